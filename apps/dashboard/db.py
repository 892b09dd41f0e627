import logging
from typing import Optional

from psycopg_pool import ConnectionPool

from .settings import settings

logger = logging.getLogger(__name__)

_pool: Optional[ConnectionPool] = None


def get_pool() -> ConnectionPool:
    # Opened on first use so importing the app never needs a live database.
    global _pool
    if _pool is None:
        logger.info("Opening connection pool (max_size=%s)", settings.DB_POOL_MAX_SIZE)
        _pool = ConnectionPool(
            conninfo=settings.DATABASE_URL,
            min_size=settings.DB_POOL_MIN_SIZE,
            max_size=settings.DB_POOL_MAX_SIZE,
            open=True,
        )
    return _pool


def close_pool() -> None:
    global _pool
    if _pool is not None:
        _pool.close()
        _pool = None


def db_ok(pool: ConnectionPool) -> bool:
    try:
        with pool.connection() as conn, conn.cursor() as cur:
            cur.execute('select 1;')
            cur.fetchone()
        return True
    except Exception:
        logger.warning("Database health check failed", exc_info=True)
        return False
