from functools import lru_cache

from psycopg_pool import ConnectionPool

from .db import get_pool
from .settings import settings
from .services.auth import Auth, CredentialsProvider
from .services.cache import PageCache


def get_db_pool() -> ConnectionPool:
    return get_pool()


@lru_cache
def get_page_cache() -> PageCache:
    return PageCache()


def get_auth() -> Auth:
    pool = get_pool()
    return Auth({"credentials": CredentialsProvider(pool)}, redirect_to=settings.LOGIN_REDIRECT_PATH)
