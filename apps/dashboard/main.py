import logging
from contextlib import asynccontextmanager

from fastapi import Depends, FastAPI
from psycopg_pool import ConnectionPool

from .db import close_pool, db_ok
from .dependencies import get_db_pool
from .settings import settings
from .routes.invoices import router as invoices_router
from .routes.auth import router as auth_router

logging.basicConfig(
    level=settings.LOG_LEVEL,
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    close_pool()


app = FastAPI(
    title="Invoice Dashboard API",
    version="0.1.0",
    description="Form actions for creating, editing and deleting invoices, plus sign-in.",
    lifespan=lifespan,
)

app.include_router(invoices_router)
app.include_router(auth_router)


@app.get("/health")
def health(pool: ConnectionPool = Depends(get_db_pool)):
    return {"db": db_ok(pool)}
