from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import JSONResponse, RedirectResponse
from psycopg_pool import ConnectionPool
from starlette.concurrency import run_in_threadpool
from typing import List

from ..dependencies import get_db_pool, get_page_cache
from ..models.invoice import InvoiceListItem
from ..models.state import Redirect
from ..repos.invoices import list_invoices as repo_list_invoices
from ..services.cache import PageCache
from ..services.invoice_actions import (
    INVOICES_PATH,
    create_invoice,
    update_invoice,
    delete_invoice,
)

router = APIRouter(prefix=INVOICES_PATH, tags=["invoices"])


def _respond(result):
    if isinstance(result, Redirect):
        return RedirectResponse(result.location, status_code=303)
    return JSONResponse(result.to_payload())


# List invoices; served from the page cache until an action revalidates it
@router.get("", response_model=List[InvoiceListItem])
def list_invoices(
    limit: int = Query(50, ge=1, le=200),
    offset: int = Query(0, ge=0),
    pool: ConnectionPool = Depends(get_db_pool),
    cache: PageCache = Depends(get_page_cache),
):
    key = f"{INVOICES_PATH}?limit={limit}&offset={offset}"
    cached, generation = cache.get(key)
    if cached is not None:
        return cached
    with pool.connection() as conn:
        items = repo_list_invoices(conn, limit=limit, offset=offset)
    cache.set(key, items, generation)
    return items


@router.post("")
async def create_invoice_action(
    request: Request,
    pool: ConnectionPool = Depends(get_db_pool),
    cache: PageCache = Depends(get_page_cache),
):
    form = await request.form()
    result = await run_in_threadpool(create_invoice, None, form, pool=pool, cache=cache)
    return _respond(result)


@router.post("/{invoice_id}/edit")
async def update_invoice_action(
    invoice_id: str,
    request: Request,
    pool: ConnectionPool = Depends(get_db_pool),
    cache: PageCache = Depends(get_page_cache),
):
    form = await request.form()
    result = await run_in_threadpool(update_invoice, invoice_id, None, form, pool=pool, cache=cache)
    return _respond(result)


@router.post("/{invoice_id}/delete")
async def delete_invoice_action(
    invoice_id: str,
    pool: ConnectionPool = Depends(get_db_pool),
    cache: PageCache = Depends(get_page_cache),
):
    state = await run_in_threadpool(delete_invoice, invoice_id, pool=pool, cache=cache)
    if state is None:
        return {"ok": True, "invoice_id": invoice_id}
    return JSONResponse(state.to_payload())
