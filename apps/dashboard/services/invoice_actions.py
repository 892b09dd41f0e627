"""
Invoice mutation actions behind the dashboard forms.

Each action runs the same three steps: validate the submitted fields,
issue one statement against `invoices`, then revalidate the listing page and
hand back a Redirect to it. Failures never raise out of an action; they come
back as a State the form can render.
"""
import logging
from datetime import date
from typing import Any, Callable, Mapping, Optional, Union

import psycopg
from psycopg_pool import ConnectionPool

from ..models.invoice import InvoiceForm, to_cents
from ..models.state import Redirect, State
from ..models.validation import ValidationFailure
from ..repos.invoices import (
    insert_invoice,
    update_invoice as repo_update_invoice,
    delete_invoice as repo_delete_invoice,
)
from .cache import PathRevalidator
from .forms import extract_fields
from .validator import form_field_names, validate_form

logger = logging.getLogger(__name__)

INVOICES_PATH = "/dashboard/invoices"

CREATE_FAILED = "Missing Fields. Failed to Create Invoice."
UPDATE_FAILED = "Missing Fields. Failed to Update Invoice."
DB_CREATE_FAILED = "Database Error: Failed to Create Invoice"
DB_UPDATE_FAILED = "Database Error: Failed to Update Invoice"
DB_DELETE_FAILED = "Database Error: Failed to Delete Invoice"

ActionResult = Union[State, Redirect]


def _validate(form_data: Mapping[str, Any], message: str):
    raw = extract_fields(form_data, form_field_names(InvoiceForm))
    return validate_form(InvoiceForm, raw, message)


def _finish(cache: PathRevalidator) -> Redirect:
    cache.revalidate_path(INVOICES_PATH)
    return Redirect(INVOICES_PATH)


def create_invoice(
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    pool: ConnectionPool,
    cache: PathRevalidator,
    today: Callable[[], date] = date.today,
) -> ActionResult:
    result = _validate(form_data, CREATE_FAILED)
    if isinstance(result, ValidationFailure):
        return State(errors=result.errors, message=result.message)

    form = result.data
    amount_in_cents = to_cents(form.amount)
    issued = today().isoformat()

    try:
        with pool.connection() as conn:
            insert_invoice(
                conn,
                customer_id=form.customer_id,
                amount=amount_in_cents,
                status=form.status.value,
                date=issued,
            )
    except psycopg.Error as exc:
        logger.warning("Failed to create invoice for customer %s: %s", form.customer_id, exc)
        return State(message=DB_CREATE_FAILED)

    logger.info("Created invoice for customer %s (%s cents, %s)", form.customer_id, amount_in_cents, form.status.value)
    return _finish(cache)


def update_invoice(
    invoice_id: str,
    prev_state: Optional[State],
    form_data: Mapping[str, Any],
    *,
    pool: ConnectionPool,
    cache: PathRevalidator,
) -> ActionResult:
    result = _validate(form_data, UPDATE_FAILED)
    if isinstance(result, ValidationFailure):
        return State(errors=result.errors, message=result.message)

    form = result.data
    amount_in_cents = to_cents(form.amount)

    try:
        with pool.connection() as conn:
            updated = repo_update_invoice(
                conn,
                invoice_id,
                customer_id=form.customer_id,
                amount=amount_in_cents,
                status=form.status.value,
            )
    except psycopg.Error as exc:
        logger.warning("Failed to update invoice %s: %s", invoice_id, exc)
        return State(message=DB_UPDATE_FAILED)

    if not updated:
        logger.info("Update matched no invoice with id %s", invoice_id)
    else:
        logger.info("Updated invoice %s", invoice_id)
    return _finish(cache)


def delete_invoice(
    invoice_id: str,
    *,
    pool: ConnectionPool,
    cache: PathRevalidator,
) -> Optional[State]:
    # The caller is already on the listing, so there is no redirect here
    try:
        with pool.connection() as conn:
            repo_delete_invoice(conn, invoice_id)
    except psycopg.Error as exc:
        logger.warning("Failed to delete invoice %s: %s", invoice_id, exc)
        return State(message=DB_DELETE_FAILED)

    logger.info("Deleted invoice %s", invoice_id)
    cache.revalidate_path(INVOICES_PATH)
    return None
