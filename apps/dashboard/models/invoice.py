from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError
from typing import Optional
from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum


def to_cents(amount: Decimal) -> int:
    return int((amount * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


class InvoiceStatus(str, Enum):
    PENDING = "pending"
    PAID = "paid"


# Fields a user submits when creating or editing an invoice. `id` and `date`
# are never user-supplied, so both actions share this one schema.
class InvoiceForm(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    customer_id: str = Field(..., alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def _require_customer(cls, value):
        if not isinstance(value, str) or not value.strip():
            raise PydanticCustomError("customer_required", "Please select a customer.")
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def _coerce_amount(cls, value):
        # Blank input coerces to 0 and is then rejected by the > 0 rule
        if value is None or (isinstance(value, str) and not value.strip()):
            value = "0"
        try:
            amount = Decimal(str(value).strip())
        except InvalidOperation:
            raise PydanticCustomError("amount_invalid", "Please enter a valid amount.") from None
        if not amount.is_finite():
            raise PydanticCustomError("amount_invalid", "Please enter a valid amount.")
        # Amounts are stored in whole cents, so anything rounding to 0 is rejected too
        if amount <= 0 or to_cents(amount) <= 0:
            raise PydanticCustomError(
                "amount_not_positive", "Please enter an amount greater than $0."
            )
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def _check_status(cls, value):
        try:
            return InvoiceStatus(value)
        except (ValueError, TypeError):
            raise PydanticCustomError("status_invalid", "Please select an invoice status.") from None


class Invoice(BaseModel):
    id: str
    customer_id: str
    amount: int = Field(..., gt=0, description="Amount in cents")
    status: InvoiceStatus
    date: date


class InvoiceListItem(Invoice):
    name: Optional[str] = None
    email: Optional[str] = None
