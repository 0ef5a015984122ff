"""Validation schemas for the invoice create and edit forms.

Fields use the names the dashboard form submits (``customerId``, ``amount``,
``status``) so the flattened errors can be rendered next to each input.
"""

import math
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator
from pydantic_core import PydanticCustomError

from dashboard.invoicing.domain.entities.invoice import InvoiceStatus

CUSTOMER_REQUIRED_MESSAGE = "please select a customer"
AMOUNT_MESSAGE = "Please enter a amount greater than $0"
STATUS_MESSAGE = "please select an invoice status"

INVOICE_FORM_FIELDS = ("customerId", "amount", "status")


class _InvoiceFields(BaseModel):
    model_config = ConfigDict(frozen=True)

    customer_id: str = Field(alias="customerId")
    amount: Decimal
    status: InvoiceStatus

    @field_validator("customer_id", mode="before")
    @classmethod
    def require_customer(cls, value: Any) -> str:
        if not isinstance(value, str) or not value:
            raise PydanticCustomError("customer_required", CUSTOMER_REQUIRED_MESSAGE)
        return value

    @field_validator("amount", mode="before")
    @classmethod
    def coerce_amount(cls, value: Any) -> Decimal:
        # Blank and missing inputs coerce to zero and fail the positivity check.
        raw = "0" if value is None or value == "" else str(value).strip()
        try:
            amount = Decimal(raw)
        except InvalidOperation:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE) from None
        if not amount.is_finite() or not math.isfinite(float(amount)) or amount <= 0:
            raise PydanticCustomError("amount_not_positive", AMOUNT_MESSAGE)
        return amount

    @field_validator("status", mode="before")
    @classmethod
    def check_status(cls, value: Any) -> str:
        if value not in [status.value for status in InvoiceStatus]:
            raise PydanticCustomError("status_invalid", STATUS_MESSAGE)
        return value


class InvoiceForm(_InvoiceFields):
    id: str
    date: str


class CreateInvoiceForm(_InvoiceFields):
    pass


class UpdateInvoiceForm(_InvoiceFields):
    pass


def read_invoice_fields(form_data: Mapping[str, Any]) -> dict[str, Any]:
    return {name: form_data.get(name) for name in INVOICE_FORM_FIELDS}


def flatten_field_errors(exc: ValidationError) -> dict[str, list[str]]:
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        location = error.get("loc") or ("form",)
        field_errors.setdefault(str(location[0]), []).append(error["msg"])
    return field_errors
