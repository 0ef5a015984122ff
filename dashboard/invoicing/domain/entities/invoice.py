from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import StrEnum
from typing import Any, Mapping


class InvoiceStatus(StrEnum):
    PENDING = "pending"
    PAID = "paid"


def to_cents(amount: Decimal) -> int:
    """Convert a major-unit amount to integer minor units.

    Sub-cent fractions are truncated toward zero.
    """
    return int(amount * 100)


@dataclass(frozen=True, slots=True)
class Invoice:
    id: str
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: date

    @staticmethod
    def _parse_date(value: Any) -> date:
        if isinstance(value, date):
            return value
        return date.fromisoformat(str(value))

    @classmethod
    def from_record(cls, record: Mapping[str, Any]) -> "Invoice":
        return cls(
            id=str(record["id"]),
            customer_id=str(record["customer_id"]),
            amount=int(record["amount"]),
            status=InvoiceStatus(record["status"]),
            date=cls._parse_date(record["date"]),
        )

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "customer_id": self.customer_id,
            "amount": self.amount,
            "status": self.status.value,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True, slots=True)
class NewInvoice:
    customer_id: str
    amount: int
    status: InvoiceStatus
    date: str


@dataclass(frozen=True, slots=True)
class InvoiceChanges:
    customer_id: str
    amount: int
    status: InvoiceStatus
