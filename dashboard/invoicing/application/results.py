from dataclasses import dataclass, field

INVOICES_PATH = "/dashboard/invoices"


@dataclass(frozen=True, slots=True)
class InvoiceFormState:
    """Returned when the submitted form fails validation."""

    errors: dict[str, list[str]] = field(default_factory=dict)
    message: str | None = None


@dataclass(frozen=True, slots=True)
class Navigate:
    """The write went through and the client should be sent to ``path``."""

    path: str


@dataclass(frozen=True, slots=True)
class Persisted:
    """The write went through and the client stays where it is."""


CreateInvoiceResult = InvoiceFormState | Navigate
