import logging
from collections.abc import Callable
from datetime import UTC, date, datetime
from typing import Any, Mapping

from opentelemetry import trace
from pydantic import ValidationError

from dashboard.invoicing.application.ports.invoice_repository_port import InvoiceRepositoryPort
from dashboard.invoicing.application.ports.path_revalidator_port import PathRevalidatorPort
from dashboard.invoicing.application.results import (
    INVOICES_PATH,
    CreateInvoiceResult,
    InvoiceFormState,
    Navigate,
)
from dashboard.invoicing.application.schemas.invoice_form import (
    CreateInvoiceForm,
    flatten_field_errors,
    read_invoice_fields,
)
from dashboard.invoicing.domain.entities.invoice import NewInvoice, to_cents
from dashboard.invoicing.domain.errors import CREATE_INVOICE_FAILED, InvoicePersistenceError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)

MISSING_FIELDS_MESSAGE = "Missing Fields. Failed to Create Invoice."


def _utc_today() -> date:
    return datetime.now(UTC).date()


class CreateInvoiceUseCase:
    def __init__(
        self,
        invoice_repository: InvoiceRepositoryPort,
        path_revalidator: PathRevalidatorPort,
        today: Callable[[], date] = _utc_today,
    ) -> None:
        self._invoice_repository = invoice_repository
        self._path_revalidator = path_revalidator
        self._today = today

    async def execute(
        self,
        previous_state: InvoiceFormState | None,
        form_data: Mapping[str, Any],
    ) -> CreateInvoiceResult:
        try:
            form = CreateInvoiceForm.model_validate(read_invoice_fields(form_data))
        except ValidationError as exc:
            return InvoiceFormState(
                errors=flatten_field_errors(exc),
                message=MISSING_FIELDS_MESSAGE,
            )

        invoice = NewInvoice(
            customer_id=form.customer_id,
            amount=to_cents(form.amount),
            status=form.status,
            date=self._today().isoformat(),
        )

        try:
            with tracer.start_as_current_span("create_invoice.insert"):
                await self._invoice_repository.insert_invoice(invoice)
        except Exception as exc:
            logger.exception(
                "invoice_create_failed customer_id=%s",
                invoice.customer_id,
                extra={"action": "create_invoice"},
            )
            raise InvoicePersistenceError(CREATE_INVOICE_FAILED) from exc

        self._path_revalidator.revalidate_path(INVOICES_PATH)
        return Navigate(INVOICES_PATH)
