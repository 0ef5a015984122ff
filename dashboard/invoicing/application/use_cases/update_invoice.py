import logging
from typing import Any, Mapping

from opentelemetry import trace

from dashboard.invoicing.application.ports.invoice_repository_port import InvoiceRepositoryPort
from dashboard.invoicing.application.ports.path_revalidator_port import PathRevalidatorPort
from dashboard.invoicing.application.results import INVOICES_PATH, Navigate
from dashboard.invoicing.application.schemas.invoice_form import (
    UpdateInvoiceForm,
    read_invoice_fields,
)
from dashboard.invoicing.domain.entities.invoice import InvoiceChanges, to_cents
from dashboard.invoicing.domain.errors import UPDATE_INVOICE_FAILED, InvoicePersistenceError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class UpdateInvoiceUseCase:
    def __init__(
        self,
        invoice_repository: InvoiceRepositoryPort,
        path_revalidator: PathRevalidatorPort,
    ) -> None:
        self._invoice_repository = invoice_repository
        self._path_revalidator = path_revalidator

    async def execute(self, invoice_id: str, form_data: Mapping[str, Any]) -> Navigate:
        # Invalid input raises pydantic.ValidationError; unlike create there is no form state.
        form = UpdateInvoiceForm.model_validate(read_invoice_fields(form_data))
        changes = InvoiceChanges(
            customer_id=form.customer_id,
            amount=to_cents(form.amount),
            status=form.status,
        )

        try:
            with tracer.start_as_current_span("update_invoice.update"):
                await self._invoice_repository.update_invoice(invoice_id, changes)
        except Exception as exc:
            logger.exception(
                "invoice_update_failed invoice_id=%s",
                invoice_id,
                extra={"action": "update_invoice"},
            )
            raise InvoicePersistenceError(UPDATE_INVOICE_FAILED) from exc

        self._path_revalidator.revalidate_path(INVOICES_PATH)
        return Navigate(INVOICES_PATH)
