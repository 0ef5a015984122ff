import logging

from opentelemetry import trace

from dashboard.invoicing.application.ports.invoice_repository_port import InvoiceRepositoryPort
from dashboard.invoicing.application.ports.path_revalidator_port import PathRevalidatorPort
from dashboard.invoicing.application.results import INVOICES_PATH, Persisted
from dashboard.invoicing.domain.errors import DELETE_INVOICE_FAILED, InvoicePersistenceError

logger = logging.getLogger(__name__)
tracer = trace.get_tracer(__name__)


class DeleteInvoiceUseCase:
    def __init__(
        self,
        invoice_repository: InvoiceRepositoryPort,
        path_revalidator: PathRevalidatorPort,
    ) -> None:
        self._invoice_repository = invoice_repository
        self._path_revalidator = path_revalidator

    async def execute(self, invoice_id: str) -> Persisted:
        # No row count check: deleting an unknown id is not an error.
        try:
            with tracer.start_as_current_span("delete_invoice.delete"):
                await self._invoice_repository.delete_invoice(invoice_id)
        except Exception as exc:
            logger.exception(
                "invoice_delete_failed invoice_id=%s",
                invoice_id,
                extra={"action": "delete_invoice"},
            )
            raise InvoicePersistenceError(DELETE_INVOICE_FAILED) from exc

        self._path_revalidator.revalidate_path(INVOICES_PATH)
        return Persisted()
