from typing import Protocol

from dashboard.invoicing.domain.entities.invoice import Invoice, InvoiceChanges, NewInvoice


class InvoiceRepositoryPort(Protocol):
    async def insert_invoice(self, invoice: NewInvoice) -> None: ...

    async def update_invoice(self, invoice_id: str, changes: InvoiceChanges) -> None: ...

    async def delete_invoice(self, invoice_id: str) -> None: ...

    async def fetch_invoices(self, customer_id: str | None = None) -> list[Invoice]: ...
