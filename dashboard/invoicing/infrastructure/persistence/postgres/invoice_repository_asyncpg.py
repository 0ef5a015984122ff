from datetime import date

import asyncpg  # type: ignore[import-untyped]

from dashboard.invoicing.domain.entities.invoice import Invoice, InvoiceChanges, NewInvoice


class InvoiceRepositoryAsyncpg:
    def __init__(self, db_pool: asyncpg.Pool) -> None:
        self._db_pool = db_pool

    async def insert_invoice(self, invoice: NewInvoice) -> None:
        async with self._db_pool.acquire() as connection:
            await connection.execute(
                "INSERT INTO invoices (customer_id, amount, status, date) "
                "VALUES ($1, $2, $3, $4)",
                invoice.customer_id,
                invoice.amount,
                invoice.status.value,
                date.fromisoformat(invoice.date),
            )

    async def update_invoice(self, invoice_id: str, changes: InvoiceChanges) -> None:
        async with self._db_pool.acquire() as connection:
            await connection.execute(
                "UPDATE invoices "
                "SET customer_id = $1, amount = $2, status = $3 "
                "WHERE id = $4",
                changes.customer_id,
                changes.amount,
                changes.status.value,
                invoice_id,
            )

    async def delete_invoice(self, invoice_id: str) -> None:
        async with self._db_pool.acquire() as connection:
            await connection.execute("DELETE FROM invoices WHERE id = $1", invoice_id)

    async def fetch_invoices(self, customer_id: str | None = None) -> list[Invoice]:
        query = "SELECT id, customer_id, amount, status, date FROM invoices"
        params: tuple[str, ...] = ()
        if customer_id:
            query += " WHERE customer_id = $1"
            params = (customer_id,)
        query += " ORDER BY date DESC"

        async with self._db_pool.acquire() as connection:
            rows = await connection.fetch(query, *params)

        return [Invoice.from_record(row) for row in rows]
