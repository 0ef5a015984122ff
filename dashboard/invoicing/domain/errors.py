class InvoicePersistenceError(RuntimeError):
    """A write against the invoices table failed."""


CREATE_INVOICE_FAILED = "Database Error: Failed to Create Invoice."
UPDATE_INVOICE_FAILED = "Database Error: Failed to Update Invoice."
DELETE_INVOICE_FAILED = "Failed to Delete Invoice"
