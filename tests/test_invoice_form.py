import unittest
from decimal import Decimal

from pydantic import ValidationError

from dashboard.invoicing.application.schemas.invoice_form import (
    AMOUNT_MESSAGE,
    CUSTOMER_REQUIRED_MESSAGE,
    STATUS_MESSAGE,
    CreateInvoiceForm,
    InvoiceForm,
    UpdateInvoiceForm,
    flatten_field_errors,
    read_invoice_fields,
)
from dashboard.invoicing.domain.entities.invoice import InvoiceStatus, to_cents


class TestInvoiceForm(unittest.TestCase):
    def test_valid_form_coerces_amount_and_status(self) -> None:
        form = CreateInvoiceForm.model_validate(
            {"customerId": "c1", "amount": "12.34", "status": "paid"}
        )

        self.assertEqual(form.customer_id, "c1")
        self.assertEqual(form.amount, Decimal("12.34"))
        self.assertIs(form.status, InvoiceStatus.PAID)

    def test_each_invalid_field_reports_its_own_message(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            CreateInvoiceForm.model_validate(
                {"customerId": "", "amount": "-1", "status": "overdue"}
            )

        self.assertEqual(
            flatten_field_errors(ctx.exception),
            {
                "customerId": [CUSTOMER_REQUIRED_MESSAGE],
                "amount": [AMOUNT_MESSAGE],
                "status": [STATUS_MESSAGE],
            },
        )

    def test_amount_must_be_a_finite_number_above_zero(self) -> None:
        for raw_amount in ("0", "-5", "abc", "", None, "NaN", "Infinity", "1e400", "1e999999"):
            with self.subTest(amount=raw_amount):
                with self.assertRaises(ValidationError) as ctx:
                    UpdateInvoiceForm.model_validate(
                        {"customerId": "c1", "amount": raw_amount, "status": "pending"}
                    )
                self.assertEqual(flatten_field_errors(ctx.exception), {"amount": [AMOUNT_MESSAGE]})

    def test_missing_customer_and_status_are_rejected(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            CreateInvoiceForm.model_validate({"customerId": None, "amount": "5", "status": None})

        errors = flatten_field_errors(ctx.exception)
        self.assertEqual(errors["customerId"], [CUSTOMER_REQUIRED_MESSAGE])
        self.assertEqual(errors["status"], [STATUS_MESSAGE])

    def test_full_form_requires_id_and_accepts_any_date_string(self) -> None:
        with self.assertRaises(ValidationError) as ctx:
            InvoiceForm.model_validate({"customerId": "c1", "amount": "1", "status": "paid"})
        self.assertEqual(set(flatten_field_errors(ctx.exception)), {"id", "date"})

        form = InvoiceForm.model_validate(
            {"id": "inv-1", "customerId": "c1", "amount": "1", "status": "paid", "date": "someday"}
        )
        self.assertEqual(form.date, "someday")

    def test_read_invoice_fields_only_picks_form_fields(self) -> None:
        fields = read_invoice_fields({"customerId": "c1", "amount": "3", "extra": "x"})

        self.assertEqual(fields, {"customerId": "c1", "amount": "3", "status": None})

    def test_to_cents_multiplies_by_one_hundred(self) -> None:
        self.assertEqual(to_cents(Decimal("12.34")), 1234)
        self.assertEqual(to_cents(Decimal("50")), 5000)
        self.assertEqual(to_cents(Decimal("0.015")), 1)


if __name__ == "__main__":
    unittest.main()
