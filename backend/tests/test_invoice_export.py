"""Tests for exporting invoices as a combined PDF or an Excel sales register."""
import io
from datetime import date
from decimal import Decimal
from unittest.mock import patch

import pytest
from openpyxl import load_workbook

from apps.invoices.services import InvoiceService

EXCEL_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


@pytest.fixture
def april_invoices(company, invoice_payload):
    service = InvoiceService()
    return [
        service.create_invoice({**invoice_payload, "invoice_number": "INV-0001", "invoice_date": "2026-03-28"}),
        service.create_invoice({**invoice_payload, "invoice_number": "INV-0002", "invoice_date": "2026-04-02"}),
        service.create_invoice({
            **invoice_payload,
            "invoice_number": "INV-0003",
            "invoice_date": "2026-04-15",
            "status": "paid",
            "auto_round_off": True,
        }),
    ]


class TestInvoicesBetween:
    def test_range_is_inclusive_and_oldest_first(self, april_invoices):
        invoices = InvoiceService().invoices_between(date(2026, 4, 2), date(2026, 4, 15))
        assert [i.invoice_number for i in invoices] == ["INV-0002", "INV-0003"]

    def test_status_filter(self, april_invoices):
        invoices = InvoiceService().invoices_between(status="paid")
        assert [i.invoice_number for i in invoices] == ["INV-0003"]


class TestRegisterExcel:
    def test_sheet_layout(self, april_invoices):
        content = InvoiceService().generate_register_excel(
            april_invoices, date(2026, 3, 1), date(2026, 4, 30)
        )

        ws = load_workbook(io.BytesIO(content)).active
        assert ws.title == "Sales Register"
        assert ws["A1"].value == "Meena Traders - Sales Register (2026-03-01 to 2026-04-30)"
        assert [c.value for c in ws[3]] == [
            "Invoice No",
            "Date",
            "Customer",
            "GSTIN",
            "Status",
            "Taxable Value",
            "CGST",
            "SGST",
            "Total Tax",
            "Round Off",
            "Grand Total",
        ]

    def test_rows_and_totals(self, april_invoices):
        content = InvoiceService().generate_register_excel(april_invoices)

        ws = load_workbook(io.BytesIO(content)).active
        assert ws["A4"].value == "INV-0001"
        assert ws["C4"].value == "Acme Textiles"
        assert ws["D4"].value == "33AAACA1234A1Z1"
        assert ws["E6"].value == "Paid"
        assert ws["J6"].value == 0.5
        assert ws["K6"].value == 89.0

        assert ws["A7"].value == "Total"
        assert ws["F7"].value == 225.0
        assert ws["I7"].value == 40.5
        assert ws["K7"].value == float(Decimal("88.50") * 2 + Decimal("89.00"))

    def test_all_dates_title(self, april_invoices):
        content = InvoiceService().generate_register_excel(april_invoices)
        ws = load_workbook(io.BytesIO(content)).active
        assert ws["A1"].value.endswith("(All dates)")


class TestExportEndpoint:
    def test_excel_export(self, client, april_invoices):
        response = client.get("/api/invoices/export/?format=excel&date_from=2026-04-01&date_to=2026-04-30")

        assert response.status_code == 200
        assert response["Content-Type"] == EXCEL_CONTENT_TYPE
        assert response["Content-Disposition"] == (
            'attachment; filename="sales-register-2026-04-01-2026-04-30.xlsx"'
        )
        ws = load_workbook(io.BytesIO(response.content)).active
        assert ws["A4"].value == "INV-0002"
        assert ws["A5"].value == "INV-0003"
        assert ws["A6"].value == "Total"

    def test_pdf_export(self, client, april_invoices):
        with patch("apps.invoices.services.html_to_pdf", return_value=b"%PDF-1.7") as to_pdf:
            response = client.get("/api/invoices/export/?date_from=2026-04-01")

        assert response.status_code == 200
        assert response["Content-Type"] == "application/pdf"
        assert response["Content-Disposition"] == 'attachment; filename="invoices-2026-04-01.pdf"'
        rendered = to_pdf.call_args[0][0]
        assert "INV-0002" in rendered
        assert "INV-0003" in rendered
        assert "INV-0001" not in rendered

    def test_no_invoices_in_period(self, client, april_invoices):
        response = client.get("/api/invoices/export/?date_from=2027-01-01")
        assert response.status_code == 404
        assert response.json() == {"error": "No invoices found for this period"}

    @pytest.mark.parametrize(
        "query, message",
        [
            ("format=csv", "format must be one of: pdf, excel"),
            ("date_from=2026-13-01", "date_from must be a date in YYYY-MM-DD format"),
            ("date_from=2026-05-01&date_to=2026-04-01", "date_from must not be after date_to"),
        ],
    )
    def test_bad_parameters(self, client, db, query, message):
        response = client.get(f"/api/invoices/export/?{query}")
        assert response.status_code == 400
        assert response.json() == {"errors": [message]}
