"""Tests for the invoice REST endpoints."""
import pytest

from apps.invoices.models import Invoice
from apps.invoices.services import InvoiceService


@pytest.fixture
def saved_invoice(db, invoice_payload):
    return InvoiceService().create_invoice(invoice_payload)


class TestCreateInvoiceEndpoint:
    def test_create_returns_computed_invoice(self, client, db, invoice_payload):
        response = client.post("/api/invoices/", invoice_payload, content_type="application/json")

        assert response.status_code == 201
        data = response.json()
        assert data["invoice_number"] == "INV-0001"
        assert data["customer_name"] == "Acme Textiles"
        assert data["subtotal"] == "75.00"
        assert data["grand_total"] == "88.50"
        assert data["amount_in_words"] == "Eighty Eight Rupees and Fifty Paise Only"
        assert data["items"][0]["amount"] == "75.00"
        assert data["items"][0]["weight"] == "2.5"

    def test_validation_errors(self, client, db, invoice_payload):
        invoice_payload["items"] = []
        invoice_payload["invoice_number"] = ""

        response = client.post("/api/invoices/", invoice_payload, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Invoice number is required",
            "At least one item is required",
        ]

    def test_oversized_rate_is_rejected(self, client, db, invoice_payload):
        invoice_payload["items"][0]["rate"] = "1e27"

        response = client.post("/api/invoices/", invoice_payload, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["errors"] == ["Item 1: rate must be at most 999999999"]
        assert not Invoice.objects.exists()

    def test_total_too_large_is_rejected(self, client, db, invoice_payload):
        invoice_payload["items"][0].update({"quantity": 999999999, "rate": 999999999})

        response = client.post("/api/invoices/", invoice_payload, content_type="application/json")

        assert response.status_code == 400
        assert response.json()["errors"] == [
            "Item 1: amount is too large",
            "Invoice total must be at most 9999999999.99",
        ]

    def test_invalid_json(self, client, db):
        response = client.post("/api/invoices/", "{not json", content_type="application/json")
        assert response.status_code == 400
        assert response.json()["errors"] == ["Request body must be valid JSON"]

    def test_duplicate_number(self, client, saved_invoice, invoice_payload):
        response = client.post("/api/invoices/", invoice_payload, content_type="application/json")
        assert response.status_code == 409
        assert response.json() == {"error": "Invoice number already exists"}


class TestReadInvoiceEndpoints:
    def test_list(self, client, saved_invoice):
        response = client.get("/api/invoices/")

        assert response.status_code == 200
        data = response.json()
        assert data["pagination"] == {"page": 1, "limit": 10, "total": 1, "pages": 1}
        assert data["invoices"][0]["invoice_number"] == "INV-0001"
        assert "items" not in data["invoices"][0]

    def test_list_filters(self, client, saved_invoice):
        assert client.get("/api/invoices/?status=paid").json()["pagination"]["total"] == 0
        assert client.get("/api/invoices/?date_from=2026-04-01").json()["pagination"]["total"] == 1
        assert client.get("/api/invoices/?date_to=2026-03-31").json()["pagination"]["total"] == 0

    def test_list_rejects_bad_filters(self, client, db):
        assert client.get("/api/invoices/?status=lost").status_code == 400
        assert client.get("/api/invoices/?date_from=April").status_code == 400

    def test_detail(self, client, saved_invoice):
        response = client.get(f"/api/invoices/{saved_invoice.pk}/")
        assert response.status_code == 200
        assert response.json()["customer"]["gstin"] == "33AAACA1234A1Z1"

    def test_detail_not_found(self, client, db):
        response = client.get("/api/invoices/999/")
        assert response.status_code == 404
        assert response.json() == {"error": "Invoice not found"}


class TestWriteInvoiceEndpoints:
    def test_update(self, client, saved_invoice, invoice_payload):
        invoice_payload["items"][0]["rate"] = 20
        invoice_payload["status"] = "paid"

        response = client.put(
            f"/api/invoices/{saved_invoice.pk}/", invoice_payload, content_type="application/json"
        )

        assert response.status_code == 200
        assert response.json()["grand_total"] == "177.00"
        assert response.json()["status"] == "paid"

    def test_delete(self, client, saved_invoice):
        response = client.delete(f"/api/invoices/{saved_invoice.pk}/")
        assert response.status_code == 204
        assert not Invoice.objects.exists()

    def test_delete_missing(self, client, db):
        assert client.delete("/api/invoices/999/").status_code == 404


class TestCalculateEndpoint:
    def test_calculate(self, client, db, invoice_payload):
        response = client.post(
            "/api/invoices/calculate/", invoice_payload, content_type="application/json"
        )

        assert response.status_code == 200
        data = response.json()
        assert data["items"][0]["amount"] == "75.00"
        assert data["total_tax"] == "13.50"
        assert data["grand_total"] == "88.50"
        assert not Invoice.objects.exists()

    def test_calculate_with_auto_round_off(self, client, db, invoice_payload):
        invoice_payload["auto_round_off"] = True
        data = client.post(
            "/api/invoices/calculate/", invoice_payload, content_type="application/json"
        ).json()
        assert data["round_off"] == "0.50"
        assert data["grand_total"] == "89.00"
        assert data["amount_in_words"] == "Eighty Nine Rupees Only"

    def test_calculate_tolerates_unfinished_form(self, client, db):
        response = client.post(
            "/api/invoices/calculate/",
            {"items": [{"description": "", "weight": "", "quantity": "", "rate": ""}]},
            content_type="application/json",
        )
        assert response.status_code == 200
        assert response.json()["grand_total"] == "0.00"

    def test_calculate_with_oversized_rate(self, client, db, invoice_payload):
        invoice_payload["items"][0]["rate"] = "1e27"

        response = client.post(
            "/api/invoices/calculate/", invoice_payload, content_type="application/json"
        )

        assert response.status_code == 200
        assert response.json()["items"][0]["amount"] == "0.00"
        assert response.json()["grand_total"] == "0.00"


class TestNextNumberEndpoint:
    def test_first_number(self, client, db):
        response = client.get("/api/invoices/next-number/")
        assert response.json() == {"next_invoice_number": "INV-0001"}

    def test_after_saved_invoice(self, client, saved_invoice):
        response = client.get("/api/invoices/next-number/")
        assert response.json() == {"next_invoice_number": "INV-0002"}
