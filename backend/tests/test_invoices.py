"""Tests for the invoice repository service."""
from datetime import date
from decimal import Decimal

import pytest

from apps.core.exceptions import Conflict, InvalidInput, NotFound
from apps.customers.models import Customer
from apps.customers.services import CustomerService
from apps.invoices.models import Invoice, InvoiceItem
from apps.invoices.money import to_currency
from apps.invoices.services import InvoiceService
from apps.invoices.types import LineItem


@pytest.fixture
def service(db):
    return InvoiceService()


class TestCreateInvoice:
    def test_totals_are_computed(self, service, invoice_payload):
        invoice = service.create_invoice(invoice_payload)

        assert invoice.subtotal == Decimal("75.00")
        assert invoice.cgst_rate == Decimal("9.00")
        assert invoice.cgst_amount == Decimal("6.75")
        assert invoice.sgst_amount == Decimal("6.75")
        assert invoice.total_tax == Decimal("13.50")
        assert invoice.round_off == Decimal("0.00")
        assert invoice.grand_total == Decimal("88.50")
        assert invoice.amount_in_words == "Eighty Eight Rupees and Fifty Paise Only"
        assert invoice.status == Invoice.Status.DRAFT

    def test_items_are_stored_in_order(self, service, invoice_payload):
        invoice_payload["items"].append(
            {"description": "Warp", "weight": "", "hsn_code": "5402", "quantity": 1, "rate": 50}
        )
        invoice = service.create_invoice(invoice_payload)

        items = list(invoice.items.all())
        assert [i.description for i in items] == ["Cotton yarn", "Warp"]
        assert [i.position for i in items] == [0, 1]
        assert items[0].amount == Decimal("75.00")
        assert items[1].amount == Decimal("0.00")

    def test_client_totals_are_ignored(self, service, invoice_payload):
        invoice_payload.update({"subtotal": 1, "grand_total": 1, "amount_in_words": "One Rupees Only"})
        invoice = service.create_invoice(invoice_payload)
        assert invoice.grand_total == Decimal("88.50")

    def test_auto_round_off(self, service, invoice_payload):
        invoice_payload["auto_round_off"] = True
        invoice = service.create_invoice(invoice_payload)
        assert invoice.round_off == Decimal("0.50")
        assert invoice.grand_total == Decimal("89.00")
        assert invoice.amount_in_words == "Eighty Nine Rupees Only"

    def test_manual_round_off(self, service, invoice_payload):
        invoice_payload["round_off"] = "-0.50"
        invoice = service.create_invoice(invoice_payload)
        assert invoice.grand_total == Decimal("88.00")

    def test_stored_precision_rounds_halves_up(self, service, invoice_payload):
        invoice_payload.update({"cgst_rate": 0, "sgst_rate": 0, "round_off": "0.125"})
        invoice_payload["items"][0].update({"weight": "1", "quantity": "1.0005", "rate": "10.005"})

        invoice = service.create_invoice(invoice_payload)

        item = invoice.items.get()
        assert item.quantity == Decimal("1.001")
        assert item.rate == Decimal("10.01")
        assert invoice.round_off == Decimal("0.13")
        assert invoice.subtotal == Decimal("10.02")
        assert invoice.grand_total == Decimal("10.15")

    @pytest.mark.parametrize("auto_round_off", [False, True])
    def test_stored_invoice_reproduces_its_totals(self, service, invoice_payload, auto_round_off):
        invoice_payload["items"][0].update({"weight": "1", "quantity": 1, "rate": 100.3})
        invoice_payload["auto_round_off"] = auto_round_off
        invoice = service.create_invoice(invoice_payload)

        draft = invoice.to_draft()

        assert draft.items == (
            LineItem(description="Cotton yarn", weight="1", hsn_code="5205", quantity=1.0, rate=100.3),
        )
        assert draft.customer.name == "Acme Textiles"
        totals = draft.totals
        assert to_currency(totals.subtotal) == invoice.subtotal
        assert to_currency(totals.total_tax) == invoice.total_tax
        assert to_currency(totals.grand_total) == invoice.grand_total
        assert totals.amount_in_words == invoice.amount_in_words

    def test_default_rates_come_from_company(self, service, company, invoice_payload):
        company.default_cgst_rate = Decimal("6")
        company.default_sgst_rate = Decimal("6")
        company.save()
        del invoice_payload["cgst_rate"]
        del invoice_payload["sgst_rate"]

        invoice = InvoiceService().create_invoice(invoice_payload)
        assert invoice.cgst_amount == Decimal("4.50")
        assert invoice.total_tax == Decimal("9.00")

    def test_company_snapshot(self, service, company, invoice_payload):
        invoice = InvoiceService().create_invoice(invoice_payload)
        assert invoice.company_snapshot["company_name"] == "Meena Traders"
        assert invoice.company_snapshot["bank_ifsc"] == "FDRL0002358"

        company.company_name = "Renamed Traders"
        company.save()
        invoice.refresh_from_db()
        assert invoice.company_snapshot["company_name"] == "Meena Traders"

    def test_creates_customer_by_name(self, service, invoice_payload):
        invoice = service.create_invoice(invoice_payload)
        assert invoice.customer.name == "Acme Textiles"
        assert invoice.customer.gstin == "33AAACA1234A1Z1"

    def test_reuses_customer_with_same_name(self, service, invoice_payload, customer):
        invoice_payload["customer"]["address"] = "New address"
        service.create_invoice(invoice_payload)

        assert Customer.objects.count() == 1
        customer.refresh_from_db()
        assert customer.address == "New address"

    def test_customer_by_id(self, service, invoice_payload, customer):
        del invoice_payload["customer"]
        invoice_payload["customer_id"] = customer.pk
        invoice = service.create_invoice(invoice_payload)
        assert invoice.customer == customer

    def test_unknown_customer_id(self, service, invoice_payload):
        del invoice_payload["customer"]
        invoice_payload["customer_id"] = 999
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert exc.value.errors == ["Customer not found"]
        assert Invoice.objects.count() == 0

    def test_duplicate_number_conflicts(self, service, invoice_payload):
        service.create_invoice(invoice_payload)
        with pytest.raises(Conflict):
            service.create_invoice(invoice_payload)
        assert Invoice.objects.count() == 1


class TestInvoiceValidation:
    @pytest.mark.parametrize(
        "change, message",
        [
            ({"invoice_number": ""}, "Invoice number is required"),
            ({"invoice_date": "01/04/2026"}, "Valid invoice date is required"),
            ({"items": []}, "At least one item is required"),
            ({"cgst_rate": 101}, "CGST rate must be at most 100"),
            ({"sgst_rate": -1}, "SGST rate must be at least 0"),
            ({"status": "archived"}, "Status must be one of: draft, sent, paid, cancelled"),
            ({"customer": {"name": " "}}, "Customer name is required"),
            ({"customer": {"name": "X", "gstin": "1" * 16}}, "GSTIN must be at most 15 characters"),
            ({"round_off": "1e27"}, "Round off must be at most 9999999999.99"),
            ({"round_off": "x"}, "Round off must be a number"),
        ],
    )
    def test_rejected_payloads(self, service, invoice_payload, change, message):
        invoice_payload.update(change)
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert message in exc.value.errors

    @pytest.mark.parametrize(
        "item_change, message",
        [
            ({"description": ""}, "Item 1: description is required"),
            ({"quantity": 0}, "Item 1: quantity must be greater than 0"),
            ({"quantity": "abc"}, "Item 1: quantity must be greater than 0"),
            ({"rate": -5}, "Item 1: rate must be at least 0"),
            ({"rate": "1e27"}, "Item 1: rate must be at most 999999999"),
            ({"rate": "1e11"}, "Item 1: rate must be at most 999999999"),
            ({"quantity": "1e10"}, "Item 1: quantity must be at most 999999999"),
        ],
    )
    def test_rejected_items(self, service, invoice_payload, item_change, message):
        invoice_payload["items"][0].update(item_change)
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert message in exc.value.errors

    def test_total_too_large_for_storage(self, service, invoice_payload):
        # 2.5 x 1000 x 9999999 fits an item amount but not the invoice totals
        invoice_payload["items"][0].update({"quantity": 1000, "rate": 9999999})
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert exc.value.errors == ["Invoice total must be at most 9999999999.99"]
        assert Invoice.objects.count() == 0

    def test_item_amount_too_large_for_storage(self, service, invoice_payload):
        invoice_payload["items"][0].update({"weight": "1e300", "quantity": 999999999})
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert exc.value.errors == [
            "Item 1: amount is too large",
            "Invoice total must be at most 9999999999.99",
        ]

    def test_negative_subtotal(self, service, invoice_payload):
        invoice_payload["items"][0]["weight"] = "-1"
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert exc.value.errors == ["Subtotal must be a positive number"]

    def test_customer_required(self, service, invoice_payload):
        del invoice_payload["customer"]
        with pytest.raises(InvalidInput) as exc:
            service.create_invoice(invoice_payload)
        assert "Customer is required" in exc.value.errors


class TestUpdateAndDelete:
    def test_update_replaces_items(self, service, invoice_payload):
        invoice = service.create_invoice(invoice_payload)
        invoice_payload["items"] = [
            {"description": "Silk", "weight": "1", "quantity": 2, "rate": 100},
            {"description": "Dye", "weight": "1", "quantity": 1, "rate": 50},
        ]
        invoice_payload["status"] = "sent"

        updated = service.update_invoice(invoice.pk, invoice_payload)

        assert [i.description for i in updated.items.all()] == ["Silk", "Dye"]
        assert InvoiceItem.objects.count() == 2
        assert updated.subtotal == Decimal("250.00")
        assert updated.grand_total == Decimal("295.00")
        assert updated.status == Invoice.Status.SENT

    def test_update_to_existing_number_conflicts(self, service, invoice_payload):
        service.create_invoice(invoice_payload)
        second = service.create_invoice({**invoice_payload, "invoice_number": "INV-0002"})
        with pytest.raises(Conflict):
            service.update_invoice(second.pk, invoice_payload)

    def test_update_missing_invoice(self, service, invoice_payload):
        with pytest.raises(NotFound):
            service.update_invoice(999, invoice_payload)

    def test_delete_removes_items(self, service, invoice_payload):
        invoice = service.create_invoice(invoice_payload)
        service.delete_invoice(invoice.pk)
        assert Invoice.objects.count() == 0
        assert InvoiceItem.objects.count() == 0

    def test_delete_missing_invoice(self, service):
        with pytest.raises(NotFound):
            service.delete_invoice(999)

    def test_customer_with_invoices_cannot_be_deleted(self, service, invoice_payload):
        invoice = service.create_invoice(invoice_payload)
        with pytest.raises(Conflict):
            CustomerService().delete_customer(invoice.customer_id)


class TestListInvoices:
    @pytest.fixture
    def invoices(self, service, invoice_payload):
        created = []
        for number, day, status in [
            ("INV-0001", "2026-03-10", "paid"),
            ("INV-0002", "2026-04-05", "draft"),
            ("INV-0003", "2026-04-20", "sent"),
        ]:
            created.append(service.create_invoice(
                {**invoice_payload, "invoice_number": number, "invoice_date": day, "status": status}
            ))
        return created

    def test_newest_first(self, service, invoices):
        page = service.list_invoices()
        assert [i.invoice_number for i in page.items] == ["INV-0003", "INV-0002", "INV-0001"]
        assert page.meta() == {"page": 1, "limit": 10, "total": 3, "pages": 1}

    def test_filters(self, service, invoices):
        assert service.list_invoices(status="paid").total == 1
        assert service.list_invoices(date_from=date(2026, 4, 1)).total == 2
        assert service.list_invoices(date_to=date(2026, 4, 5)).total == 2
        assert service.list_invoices(customer_id=invoices[0].customer_id).total == 3

    def test_pagination(self, service, invoices):
        page = service.list_invoices(page=2, limit=2)
        assert [i.invoice_number for i in page.items] == ["INV-0001"]
        assert page.pages == 2


class TestCalculate:
    def test_no_persistence(self, service, invoice_payload):
        draft = service.calculate(invoice_payload)
        assert draft.totals.grand_total == 88.5
        assert Invoice.objects.count() == 0

    def test_unfinished_form_degrades_to_zero(self, service):
        draft = service.calculate({"items": [{"weight": "abc", "quantity": "", "rate": "x"}]})
        assert draft.totals.subtotal == 0
        assert draft.totals.amount_in_words == "Zero Rupees Only"

    def test_auto_round_off(self, service):
        draft = service.calculate({
            "items": [{"description": "A", "weight": "1", "quantity": 1, "rate": 100.3}],
            "cgst_rate": 9,
            "sgst_rate": 9,
            "auto_round_off": True,
        })
        assert draft.totals.grand_total == pytest.approx(118.0)
        assert draft.round_off == pytest.approx(-0.354, abs=1e-9)

    def test_oversized_numbers_degrade_to_zero(self, service):
        draft = service.calculate({
            "items": [
                {"description": "A", "weight": "1", "quantity": 1, "rate": "1e27"},
                {"description": "B", "weight": "1", "quantity": 2, "rate": 10},
            ],
            "round_off": "1e30",
        })
        assert draft.items[0].rate == 0
        assert draft.round_off == 0
        assert draft.totals.subtotal == 20
