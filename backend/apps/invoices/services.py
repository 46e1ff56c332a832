"""Invoice service: storage, live calculation and document export."""
import base64
import io
import logging
import mimetypes
from datetime import date
from decimal import Decimal

from django.db import IntegrityError, transaction
from django.template.loader import render_to_string

from apps.company.models import CompanyProfile
from apps.company.services import CompanyService
from apps.core.exceptions import Conflict, InvalidInput, NotFound
from apps.core.pagination import Page, paginate
from apps.customers.models import Customer
from apps.customers.services import CustomerService
from apps.invoices.models import Invoice, InvoiceItem
from apps.invoices.money import to_currency
from apps.invoices.numbering import InvoiceNumberService
from apps.invoices.types import InvoiceDraft
from apps.invoices.validation import build_draft

logger = logging.getLogger(__name__)

# Minimum rows in the printed item table
MIN_TABLE_ROWS = 3


class InvoiceService:
    """Creates, reads and exports invoices for the company profile in use."""

    def __init__(self, company: CompanyProfile | None = None):
        self._company = company

    @property
    def company(self) -> CompanyProfile:
        if self._company is None:
            self._company = CompanyService().get_profile()
        return self._company

    # =========================================================================
    # Queries
    # =========================================================================

    def list_invoices(
        self,
        status: str | None = None,
        customer_id=None,
        date_from: date | None = None,
        date_to: date | None = None,
        page=1,
        limit=None,
    ) -> Page:
        """Newest invoices first, with optional filters."""
        queryset = self._filtered(status, customer_id, date_from, date_to)
        return paginate(queryset.order_by("-created_at", "-id"), page, limit)

    def invoices_between(
        self,
        date_from: date | None = None,
        date_to: date | None = None,
        status: str | None = None,
    ) -> list[Invoice]:
        """Invoices in a date range, oldest first, with items loaded."""
        queryset = self._filtered(status, None, date_from, date_to)
        return list(
            queryset.prefetch_related("items").order_by("invoice_date", "invoice_number")
        )

    def _filtered(self, status, customer_id, date_from, date_to):
        queryset = Invoice.objects.select_related("customer")
        if status:
            queryset = queryset.filter(status=status)
        if customer_id:
            queryset = queryset.filter(customer_id=customer_id)
        if date_from:
            queryset = queryset.filter(invoice_date__gte=date_from)
        if date_to:
            queryset = queryset.filter(invoice_date__lte=date_to)
        return queryset

    def get_invoice(self, invoice_id) -> Invoice:
        invoice = (
            Invoice.objects
            .select_related("customer")
            .prefetch_related("items")
            .filter(pk=invoice_id)
            .first()
        )
        if invoice is None:
            raise NotFound("Invoice not found")
        return invoice

    def next_invoice_number(self, invoice_date: date | None = None) -> str:
        return InvoiceNumberService(self.company.invoice_number_pattern).preview_next_number(
            invoice_date
        )

    def calculate(self, data: dict) -> InvoiceDraft:
        """Build a draft for an unsaved form; ``draft.totals`` holds the figures."""
        return build_draft(data, self.company, strict=False)

    # =========================================================================
    # Writes
    # =========================================================================

    def create_invoice(self, data: dict) -> Invoice:
        draft = build_draft(data, self.company)
        try:
            with transaction.atomic():
                invoice = Invoice(customer=self._resolve_customer(draft))
                self._save(invoice, draft)
        except IntegrityError:
            logger.warning("Duplicate invoice number %s", draft.invoice_number)
            raise Conflict("Invoice number already exists")
        logger.info(
            "Created invoice %s (%s) for %s, grand total %s",
            invoice.pk, invoice.invoice_number, invoice.customer.name, invoice.grand_total,
        )
        return self.get_invoice(invoice.pk)

    def update_invoice(self, invoice_id, data: dict) -> Invoice:
        invoice = self.get_invoice(invoice_id)
        draft = build_draft(data, self.company)
        try:
            with transaction.atomic():
                invoice.customer = self._resolve_customer(draft)
                self._save(invoice, draft)
        except IntegrityError:
            logger.warning("Duplicate invoice number %s", draft.invoice_number)
            raise Conflict("Invoice number already exists")
        logger.info("Updated invoice %s (%s)", invoice.pk, invoice.invoice_number)
        return self.get_invoice(invoice.pk)

    def delete_invoice(self, invoice_id) -> None:
        invoice = self.get_invoice(invoice_id)
        invoice.delete()
        logger.info("Deleted invoice %s (%s)", invoice_id, invoice.invoice_number)

    def _resolve_customer(self, draft: InvoiceDraft) -> Customer:
        if draft.customer_id:
            customer = Customer.objects.filter(pk=draft.customer_id).first()
            if customer is None:
                raise InvalidInput(["Customer not found"])
            return customer
        return CustomerService().upsert_by_name(
            {
                "name": draft.customer.name,
                "address": draft.customer.address,
                "gstin": draft.customer.gstin,
                "state": draft.customer.state,
                "state_code": draft.customer.state_code,
                "phone": draft.customer.phone,
                "email": draft.customer.email,
            }
        )

    def _save(self, invoice: Invoice, draft: InvoiceDraft) -> None:
        """Write the draft and its recomputed totals; replaces every item."""
        totals = draft.totals
        invoice.invoice_number = draft.invoice_number
        invoice.invoice_date = draft.invoice_date
        invoice.due_date = draft.due_date
        invoice.cgst_rate = to_currency(draft.cgst_rate)
        invoice.sgst_rate = to_currency(draft.sgst_rate)
        invoice.subtotal = to_currency(totals.subtotal)
        invoice.cgst_amount = to_currency(totals.cgst_amount)
        invoice.sgst_amount = to_currency(totals.sgst_amount)
        invoice.total_tax = to_currency(totals.total_tax)
        invoice.round_off = to_currency(totals.round_off)
        invoice.grand_total = to_currency(totals.grand_total)
        invoice.amount_in_words = totals.amount_in_words
        invoice.status = draft.status
        invoice.company_snapshot = draft.company
        invoice.save()

        InvoiceItem.objects.filter(invoice=invoice).delete()
        InvoiceItem.objects.bulk_create([
            InvoiceItem(
                invoice=invoice,
                description=item.description,
                weight=item.weight,
                hsn_code=item.hsn_code,
                quantity=Decimal(repr(item.quantity)),
                rate=to_currency(item.rate),
                amount=to_currency(item.amount),
                position=position,
            )
            for position, item in enumerate(draft.items)
        ])

    # =========================================================================
    # Documents
    # =========================================================================

    def render_invoice_html(self, invoices: list[Invoice]) -> str:
        """Printable HTML with one page per invoice."""
        logo_src = _image_data_uri(self.company.logo)
        signature_src = _image_data_uri(self.company.signature)
        pages = [
            _print_context(invoice, self.company, logo_src, signature_src)
            for invoice in invoices
        ]
        if len(invoices) == 1:
            title = f"Tax Invoice {invoices[0].invoice_number}"
        else:
            title = "Tax Invoices"
        return render_to_string("invoices/invoice.html", {"invoices": pages, "title": title})

    def generate_pdf(self, invoices: list[Invoice]) -> bytes:
        """
        Generate a PDF containing all invoices.

        Each invoice starts on a new page.
        """
        if not invoices:
            return b""
        return html_to_pdf(self.render_invoice_html(invoices))

    def generate_register_excel(
        self,
        invoices: list[Invoice],
        date_from: date | None = None,
        date_to: date | None = None,
    ) -> bytes:
        """Sales register: one row per invoice plus a totals row."""
        from openpyxl import Workbook
        from openpyxl.styles import Border, Font, PatternFill, Side
        from openpyxl.utils import get_column_letter

        wb = Workbook()
        ws = wb.active
        ws.title = "Sales Register"

        currency_format = "#,##0.00"
        header_font = Font(bold=True, color="FFFFFF")
        header_fill = PatternFill(start_color="0D6EFD", end_color="0D6EFD", fill_type="solid")
        total_fill = PatternFill(start_color="E5E7EB", end_color="E5E7EB", fill_type="solid")
        thin_border = Border(
            left=Side(style="thin"),
            right=Side(style="thin"),
            top=Side(style="thin"),
            bottom=Side(style="thin"),
        )

        period = " to ".join(d.isoformat() for d in (date_from, date_to) if d) or "All dates"
        ws["A1"] = f"{self.company.company_name} - Sales Register ({period})"
        ws["A1"].font = Font(bold=True, size=14)

        headers = [
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
        for col, header in enumerate(headers, 1):
            cell = ws.cell(row=3, column=col, value=header)
            cell.font = header_font
            cell.fill = header_fill
            cell.border = thin_border

        amount_fields = ["subtotal", "cgst_amount", "sgst_amount", "total_tax", "round_off", "grand_total"]
        sums = {name: to_currency(0) for name in amount_fields}
        first_amount_col = len(headers) - len(amount_fields) + 1

        row = 4
        for invoice in invoices:
            ws.cell(row=row, column=1, value=invoice.invoice_number)
            ws.cell(row=row, column=2, value=invoice.invoice_date).number_format = "dd-mm-yyyy"
            ws.cell(row=row, column=3, value=invoice.customer.name)
            ws.cell(row=row, column=4, value=invoice.customer.gstin)
            ws.cell(row=row, column=5, value=invoice.get_status_display())
            for offset, name in enumerate(amount_fields):
                value = getattr(invoice, name)
                sums[name] += value
                cell = ws.cell(row=row, column=first_amount_col + offset, value=float(value))
                cell.number_format = currency_format
            row += 1

        ws.cell(row=row, column=1, value="Total").font = Font(bold=True)
        for col in range(1, first_amount_col):
            ws.cell(row=row, column=col).fill = total_fill
        for offset, name in enumerate(amount_fields):
            cell = ws.cell(row=row, column=first_amount_col + offset, value=float(sums[name]))
            cell.number_format = currency_format
            cell.font = Font(bold=True)
            cell.fill = total_fill

        widths = [16, 12, 35, 18, 10, 15, 12, 12, 12, 10, 15]
        for col, width in enumerate(widths, 1):
            ws.column_dimensions[get_column_letter(col)].width = width

        buffer = io.BytesIO()
        wb.save(buffer)
        return buffer.getvalue()


def html_to_pdf(html: str) -> bytes:
    from weasyprint import HTML

    return HTML(string=html).write_pdf()


def _image_data_uri(field_file) -> str | None:
    """Inline an uploaded image so printing works without serving media files."""
    if not field_file:
        return None
    try:
        with field_file.open("rb") as handle:
            content = handle.read()
    except (FileNotFoundError, OSError):
        logger.exception("Could not read company image %s", field_file.name)
        return None
    mime = mimetypes.guess_type(field_file.name)[0] or "image/png"
    return f"data:{mime};base64,{base64.b64encode(content).decode('ascii')}"


def _print_context(invoice: Invoice, company: CompanyProfile, logo_src, signature_src) -> dict:
    items = [
        {
            "description": item.description,
            "weight": item.weight,
            "hsn_code": item.hsn_code,
            "quantity": item.quantity,
            "rate": item.rate,
            "amount": item.amount,
        }
        for item in invoice.items.all()
    ]
    return {
        "invoice_number": invoice.invoice_number,
        "invoice_date": invoice.invoice_date,
        "due_date": invoice.due_date,
        "company": invoice.company_snapshot or company.to_snapshot(),
        "customer": invoice.customer.to_snapshot(),
        "items": items,
        "empty_rows": range(max(0, MIN_TABLE_ROWS - len(items))),
        "subtotal": invoice.subtotal,
        "cgst_rate": invoice.cgst_rate,
        "sgst_rate": invoice.sgst_rate,
        "cgst_amount": invoice.cgst_amount,
        "sgst_amount": invoice.sgst_amount,
        "total_tax": invoice.total_tax,
        "round_off_sign": "+" if invoice.round_off >= 0 else "-",
        "round_off_abs": abs(invoice.round_off),
        "grand_total": invoice.grand_total,
        "amount_in_words": invoice.amount_in_words,
        "logo_src": logo_src,
        "signature_src": signature_src,
    }


def _decimal_str(value) -> str:
    return str(to_currency(value))


def totals_to_dict(totals) -> dict:
    return {
        "subtotal": _decimal_str(totals.subtotal),
        "cgst_rate": _decimal_str(totals.cgst_rate),
        "sgst_rate": _decimal_str(totals.sgst_rate),
        "cgst_amount": _decimal_str(totals.cgst_amount),
        "sgst_amount": _decimal_str(totals.sgst_amount),
        "total_tax": _decimal_str(totals.total_tax),
        "round_off": _decimal_str(totals.round_off),
        "grand_total": _decimal_str(totals.grand_total),
        "amount_in_words": totals.amount_in_words,
    }


def draft_to_dict(draft: InvoiceDraft) -> dict:
    """Live calculation response: per-item amounts plus totals."""
    return {
        "items": [
            {
                "description": item.description,
                "weight": item.weight,
                "hsn_code": item.hsn_code,
                "quantity": item.quantity,
                "rate": item.rate,
                "amount": _decimal_str(item.amount),
            }
            for item in draft.items
        ],
        **totals_to_dict(draft.totals),
    }


def invoice_to_dict(invoice: Invoice, with_items: bool = True) -> dict:
    data = {
        "id": invoice.pk,
        "invoice_number": invoice.invoice_number,
        "invoice_date": invoice.invoice_date.isoformat(),
        "due_date": invoice.due_date.isoformat() if invoice.due_date else None,
        "customer_id": invoice.customer_id,
        "customer_name": invoice.customer.name,
        "customer_gstin": invoice.customer.gstin,
        "customer": invoice.customer.to_snapshot(),
        "cgst_rate": str(invoice.cgst_rate),
        "sgst_rate": str(invoice.sgst_rate),
        "subtotal": str(invoice.subtotal),
        "cgst_amount": str(invoice.cgst_amount),
        "sgst_amount": str(invoice.sgst_amount),
        "total_tax": str(invoice.total_tax),
        "round_off": str(invoice.round_off),
        "grand_total": str(invoice.grand_total),
        "amount_in_words": invoice.amount_in_words,
        "status": invoice.status,
        "company_snapshot": invoice.company_snapshot,
        "created_at": invoice.created_at.isoformat(),
        "updated_at": invoice.updated_at.isoformat(),
    }
    if with_items:
        data["items"] = [
            {
                "id": item.pk,
                "description": item.description,
                "weight": item.weight,
                "hsn_code": item.hsn_code,
                "quantity": str(item.quantity),
                "rate": str(item.rate),
                "amount": str(item.amount),
                "position": item.position,
            }
            for item in invoice.items.all()
        ]
    return data
