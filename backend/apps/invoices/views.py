"""REST views for invoices: CRUD, live calculation, printing and export."""
from django.http import HttpResponse, JsonResponse

from apps.core import validation
from apps.core.exceptions import InvalidInput
from apps.core.views import JsonApiView
from apps.invoices.models import Invoice
from apps.invoices.services import (
    InvoiceService,
    draft_to_dict,
    invoice_to_dict,
)

EXCEL_CONTENT_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"


def _date_param(request, name):
    raw = request.GET.get(name, "").strip()
    if not raw:
        return None
    value = validation.parse_iso_date(raw)
    if value is None:
        raise InvalidInput([f"{name} must be a date in YYYY-MM-DD format"])
    return value


def _status_param(request):
    status = request.GET.get("status", "").strip() or None
    if status and status not in Invoice.Status.values:
        raise InvalidInput([f"status must be one of: {', '.join(Invoice.Status.values)}"])
    return status


def _file_response(content: bytes, content_type: str, filename: str, inline: bool = False):
    response = HttpResponse(content, content_type=content_type)
    disposition = "inline" if inline else "attachment"
    response["Content-Disposition"] = f'{disposition}; filename="{filename}"'
    response["Content-Length"] = len(content)
    return response


class InvoiceListView(JsonApiView):
    error_message = "Failed to process invoices"

    def get(self, request):
        page = InvoiceService().list_invoices(
            status=_status_param(request),
            customer_id=validation.parse_int(request.GET.get("customer_id")),
            date_from=_date_param(request, "date_from"),
            date_to=_date_param(request, "date_to"),
            page=request.GET.get("page"),
            limit=request.GET.get("limit"),
        )
        return JsonResponse({
            "invoices": [invoice_to_dict(i, with_items=False) for i in page.items],
            "pagination": page.meta(),
        })

    def post(self, request):
        invoice = InvoiceService().create_invoice(self.read_json(request))
        return JsonResponse(invoice_to_dict(invoice), status=201)


class InvoiceDetailView(JsonApiView):
    error_message = "Failed to process invoice"

    def get(self, request, invoice_id):
        return JsonResponse(invoice_to_dict(InvoiceService().get_invoice(invoice_id)))

    def put(self, request, invoice_id):
        invoice = InvoiceService().update_invoice(invoice_id, self.read_json(request))
        return JsonResponse(invoice_to_dict(invoice))

    def delete(self, request, invoice_id):
        InvoiceService().delete_invoice(invoice_id)
        return HttpResponse(status=204)


class InvoiceCalculateView(JsonApiView):
    """Totals for an unsaved invoice form; nothing is stored."""

    error_message = "Failed to calculate invoice"

    def post(self, request):
        draft = InvoiceService().calculate(self.read_json(request))
        return JsonResponse(draft_to_dict(draft))


class NextInvoiceNumberView(JsonApiView):
    error_message = "Failed to generate invoice number"

    def get(self, request):
        number = InvoiceService().next_invoice_number(_date_param(request, "invoice_date"))
        return JsonResponse({"next_invoice_number": number})


class InvoicePrintView(JsonApiView):
    """Printable HTML for one invoice."""

    error_message = "Failed to render invoice"

    def get(self, request, invoice_id):
        service = InvoiceService()
        html = service.render_invoice_html([service.get_invoice(invoice_id)])
        return HttpResponse(html, content_type="text/html; charset=utf-8")


class InvoicePdfView(JsonApiView):
    error_message = "Failed to generate PDF"

    def get(self, request, invoice_id):
        service = InvoiceService()
        invoice = service.get_invoice(invoice_id)
        content = service.generate_pdf([invoice])
        preview = request.GET.get("preview", "").lower() in ("true", "1")
        return _file_response(
            content, "application/pdf", f"invoice-{invoice.invoice_number}.pdf", inline=preview
        )


class InvoiceExportView(JsonApiView):
    """Export invoices in a date range as one PDF or an Excel sales register."""

    error_message = "Failed to export invoices"

    def get(self, request):
        """
        Query parameters:
            date_from, date_to: ISO dates, both optional and inclusive
            status: optional status filter
            format: "pdf" or "excel" (default "pdf")
        """
        export_format = request.GET.get("format", "pdf")
        if export_format not in ("pdf", "excel"):
            raise InvalidInput(["format must be one of: pdf, excel"])
        date_from = _date_param(request, "date_from")
        date_to = _date_param(request, "date_to")
        if date_from and date_to and date_from > date_to:
            raise InvalidInput(["date_from must not be after date_to"])

        service = InvoiceService()
        invoices = service.invoices_between(date_from, date_to, _status_param(request))
        if not invoices:
            return JsonResponse({"error": "No invoices found for this period"}, status=404)

        period = "-".join(d.isoformat() for d in (date_from, date_to) if d) or "all"
        if export_format == "pdf":
            content = service.generate_pdf(invoices)
            return _file_response(content, "application/pdf", f"invoices-{period}.pdf")

        content = service.generate_register_excel(invoices, date_from, date_to)
        return _file_response(content, EXCEL_CONTENT_TYPE, f"sales-register-{period}.xlsx")
