from django.urls import path

from .views import (
    InvoiceCalculateView,
    InvoiceDetailView,
    InvoiceExportView,
    InvoiceListView,
    InvoicePdfView,
    InvoicePrintView,
    NextInvoiceNumberView,
)

urlpatterns = [
    path("", InvoiceListView.as_view(), name="invoice-list"),
    path("calculate/", InvoiceCalculateView.as_view(), name="invoice-calculate"),
    path("next-number/", NextInvoiceNumberView.as_view(), name="invoice-next-number"),
    path("export/", InvoiceExportView.as_view(), name="invoice-export"),
    path("<int:invoice_id>/", InvoiceDetailView.as_view(), name="invoice-detail"),
    path("<int:invoice_id>/print/", InvoicePrintView.as_view(), name="invoice-print"),
    path("<int:invoice_id>/pdf/", InvoicePdfView.as_view(), name="invoice-pdf"),
]
