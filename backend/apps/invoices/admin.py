from django.contrib import admin

from .models import Invoice, InvoiceItem


class InvoiceItemInline(admin.TabularInline):
    model = InvoiceItem
    extra = 0
    readonly_fields = ["amount"]


@admin.register(Invoice)
class InvoiceAdmin(admin.ModelAdmin):
    list_display = ["invoice_number", "invoice_date", "customer", "grand_total", "status"]
    list_filter = ["status", "invoice_date"]
    search_fields = ["invoice_number", "customer__name", "customer__gstin"]
    readonly_fields = [
        "subtotal",
        "cgst_amount",
        "sgst_amount",
        "total_tax",
        "grand_total",
        "amount_in_words",
        "company_snapshot",
        "created_at",
        "updated_at",
    ]
    inlines = [InvoiceItemInline]
