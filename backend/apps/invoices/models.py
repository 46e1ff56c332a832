"""Invoice models: stored invoices and their line items."""
from django.db import models

from apps.core.models import TimestampedModel
from apps.invoices.types import CustomerDetails, InvoiceDraft, LineItem


class Invoice(TimestampedModel):
    """A saved GST invoice with totals as computed at save time."""

    class Status(models.TextChoices):
        DRAFT = "draft", "Draft"
        SENT = "sent", "Sent"
        PAID = "paid", "Paid"
        CANCELLED = "cancelled", "Cancelled"

    invoice_number = models.CharField(max_length=100, unique=True)
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="invoices",
    )
    invoice_date = models.DateField()
    due_date = models.DateField(null=True, blank=True)

    cgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=9)
    sgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=9)

    # Totals, rounded to currency precision
    subtotal = models.DecimalField(max_digits=12, decimal_places=2)
    cgst_amount = models.DecimalField(max_digits=12, decimal_places=2)
    sgst_amount = models.DecimalField(max_digits=12, decimal_places=2)
    total_tax = models.DecimalField(max_digits=12, decimal_places=2)
    round_off = models.DecimalField(max_digits=12, decimal_places=2, default=0)
    grand_total = models.DecimalField(max_digits=12, decimal_places=2)
    amount_in_words = models.TextField(blank=True)

    status = models.CharField(
        max_length=10,
        choices=Status.choices,
        default=Status.DRAFT,
    )
    company_snapshot = models.JSONField(
        default=dict,
        blank=True,
        help_text="Frozen copy of the company profile at save time",
    )

    class Meta:
        ordering = ["-created_at", "-id"]

    def __str__(self):
        return f"Invoice {self.invoice_number}"

    def to_draft(self) -> InvoiceDraft:
        """Rebuild the draft from stored fields; its totals round to the stored ones."""
        return InvoiceDraft(
            invoice_number=self.invoice_number,
            invoice_date=self.invoice_date,
            due_date=self.due_date,
            customer=CustomerDetails(**self.customer.to_snapshot()),
            customer_id=self.customer_id,
            items=tuple(item.to_line_item() for item in self.items.all()),
            cgst_rate=float(self.cgst_rate),
            sgst_rate=float(self.sgst_rate),
            round_off=float(self.round_off),
            status=self.status,
            company=dict(self.company_snapshot or {}),
        )


class InvoiceItem(models.Model):
    """A line item; ``amount`` is weight x quantity x rate, stored for reporting."""

    invoice = models.ForeignKey(
        Invoice,
        on_delete=models.CASCADE,
        related_name="items",
    )
    description = models.CharField(max_length=500)
    weight = models.CharField(max_length=50, blank=True)
    hsn_code = models.CharField(max_length=20, blank=True, help_text="HSN/SAC code")
    quantity = models.DecimalField(max_digits=12, decimal_places=3)
    rate = models.DecimalField(max_digits=12, decimal_places=2)
    amount = models.DecimalField(max_digits=14, decimal_places=2)
    position = models.PositiveIntegerField(default=0)

    class Meta:
        ordering = ["position", "id"]

    def __str__(self):
        return self.description

    def to_line_item(self) -> LineItem:
        return LineItem(
            description=self.description,
            weight=self.weight,
            hsn_code=self.hsn_code,
            quantity=float(self.quantity),
            rate=float(self.rate),
        )
