"""Customer models."""
from django.db import models

from apps.core.models import TimestampedModel


class Customer(TimestampedModel):
    """A buyer invoices are billed to. Names are unique so invoices can upsert by name."""

    name = models.CharField(max_length=255, unique=True)
    address = models.TextField(blank=True)
    gstin = models.CharField(max_length=15, blank=True, help_text="GST Identification Number")
    state = models.CharField(max_length=100, blank=True)
    state_code = models.CharField(max_length=2, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)

    class Meta:
        ordering = ["name"]

    def __str__(self):
        return self.name

    def to_snapshot(self) -> dict:
        """Buyer details as printed on an invoice."""
        return {
            "name": self.name,
            "address": self.address,
            "gstin": self.gstin,
            "state": self.state,
            "state_code": self.state_code,
            "phone": self.phone,
            "email": self.email,
        }
