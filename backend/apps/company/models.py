"""Seller profile printed on every invoice."""
import os
import uuid

from django.conf import settings
from django.db import models

from apps.core.models import TimestampedModel


def company_image_upload_path(instance, filename):
    """Upload path: uploads/company/{uuid}{ext}"""
    ext = os.path.splitext(filename)[1].lower()
    return f"uploads/company/{uuid.uuid4().hex}{ext}"


class CompanyProfile(TimestampedModel):
    """Single-row profile of the business issuing invoices."""

    SINGLETON_ID = 1

    company_name = models.CharField(max_length=255)
    tagline = models.CharField(max_length=255, blank=True)
    address = models.TextField(blank=True)
    gstin = models.CharField(max_length=15, blank=True, help_text="GST Identification Number")
    state = models.CharField(max_length=100, blank=True)
    state_code = models.CharField(max_length=2, blank=True)
    phone = models.CharField(max_length=50, blank=True)
    email = models.EmailField(blank=True)

    # Bank details printed in the invoice footer
    bank_name = models.CharField(max_length=255, blank=True)
    bank_account_number = models.CharField(max_length=50, blank=True)
    bank_ifsc = models.CharField(max_length=20, blank=True, help_text="Branch IFSC code")

    jurisdiction = models.CharField(
        max_length=100,
        blank=True,
        help_text="City named in 'Subject to ... Jurisdiction'",
    )
    terms = models.JSONField(
        default=list,
        blank=True,
        help_text="Terms and conditions, one entry per line",
    )

    default_cgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=9)
    default_sgst_rate = models.DecimalField(max_digits=5, decimal_places=2, default=9)
    invoice_number_pattern = models.CharField(
        max_length=100,
        default="INV-{NNNN}",
        help_text="Pattern with placeholders: {YYYY}, {YY}, {MM}, {NNN}, {NNNN}, {NNNNN}",
    )

    logo = models.FileField(upload_to=company_image_upload_path, blank=True, null=True)
    signature = models.FileField(upload_to=company_image_upload_path, blank=True, null=True)

    class Meta:
        verbose_name = "Company Profile"
        verbose_name_plural = "Company Profile"

    def __str__(self):
        return self.company_name

    def save(self, *args, **kwargs):
        self.pk = self.SINGLETON_ID
        super().save(*args, **kwargs)

    @classmethod
    def defaults(cls) -> "CompanyProfile":
        """Unsaved profile seeded from settings, used until one is stored."""
        return cls(
            pk=cls.SINGLETON_ID,
            company_name=settings.DEFAULT_COMPANY_NAME,
            gstin=settings.DEFAULT_GSTIN,
            state=settings.DEFAULT_STATE,
            state_code=settings.DEFAULT_STATE_CODE,
        )

    def to_snapshot(self) -> dict:
        """Capture current state as a JSON-serializable dict for invoice records."""
        return {
            "company_name": self.company_name,
            "tagline": self.tagline,
            "address": self.address,
            "gstin": self.gstin,
            "state": self.state,
            "state_code": self.state_code,
            "phone": self.phone,
            "email": self.email,
            "bank_name": self.bank_name,
            "bank_account_number": self.bank_account_number,
            "bank_ifsc": self.bank_ifsc,
            "jurisdiction": self.jurisdiction,
            "terms": list(self.terms or []),
        }
