"""Company profile service: read, save, logo and signature uploads."""
import logging
import os
from decimal import Decimal

from django.conf import settings
from django.core.files.base import ContentFile

from apps.core import validation
from apps.core.exceptions import InvalidInput
from apps.company.models import CompanyProfile

logger = logging.getLogger(__name__)

PROFILE_TEXT_FIELDS = (
    "company_name",
    "tagline",
    "address",
    "gstin",
    "state",
    "state_code",
    "phone",
    "email",
    "bank_name",
    "bank_account_number",
    "bank_ifsc",
    "jurisdiction",
    "invoice_number_pattern",
)


def validate_profile(data: dict) -> list[str]:
    """Validate a company profile payload (empty list = valid)."""
    from apps.invoices.numbering import InvoiceNumberService

    errors = [
        validation.required(data.get("company_name"), "Company name is required"),
        validation.max_length(data.get("gstin"), 15, "GSTIN"),
        validation.max_length(data.get("state_code"), 2, "State code"),
        validation.email(data.get("email")),
    ]
    for key, label in (("default_cgst_rate", "CGST rate"), ("default_sgst_rate", "SGST rate")):
        if data.get(key) not in (None, ""):
            errors.append(validation.decimal_range(data[key], label, minimum=0, maximum=100))
    terms = data.get("terms")
    if terms is not None and not isinstance(terms, list):
        errors.append("Terms must be a list of strings")
    errors = [e for e in errors if e]
    pattern = data.get("invoice_number_pattern")
    if pattern:
        errors.extend(InvoiceNumberService.validate_pattern(pattern))
    return errors


class CompanyService:
    """Reads and updates the single company profile."""

    def get_profile(self) -> CompanyProfile:
        """Return the stored profile, or unsaved defaults when none exists."""
        profile = CompanyProfile.objects.filter(pk=CompanyProfile.SINGLETON_ID).first()
        return profile or CompanyProfile.defaults()

    def _get_or_create_profile(self) -> CompanyProfile:
        profile, created = CompanyProfile.objects.get_or_create(
            pk=CompanyProfile.SINGLETON_ID,
            defaults={"company_name": settings.DEFAULT_COMPANY_NAME},
        )
        if created:
            logger.info("Created company profile with default name")
        return profile

    def save_profile(self, data: dict) -> CompanyProfile:
        errors = validate_profile(data)
        if errors:
            logger.warning("Rejected company profile update: %s", errors)
            raise InvalidInput(errors)

        profile = self.get_profile()
        for name in PROFILE_TEXT_FIELDS:
            if name in data and data[name] is not None:
                setattr(profile, name, validation.clean_text(data[name]))
        if data.get("terms") is not None:
            profile.terms = [
                validation.clean_text(t) for t in data["terms"] if validation.clean_text(t)
            ]
        for name in ("default_cgst_rate", "default_sgst_rate"):
            if data.get(name) not in (None, ""):
                setattr(profile, name, validation.parse_decimal(data[name]))
        profile.save()
        logger.info("Saved company profile for %s", profile.company_name)
        return profile

    def save_logo(self, filename: str, content: bytes) -> CompanyProfile:
        return self._save_image("logo", filename, content)

    def save_signature(self, filename: str, content: bytes) -> CompanyProfile:
        return self._save_image("signature", filename, content)

    def _save_image(self, field_name: str, filename: str, content: bytes) -> CompanyProfile:
        ext = os.path.splitext(filename or "")[1].lower()
        if ext not in settings.ALLOWED_IMAGE_EXTENSIONS:
            raise InvalidInput([
                f"File type {ext or '(none)'} not allowed. "
                f"Accepted: {', '.join(settings.ALLOWED_IMAGE_EXTENSIONS)}"
            ])
        if not content:
            raise InvalidInput([f"No {field_name} file provided"])
        if len(content) > settings.MAX_IMAGE_SIZE:
            max_mb = settings.MAX_IMAGE_SIZE / (1024 * 1024)
            raise InvalidInput([f"File too large. Maximum size is {max_mb:.0f}MB"])

        profile = self._get_or_create_profile()
        field_file = getattr(profile, field_name)

        # Delete old image if exists
        if field_file:
            field_file.delete(save=False)

        field_file.save(filename, ContentFile(content), save=True)
        logger.info("Stored company %s at %s", field_name, field_file.name)
        return profile


def company_to_dict(profile: CompanyProfile) -> dict:
    return {
        **profile.to_snapshot(),
        "default_cgst_rate": f"{Decimal(profile.default_cgst_rate):.2f}",
        "default_sgst_rate": f"{Decimal(profile.default_sgst_rate):.2f}",
        "invoice_number_pattern": profile.invoice_number_pattern,
        "logo_url": profile.logo.url if profile.logo else None,
        "signature_url": profile.signature.url if profile.signature else None,
    }
