"""GraphQL schema for the company profile."""
import base64
import binascii
from decimal import Decimal

import strawberry

from apps.core.exceptions import InvalidInput, ServiceError
from apps.company.models import CompanyProfile
from apps.company.services import CompanyService


@strawberry.type
class CompanyProfileType:
    company_name: str
    tagline: str
    address: str
    gstin: str
    state: str
    state_code: str
    phone: str
    email: str
    bank_name: str
    bank_account_number: str
    bank_ifsc: str
    jurisdiction: str
    terms: list[str]
    default_cgst_rate: Decimal
    default_sgst_rate: Decimal
    invoice_number_pattern: str
    logo_url: str | None = None
    signature_url: str | None = None


def profile_to_type(profile: CompanyProfile) -> CompanyProfileType:
    return CompanyProfileType(
        **profile.to_snapshot(),
        default_cgst_rate=profile.default_cgst_rate,
        default_sgst_rate=profile.default_sgst_rate,
        invoice_number_pattern=profile.invoice_number_pattern,
        logo_url=profile.logo.url if profile.logo else None,
        signature_url=profile.signature.url if profile.signature else None,
    )


@strawberry.input
class CompanyProfileInput:
    company_name: str
    tagline: str | None = None
    address: str | None = None
    gstin: str | None = None
    state: str | None = None
    state_code: str | None = None
    phone: str | None = None
    email: str | None = None
    bank_name: str | None = None
    bank_account_number: str | None = None
    bank_ifsc: str | None = None
    jurisdiction: str | None = None
    terms: list[str] | None = None
    default_cgst_rate: Decimal | None = None
    default_sgst_rate: Decimal | None = None
    invoice_number_pattern: str | None = None


@strawberry.input
class CompanyImageInput:
    filename: str
    file_content: str  # Base64-encoded file content


@strawberry.type
class CompanyProfileResult:
    profile: CompanyProfileType | None = None
    success: bool = False
    error: str | None = None
    errors: list[str] | None = None


def _error_result(e: ServiceError) -> CompanyProfileResult:
    if isinstance(e, InvalidInput):
        return CompanyProfileResult(error=e.message, errors=e.errors)
    return CompanyProfileResult(error=e.message)


@strawberry.type
class CompanyQuery:
    @strawberry.field
    def company_profile(self) -> CompanyProfileType:
        return profile_to_type(CompanyService().get_profile())


@strawberry.type
class CompanyMutation:
    @strawberry.mutation
    def save_company_profile(self, input: CompanyProfileInput) -> CompanyProfileResult:
        data = {k: v for k, v in strawberry.asdict(input).items() if v is not None}
        try:
            profile = CompanyService().save_profile(data)
        except ServiceError as e:
            return _error_result(e)
        return CompanyProfileResult(profile=profile_to_type(profile), success=True)

    @strawberry.mutation
    def upload_company_logo(self, input: CompanyImageInput) -> CompanyProfileResult:
        return _upload(CompanyService().save_logo, input)

    @strawberry.mutation
    def upload_company_signature(self, input: CompanyImageInput) -> CompanyProfileResult:
        return _upload(CompanyService().save_signature, input)


def _upload(save, input: CompanyImageInput) -> CompanyProfileResult:
    try:
        content = base64.b64decode(input.file_content, validate=True)
    except (binascii.Error, ValueError):
        return CompanyProfileResult(error="Invalid base64 file content")
    try:
        profile = save(input.filename, content)
    except ServiceError as e:
        return _error_result(e)
    return CompanyProfileResult(profile=profile_to_type(profile), success=True)
