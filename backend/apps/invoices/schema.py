"""GraphQL schema for invoices."""
from datetime import date
from decimal import Decimal
from typing import List, Optional

import strawberry
from strawberry import auto
import strawberry_django
from strawberry.types import Info

from apps.core.context import Context
from apps.core.exceptions import InvalidInput, ServiceError
from apps.core.schema import DeleteResult, PaginationType
from apps.customers.schema import CustomerInput, CustomerType
from apps.invoices.models import Invoice, InvoiceItem
from apps.invoices.money import to_currency
from apps.invoices.services import InvoiceService
from apps.invoices.types import InvoiceDraft
from apps.invoices.words import amount_to_words


# =========================================================================
# Stored invoice types
# =========================================================================


@strawberry_django.type(InvoiceItem)
class InvoiceItemType:
    id: auto
    description: auto
    weight: auto
    hsn_code: auto
    quantity: auto
    rate: auto
    amount: auto
    position: auto


@strawberry_django.type(Invoice)
class InvoiceType:
    id: auto
    invoice_number: auto
    invoice_date: auto
    due_date: auto
    customer: CustomerType
    cgst_rate: auto
    sgst_rate: auto
    subtotal: auto
    cgst_amount: auto
    sgst_amount: auto
    total_tax: auto
    round_off: auto
    grand_total: auto
    amount_in_words: auto
    status: str
    company_snapshot: strawberry.scalars.JSON
    created_at: auto
    updated_at: auto

    @strawberry.field
    def items(self) -> List[InvoiceItemType]:
        return list(self.items.all())


@strawberry.type
class InvoiceConnection:
    """Paginated invoice list."""

    items: List[InvoiceType]
    pagination: PaginationType


# =========================================================================
# Live calculation types
# =========================================================================


@strawberry.type
class CalculatedItemType:
    description: str
    weight: str
    hsn_code: str
    quantity: float
    rate: float
    amount: Decimal


@strawberry.type
class InvoiceCalculationType:
    """Totals for an unsaved invoice, rounded to paise."""

    items: List[CalculatedItemType]
    subtotal: Decimal
    cgst_rate: Decimal
    sgst_rate: Decimal
    cgst_amount: Decimal
    sgst_amount: Decimal
    total_tax: Decimal
    round_off: Decimal
    grand_total: Decimal
    amount_in_words: str


def _convert_draft(draft: InvoiceDraft) -> InvoiceCalculationType:
    totals = draft.totals
    return InvoiceCalculationType(
        items=[
            CalculatedItemType(
                description=item.description,
                weight=item.weight,
                hsn_code=item.hsn_code,
                quantity=item.quantity,
                rate=item.rate,
                amount=to_currency(item.amount),
            )
            for item in draft.items
        ],
        subtotal=to_currency(totals.subtotal),
        cgst_rate=to_currency(totals.cgst_rate),
        sgst_rate=to_currency(totals.sgst_rate),
        cgst_amount=to_currency(totals.cgst_amount),
        sgst_amount=to_currency(totals.sgst_amount),
        total_tax=to_currency(totals.total_tax),
        round_off=to_currency(totals.round_off),
        grand_total=to_currency(totals.grand_total),
        amount_in_words=totals.amount_in_words,
    )


# =========================================================================
# Inputs and results
# =========================================================================


@strawberry.input
class InvoiceItemInput:
    description: str
    quantity: float
    rate: float
    weight: str = ""
    hsn_code: str = ""


@strawberry.input
class InvoiceCalculationInput:
    items: List[InvoiceItemInput]
    cgst_rate: Optional[float] = None
    sgst_rate: Optional[float] = None
    round_off: Optional[float] = None
    auto_round_off: bool = False


@strawberry.input
class InvoiceInput:
    invoice_number: str
    invoice_date: date
    items: List[InvoiceItemInput]
    due_date: Optional[date] = None
    customer_id: Optional[strawberry.ID] = None
    customer: Optional[CustomerInput] = None
    cgst_rate: Optional[float] = None
    sgst_rate: Optional[float] = None
    round_off: Optional[float] = None
    auto_round_off: bool = False
    status: Optional[str] = None


@strawberry.type
class InvoiceResult:
    invoice: Optional[InvoiceType] = None
    success: bool = False
    error: Optional[str] = None
    errors: Optional[List[str]] = None


def _to_payload(input) -> dict:
    """Input object to the plain dict the service validates."""
    data = {k: v for k, v in strawberry.asdict(input).items() if v is not None}
    for key in ("invoice_date", "due_date"):
        if isinstance(data.get(key), date):
            data[key] = data[key].isoformat()
    return data


def _invoice_error(e: ServiceError) -> InvoiceResult:
    if isinstance(e, InvalidInput):
        return InvoiceResult(error=e.message, errors=e.errors)
    return InvoiceResult(error=e.message)


# =========================================================================
# Queries
# =========================================================================


@strawberry.type
class InvoiceQuery:
    @strawberry.field
    def calculate_invoice(
        self, info: Info[Context, None], input: InvoiceCalculationInput
    ) -> InvoiceCalculationType:
        """Recompute totals for the invoice form; called on every edit."""
        draft = InvoiceService(info.context.company).calculate(_to_payload(input))
        return _convert_draft(draft)

    @strawberry.field
    def amount_in_words(self, amount: float) -> str:
        return amount_to_words(amount)

    @strawberry.field
    def invoices(
        self,
        info: Info[Context, None],
        status: Optional[str] = None,
        customer_id: Optional[strawberry.ID] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
        page: int = 1,
        limit: Optional[int] = None,
    ) -> InvoiceConnection:
        result = InvoiceService(info.context.company).list_invoices(
            status=status,
            customer_id=customer_id,
            date_from=date_from,
            date_to=date_to,
            page=page,
            limit=limit,
        )
        return InvoiceConnection(
            items=result.items,
            pagination=PaginationType(**result.meta()),
        )

    @strawberry.field
    def invoice(self, id: strawberry.ID) -> Optional[InvoiceType]:
        return (
            Invoice.objects.select_related("customer")
            .prefetch_related("items")
            .filter(pk=id)
            .first()
        )

    @strawberry.field
    def next_invoice_number(
        self, info: Info[Context, None], invoice_date: Optional[date] = None
    ) -> str:
        return InvoiceService(info.context.company).next_invoice_number(invoice_date)


# =========================================================================
# Mutations
# =========================================================================


@strawberry.type
class InvoiceMutation:
    @strawberry.mutation
    def create_invoice(self, info: Info[Context, None], input: InvoiceInput) -> InvoiceResult:
        try:
            invoice = InvoiceService(info.context.company).create_invoice(_to_payload(input))
        except ServiceError as e:
            return _invoice_error(e)
        return InvoiceResult(invoice=invoice, success=True)

    @strawberry.mutation
    def update_invoice(
        self, info: Info[Context, None], id: strawberry.ID, input: InvoiceInput
    ) -> InvoiceResult:
        try:
            invoice = InvoiceService(info.context.company).update_invoice(id, _to_payload(input))
        except ServiceError as e:
            return _invoice_error(e)
        return InvoiceResult(invoice=invoice, success=True)

    @strawberry.mutation
    def delete_invoice(self, info: Info[Context, None], id: strawberry.ID) -> DeleteResult:
        try:
            InvoiceService(info.context.company).delete_invoice(id)
        except ServiceError as e:
            return DeleteResult(error=e.message)
        return DeleteResult(success=True)
