"""Invoice data classes passed between form, calculator, storage and renderer."""
from dataclasses import dataclass, field, replace
from datetime import date
from typing import Optional

from apps.invoices.calculator import (
    InvoiceTotals,
    compute_auto_round_off,
    compute_line_amount,
    compute_totals,
)


@dataclass(frozen=True)
class LineItem:
    """One invoice row. ``amount`` is always derived from weight, quantity and rate."""

    description: str
    weight: str = ""
    hsn_code: str = ""
    quantity: float = 0.0
    rate: float = 0.0

    @property
    def amount(self) -> float:
        return compute_line_amount(self.weight, self.quantity, self.rate)


@dataclass(frozen=True)
class CustomerDetails:
    """Buyer block as printed on the invoice."""

    name: str
    address: str = ""
    gstin: str = ""
    state: str = ""
    state_code: str = ""
    phone: str = ""
    email: str = ""


@dataclass(frozen=True)
class InvoiceDraft:
    """
    Everything needed to compute and render an invoice.

    A draft is immutable: editing a field means building a new draft, and
    ``totals`` is recomputed from the current items, rates and round-off on
    every access.
    """

    invoice_number: str
    invoice_date: date
    customer: CustomerDetails
    items: tuple[LineItem, ...] = ()
    cgst_rate: float = 9.0
    sgst_rate: float = 9.0
    round_off: float = 0.0
    due_date: Optional[date] = None
    customer_id: Optional[int] = None
    status: str = "draft"
    company: dict = field(default_factory=dict)

    @property
    def totals(self) -> InvoiceTotals:
        return compute_totals(self.items, self.cgst_rate, self.sgst_rate, self.round_off)

    def with_auto_round_off(self) -> "InvoiceDraft":
        """Return a copy whose round-off brings the grand total to a whole rupee."""
        base = compute_totals(self.items, self.cgst_rate, self.sgst_rate, 0.0)
        return replace(
            self, round_off=compute_auto_round_off(base.subtotal, base.total_tax)
        )
