"""Invoice calculation pipeline: line amount, totals, round-off.

Every function here is pure. Amounts stay in float with full precision
through the pipeline; rounding to currency precision happens only at
presentation and persistence boundaries (see ``money.to_currency``).
"""
from dataclasses import dataclass

from apps.invoices.money import parse_number, round_half_away
from apps.invoices.words import amount_to_words


@dataclass(frozen=True)
class InvoiceTotals:
    """Derived totals of an invoice. Rebuilt on every input change."""

    subtotal: float
    cgst_rate: float
    sgst_rate: float
    cgst_amount: float
    sgst_amount: float
    total_tax: float
    round_off: float
    grand_total: float
    amount_in_words: str


def compute_line_amount(weight, quantity, rate) -> float:
    """
    Amount of one invoice row: weight x quantity x rate.

    An empty or non-numeric weight counts as 0, which zeroes the row.
    Negative inputs are passed through; range checks belong to the caller.
    """
    return parse_number(weight) * parse_number(quantity) * parse_number(rate)


def compute_auto_round_off(subtotal, total_tax) -> float:
    """Adjustment that brings subtotal + tax to the nearest whole rupee."""
    pre_round = parse_number(subtotal) + parse_number(total_tax)
    return round_half_away(pre_round) - pre_round


def compute_totals(items, cgst_rate, sgst_rate, round_off=0.0) -> InvoiceTotals:
    """
    Derive the full totals chain for a sequence of line items.

    Args:
        items: Objects exposing an ``amount`` (e.g. ``LineItem``). Order does
            not affect the result.
        cgst_rate: CGST percentage (9 means 9%).
        sgst_rate: SGST percentage.
        round_off: Caller-supplied adjustment; never applied automatically.

    Returns:
        InvoiceTotals including the amount in words of the grand total.
    """
    cgst_rate = parse_number(cgst_rate)
    sgst_rate = parse_number(sgst_rate)
    round_off = parse_number(round_off)

    subtotal = sum((item.amount for item in items), 0.0)
    cgst_amount = subtotal * cgst_rate / 100
    sgst_amount = subtotal * sgst_rate / 100
    total_tax = cgst_amount + sgst_amount
    grand_total = subtotal + total_tax + round_off

    return InvoiceTotals(
        subtotal=subtotal,
        cgst_rate=cgst_rate,
        sgst_rate=sgst_rate,
        cgst_amount=cgst_amount,
        sgst_amount=sgst_amount,
        total_tax=total_tax,
        round_off=round_off,
        grand_total=grand_total,
        amount_in_words=amount_to_words(grand_total),
    )
