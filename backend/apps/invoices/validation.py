"""Invoice payload validation and conversion to ``InvoiceDraft``."""
import logging
import math
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

from apps.core import validation
from apps.core.exceptions import InvalidInput
from apps.customers.validation import validate_customer
from apps.invoices.models import Invoice
from apps.invoices.money import parse_number
from apps.invoices.types import CustomerDetails, InvoiceDraft, LineItem

QUANTITY_PLACES = Decimal("0.001")
RATE_PLACES = Decimal("0.01")
MIN_QUANTITY = Decimal("0.01")
MAX_QUANTITY = Decimal("999999999")
MAX_RATE = Decimal("999999999")
# Largest values the invoice and item amount columns hold.
MAX_TOTAL = Decimal("9999999999.99")
MAX_ITEM_AMOUNT = Decimal("999999999999.99")

logger = logging.getLogger(__name__)


def _stored(value, places: Decimal) -> float:
    """Round a number to the precision its column stores."""
    number = validation.parse_decimal(value)
    if number is None:
        number = Decimal(repr(parse_number(value)))
    try:
        return float(number.quantize(places, rounding=ROUND_HALF_UP))
    except InvalidOperation:
        return 0.0


def _validate_item(index: int, item) -> list[str]:
    label = f"Item {index}"
    if not isinstance(item, dict):
        return [f"{label}: must be an object"]
    errors = [
        validation.required(item.get("description"), f"{label}: description is required"),
        validation.max_length(item.get("description"), 500, f"{label}: description"),
        validation.max_length(item.get("weight"), 50, f"{label}: weight"),
        validation.max_length(item.get("hsn_code"), 20, f"{label}: HSN code"),
        validation.decimal_range(
            item.get("rate"), f"{label}: rate", minimum=0, maximum=MAX_RATE
        ),
    ]
    quantity = validation.parse_decimal(item.get("quantity"))
    if quantity is None or quantity < MIN_QUANTITY:
        errors.append(f"{label}: quantity must be greater than 0")
    elif quantity > MAX_QUANTITY:
        errors.append(f"{label}: quantity must be at most {MAX_QUANTITY}")
    return [e for e in errors if e]


def _fits(value: float, limit: Decimal) -> bool:
    return math.isfinite(value) and abs(value) <= float(limit)


def _validate_amounts(draft: InvoiceDraft) -> list[str]:
    """Check computed amounts fit the columns they are stored in."""
    errors = [
        f"Item {index}: amount is too large"
        for index, item in enumerate(draft.items, 1)
        if not _fits(item.amount, MAX_ITEM_AMOUNT)
    ]
    totals = draft.totals
    figures = (
        totals.subtotal,
        totals.cgst_amount,
        totals.sgst_amount,
        totals.total_tax,
        totals.grand_total,
    )
    if not all(_fits(figure, MAX_TOTAL) for figure in figures):
        errors.append(f"Invoice total must be at most {MAX_TOTAL}")
    return errors


def _line_item(item: dict) -> LineItem:
    return LineItem(
        description=validation.clean_text(item.get("description")),
        weight=validation.clean_text(item.get("weight")),
        hsn_code=validation.clean_text(item.get("hsn_code")),
        quantity=_stored(item.get("quantity"), QUANTITY_PLACES),
        rate=_stored(item.get("rate"), RATE_PLACES),
    )


def _customer_details(data) -> CustomerDetails:
    data = data if isinstance(data, dict) else {}
    return CustomerDetails(
        name=validation.clean_text(data.get("name")),
        address=validation.clean_text(data.get("address")),
        gstin=validation.clean_text(data.get("gstin")),
        state=validation.clean_text(data.get("state")),
        state_code=validation.clean_text(data.get("state_code")),
        phone=validation.clean_text(data.get("phone")),
        email=validation.clean_text(data.get("email")),
    )


def validate_invoice(data: dict) -> list[str]:
    """Validate an invoice payload for saving. Returns a list of errors (empty = valid)."""
    errors = [
        validation.required(data.get("invoice_number"), "Invoice number is required"),
        validation.max_length(data.get("invoice_number"), 100, "Invoice number"),
    ]
    if validation.parse_iso_date(data.get("invoice_date")) is None:
        errors.append("Valid invoice date is required")
    if data.get("due_date") and validation.parse_iso_date(data["due_date"]) is None:
        errors.append("Due date must be a valid date")

    customer_id = data.get("customer_id")
    if customer_id not in (None, ""):
        if validation.parse_int(customer_id, 0) < 1:
            errors.append("Customer id must be a positive integer")
    elif data.get("customer") is None:
        errors.append("Customer is required")
    else:
        errors.extend(validate_customer(data["customer"]))

    for key, label in (("cgst_rate", "CGST rate"), ("sgst_rate", "SGST rate")):
        if data.get(key) not in (None, ""):
            errors.append(validation.decimal_range(data[key], label, minimum=0, maximum=100))
    if data.get("round_off") not in (None, ""):
        errors.append(
            validation.decimal_range(
                data["round_off"], "Round off", minimum=-MAX_TOTAL, maximum=MAX_TOTAL
            )
        )

    status = data.get("status")
    if status not in (None, "") and status not in Invoice.Status.values:
        errors.append(f"Status must be one of: {', '.join(Invoice.Status.values)}")

    items = data.get("items")
    if not isinstance(items, list) or not items:
        errors.append("At least one item is required")
    else:
        for index, item in enumerate(items, 1):
            errors.extend(_validate_item(index, item))

    return [e for e in errors if e]


def build_draft(data: dict, company=None, strict: bool = True) -> InvoiceDraft:
    """
    Convert a request payload into an ``InvoiceDraft``.

    With ``strict`` the payload must pass ``validate_invoice``, the resulting
    subtotal may not be negative and every amount must fit its column;
    otherwise ``InvalidInput`` is raised. Without it (live recalculation of an unfinished form) bad numbers
    degrade to 0 and missing fields get defaults. Totals sent by the client
    are ignored either way. ``auto_round_off`` replaces ``round_off`` with the
    amount that brings the grand total to a whole rupee.
    """
    if not isinstance(data, dict):
        raise InvalidInput(["Invoice must be an object"])
    if strict:
        errors = validate_invoice(data)
        if errors:
            logger.warning("Rejected invoice %s: %s", data.get("invoice_number"), errors)
            raise InvalidInput(errors)

    raw_items = data.get("items")
    if not isinstance(raw_items, list):
        raw_items = []
    items = tuple(_line_item(item) for item in raw_items if isinstance(item, dict))

    default_cgst = company.default_cgst_rate if company is not None else 9
    default_sgst = company.default_sgst_rate if company is not None else 9
    cgst = data.get("cgst_rate")
    sgst = data.get("sgst_rate")

    draft = InvoiceDraft(
        invoice_number=validation.clean_text(data.get("invoice_number")),
        invoice_date=validation.parse_iso_date(data.get("invoice_date")) or date.today(),
        due_date=validation.parse_iso_date(data.get("due_date")) if data.get("due_date") else None,
        customer=_customer_details(data.get("customer")),
        customer_id=validation.parse_int(data.get("customer_id")),
        items=items,
        cgst_rate=_stored(default_cgst if cgst in (None, "") else cgst, RATE_PLACES),
        sgst_rate=_stored(default_sgst if sgst in (None, "") else sgst, RATE_PLACES),
        round_off=_stored(data.get("round_off") or 0, RATE_PLACES),
        status=data.get("status") or Invoice.Status.DRAFT,
        company=company.to_snapshot() if company is not None else {},
    )
    if data.get("auto_round_off"):
        draft = draft.with_auto_round_off()

    if strict and draft.totals.subtotal < 0:
        logger.warning("Rejected invoice %s: negative subtotal", draft.invoice_number)
        raise InvalidInput(["Subtotal must be a positive number"])
    if strict:
        errors = _validate_amounts(draft)
        if errors:
            logger.warning("Rejected invoice %s: %s", draft.invoice_number, errors)
            raise InvalidInput(errors)
    return draft
