"""Number coercion and currency rounding shared by the invoice pipeline."""
import math
import re
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation

CURRENCY_PLACES = Decimal("0.01")

# Leading decimal literal, the same prefix a browser's parseFloat accepts.
_LEADING_NUMBER = re.compile(r"^\s*([+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_number(value) -> float:
    """
    Coerce a form value to a finite float.

    Strings are read up to the end of their leading number ("2.5kg" -> 2.5).
    Empty, missing, non-numeric and non-finite values all become 0.
    """
    if value is None or isinstance(value, bool):
        return 0.0
    if isinstance(value, (int, float, Decimal)):
        number = float(value)
    else:
        match = _LEADING_NUMBER.match(str(value))
        if not match:
            return 0.0
        number = float(match.group(1))
    if not math.isfinite(number):
        return 0.0
    return number


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value if value.is_finite() else Decimal("0")
    # repr() gives the shortest string that round-trips, i.e. what a user sees.
    return Decimal(repr(parse_number(value)))


def round_half_away(value) -> float:
    """Round to the nearest integer, halves away from zero (118.5 -> 119)."""
    number = _to_decimal(value)
    try:
        return float(number.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        # Past 28 digits a float has no fractional part left to round.
        return float(number)


def to_currency(value) -> Decimal:
    """
    Round to 2 decimal places, halves away from zero, for display and storage.

    Amounts too large to carry paise within the decimal context become 0,
    like any other value that is not a usable number.
    """
    try:
        return _to_decimal(value).quantize(CURRENCY_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return Decimal("0.00")
