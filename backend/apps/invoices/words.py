"""Spell out rupee amounts in English using the Indian numbering system."""
from apps.invoices.money import to_currency

ONES = [
    "", "One", "Two", "Three", "Four", "Five", "Six", "Seven", "Eight", "Nine",
    "Ten", "Eleven", "Twelve", "Thirteen", "Fourteen", "Fifteen", "Sixteen",
    "Seventeen", "Eighteen", "Nineteen",
]
TENS = ["", "", "Twenty", "Thirty", "Forty", "Fifty", "Sixty", "Seventy", "Eighty", "Ninety"]

CRORE = 10_000_000
LAKH = 100_000
THOUSAND = 1_000


def _below_hundred(number: int) -> str:
    if number < 20:
        return ONES[number]
    tens, ones = divmod(number, 10)
    if ones:
        return f"{TENS[tens]} {ONES[ones]}"
    return TENS[tens]


def _below_thousand(number: int) -> str:
    hundreds, rest = divmod(number, 100)
    parts = []
    if hundreds:
        parts.append(f"{ONES[hundreds]} Hundred")
    if rest:
        parts.append(_below_hundred(rest))
    return " ".join(parts)


def integer_to_words(number: int) -> str:
    """
    Spell a non-negative integer with crore/lakh/thousand grouping.

    12,34,567 -> "Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven".
    Crore counts above 99 are spelled with the same scale
    (1,00,00,00,000 -> "One Hundred Crore"). Zero gives an empty string.
    """
    parts = []
    crores, number = divmod(number, CRORE)
    if crores:
        parts.append(f"{integer_to_words(crores)} Crore")
    lakhs, number = divmod(number, LAKH)
    if lakhs:
        parts.append(f"{_below_hundred(lakhs)} Lakh")
    thousands, number = divmod(number, THOUSAND)
    if thousands:
        parts.append(f"{_below_hundred(thousands)} Thousand")
    if number:
        parts.append(_below_thousand(number))
    return " ".join(parts)


def amount_to_words(amount) -> str:
    """
    Convert a currency amount to its invoice wording.

    The amount is rounded to paise first, so 10.999 reads as Eleven Rupees
    rather than Ten Rupees and 100 Paise.

    >>> amount_to_words(1234567.89)
    'Twelve Lakh Thirty Four Thousand Five Hundred Sixty Seven Rupees and Eighty Nine Paise Only'
    """
    value = to_currency(amount)
    prefix = ""
    if value < 0:
        prefix = "Minus "
        value = -value

    rupees = int(value)
    paise = int((value - rupees) * 100)

    words = f"{integer_to_words(rupees) or 'Zero'} Rupees"
    if paise:
        words += f" and {_below_hundred(paise)} Paise"
    return f"{prefix}{words} Only"
