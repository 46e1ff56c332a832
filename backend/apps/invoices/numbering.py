"""Invoice numbering service for pattern-based number suggestions."""
import re
from datetime import date

from apps.invoices.models import Invoice

DEFAULT_PATTERN = "INV-{NNNN}"

TRAILING_DIGITS = re.compile(r"(\d+)$")


class InvoiceNumberService:
    """Suggests the next invoice number from the company pattern and the latest invoice."""

    def __init__(self, pattern: str | None = None):
        self.pattern = pattern or DEFAULT_PATTERN

    def preview_next_number(self, invoice_date: date | None = None) -> str:
        """
        Return the number the next invoice should get.

        Nothing is reserved: uniqueness is enforced when the invoice is
        saved, so two callers may receive the same suggestion.
        """
        if invoice_date is None:
            invoice_date = date.today()
        return self._format_number(self.pattern, invoice_date, self.next_counter())

    def next_counter(self) -> int:
        """Trailing digits of the most recently created invoice number, plus one."""
        latest = (
            Invoice.objects
            .order_by("-created_at", "-id")
            .values_list("invoice_number", flat=True)
            .first()
        )
        return self.counter_after(latest)

    @staticmethod
    def counter_after(invoice_number: str | None) -> int:
        if not invoice_number:
            return 1
        match = TRAILING_DIGITS.search(invoice_number)
        if not match:
            return 1
        return int(match.group(1)) + 1

    @staticmethod
    def _format_number(pattern: str, invoice_date: date, counter: int) -> str:
        """
        Replace placeholders in the pattern with actual values.

        Supported placeholders:
        - {YYYY}: 4-digit year
        - {YY}: 2-digit year
        - {MM}: 2-digit month
        - {NNN}: 3-digit zero-padded counter
        - {NNNN}: 4-digit zero-padded counter
        - {NNNNN}: 5-digit zero-padded counter
        """
        result = pattern
        result = result.replace("{YYYY}", f"{invoice_date.year:04d}")
        result = result.replace("{YY}", f"{invoice_date.year % 100:02d}")
        result = result.replace("{MM}", f"{invoice_date.month:02d}")

        # Longest counter placeholder first
        result = result.replace("{NNNNN}", f"{counter:05d}")
        result = result.replace("{NNNN}", f"{counter:04d}")
        result = result.replace("{NNN}", f"{counter:03d}")

        return result

    @staticmethod
    def validate_pattern(pattern: str) -> list[str]:
        """Validate a number pattern and return a list of errors (empty = valid)."""
        errors = []
        if not pattern:
            errors.append("Pattern cannot be empty.")
            return errors

        counter_placeholders = ["{NNN}", "{NNNN}", "{NNNNN}"]
        if not any(p in pattern for p in counter_placeholders):
            errors.append(
                "Pattern must contain at least one counter placeholder "
                "({NNN}, {NNNN}, or {NNNNN})."
            )

        valid_placeholders = {"{YYYY}", "{YY}", "{MM}", "{NNN}", "{NNNN}", "{NNNNN}"}
        for placeholder in re.findall(r"\{[^}]+\}", pattern):
            if placeholder not in valid_placeholders:
                errors.append(f"Unknown placeholder: {placeholder}")

        return errors
