"""Customer payload validation."""
from apps.core import validation

CUSTOMER_FIELDS = ("name", "address", "gstin", "state", "state_code", "phone", "email")


def validate_customer(data: dict) -> list[str]:
    """Validate a customer payload and return a list of errors (empty = valid)."""
    if not isinstance(data, dict):
        return ["Customer details must be an object"]
    errors = [
        validation.required(data.get("name"), "Customer name is required"),
        validation.max_length(data.get("name"), 255, "Customer name"),
        validation.max_length(data.get("gstin"), 15, "GSTIN"),
        validation.max_length(data.get("state_code"), 2, "State code"),
        validation.email(data.get("email")),
    ]
    return [e for e in errors if e]


def clean_customer(data: dict) -> dict:
    """Trimmed values for every customer field present in ``data``."""
    return {
        name: validation.clean_text(data.get(name))
        for name in CUSTOMER_FIELDS
        if name in data
    }
