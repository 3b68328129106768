# validators.py
from decimal import Decimal, InvalidOperation


class ValidationError(ValueError):
    """Raised when request data fails validation; carries per-field messages."""

    def __init__(self, errors, message="Validation failed"):
        super().__init__(message)
        self.message = message
        self.errors = errors


def require_fields(data, *fields):
    missing = [field for field in fields if not data.get(field)]
    if missing:
        raise ValidationError(
            {field: f"{field} is required." for field in missing},
            message="Missing required fields",
        )


def validate_string(field_name, value):
    if value is not None and not isinstance(value, str):
        raise ValidationError({field_name: f"{field_name} must be a string."})


def validate_length(field_name, value, max_length):
    validate_string(field_name, value)
    if value is not None and len(value) > max_length:
        raise ValidationError({field_name: f"{field_name} must be {max_length} characters or fewer."})


def validate_choice(field_name, value, choices):
    if value not in choices:
        raise ValidationError({field_name: f"{field_name} must be one of: {', '.join(choices)}."})


def validate_price(value):
    """Returns the price as a Decimal, or None for an empty value."""
    if value is None or value == "":
        return None
    try:
        price = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError({"price": "price must be a number."})
    if not price.is_finite() or price < 0:
        raise ValidationError({"price": "price cannot be negative."})
    return price.quantize(Decimal("0.01"))


def parse_bool(field_name, value):
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    raise ValidationError({field_name: f"{field_name} must be true or false."})
