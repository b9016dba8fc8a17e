from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable

from vendorhub.time_utils import parse_iso_date


# Matches DECIMAL(12,2): 9,999,999,999.99
MAX_AMOUNT = Decimal("9999999999.99")
# Matches DECIMAL(10,2): 99,999,999.99
MAX_SMALL_AMOUNT = Decimal("99999999.99")


class ValidationError(ValueError):
    """400-level input problem."""


class ConflictError(ValueError):
    """409-level business rule conflict (e.g., duplicate credit note number)."""


class NotFoundError(LookupError):
    """404-level: a referenced record does not exist."""


class StorageError(RuntimeError):
    """500-level: the record store failed (I/O, connectivity, constraint)."""


def reject_unknown_fields(payload: Any, allowed: Iterable[str]) -> dict:
    """Ensure payload is a JSON object whose keys are all in the allowlist."""
    if payload is None:
        payload = {}
    if not isinstance(payload, dict):
        raise ValidationError("Invalid JSON payload")
    allowed = set(allowed)
    unknown = sorted(k for k in payload if k not in allowed)
    if unknown:
        raise ValidationError(f"Field not allowed: {', '.join(unknown)}")
    return payload


def to_text(field: str, value: Any, *, required: bool = False, max_length: int | None = None) -> str | None:
    if value is None:
        text = None
    elif isinstance(value, (dict, list)):
        raise ValidationError(f"{field} must be a string")
    else:
        text = str(value).strip() or None
    if text is None:
        if required:
            raise ValidationError(f"{field} is required")
        return None
    if max_length and len(text) > max_length:
        raise ValidationError(f"{field} exceeds max length {max_length}")
    return text


def to_int(field: str, value: Any, *, default: int | None = None, minimum: int | None = None) -> int | None:
    """
    Integers: reject floats with a fraction, booleans and scientific notation.
    None / "" fall back to the default.
    """
    if value is None or value == "":
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, int):
        result = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{field} must be an integer, not a decimal")
        result = int(value)
    elif isinstance(value, str):
        stripped = value.strip()
        if "e" in stripped.lower() or "." in stripped:
            raise ValidationError(f"{field} must be a plain integer")
        try:
            result = int(stripped)
        except ValueError:
            raise ValidationError(f"{field} must be an integer")
    else:
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and result < minimum:
        raise ValidationError(f"{field} must be >= {minimum}")
    return result


def to_amount(
    field: str,
    value: Any,
    *,
    required: bool = False,
    default: Decimal | None = None,
    maximum: Decimal = MAX_AMOUNT,
) -> Decimal | None:
    """Money: accept numbers or numeric strings, normalise to two decimal places."""
    if value is None or value == "":
        if required:
            raise ValidationError(f"{field} is required")
        return default
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be a number")
    if isinstance(value, float):
        value = repr(value)
    try:
        amount = Decimal(str(value).strip().replace(",", ""))
    except InvalidOperation:
        raise ValidationError(f"{field} must be a number")
    if not amount.is_finite():
        raise ValidationError(f"{field} must be a number")
    if abs(amount) > maximum:
        raise ValidationError(f"{field} cannot exceed {maximum:,}")
    return amount.quantize(Decimal("0.01"))


def to_date(field: str, value: Any, *, required: bool = False, default: date | None = None) -> date | None:
    """Dates: ISO "YYYY-MM-DD"; an empty string means absent."""
    if isinstance(value, date):
        return value
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationError(f"{field} is required")
        return default
    if not isinstance(value, str):
        raise ValidationError(f"{field} must be an ISO-8601 date")
    try:
        return parse_iso_date(value)
    except ValueError:
        raise ValidationError(f"{field} must be an ISO-8601 date")


def to_choice(field: str, value: Any, choices: Iterable[str], *, default: str | None = None) -> str | None:
    if value is None:
        return default
    text = str(value).strip()
    if not text and default is not None:
        return default
    choices = tuple(choices)
    if text not in choices:
        raise ValidationError(f"{field} must be one of {', '.join(repr(c) for c in choices)}")
    return text
