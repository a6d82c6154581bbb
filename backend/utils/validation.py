# backend/utils/validation.py
from datetime import datetime, timezone
from typing import Any, Optional

from services.errors import InvalidInput


def require_text(value: Any, field: str) -> str:
    """Return the stripped string, or raise InvalidInput when it is missing or blank."""
    if not isinstance(value, str) or not value.strip():
        raise InvalidInput(f"{field} is required", details={"field": field})
    return value.strip()


def optional_text(value: Any, field: str) -> Optional[str]:
    if value is None:
        return None
    return require_text(value, field)


def require_int(value: Any, field: str, minimum: Optional[int] = None) -> int:
    """Coerce a quantity-like value to int.

    Accepts ints, integral floats and numeric strings ("5"). Booleans, blanks and
    anything non-numeric are rejected, as are values below ``minimum``.
    """
    if value is None or isinstance(value, bool):
        raise InvalidInput(f"{field} must be an integer", details={"field": field})

    if isinstance(value, int):
        number = value
    elif isinstance(value, float):
        if not value.is_integer():
            raise InvalidInput(f"{field} must be an integer", details={"field": field})
        number = int(value)
    elif isinstance(value, str):
        try:
            number = int(value.strip())
        except ValueError:
            raise InvalidInput(f"{field} must be an integer", details={"field": field})
    else:
        raise InvalidInput(f"{field} must be an integer", details={"field": field})

    if minimum is not None and number < minimum:
        raise InvalidInput(f"{field} must be >= {minimum}", details={"field": field, "value": number})
    return number


def as_utc(value: datetime) -> datetime:
    # Naive timestamps are taken to be UTC already
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)
