"""Input checks that run before any order, response or dispute is mutated.

Services call these first; each raises `common.exceptions.ValidationError` with a
field-keyed detail so the API can report which input was rejected.
"""

from decimal import Decimal, InvalidOperation

from django.conf import settings

from .exceptions import ValidationError


def _marketplace(key: str):
    return settings.MARKETPLACE[key]


def _blank(value) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def require_text(field: str, value, max_length: int = None) -> str:
    """Require a non-blank string, optionally bounded in length."""
    if _blank(value):
        raise ValidationError({field: "This field is required."})
    value = value.strip()
    if max_length is not None and len(value) > max_length:
        raise ValidationError({field: f"Must not exceed {max_length} characters."})
    return value


def positive_amount(field: str, value, required: bool = False):
    """Return `value` as a Decimal > 0 (or None when optional and absent)."""
    if value is None or value == "":
        if required:
            raise ValidationError({field: "This field is required."})
        return None
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, TypeError):
        raise ValidationError({field: "Must be a number."})
    if amount <= 0:
        raise ValidationError({field: "Must be positive."})
    return amount


def positive_int(field: str, value, required: bool = False):
    if value is None or value == "":
        if required:
            raise ValidationError({field: "This field is required."})
        return None
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError({field: "Must be an integer."})
    if number <= 0:
        raise ValidationError({field: "Must be positive."})
    return number


def budget_range(budget_min, budget_max):
    """Validate an optional budget range; both bounds must be positive, min <= max."""
    low = positive_amount("budget_min", budget_min)
    high = positive_amount("budget_max", budget_max)
    if low is not None and high is not None and low > high:
        raise ValidationError({"budget_max": "Must be greater than or equal to budget_min."})
    return low, high


def dispute_reason(reason) -> str:
    """Reason must be at least DISPUTE_REASON_MIN_LENGTH characters once stripped."""
    min_length = _marketplace("DISPUTE_REASON_MIN_LENGTH")
    max_length = _marketplace("DISPUTE_REASON_MAX_LENGTH")
    text = (reason or "").strip()
    if len(text) < min_length:
        raise ValidationError(
            {"reason": f"Reason must be between {min_length} and {max_length} characters."}
        )
    if len(text) > max_length:
        raise ValidationError(
            {"reason": f"Reason must be between {min_length} and {max_length} characters."}
        )
    return text


def cover_letter(value) -> str:
    return require_text("cover_letter", value, _marketplace("COVER_LETTER_MAX_LENGTH"))


def evidence(file_url, file_name, file_size=None, description=None) -> dict:
    """Validate an evidence item; url and name are required."""
    cleaned = {
        "file_url": require_text("file_url", file_url, 500),
        "file_name": require_text("file_name", file_name, 255),
        "file_size": None,
        "description": (description or "").strip(),
    }
    if file_size is not None:
        try:
            size = int(file_size)
        except (TypeError, ValueError):
            raise ValidationError({"file_size": "Must be an integer."})
        if size < 0:
            raise ValidationError({"file_size": "Must not be negative."})
        cleaned["file_size"] = size
    limit = _marketplace("EVIDENCE_DESCRIPTION_MAX_LENGTH")
    if len(cleaned["description"]) > limit:
        raise ValidationError({"description": f"Must not exceed {limit} characters."})
    return cleaned


def rating(value) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError({"rating": "Must be an integer between 1 and 5."})
    if not 1 <= number <= 5:
        raise ValidationError({"rating": "Must be an integer between 1 and 5."})
    return number
