"""Form/JSON input parsing shared by the record services."""
import math
from datetime import date, datetime

from services.errors import ValidationError


def normalize_code(value):
    return (value or "").strip().upper()


def normalize_email(value):
    return (value or "").strip().lower()


def require_text(data, key, label):
    value = data.get(key)
    if value is None or not str(value).strip():
        raise ValidationError(f"{label} is required")
    return str(value).strip()


def optional_text(data, key):
    value = data.get(key)
    if value is None:
        return None
    value = str(value).strip()
    return value or None


def parse_bool(value, default=False):
    # HTML checkboxes post "on"; JSON clients send booleans
    if value is None:
        return default
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("on", "true", "1", "yes")


def parse_int(value, label, minimum=None, maximum=None, default=None):
    if value is None or str(value).strip() == "":
        if default is not None:
            return default
        raise ValidationError(f"{label} is required")
    try:
        number = int(str(value).strip())
    except ValueError:
        raise ValidationError(f"{label} must be a whole number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{label} must be at least {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{label} cannot exceed {maximum}")
    return number


def parse_float(value, label, minimum=None, maximum=None, default=None):
    if value is None or str(value).strip() == "":
        if default is not None:
            return default
        raise ValidationError(f"{label} is required")
    try:
        number = float(str(value).strip())
    except ValueError:
        raise ValidationError(f"{label} must be a number")
    if math.isnan(number):
        raise ValidationError(f"{label} must be a number")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{label} cannot be less than {minimum}")
    if maximum is not None and number > maximum:
        raise ValidationError(f"{label} cannot exceed {maximum}")
    return number


def parse_date(value, label, required=True):
    if value is None or str(value).strip() == "":
        if required:
            raise ValidationError(f"{label} is required")
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return date.fromisoformat(str(value).strip()[:10])
    except ValueError:
        raise ValidationError(f"{label} must be a date (YYYY-MM-DD)")


def parse_id(value, label):
    try:
        return int(str(value).strip())
    except (TypeError, ValueError):
        raise ValidationError(f"{label} is required")


def parse_id_list(value, label):
    """Accept a single id, a list of ids, or nothing."""
    if value is None or value == "":
        return []
    items = value if isinstance(value, (list, tuple)) else [value]
    ids = []
    for item in items:
        if item is None or str(item).strip() == "":
            continue
        ids.append(parse_id(item, label))
    return list(dict.fromkeys(ids))


def parse_lines(value):
    """Learning outcomes arrive as one newline-separated string or a list."""
    if not value:
        return []
    lines = value if isinstance(value, (list, tuple)) else str(value).split("\n")
    return [str(line).strip() for line in lines if str(line).strip()]


def parse_choice(value, label, choices, default=None):
    if value is None or str(value).strip() == "":
        if default is not None:
            return default
        raise ValidationError(f"{label} is required")
    value = str(value).strip()
    if value not in choices:
        raise ValidationError(f"{label} must be one of: {', '.join(choices)}")
    return value


def validate_password(password, minimum):
    if not password or len(password) < minimum:
        raise ValidationError(f"Password must be at least {minimum} characters")
    return password
