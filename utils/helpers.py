from datetime import datetime, timezone
import bleach
from utils.errors import ValidationFailed


def utcnow():
    """Naive UTC timestamp, the form every DateTime column stores."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def parse_datetime(value, field_name="start_date"):
    """Parse an ISO-8601 string into naive UTC."""
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        raw = value.strip()
        if raw.endswith("Z"):
            raw = raw[:-1] + "+00:00"
        try:
            parsed = datetime.fromisoformat(raw)
        except ValueError:
            raise ValidationFailed(f"'{field_name}' must be an ISO-8601 date")
    else:
        raise ValidationFailed(f"'{field_name}' is required")

    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def clean_text(value, field_name, required=True):
    """Strip markup from user supplied text."""
    if value is None or (isinstance(value, str) and not value.strip()):
        if required:
            raise ValidationFailed(f"'{field_name}' is required")
        return None
    if not isinstance(value, str):
        raise ValidationFailed(f"'{field_name}' must be a string")
    return bleach.clean(value.strip(), tags=[], strip=True)


def get_json_body(request):
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationFailed("Request body must be a JSON object")
    return data


def parse_id(value, field_name):
    """Coerce an id from a JSON body or query into an int."""
    if isinstance(value, bool):
        raise ValidationFailed(f"'{field_name}' must be an id")
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationFailed(f"'{field_name}' must be an id")
