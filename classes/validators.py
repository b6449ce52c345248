import re
from utils.errors import ValidationFailed

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$")


def validate_length(field_name, value, max_length):
    if len(value) > max_length:
        raise ValidationFailed(f"{field_name} must be {max_length} characters or fewer.")


def validate_email(email):
    if not isinstance(email, str) or not EMAIL_PATTERN.match(email):
        raise ValidationFailed("A valid email address is required.")


def validate_duration(duration):
    # bool is an int subclass, reject it explicitly
    if isinstance(duration, bool) or not isinstance(duration, int) or duration <= 0:
        raise ValidationFailed("'duration' must be a positive number of minutes.")


def validate_future(start_date, now):
    if start_date <= now:
        raise ValidationFailed("Quiz start date must be in the future")
