"""Input sanitization and validation for user-entered text."""
import re
from typing import List, Optional


MAX_NAME_LENGTH = 100
MAX_TEXT_LENGTH = 200
MAX_NOTES_LENGTH = 500

EMAIL_PATTERN = re.compile(r'^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$')
PHONE_PATTERN = re.compile(r'^\+?[\d\s\-\(\)]{10,20}$')
TIME_OF_DAY_PATTERN = re.compile(r'^([01]\d|2[0-3]):[0-5]\d$')


def sanitize_text(text: Optional[str], max_length: Optional[int] = None, strip_html: bool = True) -> str:
    """
    Strip HTML tags and normalize whitespace.

    None becomes an empty string so optional profile fields can be stored
    as "" the way registration always has.

    Raises:
        ValueError: If text exceeds max_length or still looks like markup
    """
    if text is None:
        return ""
    if not isinstance(text, str):
        raise ValueError("Input must be a string")

    sanitized = text.strip()

    if max_length and len(sanitized) > max_length:
        raise ValueError(f"Input exceeds maximum length of {max_length} characters")

    if strip_html:
        sanitized = re.sub(r'<[^>]*>', '', sanitized)

    if '<' in sanitized or '>' in sanitized:
        raise ValueError("Input contains invalid HTML-like patterns")

    return re.sub(r'\s+', ' ', sanitized)


def validate_user_input(name: Optional[str], email: Optional[str], phone: Optional[str]) -> List[str]:
    """
    Check the three required contact fields.

    Returns every problem found rather than stopping at the first, so the
    form can show them all at once. An empty list means the input is valid.
    """
    errors = []

    if not name or len(name.strip()) < 1 or len(name.strip()) > MAX_NAME_LENGTH:
        errors.append(f"Name must be 1-{MAX_NAME_LENGTH} characters")

    if not email or not EMAIL_PATTERN.match(email.strip()):
        errors.append("Invalid email format")

    if not phone or not PHONE_PATTERN.match(phone.strip()):
        errors.append("Invalid phone format")

    return errors


def normalize_email(email: str) -> str:
    return email.strip().lower()


def validate_time_of_day(value: str) -> str:
    """Schedule times must be zero-padded 24h "HH:MM" so they compare as strings."""
    if not isinstance(value, str) or not TIME_OF_DAY_PATTERN.match(value):
        raise ValueError("Time must be in 24-hour HH:MM format")
    return value


def sanitize_signature(signature: str) -> str:
    """A typed legal signature: a non-empty person's name."""
    sanitized = sanitize_text(signature, max_length=MAX_NAME_LENGTH)
    if not sanitized:
        raise ValueError("Signature cannot be empty")
    return sanitized
