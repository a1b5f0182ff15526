"""Input validation helpers for account data.

Functions:
- normalize_email(email) -> str: Strip and lower-case an email address
- validate_email(email) -> bool: Check email format
- validate_registration(email, password, name, ...) -> dict: Normalized fields
- parse_step_id(raw) -> int | None: Parse a step id from a URL segment
"""

import re

from training.core.errors import ValidationError

EMAIL_PATTERN = re.compile(r"^[a-zA-Z0-9_.+-]+@[a-zA-Z0-9-]+\.[a-zA-Z0-9-.]+$")

# ASCII digits only; int() would also take "0_4" or Arabic-Indic digits
STEP_ID_PATTERN = re.compile(r"[0-9]+")

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def normalize_email(email: str) -> str:
    """Strip surrounding whitespace and lower-case an email address."""
    return email.strip().lower()


def validate_email(email: str) -> bool:
    """Validate email format.

    Args:
        email: Email address to validate

    Returns:
        True if the address looks like user@domain.tld
    """
    return bool(EMAIL_PATTERN.match(email))


def _encodable(text: str) -> bool:
    """False for strings UTF-8 cannot encode, such as lone surrogates."""
    try:
        text.encode("utf-8")
    except UnicodeEncodeError:
        return False
    return True


def validate_registration(
    email: str,
    password: str,
    name: str,
    min_password_length: int = 6,
) -> dict[str, str]:
    """Validate and normalize registration fields.

    Args:
        email: Raw email as submitted
        password: Raw password as submitted
        name: Raw display name as submitted
        min_password_length: Minimum accepted password length

    Returns:
        Dict with normalized "email", "password" and "name"

    Raises:
        ValidationError: With one entry per failing field
    """
    errors = []

    email = normalize_email(email)
    if not validate_email(email):
        errors.append({"field": "email", "message": "Invalid email format"})

    if len(password) < min_password_length:
        errors.append(
            {
                "field": "password",
                "message": f"Password must be at least {min_password_length} characters",
            }
        )
    elif not _encodable(password):
        errors.append({"field": "password", "message": "Password contains invalid characters"})
    elif len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        errors.append(
            {
                "field": "password",
                "message": f"Password must be at most {MAX_PASSWORD_BYTES} bytes",
            }
        )

    name = name.strip()
    if not name:
        errors.append({"field": "name", "message": "Name is required"})
    elif not _encodable(name):
        errors.append({"field": "name", "message": "Name contains invalid characters"})

    if errors:
        raise ValidationError(errors)

    return {"email": email, "password": password, "name": name}


def parse_step_id(raw: str | int) -> int | None:
    """Parse a step id taken from a URL path.

    Examples:
        "3" -> 3
        " 3 " -> 3
        "three" -> None
        "0_4" -> None

    Returns:
        The integer id, or None if raw is not an integer
    """
    if isinstance(raw, int):
        return raw
    raw = raw.strip()
    if not STEP_ID_PATTERN.fullmatch(raw):
        return None
    return int(raw)
