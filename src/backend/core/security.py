"""Security utilities for respondent identity and admin access.

Respondents never authenticate. Their identity is a salted one-way
fingerprint of the email address, used to detect duplicate submissions
without indexing the email itself.
"""

import hashlib
import hmac

from core.config import settings


def normalize_email(email: str) -> str:
    """Trim surrounding whitespace and lower-case an email address."""
    return email.strip().lower()


def generate_respondent_fingerprint(email: str) -> str:
    """
    Generate a privacy-preserving fingerprint for duplicate detection.

    This fingerprint allows us to:
    1. Recognise a returning respondent (same normalized email = same value)
    2. Look respondents up without an index on the email column
    3. Avoid exposing the email, since the value cannot be reversed

    The hash uses a server-side salt to prevent rainbow table attacks.
    Any string, including an empty one, produces a fingerprint; whether the
    address is well formed is checked before this is called.

    Args:
        email: The respondent's email address, as submitted

    Returns:
        A 64-character hex SHA-256 digest
    """
    data = f"{normalize_email(email)}{settings.fingerprint_salt}"
    return hashlib.sha256(data.encode("utf-8")).hexdigest()


def verify_admin_key(provided: str | None) -> bool:
    """Constant-time comparison of an admin API key against settings."""
    if not provided:
        return False
    return hmac.compare_digest(provided.encode("utf-8"), settings.ADMIN_API_KEY.encode("utf-8"))
