"""
Field-level encryption for respondent PII.

Respondent name and email live in their own table, apart from the
anonymized responses. When FIELD_ENCRYPTION_KEY is configured those two
columns are additionally encrypted at rest with AES-256-GCM. Lookups never
need the plaintext because respondents are found by fingerprint.

Stored format: "enc:v1:" + base64(nonce || ciphertext || tag).
Values without the prefix are treated as plaintext, so enabling a key on an
existing database keeps old rows readable.
"""

import base64
import math
import secrets
from functools import lru_cache
from typing import Optional

import structlog
from cryptography.exceptions import InvalidTag
from cryptography.hazmat.primitives.ciphers.aead import AESGCM

from core.config import settings

logger = structlog.get_logger(__name__)

NONCE_SIZE = 12
TAG_SIZE = 16
KEY_SIZE = 32
MAX_UTF8_BYTES_PER_CHAR = 4


class FieldEncryptionError(Exception):
    """Raised when field encryption/decryption fails."""


class FieldEncryption:
    """AES-256-GCM encryption for individual column values."""

    ENCRYPTED_PREFIX = "enc:v1:"

    def __init__(self, encryption_key: Optional[bytes] = None):
        self._aesgcm = AESGCM(encryption_key) if encryption_key else None

        if self._aesgcm is not None:
            logger.info("field_encryption_initialized", status="enabled")
        else:
            logger.warning(
                "field_encryption_disabled",
                reason="no_key_configured",
                message="Respondent PII will be stored unencrypted.",
            )

    @classmethod
    def from_settings(cls) -> "FieldEncryption":
        return cls(_decode_key(settings.FIELD_ENCRYPTION_KEY))

    @property
    def is_enabled(self) -> bool:
        return self._aesgcm is not None

    def encrypt(self, plaintext: Optional[str]) -> Optional[str]:
        """Encrypt a value; empty values and disabled encryption pass through."""
        if not plaintext or self._aesgcm is None:
            return plaintext

        nonce = secrets.token_bytes(NONCE_SIZE)
        ciphertext = self._aesgcm.encrypt(nonce, plaintext.encode("utf-8"), None)
        encoded = base64.b64encode(nonce + ciphertext).decode("ascii")
        return f"{self.ENCRYPTED_PREFIX}{encoded}"

    def decrypt(self, value: Optional[str]) -> Optional[str]:
        """Decrypt a stored value; unprefixed values are returned unchanged."""
        if not value or not value.startswith(self.ENCRYPTED_PREFIX):
            return value

        if self._aesgcm is None:
            logger.error("cannot_decrypt_without_key")
            raise FieldEncryptionError("Encryption key not configured, cannot decrypt")

        try:
            raw = base64.b64decode(value[len(self.ENCRYPTED_PREFIX):])
            plaintext = self._aesgcm.decrypt(raw[:NONCE_SIZE], raw[NONCE_SIZE:], None)
        except (InvalidTag, ValueError) as e:
            logger.error("decryption_failed", error_type=type(e).__name__)
            raise FieldEncryptionError("Failed to decrypt field") from e

        return plaintext.decode("utf-8")

    def is_encrypted(self, value: Optional[str]) -> bool:
        return bool(value) and value.startswith(self.ENCRYPTED_PREFIX)


def _decode_key(key_str: Optional[str]) -> Optional[bytes]:
    if not key_str:
        if settings.APP_ENV in ("production", "staging"):
            logger.error(
                "encryption_key_required_in_production",
                app_env=settings.APP_ENV,
            )
        return None

    try:
        key = base64.b64decode(key_str, validate=True)
    except ValueError as e:
        logger.error("failed_to_decode_encryption_key", error=str(e))
        return None

    if len(key) != KEY_SIZE:
        logger.error("invalid_encryption_key_length", expected=KEY_SIZE, actual=len(key))
        return None
    return key


@lru_cache()
def get_field_encryption() -> FieldEncryption:
    """Get the process-wide FieldEncryption instance."""
    return FieldEncryption.from_settings()


def max_ciphertext_length(max_chars: int) -> int:
    """
    Longest stored value for a plaintext of up to `max_chars` characters.

    Counts every character as 4 UTF-8 bytes, then adds nonce, GCM tag,
    base64 padding and the version prefix.
    """
    raw_bytes = NONCE_SIZE + max_chars * MAX_UTF8_BYTES_PER_CHAR + TAG_SIZE
    return len(FieldEncryption.ENCRYPTED_PREFIX) + 4 * math.ceil(raw_bytes / 3)


def generate_encryption_key() -> str:
    """Generate a new base64-encoded 256-bit key for FIELD_ENCRYPTION_KEY."""
    return base64.b64encode(secrets.token_bytes(KEY_SIZE)).decode("ascii")


def encrypt_pii(value: Optional[str]) -> Optional[str]:
    return get_field_encryption().encrypt(value)


def decrypt_pii(value: Optional[str]) -> Optional[str]:
    return get_field_encryption().decrypt(value)
