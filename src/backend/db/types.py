"""
Column type for respondent PII.
"""

from typing import Optional

from sqlalchemy import String, TypeDecorator

from core.encryption import decrypt_pii, encrypt_pii, max_ciphertext_length


class EncryptedString(TypeDecorator):
    """
    Stores a string through field encryption.

    `max_chars` is the longest plaintext the column must accept, counted in
    characters as validation counts them. The underlying VARCHAR is sized
    for the ciphertext of that many 4-byte characters, so any valid name or
    email fits on databases that enforce the length.

    Ciphertext is randomized, so these columns are never filtered on;
    respondents are looked up by fingerprint.
    """

    impl = String
    cache_ok = True

    def __init__(self, max_chars: int, **kwargs):
        self.max_chars = max_chars
        super().__init__(length=max_ciphertext_length(max_chars), **kwargs)

    def process_bind_param(self, value: Optional[str], dialect) -> Optional[str]:
        return None if value is None else encrypt_pii(value)

    def process_result_value(self, value: Optional[str], dialect) -> Optional[str]:
        return None if value is None else decrypt_pii(value)
