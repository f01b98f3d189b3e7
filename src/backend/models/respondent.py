"""
Respondent model.

The only table holding personally-identifying data. Responses reference a
respondent by id alone, so deleting a row here erases the person while their
anonymized answers stay behind.
"""

from datetime import datetime
from uuid import uuid4

from sqlalchemy import DateTime, String, func
from sqlalchemy.orm import Mapped, mapped_column

from db.base import Base
from db.types import EncryptedString


class Respondent(Base):
    """
    Respondent identity record.

    PRIVACY DESIGN:
    - name/email are encrypted at rest when a field key is configured
    - fingerprint = SHA-256(normalized email + salt), cannot be reversed
    - lookups go through the fingerprint only; the email is never indexed
    - the unique fingerprint index is what stops two concurrent first-time
      submissions from creating two identities for one email
    """

    __tablename__ = "respondents"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    name: Mapped[str] = mapped_column(EncryptedString(255))
    email: Mapped[str] = mapped_column(EncryptedString(254))

    fingerprint: Mapped[str] = mapped_column(
        String(64),  # SHA-256 hex
        unique=True,
        index=True,
    )

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )
