"""
Response model.

Anonymized submission envelope: which form was answered, when, and in what
role. No name or email is ever stored here.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any, Optional
from uuid import uuid4

from sqlalchemy import JSON, DateTime, Index, String, UniqueConstraint, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from models.answer import Answer


class FormResponse(Base):
    """
    One respondent's submission of one form.

    respondent_id is intentionally not a foreign key: erasing a respondent
    must leave this row in place with a dangling reference.
    """

    __tablename__ = "responses"

    __table_args__ = (
        # One response per respondent per form
        UniqueConstraint("respondent_id", "form_id", name="uq_responses_respondent_form"),
        Index("ix_responses_form_submitted", "form_id", "submitted_at"),
    )

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    respondent_id: Mapped[str] = mapped_column(String(36), index=True)

    form_id: Mapped[str] = mapped_column(String(64), index=True)

    role: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    submitted_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    # "metadata" is reserved on declarative classes
    extra_metadata: Mapped[dict[str, Any]] = mapped_column(
        "metadata",
        JSON().with_variant(JSONB, "postgresql"),
        default=dict,
    )

    answers: Mapped[list["Answer"]] = relationship(
        "Answer",
        back_populates="response",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )
