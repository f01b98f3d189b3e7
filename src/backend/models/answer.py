"""
Answer model: a single question's value within a response.
"""

from datetime import datetime
from typing import TYPE_CHECKING, Any
from uuid import uuid4

from sqlalchemy import JSON, DateTime, ForeignKey, String, func
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column, relationship

from db.base import Base

if TYPE_CHECKING:
    from models.response import FormResponse


class Answer(Base):
    __tablename__ = "answers"

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=lambda: str(uuid4()),
    )

    response_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("responses.id", ondelete="CASCADE"),
        index=True,
    )

    question_id: Mapped[str] = mapped_column(String(64), index=True)

    # Serialized AnswerValue: number, string, list of strings or {rating, comment}
    value: Mapped[Any] = mapped_column(JSON().with_variant(JSONB, "postgresql"))

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
    )

    response: Mapped["FormResponse"] = relationship("FormResponse", back_populates="answers")
