"""
Answer values as a closed set of variants.

Answers arrive as untyped JSON. They are parsed once, at the submission
boundary, into one of four variants; storage and statistics only ever see
these. Each variant serializes back to the JSON shape it was parsed from.

    4                                  -> ScalarValue
    "Needs more meetings"              -> TextValue
    {"rating": 4, "comment": "Good"}   -> RatedValue
    ["email", "slack"]                 -> ChoicesValue
"""

from dataclasses import dataclass
from typing import Any, Optional, Union

Number = Union[int, float]


@dataclass(frozen=True)
class ScalarValue:
    """Likert, rating and number questions."""

    number: Number

    def to_json(self) -> Number:
        return self.number


@dataclass(frozen=True)
class TextValue:
    """Free text, single choice, yes/no and date questions."""

    text: str

    def to_json(self) -> str:
        return self.text


@dataclass(frozen=True)
class RatedValue:
    """A rating with an optional explanatory comment."""

    rating: Number
    comment: Optional[str] = None

    def to_json(self) -> dict[str, Any]:
        if self.comment is None:
            return {"rating": self.rating}
        return {"rating": self.rating, "comment": self.comment}


@dataclass(frozen=True)
class ChoicesValue:
    """Multi-select questions."""

    options: tuple[str, ...]

    def to_json(self) -> list[str]:
        return list(self.options)


AnswerValue = Union[ScalarValue, TextValue, RatedValue, ChoicesValue]


def _is_number(raw: Any) -> bool:
    # bool is an int subclass but never a valid rating
    return isinstance(raw, (int, float)) and not isinstance(raw, bool)


def parse_answer_value(raw: Any) -> AnswerValue:
    """
    Parse a raw JSON answer value into its variant.

    Raises:
        ValueError: If the value has none of the accepted shapes.
    """
    if _is_number(raw):
        return ScalarValue(raw)

    if isinstance(raw, str):
        return TextValue(raw)

    if isinstance(raw, list):
        if not all(isinstance(option, str) for option in raw):
            raise ValueError("Selected options must be strings")
        return ChoicesValue(tuple(raw))

    if isinstance(raw, dict):
        unexpected = set(raw) - {"rating", "comment"}
        if unexpected or "rating" not in raw:
            raise ValueError("Rated answers must contain 'rating' and an optional 'comment'")
        if not _is_number(raw["rating"]):
            raise ValueError("Rating must be a number")
        comment = raw.get("comment")
        if comment is not None and not isinstance(comment, str):
            raise ValueError("Comment must be text")
        return RatedValue(rating=raw["rating"], comment=comment)

    raise ValueError("Unsupported answer value")


def rating_of(value: AnswerValue) -> Optional[Number]:
    """Numeric rating carried by a value, or None for non-numeric answers."""
    if isinstance(value, ScalarValue):
        return value.number
    if isinstance(value, RatedValue):
        return value.rating
    if isinstance(value, (TextValue, ChoicesValue)):
        return None
    raise TypeError(f"Unknown answer value variant: {type(value).__name__}")


def text_parts(value: AnswerValue) -> list[str]:
    """All free-text fragments inside a value, for content screening."""
    if isinstance(value, TextValue):
        return [value.text]
    if isinstance(value, RatedValue):
        return [value.comment] if value.comment is not None else []
    if isinstance(value, ChoicesValue):
        return list(value.options)
    if isinstance(value, ScalarValue):
        return []
    raise TypeError(f"Unknown answer value variant: {type(value).__name__}")
