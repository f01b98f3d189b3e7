"""
Anonymous per-form statistics.

Computed from the responses and answers tables alone. The respondents
table is never read, so erasing a respondent leaves these numbers intact.
"""

from collections import defaultdict
from dataclasses import dataclass, field

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from repositories.answer_repository import AnswerRepository
from repositories.response_repository import ResponseRepository
from schemas.answer_value import Number, parse_answer_value, rating_of
from schemas.stats import AnonymousStats, QuestionStat, RatingCount, RoleCount

logger = structlog.get_logger(__name__)


@dataclass
class _QuestionAccumulator:
    response_ids: set[str] = field(default_factory=set)
    ratings: list[Number] = field(default_factory=list)

    def to_stat(self, question_id: str) -> QuestionStat:
        distribution: dict[int, int] = defaultdict(int)
        for rating in self.ratings:
            distribution[int(rating)] += 1

        return QuestionStat(
            question_id=question_id,
            response_count=len(self.response_ids),
            average_rating=sum(self.ratings) / len(self.ratings),
            rating_distribution=[
                RatingCount(rating=rating, count=count)
                for rating, count in sorted(distribution.items())
            ],
        )


class StatsService:
    def __init__(self, db: AsyncSession):
        self.responses = ResponseRepository(db)
        self.answers = AnswerRepository(db)

    async def get_form_stats(self, form_id: str) -> AnonymousStats:
        """
        Aggregate a form's responses.

        Only numeric answers (plain ratings and rated comments) contribute
        to question statistics; questions without any are omitted.
        """
        total = await self.responses.count_by_form(form_id)
        roles = await self.responses.role_distribution(form_id)

        per_question: dict[str, _QuestionAccumulator] = defaultdict(_QuestionAccumulator)
        for answer in await self.answers.list_by_form(form_id):
            try:
                value = parse_answer_value(answer.value)
            except ValueError:
                logger.warning("unparseable_answer_skipped", answer_id=answer.id)
                continue

            rating = rating_of(value)
            if rating is None:
                continue
            accumulator = per_question[answer.question_id]
            accumulator.response_ids.add(answer.response_id)
            accumulator.ratings.append(rating)

        return AnonymousStats(
            form_id=form_id,
            total_responses=total,
            role_distribution=[RoleCount(role=role, count=count) for role, count in roles],
            question_stats=[
                per_question[question_id].to_stat(question_id)
                for question_id in sorted(per_question)
            ],
        )
