"""
Scoring completeness and export gating.

A generation may be exported only once every answer choice carries a
correct/incorrect label. Generations with no questions, and questions with no
answers, are trivially complete.
"""

from __future__ import annotations

from dataclasses import dataclass

from quizgate.core.models import AnswerChoice, FeedbackType, Generation
from quizgate.core.positions import AnswerLocation, PositionIndex


def collect_answers(generation: Generation) -> list[AnswerChoice]:
    """Flatten answers in question order, then answer order."""
    return [answer for question in generation.questions for answer in question.answers]


def find_unscored(generation: Generation) -> list[AnswerChoice]:
    """Answers still labelled ``unselected``, in display order."""
    return [
        answer for answer in collect_answers(generation)
        if answer.user_feedback == FeedbackType.UNSELECTED
    ]


def is_export_ready(generation: Generation) -> bool:
    return not find_unscored(generation)


@dataclass(frozen=True)
class UnscoredAnswer:
    """Diagnostic entry for an answer choice that blocks export."""

    answer: AnswerChoice
    location: AnswerLocation

    @property
    def label(self) -> str:
        return self.location.label


def describe_unscored(
    generation: Generation,
    index: PositionIndex | None = None,
) -> list[UnscoredAnswer]:
    """
    Build the ordered diagnostic list of unscored answer choices.

    Args:
        generation: Current snapshot
        index: Position index for this snapshot (built if not given)

    Returns:
        One UnscoredAnswer per unscored choice, in display order

    Raises:
        SnapshotConsistencyError: If an unscored answer cannot be located
    """
    if index is None:
        index = PositionIndex.build(generation)
    return [
        UnscoredAnswer(answer=answer, location=index.locate(answer))
        for answer in find_unscored(generation)
    ]


@dataclass(frozen=True)
class ScoringSummary:
    """Feedback totals for a generation."""

    total: int
    correct: int
    incorrect: int
    unselected: int

    @property
    def scored(self) -> int:
        return self.correct + self.incorrect

    @property
    def export_ready(self) -> bool:
        return self.unselected == 0

    @classmethod
    def from_generation(cls, generation: Generation) -> ScoringSummary:
        counts = {feedback: 0 for feedback in FeedbackType}
        answers = collect_answers(generation)
        for answer in answers:
            counts[answer.user_feedback] += 1

        return cls(
            total=len(answers),
            correct=counts[FeedbackType.CORRECT],
            incorrect=counts[FeedbackType.INCORRECT],
            unselected=counts[FeedbackType.UNSELECTED],
        )
