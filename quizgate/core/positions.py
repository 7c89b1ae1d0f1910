"""
Position resolution for answer-choice diagnostics.

Feedback is addressed by id, but reviewers are told "Question 3, answer
choice 2". These helpers translate ids into zero-based positions within the
current snapshot. A lookup that fails yields None; it is never turned into a
display number.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from quizgate.core.errors import SnapshotConsistencyError
from quizgate.core.models import AnswerChoice, Generation


def _first_index(items, item_id: int) -> int | None:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


def question_position(generation: Generation, question_id: int) -> int | None:
    """Index of the first question with ``question_id``, or None."""
    return _first_index(generation.questions, question_id)


def answer_position(generation: Generation, answer_id: int, question_id: int) -> int | None:
    """Index of ``answer_id`` within the answers of ``question_id``, or None."""
    q_index = question_position(generation, question_id)
    if q_index is None:
        return None
    return _first_index(generation.questions[q_index].answers, answer_id)


@dataclass(frozen=True)
class AnswerLocation:
    """Resolved zero-based position of an answer choice."""

    question_index: int
    answer_index: int

    @property
    def question_number(self) -> int:
        return self.question_index + 1

    @property
    def answer_number(self) -> int:
        return self.answer_index + 1

    @property
    def label(self) -> str:
        return f"Question {self.question_number}, answer choice {self.answer_number}"


@dataclass(frozen=True)
class PositionIndex:
    """
    Id-to-position mapping built once per snapshot.

    Duplicated ids keep their first occurrence, matching the linear lookups
    above.
    """

    generation_id: int
    questions: dict[int, int] = field(default_factory=dict)
    answers: dict[int, dict[int, int]] = field(default_factory=dict)

    @classmethod
    def build(cls, generation: Generation) -> PositionIndex:
        questions: dict[int, int] = {}
        answers: dict[int, dict[int, int]] = {}

        for q_index, question in enumerate(generation.questions):
            if question.id in questions:
                continue
            questions[question.id] = q_index

            by_answer: dict[int, int] = {}
            for a_index, answer in enumerate(question.answers):
                by_answer.setdefault(answer.id, a_index)
            answers[question.id] = by_answer

        return cls(generation_id=generation.id, questions=questions, answers=answers)

    def question_position(self, question_id: int) -> int | None:
        return self.questions.get(question_id)

    def answer_position(self, answer_id: int, question_id: int) -> int | None:
        by_answer = self.answers.get(question_id)
        if by_answer is None:
            return None
        return by_answer.get(answer_id)

    def locate(self, answer: AnswerChoice) -> AnswerLocation:
        """
        Resolve an answer choice to its display location.

        Raises:
            SnapshotConsistencyError: If the answer's question_id is not in the
                snapshot, or the answer is not listed under that question.
        """
        q_index = self.question_position(answer.question_id)
        if q_index is None:
            logger.error(
                f"Answer {answer.id} references question {answer.question_id}, "
                f"which is not in generation {self.generation_id}"
            )
            raise SnapshotConsistencyError(
                f"Question {answer.question_id} not found in generation {self.generation_id}",
                answer_id=answer.id,
                question_id=answer.question_id,
            )

        a_index = self.answer_position(answer.id, answer.question_id)
        if a_index is None:
            logger.error(
                f"Answer {answer.id} is not listed under question {answer.question_id} "
                f"in generation {self.generation_id}"
            )
            raise SnapshotConsistencyError(
                f"Answer {answer.id} not found under question {answer.question_id}",
                answer_id=answer.id,
                question_id=answer.question_id,
            )

        return AnswerLocation(question_index=q_index, answer_index=a_index)
