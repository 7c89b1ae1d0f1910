"""
Snapshot models for a generated quiz.

A Generation is the root aggregate: an ordered tuple of Questions, each with an
ordered tuple of AnswerChoices. Snapshots are frozen and are only ever replaced
wholesale by refetching from the generation service.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict


class FeedbackType(str, Enum):
    """Scoring label a reviewer attaches to an answer choice."""

    UNSELECTED = "unselected"
    CORRECT = "correct"
    INCORRECT = "incorrect"


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True, extra="ignore")


class AnswerChoice(_Snapshot):
    """One candidate answer to a question."""

    id: int
    question_id: int  # back-reference, does not own the question
    answer: str = ""
    user_feedback: FeedbackType = FeedbackType.UNSELECTED

    @property
    def is_scored(self) -> bool:
        return self.user_feedback != FeedbackType.UNSELECTED


class Question(_Snapshot):
    """A quiz question and its answer choices in display order."""

    id: int
    question: str
    answers: tuple[AnswerChoice, ...] = ()


class Generation(_Snapshot):
    """A generated quiz."""

    id: int
    filename: str
    questions: tuple[Question, ...] = ()

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> Generation:
        """Parse a generation payload returned by the service."""
        return cls.model_validate(data)


class GenerationSummary(_Snapshot):
    """Entry in the all-generations list."""

    id: int
    filename: str
    question_count: int | None = None

    @classmethod
    def from_api(cls, data: dict[str, Any]) -> GenerationSummary:
        questions = data.get("questions")
        return cls(
            id=data["id"],
            filename=data.get("filename", ""),
            question_count=len(questions) if isinstance(questions, list) else None,
        )
