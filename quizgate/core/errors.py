"""
Error taxonomy for the review-and-export workflow.

Every failure is scoped to the single submission that raised it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Sequence

if TYPE_CHECKING:
    from quizgate.core.scoring import UnscoredAnswer


class QuizGateError(Exception):
    """Base exception for quizgate errors."""
    pass


class OperationValidationError(QuizGateError):
    """Operation input was rejected before any request was sent."""

    def __init__(self, message: str, errors: Sequence[str] = ()):
        super().__init__(message)
        self.errors = list(errors)


class ExportNotReadyError(OperationValidationError):
    """Export was blocked because some answer choices are still unscored."""

    def __init__(self, unscored: Sequence[UnscoredAnswer]):
        labels = [item.location.label for item in unscored]
        super().__init__(
            f"All answer choices must be scored ({len(labels)} remaining)",
            labels,
        )
        self.unscored = list(unscored)


class SnapshotConsistencyError(QuizGateError):
    """An answer choice could not be placed within the current snapshot."""

    def __init__(self, message: str, answer_id: int | None = None, question_id: int | None = None):
        super().__init__(message)
        self.answer_id = answer_id
        self.question_id = question_id


class RemoteOperationError(QuizGateError):
    """A call to the generation service failed."""

    def __init__(self, operation: str, message: str, status_code: int | None = None):
        super().__init__(f"{operation} failed: {message}")
        self.operation = operation
        self.status_code = status_code


class OperationInProgressError(QuizGateError):
    """The same operation was submitted again before the previous one settled."""

    def __init__(self, operation: str):
        super().__init__(f"{operation} is already in progress")
        self.operation = operation
