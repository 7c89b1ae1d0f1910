"""
Core Module - Snapshot models and the scoring/export gate.

Components:
- models: Generation, Question, AnswerChoice snapshots and FeedbackType
- positions: id -> display position resolution (PositionIndex)
- scoring: completeness checks and unscored-answer diagnostics
- schemas: input validation for mutating operations
- errors: error taxonomy shared by client, engine and CLI

Everything here is pure: no I/O, no hidden state.
"""

from quizgate.core.errors import (
    ExportNotReadyError,
    OperationInProgressError,
    OperationValidationError,
    QuizGateError,
    RemoteOperationError,
    SnapshotConsistencyError,
)
from quizgate.core.models import (
    AnswerChoice,
    FeedbackType,
    Generation,
    GenerationSummary,
    Question,
)
from quizgate.core.positions import (
    AnswerLocation,
    PositionIndex,
    answer_position,
    question_position,
)
from quizgate.core.scoring import (
    ScoringSummary,
    UnscoredAnswer,
    collect_answers,
    describe_unscored,
    find_unscored,
    is_export_ready,
)

__all__ = [
    # Models
    "AnswerChoice",
    "FeedbackType",
    "Generation",
    "GenerationSummary",
    "Question",
    # Positions
    "AnswerLocation",
    "PositionIndex",
    "answer_position",
    "question_position",
    # Scoring
    "ScoringSummary",
    "UnscoredAnswer",
    "collect_answers",
    "describe_unscored",
    "find_unscored",
    "is_export_ready",
    # Errors
    "ExportNotReadyError",
    "OperationInProgressError",
    "OperationValidationError",
    "QuizGateError",
    "RemoteOperationError",
    "SnapshotConsistencyError",
]
