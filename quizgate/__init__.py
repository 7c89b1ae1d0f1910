"""
quizgate: review, score and export generated quizzes.

Reviewers label every generated answer choice correct or incorrect; only a
fully scored generation can be exported to an external form.
"""

__version__ = "0.1.0"

from quizgate.config import Settings, get_settings
from quizgate.core.models import AnswerChoice, FeedbackType, Generation, Question
from quizgate.core.scoring import describe_unscored, find_unscored, is_export_ready
from quizgate.integrations.generation_client import GenerationClient
from quizgate.workflow.engine import GenerationWorkflow

__all__ = [
    # Config
    "Settings",
    "get_settings",
    # Models
    "AnswerChoice",
    "FeedbackType",
    "Generation",
    "Question",
    # Scoring
    "describe_unscored",
    "find_unscored",
    "is_export_ready",
    # Client & workflow
    "GenerationClient",
    "GenerationWorkflow",
]
