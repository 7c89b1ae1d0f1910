"""
Workflow Module - snapshot holder and mutation entry points.
"""

from quizgate.workflow.engine import (
    GenerationView,
    GenerationWorkflow,
    OperationState,
    OperationStatus,
)

__all__ = [
    "GenerationView",
    "GenerationWorkflow",
    "OperationState",
    "OperationStatus",
]
