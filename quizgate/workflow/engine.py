"""
Scoring & Export Workflow Engine.

Holds the last-fetched snapshot of one generation and exposes the mutating
operations a reviewer can submit against it. Every mutation follows the same
discipline:

1. Validate input (and, for export, the scoring gate) - nothing is sent on failure
2. Fire the request
3. On success, discard the held snapshot and refetch the target
4. On failure, leave held state untouched and surface the error

A refetch that fails after the request was applied is recorded on the
``refresh`` state, not on the mutation's, so the control does not invite a
duplicate submission.

There is no optimistic local mutation and no client-side merge.
"""

from __future__ import annotations

from contextlib import asynccontextmanager
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import AsyncIterator

from loguru import logger

from quizgate.config import Settings, get_settings
from quizgate.core.errors import (
    ExportNotReadyError,
    OperationInProgressError,
    OperationValidationError,
    QuizGateError,
)
from quizgate.core.models import FeedbackType, Generation, GenerationSummary
from quizgate.core.positions import PositionIndex
from quizgate.core.schemas import (
    AddQuestionsInput,
    CustomQuestionInput,
    ExportToFormInput,
    validate_input,
)
from quizgate.core.scoring import (
    ScoringSummary,
    UnscoredAnswer,
    describe_unscored,
    find_unscored,
)
from quizgate.integrations.generation_client import GenerationClient


class OperationStatus(str, Enum):
    """Observable state of a submission control."""

    IDLE = "idle"
    LOADING = "loading"
    ERROR = "error"


@dataclass
class OperationState:
    """Loading/error state of one mutation entry point."""

    name: str
    status: OperationStatus = OperationStatus.IDLE
    error: str | None = None

    @property
    def is_loading(self) -> bool:
        return self.status == OperationStatus.LOADING


@dataclass
class _Submission:
    state: OperationState
    applied: bool = False


@dataclass(frozen=True)
class GenerationView:
    """Everything the presentation layer needs for one render."""

    generation: Generation
    export_ready: bool
    unscored: list[UnscoredAnswer]
    summary: ScoringSummary
    operations: dict[str, OperationState] = field(default_factory=dict)


class GenerationWorkflow:
    """
    Review-and-export workflow for a single generation.

    Operations on the same entry point are serialized: a second submission
    while the first is loading raises OperationInProgressError. Unrelated
    operations do not block each other.
    """

    OPERATIONS = (
        "create_question",
        "add_questions",
        "delete_generation",
        "export_to_form",
        "score_answer",
    )
    REFRESH = "refresh"

    def __init__(
        self,
        client: GenerationClient,
        generation_id: int,
        settings: Settings | None = None,
    ):
        self.client = client
        self.generation_id = generation_id
        self.settings = settings if settings is not None else get_settings()

        self.generation: Generation | None = None
        self.generations: list[GenerationSummary] | None = None
        self._index: PositionIndex | None = None
        self.states = {
            name: OperationState(name) for name in (*self.OPERATIONS, self.REFRESH)
        }

    # =========================================================================
    # Snapshot
    # =========================================================================

    def _replace_snapshot(self, generation: Generation | None) -> None:
        self.generation = generation
        self._index = PositionIndex.build(generation) if generation is not None else None

    def _discard_snapshot(self) -> None:
        logger.debug(f"Discarding snapshot of generation {self.generation_id}")
        self._replace_snapshot(None)

    async def refresh(self) -> Generation:
        """Refetch this generation and replace the held snapshot."""
        generation = await self.client.fetch_generation(self.generation_id)
        self._replace_snapshot(generation)
        self._clear_refresh_error()
        return generation

    async def list_generations(self) -> list[GenerationSummary]:
        """Refetch the all-generations list."""
        self.generations = await self.client.list_generations()
        self._clear_refresh_error()
        return self.generations

    def _clear_refresh_error(self) -> None:
        state = self.states[self.REFRESH]
        state.status = OperationStatus.IDLE
        state.error = None

    async def _require_snapshot(self) -> Generation:
        if self.generation is None:
            return await self.refresh()
        return self.generation

    def view(self) -> GenerationView:
        """
        Derive the presentation state from the held snapshot.

        Raises:
            QuizGateError: If no snapshot has been fetched
            SnapshotConsistencyError: If an unscored answer cannot be located
        """
        if self.generation is None:
            raise QuizGateError(f"Generation {self.generation_id} has not been fetched")

        unscored = describe_unscored(self.generation, self._index)
        return GenerationView(
            generation=self.generation,
            export_ready=not unscored,
            unscored=unscored,
            summary=ScoringSummary.from_generation(self.generation),
            operations={name: replace(state) for name, state in self.states.items()},
        )

    # =========================================================================
    # Submission control
    # =========================================================================

    @asynccontextmanager
    async def _submission(self, name: str) -> AsyncIterator[_Submission]:
        """
        Track one submission of ``name``.

        The body sets ``applied`` once the service has accepted the request.
        Failures after that point belong to the refetch and are recorded on
        the refresh state; the mutation itself returns to idle. Validation
        errors raised inside the body leave the control idle.
        """
        state = self.states[name]
        if state.is_loading:
            raise OperationInProgressError(name)

        state.status = OperationStatus.LOADING
        state.error = None
        submission = _Submission(state)
        logger.debug(f"{name} submitted for generation {self.generation_id}")
        try:
            yield submission
        except OperationValidationError:
            raise
        except Exception as e:
            if submission.applied:
                refresh = self.states[self.REFRESH]
                refresh.status = OperationStatus.ERROR
                refresh.error = f"{name} was applied but refetching failed: {e}"
                logger.warning(
                    f"{name} applied to generation {self.generation_id} "
                    f"but refetching failed: {e}"
                )
            else:
                state.status = OperationStatus.ERROR
                state.error = str(e)
                logger.warning(f"{name} failed for generation {self.generation_id}: {e}")
            raise
        finally:
            if state.is_loading:
                state.status = OperationStatus.IDLE

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_question(self, question: str) -> Generation:
        """Append a custom question, then refetch this generation."""
        payload = validate_input(CustomQuestionInput, {"question": question})

        async with self._submission("create_question") as submission:
            await self.client.create_question(self.generation_id, payload.question)
            submission.applied = True
            self._discard_snapshot()
            return await self.refresh()

    async def add_questions(self, count: int) -> Generation:
        """Generate ``count`` more questions, then refetch this generation."""
        payload = validate_input(
            AddQuestionsInput,
            {"count": count},
            context={"max_count": self.settings.max_generated_questions},
        )

        async with self._submission("add_questions") as submission:
            await self.client.add_questions(self.generation_id, payload.count)
            submission.applied = True
            self._discard_snapshot()
            return await self.refresh()

    async def delete_generation(self) -> list[GenerationSummary]:
        """Delete this generation, then refetch the all-generations list."""
        async with self._submission("delete_generation") as submission:
            await self.client.delete_generation(self.generation_id)
            submission.applied = True
            self._discard_snapshot()
            return await self.list_generations()

    async def export_to_form(self, email: str) -> None:
        """
        Export this generation to an external form.

        Blocked before any request unless every answer choice is scored.
        The held snapshot is left as is.

        Raises:
            OperationValidationError: If the email is invalid
            ExportNotReadyError: If any answer choice is still unselected
        """
        payload = validate_input(ExportToFormInput, {"email": email})

        async with self._submission("export_to_form"):
            generation = await self._require_snapshot()

            if find_unscored(generation):
                unscored = describe_unscored(generation, self._index)
                logger.info(
                    f"Export of generation {self.generation_id} blocked: "
                    f"{len(unscored)} answer choices unscored"
                )
                raise ExportNotReadyError(unscored)

            await self.client.export_to_form(self.generation_id, str(payload.email))

    async def score_answer(self, answer_id: int, feedback: FeedbackType | str) -> Generation:
        """Set feedback on one answer choice, then refetch this generation."""
        try:
            feedback = FeedbackType(feedback)
        except ValueError as e:
            valid = ", ".join(f.value for f in FeedbackType)
            raise OperationValidationError(
                f"Invalid feedback {feedback!r}; expected one of: {valid}",
                [f"user_feedback: expected one of {valid}"],
            ) from e

        async with self._submission("score_answer") as submission:
            await self.client.set_feedback(self.generation_id, answer_id, feedback)
            submission.applied = True
            self._discard_snapshot()
            return await self.refresh()
