"""
Generation Service Client

HTTP client for the remote service that creates, stores and serves generated
quizzes. Mutating calls return nothing: callers refetch the snapshot they need
after a call succeeds.

Usage:
    async with GenerationClient.from_settings(get_settings()) as client:
        generation = await client.fetch_generation(42)
        await client.add_questions(42, count=5)
        generation = await client.fetch_generation(42)
"""

from __future__ import annotations

from typing import Any

import httpx
from loguru import logger

from quizgate.config import Settings
from quizgate.core.errors import RemoteOperationError
from quizgate.core.models import FeedbackType, Generation, GenerationSummary


class GenerationClient:
    """
    Async HTTP client for the generation service.

    Supports:
    - Fetching a single generation and the list of all generations
    - Creating custom questions and generating more questions
    - Deleting a generation
    - Exporting a generation to an external form
    - Setting per-answer feedback

    Every failure (transport error, non-2xx status, undecodable body) is raised
    as RemoteOperationError. There is no retry at this layer.
    """

    def __init__(
        self,
        api_url: str,
        timeout_seconds: float = 30.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        """
        Initialize the client.

        Args:
            api_url: Base URL of the generation service
            timeout_seconds: Transport timeout for every request
            transport: Optional httpx transport (used by tests)
        """
        self.api_url = api_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.client = httpx.AsyncClient(
            base_url=self.api_url,
            headers={"Content-Type": "application/json"},
            timeout=httpx.Timeout(timeout_seconds),
            follow_redirects=True,
            transport=transport,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> GenerationClient:
        return cls(settings.api_url, timeout_seconds=settings.request_timeout_seconds)

    async def __aenter__(self) -> GenerationClient:
        return self

    async def __aexit__(self, *args: Any) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the HTTP client."""
        await self.client.aclose()

    # =========================================================================
    # Transport
    # =========================================================================

    async def _request(
        self,
        operation: str,
        method: str,
        path: str,
        json: dict[str, Any] | None = None,
    ) -> httpx.Response:
        logger.debug(f"{operation}: {method} {path}")
        try:
            if method == "GET":
                response = await self.client.get(path)
            else:
                response = await self.client.post(path, json=json)
        except httpx.RequestError as e:
            logger.error(f"Connection error during {operation}: {e}")
            raise RemoteOperationError(operation, str(e)) from e

        if response.is_error:
            detail = _error_detail(response)
            logger.warning(f"{operation} rejected with {response.status_code}: {detail}")
            raise RemoteOperationError(operation, detail, status_code=response.status_code)

        return response

    @staticmethod
    def _decode(operation: str, response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            logger.error(f"Undecodable response body for {operation}: {e}")
            raise RemoteOperationError(operation, "response body is not valid JSON") from e

    # =========================================================================
    # Reads
    # =========================================================================

    async def fetch_generation(self, generation_id: int) -> Generation:
        """Fetch the current snapshot of a generation."""
        operation = "fetch_generation"
        response = await self._request(operation, "GET", f"/generated/{generation_id}")
        data = self._decode(operation, response)

        try:
            generation = Generation.from_api(data)
        except ValueError as e:
            raise RemoteOperationError(operation, f"malformed generation payload: {e}") from e

        logger.debug(
            f"Fetched generation {generation.id} with {len(generation.questions)} questions"
        )
        return generation

    async def list_generations(self) -> list[GenerationSummary]:
        """Fetch the list of all generations."""
        operation = "list_generations"
        response = await self._request(operation, "GET", "/generated")
        data = self._decode(operation, response)

        if isinstance(data, dict):
            data = data.get("generations", [])
        if not isinstance(data, list):
            raise RemoteOperationError(operation, "expected a list of generations")
        if not all(isinstance(item, dict) for item in data):
            logger.error(f"Non-object entry in {operation} response")
            raise RemoteOperationError(operation, "malformed generation entry: expected an object")

        try:
            return [GenerationSummary.from_api(item) for item in data]
        except (KeyError, TypeError, ValueError) as e:
            raise RemoteOperationError(operation, f"malformed generation entry: {e}") from e

    # =========================================================================
    # Mutations
    # =========================================================================

    async def create_question(self, generation_id: int, question: str) -> None:
        """Append a custom question to a generation."""
        await self._request(
            "create_question", "POST",
            f"/generated/{generation_id}/new",
            json={"question": question},
        )
        logger.info(f"Created custom question in generation {generation_id}")

    async def add_questions(self, generation_id: int, count: int) -> None:
        """Ask the service to generate ``count`` more questions."""
        await self._request(
            "add_questions", "POST",
            f"/generated/{generation_id}/more",
            json={"count": count},
        )
        logger.info(f"Requested {count} more questions for generation {generation_id}")

    async def delete_generation(self, generation_id: int) -> None:
        """Delete a generation."""
        await self._request("delete_generation", "POST", f"/generated/{generation_id}/delete")
        logger.info(f"Deleted generation {generation_id}")

    async def export_to_form(self, generation_id: int, email: str) -> None:
        """Create an external form from the generation's current state."""
        await self._request(
            "export_to_form", "POST",
            f"/generated/{generation_id}/google_form",
            json={"email": email},
        )
        logger.info(f"Exported generation {generation_id} to a form for {email}")

    async def set_feedback(
        self,
        generation_id: int,
        answer_id: int,
        feedback: FeedbackType,
    ) -> None:
        """Set the reviewer feedback on one answer choice."""
        await self._request(
            "set_feedback", "POST",
            f"/generated/{generation_id}/answers/{answer_id}/feedback",
            json={"user_feedback": FeedbackType(feedback).value},
        )
        logger.debug(f"Set feedback on answer {answer_id} to {FeedbackType(feedback).value}")


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(body, dict) and body.get("detail"):
        return str(body["detail"])
    return response.reason_phrase or str(body)
