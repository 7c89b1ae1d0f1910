"""
Pytest Configuration and Fixtures.

This file configures pytest and provides shared fixtures for all tests.
"""
import pytest
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from quizgate.config import Settings


def pytest_configure(config):
    """Configure pytest markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "smoke: Smoke tests for CLI commands")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)
        elif "smoke" in str(item.fspath):
            item.add_marker(pytest.mark.smoke)


def make_generation_payload(
    generation_id: int = 1,
    feedback: list[list[str]] | None = None,
    filename: str = "lecture-notes.pdf",
) -> dict:
    """
    Build a generation payload as the service returns it.

    ``feedback`` holds one list per question, one entry per answer choice.
    Question ids are 10, 20, ...; answer ids are question id + 1, + 2, ...
    """
    if feedback is None:
        feedback = [["unselected", "unselected"], ["unselected", "unselected"]]

    questions = []
    for q_index, answers in enumerate(feedback):
        question_id = (q_index + 1) * 10
        questions.append({
            "id": question_id,
            "question": f"Question text {q_index + 1}",
            "answers": [
                {
                    "id": question_id + a_index + 1,
                    "question_id": question_id,
                    "answer": f"Choice {a_index + 1}",
                    "user_feedback": value,
                }
                for a_index, value in enumerate(answers)
            ],
        })

    return {"id": generation_id, "filename": filename, "questions": questions}


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return PROJECT_ROOT


@pytest.fixture
def settings():
    """Settings isolated from the environment."""
    return Settings(
        api_url="http://quizgate.test/api",
        request_timeout_seconds=5.0,
        max_generated_questions=20,
        _env_file=None,
    )


@pytest.fixture
def unscored_payload():
    """Two questions with two unselected answer choices each."""
    return make_generation_payload()


@pytest.fixture
def scored_payload():
    """Two questions with every answer choice scored."""
    return make_generation_payload(
        feedback=[["correct", "incorrect"], ["incorrect", "correct"]],
    )


@pytest.fixture
def generation_payload():
    """Factory for generation payloads."""
    return make_generation_payload
