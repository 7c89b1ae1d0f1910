"""
Unit tests for operation input schemas.
"""

import pytest

from quizgate.core.errors import OperationValidationError
from quizgate.core.schemas import (
    AddQuestionsInput,
    CustomQuestionInput,
    ExportToFormInput,
    validate_input,
)


class TestCustomQuestionInput:
    def test_strips_text(self):
        payload = validate_input(CustomQuestionInput, {"question": "  Which keyword declares a constant?  "})

        assert payload.question == "Which keyword declares a constant?"

    @pytest.mark.parametrize("text", ["", "   ", "\n\t"])
    def test_blank_question_rejected(self, text):
        with pytest.raises(OperationValidationError) as exc_info:
            validate_input(CustomQuestionInput, {"question": text})

        assert exc_info.value.errors
        assert exc_info.value.errors[0].startswith("question")

    def test_missing_question_rejected(self):
        with pytest.raises(OperationValidationError):
            validate_input(CustomQuestionInput, {})


class TestAddQuestionsInput:
    def test_positive_count_accepted(self):
        assert validate_input(AddQuestionsInput, {"count": 5}).count == 5

    @pytest.mark.parametrize("count", [0, -1])
    def test_non_positive_count_rejected(self, count):
        with pytest.raises(OperationValidationError):
            validate_input(AddQuestionsInput, {"count": count})

    def test_count_above_context_limit_rejected(self):
        with pytest.raises(OperationValidationError):
            validate_input(AddQuestionsInput, {"count": 6}, context={"max_count": 5})

    def test_count_at_context_limit_accepted(self):
        payload = validate_input(AddQuestionsInput, {"count": 5}, context={"max_count": 5})

        assert payload.count == 5

    def test_non_integer_rejected(self):
        with pytest.raises(OperationValidationError):
            validate_input(AddQuestionsInput, {"count": "several"})


class TestExportToFormInput:
    def test_valid_email_accepted(self):
        payload = validate_input(ExportToFormInput, {"email": "instructor@example.com"})

        assert str(payload.email) == "instructor@example.com"

    @pytest.mark.parametrize("email", ["", "not-an-email", "missing@", "@example.com"])
    def test_invalid_email_rejected(self, email):
        with pytest.raises(OperationValidationError):
            validate_input(ExportToFormInput, {"email": email})
