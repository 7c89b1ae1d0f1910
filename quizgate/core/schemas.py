"""
Input schemas for the mutating operations.

Shape validation only: a payload that fails here is never sent to the
generation service.
"""

from __future__ import annotations

from typing import Any, TypeVar

from pydantic import BaseModel, EmailStr, Field, ValidationError, ValidationInfo, field_validator

from quizgate.core.errors import OperationValidationError

DEFAULT_MAX_COUNT = 20


class CustomQuestionInput(BaseModel):
    """Payload for creating a custom question."""

    question: str = Field(..., description="Question text")

    @field_validator("question")
    @classmethod
    def question_not_blank(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("Question is required")
        return value


class AddQuestionsInput(BaseModel):
    """Payload for generating more questions."""

    count: int = Field(..., description="Number of questions to generate")

    @field_validator("count")
    @classmethod
    def count_in_range(cls, value: int, info: ValidationInfo) -> int:
        max_count = (info.context or {}).get("max_count", DEFAULT_MAX_COUNT)
        if value < 1:
            raise ValueError("Number of questions must be positive")
        if value > max_count:
            raise ValueError(f"Number of questions must be at most {max_count}")
        return value


class ExportToFormInput(BaseModel):
    """Payload for exporting a generation to an external form."""

    email: EmailStr = Field(..., description="Owner of the created form")


SchemaT = TypeVar("SchemaT", bound=BaseModel)


def validate_input(
    schema: type[SchemaT],
    data: dict[str, Any],
    context: dict[str, Any] | None = None,
) -> SchemaT:
    """
    Validate operation input against a schema.

    Raises:
        OperationValidationError: With one message per failing field
    """
    try:
        return schema.model_validate(data, context=context)
    except ValidationError as e:
        messages = [
            f"{'.'.join(str(p) for p in err['loc']) or schema.__name__}: {err['msg']}"
            for err in e.errors()
        ]
        raise OperationValidationError(
            f"Invalid {schema.__name__}: " + "; ".join(messages),
            messages,
        ) from e
