"""Pydantic models shared across the API routes and storage backends.

Beginner terms used in this file:
- Model: a typed schema class used for validation/serialization.
- field_validator: a hook that cleans or rejects one field before the model is built.
- Partial update: only the fields a caller actually sends are changed.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, StrictBool, field_validator

TEXT_REQUIRED = "Text is required"


def _clean_text(value: Any) -> str:
    """Trim task text and reject blank values."""
    if not isinstance(value, str):
        raise ValueError(TEXT_REQUIRED)
    cleaned = value.strip()
    if not cleaned:
        raise ValueError(TEXT_REQUIRED)
    return cleaned


class Todo(BaseModel):
    """Canonical todo record shape returned by API/storage."""

    # Generated by the storage layer on create; never changes afterwards.
    id: str
    text: str
    completed: bool = False


class CreateTodoRequest(BaseModel):
    """Request body for POST /."""

    text: str

    @field_validator("text", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str:
        return _clean_text(value)


class UpdateTodoRequest(BaseModel):
    """Request body for PUT /{id}; every field is optional."""

    model_config = ConfigDict(extra="ignore")

    text: str | None = None
    completed: StrictBool | None = None

    @field_validator("text", mode="before")
    @classmethod
    def _validate_text(cls, value: Any) -> str | None:
        if value is None:
            return None
        return _clean_text(value)

    def changes(self) -> TodoChanges:
        return TodoChanges(text=self.text, completed=self.completed)


class TodoChanges(BaseModel):
    """Validated partial update handed to the storage layer."""

    text: str | None = None
    completed: bool | None = None

    def as_document(self) -> dict[str, Any]:
        """Only the fields that should be written; None means "leave untouched"."""
        return self.model_dump(exclude_none=True)


class DeleteTodoResponse(BaseModel):
    """Response body for DELETE /{id}."""

    message: str = "Todo deleted successfully"


class HealthResponse(BaseModel):
    status: str = "ok"
    service: str
