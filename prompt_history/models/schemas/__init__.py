"""Pydantic schemas for request/response validation."""

from prompt_history.models.schemas.prompt import (
    ErrorResponse,
    PromptCreate,
    PromptResponse,
    PromptUpdate,
    PromptWrite,
)

__all__ = [
    "ErrorResponse",
    "PromptCreate",
    "PromptResponse",
    "PromptUpdate",
    "PromptWrite",
]
