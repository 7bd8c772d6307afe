"""Prompt request/response schemas.

Fields use snake_case in Python and camelCase on the wire
(``media_url`` <-> ``mediaUrl``).
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from prompt_history.models.prompt import PromptRecord


class _CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PromptWrite(_CamelModel):
    """Request body for creating or replacing a prompt.

    Presence and enumeration checks happen in the service so that create
    and update can apply different rules.
    """

    prompt: Optional[str] = Field(None, description="Prompt text")
    media_url: Optional[str] = Field(None, description="URL of the generated media")
    media_type: Optional[str] = Field(None, description="One of image, audio, video")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "prompt": "a cat",
                "mediaUrl": "https://cdn.example.com/generated-media/cat.png",
                "mediaType": "image",
            }
        },
    )


# Aliases for API requests
PromptCreate = PromptWrite
PromptUpdate = PromptWrite


class PromptResponse(_CamelModel):
    """Response schema for a prompt."""

    id: str
    prompt: str
    media_url: str
    media_type: str
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_record(cls, record: PromptRecord) -> "PromptResponse":
        return cls(
            id=record.id,
            prompt=record.prompt,
            media_url=record.media_url,
            media_type=record.media_type,
            created_at=record.created_at,
            updated_at=record.updated_at,
        )


class ErrorResponse(BaseModel):
    """Error envelope returned by every failing request."""

    status: str = "error"
    code: str
    message: str
