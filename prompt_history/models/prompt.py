"""Prompt domain model.

A prompt record pairs the text used to generate a media asset with the
location of that asset. Records are stored flat, every attribute as a
string, in whichever record store is configured:

    {
        "id": "550e8400-e29b-41d4-a716-446655440000",
        "prompt": "a cat",
        "mediaUrl": "https://cdn.example.com/generated-media/cat.png",
        "mediaType": "image",
        "createdAt": "2024-01-15T10:30:00.000Z",
        "updatedAt": "2024-01-15T10:30:00.000Z",
    }
"""

from dataclasses import dataclass
from enum import Enum
from typing import Dict, Mapping, Optional


class MediaType(str, Enum):
    """Kind of generated media a prompt refers to."""

    IMAGE = "image"
    AUDIO = "audio"
    VIDEO = "video"


MEDIA_TYPES = frozenset(m.value for m in MediaType)


@dataclass
class PromptRecord:
    """Snapshot of a stored prompt.

    Attributes:
        id: Opaque unique identifier assigned at creation
        prompt: Prompt text
        media_url: Location of the generated media asset
        media_type: One of image, audio, video
        created_at: ISO-8601 creation timestamp
        updated_at: ISO-8601 last update timestamp, None for legacy items
    """

    id: str
    prompt: str
    media_url: str
    media_type: str
    created_at: str
    updated_at: Optional[str] = None

    @classmethod
    def from_item(cls, item: Mapping[str, str]) -> "PromptRecord":
        """Build a record from a flat store item keyed by wire names."""
        return cls(
            id=item["id"],
            prompt=item.get("prompt", ""),
            media_url=item.get("mediaUrl", ""),
            media_type=item.get("mediaType", ""),
            created_at=item.get("createdAt", ""),
            updated_at=item.get("updatedAt"),
        )

    def to_item(self) -> Dict[str, str]:
        """Flatten to a store item keyed by wire names."""
        item = {
            "id": self.id,
            "prompt": self.prompt,
            "mediaUrl": self.media_url,
            "mediaType": self.media_type,
            "createdAt": self.created_at,
        }
        if self.updated_at is not None:
            item["updatedAt"] = self.updated_at
        return item
