"""Domain models and API schemas."""

from prompt_history.models.prompt import MEDIA_TYPES, MediaType, PromptRecord

__all__ = ["MEDIA_TYPES", "MediaType", "PromptRecord"]
