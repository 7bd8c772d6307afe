"""Prompt service for generated-media prompt records."""

from prompt_history.services.prompt.service import (
    PromptService,
    media_basename,
    new_prompt_id,
    utc_now_iso,
)

__all__ = [
    "PromptService",
    "media_basename",
    "new_prompt_id",
    "utc_now_iso",
]
