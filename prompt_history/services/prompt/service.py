"""Prompt service: CRUD over prompt records and their generated media.

This service owns the business rules for prompt records:

Features:
    - Input validation for create and update
    - Identifier and timestamp assignment
    - Conditional full-replace updates (never creates on update)
    - Two-step delete of the media object and then the record,
      with partial failures surfaced separately from full failures
    - Store error translation into the service's error taxonomy

Architecture:
    Collaborators (record store, blob store, id factory, clock) are passed
    in explicitly. The service holds no per-request state, so a single
    instance is shared by all requests.

Usage:
    service = PromptService(record_store, blob_store)

    record = await service.create("a cat", "https://x/y/cat.png", "image")
    record = await service.update(record.id, "a dog", "https://x/y/dog.png", "image")
    await service.delete(record.id)
"""

import logging
import uuid
from datetime import datetime, timezone
from typing import Callable, List, Optional
from urllib.parse import urlsplit

from prompt_history.core.exceptions import (
    NotFoundError,
    PartialDeleteError,
    StoreError,
    ValidationError,
)
from prompt_history.models.prompt import MEDIA_TYPES, PromptRecord
from prompt_history.observability.logging import get_logger, log_event
from prompt_history.observability.metrics import metrics
from prompt_history.services.storage.base import BlobStore, RecordStore

logger = get_logger(__name__)

CREATE_VALIDATION_MESSAGE = (
    "Invalid prompt, mediaUrl, or mediaType (must be image, audio, or video)"
)
UPDATE_VALIDATION_MESSAGE = "Invalid prompt"
DEFAULT_MEDIA_KEY_PREFIX = "generated-media/"


def new_prompt_id() -> str:
    """Generate a fresh prompt identifier."""
    return str(uuid.uuid4())


def utc_now_iso() -> str:
    """Current UTC time as ISO-8601 with millisecond precision and a Z suffix."""
    now = datetime.now(timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def media_basename(media_url: str) -> str:
    """Return the final path segment of a media URL (query and fragment excluded)."""
    path = urlsplit(media_url).path
    return path.rsplit("/", 1)[-1]


class PromptService:
    """Service for managing prompt records.

    Args:
        record_store: Key-value store holding prompt records
        blob_store: Object store holding generated media
        id_factory: Produces unique prompt ids
        clock: Produces ISO-8601 timestamps
        media_key_prefix: Logical folder holding generated media objects
        strict_update_validation: Apply create's validation rules to update
        expose_store_errors: Include store error detail in error messages
    """

    def __init__(
        self,
        record_store: RecordStore,
        blob_store: BlobStore,
        id_factory: Optional[Callable[[], str]] = None,
        clock: Optional[Callable[[], str]] = None,
        media_key_prefix: str = DEFAULT_MEDIA_KEY_PREFIX,
        strict_update_validation: bool = False,
        expose_store_errors: bool = True,
    ):
        self.record_store = record_store
        self.blob_store = blob_store
        self._id_factory = id_factory or new_prompt_id
        self._clock = clock or utc_now_iso
        self.media_key_prefix = media_key_prefix
        self.strict_update_validation = strict_update_validation
        self.expose_store_errors = expose_store_errors

    def media_key_for(self, media_url: str) -> Optional[str]:
        """Object store key for a media URL, or None if the URL has no basename."""
        basename = media_basename(media_url)
        if not basename:
            return None
        return f"{self.media_key_prefix}{basename}"

    @staticmethod
    def _is_valid_write(
        prompt: Optional[str],
        media_url: Optional[str],
        media_type: Optional[str],
    ) -> bool:
        return bool(prompt) and bool(media_url) and media_type in MEDIA_TYPES

    def _store_failure(self, action: str, exc: StoreError) -> StoreError:
        """Re-label a store error with the failed action."""
        message = f"Failed to {action}"
        if self.expose_store_errors:
            message = f"{message}: {exc.message}"
        return StoreError(exc.store, exc.operation, message)

    async def create(
        self,
        prompt: Optional[str],
        media_url: Optional[str],
        media_type: Optional[str],
    ) -> PromptRecord:
        """Create a new prompt record.

        Args:
            prompt: Prompt text, must be non-empty
            media_url: Location of the generated media, must be non-empty
            media_type: One of image, audio, video

        Returns:
            The stored record

        Raises:
            ValidationError: If any field is missing or invalid
            StoreError: If the record store write fails
        """
        if not self._is_valid_write(prompt, media_url, media_type):
            metrics.record_operation("create", "invalid")
            logger.warning("Rejected prompt create: invalid input")
            raise ValidationError(CREATE_VALIDATION_MESSAGE)

        now = self._clock()
        record = PromptRecord(
            id=self._id_factory(),
            prompt=prompt,
            media_url=media_url,
            media_type=media_type,
            created_at=now,
            updated_at=now,
        )

        try:
            await self.record_store.put(record.to_item())
        except StoreError as e:
            metrics.record_operation("create", "error")
            raise self._store_failure("save prompt", e) from e

        metrics.record_operation("create", "success")
        log_event(logger, logging.INFO, "Created prompt", prompt_id=record.id)
        return record

    async def list_all(self) -> List[PromptRecord]:
        """List every prompt record in store order."""
        try:
            items = await self.record_store.scan()
        except StoreError as e:
            metrics.record_operation("list", "error")
            raise self._store_failure("list prompts", e) from e

        metrics.record_operation("list", "success")
        return [PromptRecord.from_item(item) for item in items]

    async def get(self, prompt_id: str) -> PromptRecord:
        """Get a prompt record by id.

        Raises:
            NotFoundError: If no record has this id
            StoreError: If the read fails
        """
        try:
            item = await self.record_store.get(prompt_id)
        except StoreError as e:
            metrics.record_operation("get", "error")
            raise self._store_failure("get prompt", e) from e

        if item is None:
            metrics.record_operation("get", "not_found")
            raise NotFoundError("Prompt", prompt_id)

        metrics.record_operation("get", "success")
        return PromptRecord.from_item(item)

    async def update(
        self,
        prompt_id: str,
        prompt: Optional[str],
        media_url: Optional[str],
        media_type: Optional[str],
    ) -> PromptRecord:
        """Replace the mutable fields of an existing prompt.

        Only ``prompt`` is required unless strict update validation is
        enabled. Omitted media fields are written as empty strings since an
        update always rewrites every mutable field.

        Returns:
            The record as stored after the update

        Raises:
            ValidationError: If the input is invalid
            NotFoundError: If no record has this id
            StoreError: If the write fails
        """
        if self.strict_update_validation:
            if not self._is_valid_write(prompt, media_url, media_type):
                metrics.record_operation("update", "invalid")
                raise ValidationError(CREATE_VALIDATION_MESSAGE)
        elif not prompt:
            metrics.record_operation("update", "invalid")
            raise ValidationError(UPDATE_VALIDATION_MESSAGE)

        fields = {
            "prompt": prompt,
            "updatedAt": self._clock(),
            "mediaUrl": media_url or "",
            "mediaType": media_type or "",
        }

        try:
            item = await self.record_store.update(prompt_id, fields)
        except NotFoundError:
            metrics.record_operation("update", "not_found")
            log_event(logger, logging.WARNING, "Update of missing prompt", prompt_id=prompt_id)
            raise
        except StoreError as e:
            metrics.record_operation("update", "error")
            raise self._store_failure("update prompt", e) from e

        item.setdefault("id", prompt_id)
        metrics.record_operation("update", "success")
        log_event(logger, logging.INFO, "Updated prompt", prompt_id=prompt_id)
        return PromptRecord.from_item(item)

    async def delete(self, prompt_id: str) -> None:
        """Delete a prompt record and its media object.

        The media object is deleted first. If that fails the record is left
        untouched. If the record delete then fails, a PartialDeleteError
        reports that the media is already gone.

        Raises:
            NotFoundError: If no record has this id
            StoreError: If the lookup or media delete fails
            PartialDeleteError: If the record delete fails after the media delete
        """
        try:
            item = await self.record_store.get(prompt_id)
        except StoreError as e:
            metrics.record_operation("delete", "error")
            raise self._store_failure("delete prompt", e) from e

        if item is None:
            metrics.record_operation("delete", "not_found")
            raise NotFoundError("Prompt", prompt_id)

        media_url = item.get("mediaUrl", "")
        media_key = self.media_key_for(media_url)

        if media_key is None:
            log_event(
                logger,
                logging.WARNING,
                "Prompt media URL has no file name, skipping media delete",
                prompt_id=prompt_id,
                media_url=media_url,
            )
        else:
            try:
                await self.blob_store.delete(media_key)
            except StoreError as e:
                metrics.record_operation("delete", "error")
                raise self._store_failure("delete prompt", e) from e

        try:
            await self.record_store.delete(prompt_id)
        except StoreError as e:
            if media_key is None:
                metrics.record_operation("delete", "error")
                raise self._store_failure("delete prompt", e) from e

            metrics.record_operation("delete", "partial")
            metrics.record_partial_delete()
            log_event(
                logger,
                logging.ERROR,
                f"Media deleted but prompt record remains: {e.message}",
                prompt_id=prompt_id,
                media_key=media_key,
            )
            message = "Failed to delete prompt: media was removed but the record was not"
            if self.expose_store_errors:
                message = f"{message}: {e.message}"
            raise PartialDeleteError(prompt_id, media_key, message) from e

        metrics.record_operation("delete", "success")
        log_event(logger, logging.INFO, "Deleted prompt", prompt_id=prompt_id, media_key=media_key)
