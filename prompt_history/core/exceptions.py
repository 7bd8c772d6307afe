"""Custom exceptions for Prompt History."""

from typing import Any, Dict, List, Optional


class PromptHistoryError(Exception):
    """Base exception for all Prompt History errors."""

    status_code: int = 500

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
        details: Optional[List[Dict[str, Any]]] = None,
    ):
        self.message = message
        self.code = code
        self.details = details or []
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to the API error envelope."""
        result = {
            "status": "error",
            "code": self.code,
            "message": self.message,
        }
        if self.details:
            result["details"] = self.details
        return result


class ValidationError(PromptHistoryError):
    """Raised when input validation fails."""

    status_code = 400

    def __init__(self, message: str, details: Optional[List[Dict[str, Any]]] = None):
        super().__init__(message, code="VALIDATION_ERROR", details=details)


class NotFoundError(PromptHistoryError):
    """Raised when a resource is not found."""

    status_code = 404

    def __init__(self, resource: str, identifier: str):
        super().__init__(
            message=f"{resource} not found",
            code="NOT_FOUND",
            details=[{"id": identifier}],
        )
        self.resource = resource
        self.identifier = identifier


class StoreError(PromptHistoryError):
    """Raised when a backing store operation fails."""

    status_code = 500

    def __init__(self, store: str, operation: str, message: str, code: str = "STORE_ERROR"):
        super().__init__(message=message, code=code)
        self.store = store
        self.operation = operation


class PartialDeleteError(StoreError):
    """Raised when media was deleted but the record deletion failed."""

    def __init__(self, prompt_id: str, media_key: str, message: str):
        super().__init__(
            store="record",
            operation="delete",
            message=message,
            code="PARTIAL_DELETE",
        )
        self.prompt_id = prompt_id
        self.media_key = media_key
