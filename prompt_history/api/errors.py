"""Exception handlers rendering every failure as the JSON error envelope."""

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from prompt_history.core.exceptions import PromptHistoryError, StoreError
from prompt_history.observability.logging import get_logger

logger = get_logger(__name__)


def error_body(code: str, message: str) -> dict:
    """Build an error envelope."""
    return {"status": "error", "code": code, "message": message}


async def prompt_history_error_handler(request: Request, exc: PromptHistoryError) -> JSONResponse:
    if isinstance(exc, StoreError):
        logger.error(
            f"{request.method} {request.url.path} failed: {exc.message}",
            extra={"code": exc.code, "store": exc.store, "operation": exc.operation},
        )
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


async def request_validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    errors = exc.errors()
    fields = [".".join(str(part) for part in err.get("loc", ())) for err in errors]
    message = "Invalid request"
    if fields:
        message = f"Invalid request: {', '.join(fields)}"
    return JSONResponse(status_code=400, content=error_body("VALIDATION_ERROR", message))


async def http_error_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = "NOT_FOUND" if exc.status_code == 404 else "HTTP_ERROR"
    message = exc.detail if isinstance(exc.detail, str) else "Request failed"
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(code, message),
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Install the error envelope handlers on an application."""
    app.add_exception_handler(PromptHistoryError, prompt_history_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_error_handler)
