"""FastAPI application entry point."""

from contextlib import AsyncExitStack, asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from prompt_history import __version__
from prompt_history.api.errors import register_exception_handlers
from prompt_history.api.router import api_router
from prompt_history.core.config import settings
from prompt_history.observability.logging import get_logger, setup_logging
from prompt_history.observability.metrics import metrics
from prompt_history.services.prompt import PromptService
from prompt_history.services.storage import build_stores

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown events."""
    # Startup
    setup_logging()
    logger.info(f"Starting {settings.APP_NAME}")

    async with AsyncExitStack() as stack:
        record_store, blob_store = await build_stores(settings, stack)
        logger.info(
            f"Stores initialized (records={record_store.name}, media={blob_store.name}, "
            f"bucket={settings.MEDIA_BUCKET})"
        )

        app.state.prompt_service = PromptService(
            record_store,
            blob_store,
            media_key_prefix=settings.MEDIA_KEY_PREFIX,
            strict_update_validation=settings.STRICT_UPDATE_VALIDATION,
            expose_store_errors=settings.EXPOSE_STORE_ERRORS,
        )

        metrics.set_app_info(version=__version__, record_backend=record_store.name)

        logger.info(f"Strict update validation: {settings.STRICT_UPDATE_VALIDATION}")
        logger.info(f"Expose store errors: {settings.EXPOSE_STORE_ERRORS}")

        yield

        # Shutdown
        logger.info("Shutting down...")
        app.state.prompt_service = None

    logger.info("Store clients closed")
    logger.info("Shutdown complete")


app = FastAPI(
    title=settings.APP_NAME,
    description="CRUD service for prompts and their generated media",
    version=__version__,
    docs_url="/docs",
    redoc_url="/redoc",
    openapi_url="/openapi.json",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type", "Authorization"],
)

register_exception_handlers(app)

app.include_router(api_router)


@app.get("/", include_in_schema=False)
async def root():
    """Root endpoint with API info."""
    return {
        "name": settings.APP_NAME,
        "version": __version__,
        "docs": "/docs",
        "health": "/health",
        "ready": "/ready",
    }


def run() -> None:
    """Run the API server."""
    import uvicorn

    uvicorn.run(
        "prompt_history.main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=settings.DEBUG,
    )


if __name__ == "__main__":
    run()
