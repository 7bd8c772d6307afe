"""Health check endpoints."""

from fastapi import APIRouter, Response
from fastapi.responses import JSONResponse

from prompt_history.api.deps import PromptServiceDep
from prompt_history.core.config import settings
from prompt_history.observability.logging import get_logger
from prompt_history.observability.metrics import metrics

logger = get_logger(__name__)

router = APIRouter()


@router.get("/health")
async def health_check():
    """
    Liveness probe endpoint.

    Returns basic status - use this for container liveness checks.
    """
    return {"status": "ok"}


@router.get("/ready")
async def readiness_check(service: PromptServiceDep):
    """
    Readiness probe endpoint.

    Checks connectivity to the record store and the media store.
    Returns 503 if any dependency is unhealthy.
    """
    checks = {}
    all_healthy = True

    for store in (service.record_store, service.blob_store):
        ok = await store.ping()
        checks[store.name] = "ok" if ok else "error"
        if not ok:
            logger.error(f"Readiness check failed for {store.name}")
            all_healthy = False

    result = {
        "status": "ready" if all_healthy else "not_ready",
        "dependencies": checks,
    }

    if not all_healthy:
        return JSONResponse(content=result, status_code=503)

    return result


@router.get("/metrics")
async def prometheus_metrics():
    """
    Prometheus metrics endpoint.

    Returns all metrics in Prometheus text format.
    """
    if not settings.METRICS_ENABLED:
        return Response(content="Metrics disabled", status_code=404)

    content = metrics.get_metrics()
    return Response(content=content, media_type="text/plain; charset=utf-8")
