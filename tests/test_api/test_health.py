"""Tests for health check endpoints."""

from unittest.mock import patch

import pytest
from httpx import AsyncClient


@pytest.mark.unit
async def test_health_endpoint(client: AsyncClient):
    """Test /health returns ok."""
    response = await client.get("/health")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"


@pytest.mark.unit
async def test_ready_endpoint(client: AsyncClient):
    """Test /ready reports every store healthy."""
    response = await client.get("/ready")
    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ready"
    assert data["dependencies"] == {"memory": "ok", "memory-blob": "ok"}


@pytest.mark.unit
async def test_ready_endpoint_blob_store_down(client: AsyncClient, blob_store):
    """Test /ready returns 503 when the media store is unreachable."""
    blob_store.fail_on.add("ping")

    response = await client.get("/ready")

    assert response.status_code == 503
    data = response.json()
    assert data["status"] == "not_ready"
    assert data["dependencies"]["memory-blob"] == "error"
    assert data["dependencies"]["memory"] == "ok"


@pytest.mark.unit
async def test_metrics_endpoint(client: AsyncClient, cat_prompt):
    """Test /metrics exposes operation counters."""
    await client.post("/prompts", json=cat_prompt)

    response = await client.get("/metrics")

    assert response.status_code == 200
    assert "prompt_history_operations_total" in response.text


@pytest.mark.unit
async def test_metrics_disabled(client: AsyncClient):
    """Test /metrics returns 404 when disabled."""
    with patch("prompt_history.api.health.settings") as mock_settings:
        mock_settings.METRICS_ENABLED = False

        response = await client.get("/metrics")

    assert response.status_code == 404


@pytest.mark.unit
async def test_openapi_schema(client: AsyncClient):
    """Test OpenAPI schema is available."""
    response = await client.get("/openapi.json")
    assert response.status_code == 200
    data = response.json()
    assert "openapi" in data
    assert "paths" in data
    assert "/prompts" in data["paths"]
    assert "/prompts/{prompt_id}" in data["paths"]
