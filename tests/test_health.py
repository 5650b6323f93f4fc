import pytest
from unittest.mock import patch
from httpx import AsyncClient, ASGITransport

from app.config import settings
from app.main import app


@pytest.mark.asyncio
async def test_health_endpoint():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["service"] == "zone-zero-navigator"
    assert data["version"] == "0.1.0"
    assert data["analysis_mode"] == "demo"


@pytest.mark.asyncio
async def test_health_reports_ai_mode_when_key_configured():
    with patch.object(settings, "openai_api_key", "sk-test"):
        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as client:
            response = await client.get("/health")

    assert response.json()["analysis_mode"] == "ai"
