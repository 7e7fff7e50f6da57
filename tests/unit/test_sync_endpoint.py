"""
Tests unitarios para el endpoint de sincronización HubSpot -> Notion.

Verifica el contrato HTTP:
- dry_run se pasa al caso de uso.
- Los AppException se responden con su código y payload de error.
"""
from __future__ import annotations

from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from app.api.v1.dependencies.use_case_deps import get_deal_sync_use_cases
from app.application.dto.sync_dto import SyncResultDTO
from app.infrastructure.external.deal_sync.notion_client import NotionApiError
from app.infrastructure.external.deal_sync.types import SyncResult


@pytest.fixture
def mock_use_cases() -> AsyncMock:
    uc = AsyncMock()
    uc.run_sync = AsyncMock(
        return_value=SyncResultDTO.from_result(
            SyncResult(created_rows=1, updated_rows=1, archived_rows=0, schema_updated=False)
        )
    )
    return uc


@pytest.fixture
def app_with_mock(mock_use_cases: AsyncMock):
    """Crea la app FastAPI con el use case mockeado via dependency_overrides."""
    from main import create_application
    app = create_application()
    app.dependency_overrides[get_deal_sync_use_cases] = lambda: mock_use_cases
    yield app
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_sync_endpoint_returns_summary(app_with_mock, mock_use_cases: AsyncMock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/v1/sync/hubspot-notion", params={"dry_run": "true"})

    assert response.status_code == 200
    data = response.json()
    assert data["success"] is True
    assert data["created_rows"] == 1
    assert data["updated_rows"] == 1
    mock_use_cases.run_sync.assert_awaited_once_with(dry_run=True)


@pytest.mark.asyncio
async def test_sync_endpoint_maps_remote_failure(app_with_mock, mock_use_cases: AsyncMock) -> None:
    mock_use_cases.run_sync.side_effect = NotionApiError("Notion request falló 400", status=400)

    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.post("/api/v1/sync/hubspot-notion")

    assert response.status_code == 502
    body = response.json()
    assert body["error"] == "NOTION_API_ERROR"
    assert body["details"] == {"service": "notion", "status": 400}


@pytest.mark.asyncio
async def test_health_check(app_with_mock) -> None:
    transport = ASGITransport(app=app_with_mock)
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        response = await client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_dto_message_when_nothing_changed() -> None:
    dto = SyncResultDTO.from_result(
        SyncResult(created_rows=0, updated_rows=0, archived_rows=0, schema_updated=False)
    )
    assert dto.message == "Sin deals para sincronizar"
