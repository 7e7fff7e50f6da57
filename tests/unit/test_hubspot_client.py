from __future__ import annotations

import httpx
import pytest

from app.infrastructure.external.deal_sync.hubspot_client import (
    HubspotApiError,
    HubspotClient,
    HubspotCredentials,
)


def _client(handler, **kwargs) -> HubspotClient:
    return HubspotClient(
        HubspotCredentials(access_token="tok"),
        client=httpx.AsyncClient(transport=httpx.MockTransport(handler)),
        **kwargs,
    )


@pytest.mark.asyncio
async def test_list_all_records_follows_pagination() -> None:
    seen_after = []

    def handler(request: httpx.Request) -> httpx.Response:
        assert request.headers["Authorization"] == "Bearer tok"
        assert request.url.path == "/crm/v3/objects/deals"
        after = request.url.params.get("after")
        seen_after.append(after)
        if after is None:
            return httpx.Response(
                200,
                json={
                    "results": [{"id": "1", "properties": {"dealname": "Alpha"}}],
                    "paging": {"next": {"after": "cursor-2"}},
                },
            )
        return httpx.Response(200, json={"results": [{"id": "2", "properties": {"dealname": "Beta"}}]})

    records = await _client(handler).list_all_records()

    assert [r.id for r in records] == ["1", "2"]
    assert records[1].fields == {"dealname": "Beta"}
    assert seen_after == [None, "cursor-2"]


@pytest.mark.asyncio
async def test_requested_properties_are_sent() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        assert request.url.params.get("properties") == "dealname,amount"
        return httpx.Response(200, json={"results": []})

    assert await _client(handler, properties=["dealname", "amount"]).list_all_records() == []


@pytest.mark.asyncio
async def test_error_status_raises_remote_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(401, json={"message": "expired"})

    with pytest.raises(HubspotApiError) as exc_info:
        await _client(handler).list_all_records()
    assert exc_info.value.status == 401
    assert exc_info.value.status_code == 502


@pytest.mark.asyncio
async def test_transport_error_raises_remote_failure() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("sin red", request=request)

    with pytest.raises(HubspotApiError):
        await _client(handler).list_all_records()


@pytest.mark.asyncio
async def test_deal_without_id_is_rejected() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(200, json={"results": [{"properties": {}}]})

    with pytest.raises(HubspotApiError):
        await _client(handler).list_all_records()
