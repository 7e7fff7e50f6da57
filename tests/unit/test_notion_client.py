from __future__ import annotations

import json

import httpx
import pytest

from app.infrastructure.external.deal_sync.notion_client import (
    NOTION_VERSION,
    NotionApiError,
    NotionClient,
    NotionCredentials,
)


class _Recorder:
    def __init__(self, responses):
        self.requests: list[httpx.Request] = []
        self._responses = list(responses)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._responses.pop(0)

    def body(self, index: int) -> dict:
        return json.loads(self.requests[index].content)


def _client(recorder: _Recorder) -> NotionClient:
    return NotionClient(
        NotionCredentials(token="secret"),
        client=httpx.AsyncClient(transport=httpx.MockTransport(recorder)),
    )


@pytest.mark.asyncio
async def test_query_rows_paginates_with_start_cursor() -> None:
    recorder = _Recorder([
        httpx.Response(200, json={
            "results": [{"object": "page", "id": "p1", "properties": {"Name": {"type": "title"}}}],
            "has_more": True,
            "next_cursor": "c2",
        }),
        httpx.Response(200, json={
            "results": [{"object": "page", "id": "p2", "archived": True, "properties": {}}],
            "has_more": False,
            "next_cursor": None,
        }),
    ])

    rows = await _client(recorder).query_rows("db-1")

    assert [r.row_id for r in rows] == ["p1", "p2"]
    assert rows[1].archived is True
    assert rows[0].object_kind == "page"
    assert recorder.requests[0].url.path == "/v1/databases/db-1/query"
    assert "start_cursor" not in recorder.body(0)
    assert recorder.body(1)["start_cursor"] == "c2"
    assert recorder.requests[0].headers["Notion-Version"] == NOTION_VERSION
    assert recorder.requests[0].headers["Authorization"] == "Bearer secret"


@pytest.mark.asyncio
async def test_get_schema_returns_column_descriptors() -> None:
    recorder = _Recorder([
        httpx.Response(200, json={"properties": {
            "Name": {"id": "title", "type": "title"},
            "HubSpot URL": {"id": "abc", "type": "url"},
        }}),
    ])

    columns = await _client(recorder).get_schema("db-1")

    assert {(c.name, c.type) for c in columns} == {("Name", "title"), ("HubSpot URL", "url")}
    assert recorder.requests[0].method == "GET"


@pytest.mark.asyncio
async def test_mutations_use_expected_endpoints() -> None:
    recorder = _Recorder([
        httpx.Response(200, json={"id": "db-1"}),
        httpx.Response(200, json={"id": "new-page"}),
        httpx.Response(200, json={"id": "p1"}),
        httpx.Response(200, json={"id": "p2"}),
    ])
    client = _client(recorder)

    await client.update_schema("db-1", {"old": None})
    new_id = await client.create_row("db-1", {"Name": {"title": []}})
    await client.update_row("p1", {"Name": {"title": []}})
    await client.archive_row("p2")

    assert new_id == "new-page"
    assert [(r.method, r.url.path) for r in recorder.requests] == [
        ("PATCH", "/v1/databases/db-1"),
        ("POST", "/v1/pages"),
        ("PATCH", "/v1/pages/p1"),
        ("PATCH", "/v1/pages/p2"),
    ]
    assert recorder.body(0) == {"properties": {"old": None}}
    assert recorder.body(1)["parent"] == {"database_id": "db-1"}
    assert recorder.body(3) == {"archived": True}


@pytest.mark.asyncio
async def test_error_status_raises_notion_api_error() -> None:
    recorder = _Recorder([httpx.Response(429, json={"code": "rate_limited"})])

    with pytest.raises(NotionApiError) as exc_info:
        await _client(recorder).archive_row("p1")
    assert exc_info.value.status == 429
    assert exc_info.value.error_code == "NOTION_API_ERROR"
