"""
Cliente mínimo de la API REST de Notion (databases + pages).

Requisitos cubiertos:
- httpx (async)
- paginación por `start_cursor` / `has_more`
- archivado de páginas vía PATCH {"archived": true}
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional, Sequence

import httpx
from loguru import logger

from app.shared.exceptions.integration import RemoteCallException

from .types import ColumnDescriptor, DestinationRow

NOTION_VERSION = "2022-06-28"


@dataclass(frozen=True)
class NotionCredentials:
    token: str


class NotionApiError(RemoteCallException):
    """Error de integración con Notion."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message, service="notion", status=status, error_code="NOTION_API_ERROR")


class NotionClient:
    """
    Cliente HTTP de Notion. Implementa el DestinationStore del sync.

    Cada método es una sola llamada (o una secuencia paginada) y no
    comparte estado mutable, así el BatchWriter puede invocarlo en paralelo.
    """

    def __init__(
        self,
        credentials: NotionCredentials,
        *,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = "https://api.notion.com/v1",
        timeout_s: float = 30.0,
        page_size: int = 100,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._page_size = page_size
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def query_rows(self, container_id: str) -> list[DestinationRow]:
        """Todas las páginas de la base (Notion ya excluye las archivadas)."""
        rows: list[DestinationRow] = []
        cursor: Optional[str] = None

        while True:
            body: dict[str, Any] = {"page_size": self._page_size}
            if cursor:
                body["start_cursor"] = cursor

            payload = await self._request_json("POST", f"/databases/{container_id}/query", json=body)
            for raw in payload.get("results") or []:
                rows.append(
                    DestinationRow(
                        row_id=str(raw.get("id")),
                        properties=raw.get("properties") or {},
                        archived=bool(raw.get("archived", False)),
                        object_kind=str(raw.get("object")),
                    )
                )

            cursor = payload.get("next_cursor")
            if not payload.get("has_more") or not cursor:
                break

        logger.info(f"Notion: {len(rows)} fila(s) en la base {container_id}")
        return rows

    async def get_schema(self, container_id: str) -> Sequence[ColumnDescriptor]:
        payload = await self._request_json("GET", f"/databases/{container_id}")
        return [
            ColumnDescriptor(name=name, type=str(prop.get("type")), id=prop.get("id"))
            for name, prop in (payload.get("properties") or {}).items()
        ]

    async def update_schema(
        self, container_id: str, properties: dict[str, Optional[dict[str, Any]]]
    ) -> None:
        await self._request_json("PATCH", f"/databases/{container_id}", json={"properties": properties})

    async def create_row(self, container_id: str, properties: dict[str, Any]) -> str:
        payload = await self._request_json(
            "POST",
            "/pages",
            json={"parent": {"database_id": container_id}, "properties": properties},
        )
        return str(payload.get("id"))

    async def update_row(self, row_id: str, properties: dict[str, Any]) -> None:
        await self._request_json("PATCH", f"/pages/{row_id}", json={"properties": properties})

    async def archive_row(self, row_id: str) -> None:
        await self._request_json("PATCH", f"/pages/{row_id}", json={"archived": True})

    async def _request_json(self, method: str, path: str, **kwargs: Any) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._creds.token}",
            "Notion-Version": NOTION_VERSION,
            "Content-Type": "application/json",
        }
        try:
            resp = await self._client.request(method, f"{self._base_url}{path}", headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise NotionApiError(f"Notion request falló ({method} {path}): {e}") from e

        if not resp.is_success:
            raise NotionApiError(
                f"Notion request falló {resp.status_code} ({method} {path}): {resp.text}",
                status=resp.status_code,
            )
        return resp.json()
