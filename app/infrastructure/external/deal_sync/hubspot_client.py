"""
Cliente mínimo de HubSpot CRM v3 (deals), sin SDKs externos.

Requisitos cubiertos:
- httpx (async)
- paginación por cursor `paging.next.after`
- propiedades configurables
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

import httpx
from loguru import logger

from app.shared.exceptions.integration import RemoteCallException

from .types import SourceRecord


@dataclass(frozen=True)
class HubspotCredentials:
    access_token: str


class HubspotApiError(RemoteCallException):
    """Error de integración con HubSpot."""

    def __init__(self, message: str, status: Optional[int] = None) -> None:
        super().__init__(message, service="hubspot", status=status, error_code="HUBSPOT_API_ERROR")


class HubspotClient:
    """
    Cliente HTTP de HubSpot. Expone el listado completo de deals.

    Importante:
    - No hace cast de tipos: HubSpot devuelve las propiedades como strings
      (o null) y así se proyectan a Notion.
    - No reintenta: cualquier respuesta no-2xx es fatal para la corrida.
    """

    DEALS_PATH = "/crm/v3/objects/deals"

    def __init__(
        self,
        credentials: HubspotCredentials,
        *,
        client: Optional[httpx.AsyncClient] = None,
        base_url: str = "https://api.hubapi.com",
        timeout_s: float = 30.0,
        properties: Optional[list[str]] = None,
        page_size: int = 100,
    ) -> None:
        self._creds = credentials
        self._base_url = base_url.rstrip("/")
        self._properties = properties or []
        self._page_size = page_size
        self._client = client or httpx.AsyncClient(timeout=timeout_s)

    async def aclose(self) -> None:
        await self._client.aclose()

    async def list_all_records(self) -> list[SourceRecord]:
        """Trae todos los deals siguiendo la paginación hasta agotarla."""
        records: list[SourceRecord] = []
        after: Optional[str] = None
        url = f"{self._base_url}{self.DEALS_PATH}"

        while True:
            params: list[tuple[str, Any]] = [("limit", self._page_size), ("archived", "false")]
            if self._properties:
                params.append(("properties", ",".join(self._properties)))
            if after:
                params.append(("after", after))

            payload = await self._request_json("GET", url, params=params)
            for raw in payload.get("results") or []:
                records.append(self._to_record(raw))

            after = ((payload.get("paging") or {}).get("next") or {}).get("after")
            if not after:
                break

        logger.info(f"HubSpot: {len(records)} deal(s) obtenidos")
        return records

    @staticmethod
    def _to_record(raw: dict[str, Any]) -> SourceRecord:
        deal_id = raw.get("id")
        if not deal_id:
            # Caso raro; preferimos fallar temprano y visible.
            raise HubspotApiError("HubSpot devolvió un deal sin 'id'")
        return SourceRecord(id=str(deal_id), fields=dict(raw.get("properties") or {}))

    async def _request_json(self, method: str, url: str, **kwargs: Any) -> dict[str, Any]:
        headers = {
            "Authorization": f"Bearer {self._creds.access_token}",
            "Content-Type": "application/json",
        }
        try:
            resp = await self._client.request(method, url, headers=headers, **kwargs)
        except httpx.HTTPError as e:
            raise HubspotApiError(f"HubSpot request falló: {e}") from e

        if not resp.is_success:
            raise HubspotApiError(
                f"HubSpot request falló {resp.status_code}: {resp.text}", status=resp.status_code
            )
        return resp.json()
