"""
Contratos de los stores externos que consume el sync.

Este contrato existe para:
- Que el algoritmo de reconciliación no dependa de httpx ni de los formatos REST.
- Facilitar tests unitarios con fakes en memoria.
"""

from __future__ import annotations

from typing import Any, Optional, Protocol, Sequence

from app.infrastructure.external.deal_sync.types import (
    ColumnDescriptor,
    DestinationRow,
    SourceRecord,
)


class SourceStore(Protocol):
    """CRM de origen (HubSpot)."""

    async def list_all_records(self) -> list[SourceRecord]:
        """Lista completa de deals; la paginación se resuelve adentro."""
        ...


class DestinationStore(Protocol):
    """
    Store de destino (base de Notion).

    Implementaciones:
    - NotionClient (REST).
    - Fake en memoria para tests.
    """

    async def query_rows(self, container_id: str) -> list[DestinationRow]:
        ...

    async def get_schema(self, container_id: str) -> Sequence[ColumnDescriptor]:
        ...

    async def update_schema(self, container_id: str, properties: dict[str, Optional[dict[str, Any]]]) -> None:
        ...

    async def create_row(self, container_id: str, properties: dict[str, Any]) -> str:
        """Crea una fila y retorna su id."""
        ...

    async def update_row(self, row_id: str, properties: dict[str, Any]) -> None:
        ...

    async def archive_row(self, row_id: str) -> None:
        ...
