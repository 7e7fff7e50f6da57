"""
Configuración de fixtures para pytest.

Fakes en memoria de HubSpot y Notion para testear el pipeline sin red.
"""
from __future__ import annotations

from typing import Any, Optional

import pytest

from app.infrastructure.external.deal_sync import identifier_codec
from app.infrastructure.external.deal_sync.types import (
    ColumnDescriptor,
    DestinationRow,
    SourceRecord,
)


PORTAL_ID = "42"
TITLE_COLUMN = "Name"
REF_COLUMN = "HubSpot URL"


def notion_row(
    row_id: str,
    ref: Optional[str] = None,
    *,
    ref_type: str = "url",
    kind: str = "page",
    archived: bool = False,
    with_ref: bool = True,
) -> DestinationRow:
    """Fila de Notion con (o sin) la columna de referencia."""
    properties: dict[str, Any] = {}
    if with_ref:
        properties[REF_COLUMN] = {"id": "ref", "type": ref_type, ref_type: ref}
    return DestinationRow(row_id=row_id, properties=properties, archived=archived, object_kind=kind)


def row_for_deal(row_id: str, deal_id: str, portal_id: str = PORTAL_ID) -> DestinationRow:
    return notion_row(row_id, identifier_codec.encode(portal_id, deal_id))


class FakeSource:
    def __init__(self, records: list[SourceRecord]) -> None:
        self.records = records

    async def list_all_records(self) -> list[SourceRecord]:
        return list(self.records)


class FakeNotionStore:
    """
    DestinationStore en memoria.

    `calls` registra cada llamada en orden; `update_schema` aplica los cambios
    a `columns` con la misma semántica que Notion (None borra, "name" renombra).
    """

    def __init__(
        self,
        columns: Optional[list[ColumnDescriptor]] = None,
        rows: Optional[list[DestinationRow]] = None,
    ) -> None:
        self.columns: dict[str, ColumnDescriptor] = {c.name: c for c in (columns or [])}
        self.rows = list(rows or [])
        self.calls: list[tuple[str, Any]] = []
        self._next_id = 0

    def calls_named(self, name: str) -> list[Any]:
        return [args for call, args in self.calls if call == name]

    async def query_rows(self, container_id: str) -> list[DestinationRow]:
        self.calls.append(("query_rows", container_id))
        return list(self.rows)

    async def get_schema(self, container_id: str) -> list[ColumnDescriptor]:
        self.calls.append(("get_schema", container_id))
        return list(self.columns.values())

    async def update_schema(self, container_id: str, properties: dict[str, Any]) -> None:
        self.calls.append(("update_schema", properties))
        for name, spec in properties.items():
            if spec is None:
                self.columns.pop(name, None)
                continue
            new_name = spec.get("name", name)
            col_type = next(key for key in spec if key != "name")
            if new_name != name:
                self.columns.pop(name, None)
            self.columns[new_name] = ColumnDescriptor(name=new_name, type=col_type)

    async def create_row(self, container_id: str, properties: dict[str, Any]) -> str:
        self._next_id += 1
        self.calls.append(("create_row", properties))
        return f"new-{self._next_id}"

    async def update_row(self, row_id: str, properties: dict[str, Any]) -> None:
        self.calls.append(("update_row", (row_id, properties)))

    async def archive_row(self, row_id: str) -> None:
        self.calls.append(("archive_row", row_id))


def synced_columns(*fields: str) -> list[ColumnDescriptor]:
    """Esquema ya alineado: title + referencia + una columna rich_text por campo."""
    return [
        ColumnDescriptor(name=TITLE_COLUMN, type="title"),
        ColumnDescriptor(name=REF_COLUMN, type="url"),
        *(ColumnDescriptor(name=f, type="rich_text") for f in fields),
    ]


@pytest.fixture
def fake_store() -> FakeNotionStore:
    return FakeNotionStore(columns=synced_columns("dealname"))
