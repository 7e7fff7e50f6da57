"""
Tipos y utilidades puras para el pipeline HubSpot -> Notion.

Se mantienen libres de I/O para poder testearlos fácilmente.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Optional

# source deal id -> Notion page id
IdentifierMap = dict[str, str]


@dataclass(frozen=True)
class SourceRecord:
    """Deal de HubSpot mínimo para sync (snapshot inmutable por corrida)."""

    id: str
    fields: dict[str, Any]


@dataclass(frozen=True)
class DestinationRow:
    """
    Fila (página) de la base de Notion.

    - object_kind: el campo "object" de Notion; debe ser "page"
    - properties: objetos de propiedad crudos tal como los devuelve Notion
    """

    row_id: str
    properties: dict[str, Any]
    archived: bool = False
    object_kind: str = "page"


@dataclass(frozen=True)
class ColumnDescriptor:
    """Columna (propiedad) de la base de Notion."""

    name: str
    type: str
    id: Optional[str] = None


@dataclass(frozen=True)
class UpdateItem:
    record: SourceRecord
    row_id: str


@dataclass(frozen=True)
class CreateItem:
    record: SourceRecord


@dataclass(frozen=True)
class DuplicateMapping:
    """Dos filas de Notion que decodifican al mismo deal."""

    source_id: str
    kept_row_id: str
    shadowed_row_id: str


@dataclass
class MatchResult:
    identifier_map: IdentifierMap = field(default_factory=dict)
    archived_row_ids: list[str] = field(default_factory=list)
    duplicates: list[DuplicateMapping] = field(default_factory=list)


@dataclass(frozen=True)
class SyncResult:
    created_rows: int
    updated_rows: int
    archived_rows: int
    schema_updated: bool
    duplicate_refs: int = 0
    dry_run: bool = False
