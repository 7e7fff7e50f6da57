"""
Partición de deals en updates (ya tienen fila en Notion) y creates.
"""

from __future__ import annotations

from typing import Iterable

from .types import CreateItem, IdentifierMap, SourceRecord, UpdateItem


def partition(
    records: Iterable[SourceRecord],
    identifier_map: IdentifierMap,
) -> tuple[list[UpdateItem], list[CreateItem]]:
    """
    Recorre los deals una vez y los reparte según el IdentifierMap.

    La partición es estable (mantiene el orden de entrada) y total:
    len(updates) + len(creates) == len(records).
    """
    updates: list[UpdateItem] = []
    creates: list[CreateItem] = []
    for record in records:
        row_id = identifier_map.get(record.id)
        if row_id is not None:
            updates.append(UpdateItem(record=record, row_id=row_id))
        else:
            creates.append(CreateItem(record=record))
    return updates, creates
