"""
Escritura en lotes hacia Notion con concurrencia acotada.

Cada partición se divide en lotes consecutivos de tamaño fijo. Dentro de un
lote las escrituras se lanzan en paralelo; el siguiente lote no arranca hasta
que todas las del anterior terminan. Así nunca hay más de `batch_size`
requests en vuelo contra Notion.
"""

from __future__ import annotations

import asyncio
from typing import Any, Awaitable, Callable, Iterator, Sequence, TypeVar

from loguru import logger

from app.application.interfaces.record_stores import DestinationStore

from . import identifier_codec
from .notion_properties import rich_text_value, stringify, title_value, url_value
from .types import CreateItem, SourceRecord, UpdateItem

T = TypeVar("T")

DEFAULT_BATCH_SIZE = 10


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    """Lotes consecutivos de hasta `size` elementos (el último puede ser menor)."""
    if size < 1:
        raise ValueError(f"batch size debe ser >= 1 (recibido {size})")
    for start in range(0, len(items), size):
        yield list(items[start:start + size])


def build_row_properties(
    record: SourceRecord,
    *,
    namespace: str,
    title_field: str,
    title_column: str,
    ref_column: str,
    projected_fields: Sequence[str],
) -> dict[str, Any]:
    """
    Propiedades de Notion para un deal.

    - title: campo "nombre" del deal (dealname por defecto)
    - referencia: URL del deal vía identifier_codec
    - resto: una columna rich_text por propiedad, con el valor como texto
    """
    properties: dict[str, Any] = {
        title_column: title_value(stringify(record.fields.get(title_field))),
        ref_column: url_value(identifier_codec.encode(namespace, record.id)),
    }
    for name in projected_fields:
        if name in (title_column, ref_column):
            continue
        properties[name] = rich_text_value(stringify(record.fields.get(name)))
    return properties


class BatchWriter:
    def __init__(
        self,
        store: DestinationStore,
        *,
        database_id: str,
        namespace: str,
        title_field: str,
        title_column: str,
        ref_column: str,
        projected_fields: Sequence[str],
        batch_size: int = DEFAULT_BATCH_SIZE,
    ) -> None:
        self._store = store
        self._database_id = database_id
        self._namespace = namespace
        self._title_field = title_field
        self._title_column = title_column
        self._ref_column = ref_column
        self._projected_fields = list(projected_fields)
        self._batch_size = batch_size

    def properties_for(self, record: SourceRecord) -> dict[str, Any]:
        return build_row_properties(
            record,
            namespace=self._namespace,
            title_field=self._title_field,
            title_column=self._title_column,
            ref_column=self._ref_column,
            projected_fields=self._projected_fields,
        )

    async def write_updates(self, updates: Sequence[UpdateItem]) -> int:
        async def _write(item: UpdateItem) -> None:
            await self._store.update_row(item.row_id, self.properties_for(item.record))

        return await self._drain("update", updates, _write)

    async def write_creates(self, creates: Sequence[CreateItem]) -> int:
        async def _write(item: CreateItem) -> None:
            await self._store.create_row(self._database_id, self.properties_for(item.record))

        return await self._drain("create", creates, _write)

    async def _drain(
        self,
        label: str,
        items: Sequence[T],
        write: Callable[[T], Awaitable[None]],
    ) -> int:
        """
        Procesa la partición lote por lote.

        Todas las llamadas de un lote terminan antes de seguir; si alguna
        falló, se relanza el primer error y los lotes restantes no se envían.
        Los lotes ya completados quedan aplicados.
        """
        if not items:
            logger.info(f"[{label}] nada que escribir")
            return 0

        total_chunks = (len(items) + self._batch_size - 1) // self._batch_size
        written = 0
        for index, chunk in enumerate(chunked(items, self._batch_size), start=1):
            results = await asyncio.gather(*(write(item) for item in chunk), return_exceptions=True)
            errors = [r for r in results if isinstance(r, BaseException)]
            if errors:
                logger.error(
                    f"[{label}] lote {index}/{total_chunks}: {len(errors)} escritura(s) fallaron; "
                    f"se abortan los lotes restantes"
                )
                raise errors[0]
            written += len(chunk)
            logger.info(f"[{label}] lote {index}/{total_chunks} ok ({written}/{len(items)})")
        return written
