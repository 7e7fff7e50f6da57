"""
Matching de filas existentes de Notion contra deals de HubSpot.

Recorre las filas una vez y construye el mapa deal id -> page id a partir de
la columna de referencia. Las filas sin referencia utilizable se archivan
durante el recorrido (no al final).
"""

from __future__ import annotations

from typing import Iterable

from loguru import logger

from app.application.interfaces.record_stores import DestinationStore
from app.shared.exceptions.domain import (
    InvalidIdentifierException,
    NamespaceMismatchException,
    UnexpectedRowKindException,
)

from . import identifier_codec
from .notion_properties import read_url_property
from .types import DestinationRow, DuplicateMapping, MatchResult

ROW_KIND = "page"


class Matcher:
    def __init__(
        self,
        store: DestinationStore,
        *,
        namespace: str,
        ref_column: str,
        strict_identifier_validation: bool = False,
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._namespace = namespace
        self._ref_column = ref_column
        self._strict = strict_identifier_validation
        self._dry_run = dry_run

    async def match(self, rows: Iterable[DestinationRow]) -> MatchResult:
        """
        Construye el IdentifierMap.

        - Fila que no es "page": UnexpectedRowKindException (fatal).
        - Sin referencia / no url / URL inválida: se archiva y se omite.
        - Referencia que no decodifica: igual que sin referencia, salvo en
          modo estricto, donde el error se propaga.
        - Deal repetido: gana la primera fila; la otra no se toca y se
          reporta como duplicada.
        """
        result = MatchResult()

        for row in rows:
            if row.object_kind != ROW_KIND:
                raise UnexpectedRowKindException(row.row_id, row.object_kind)

            ref = read_url_property(row.properties.get(self._ref_column))
            if ref is None:
                logger.debug(f"Fila {row.row_id} sin referencia válida a HubSpot")
                await self._archive(row, result)
                continue

            try:
                source_id = identifier_codec.decode(self._namespace, ref)
            except (InvalidIdentifierException, NamespaceMismatchException) as e:
                if self._strict:
                    raise
                logger.warning(f"Fila {row.row_id}: referencia no decodificable ({e.message})")
                await self._archive(row, result)
                continue

            kept = result.identifier_map.get(source_id)
            if kept is not None:
                logger.warning(
                    f"Deal {source_id} referenciado por dos filas: se mantiene {kept}, "
                    f"se ignora {row.row_id}"
                )
                result.duplicates.append(
                    DuplicateMapping(source_id=source_id, kept_row_id=kept, shadowed_row_id=row.row_id)
                )
                continue

            result.identifier_map[source_id] = row.row_id

        logger.info(
            f"Matching completado: mapeadas={len(result.identifier_map)}, "
            f"archivadas={len(result.archived_row_ids)}, duplicadas={len(result.duplicates)}"
        )
        return result

    async def _archive(self, row: DestinationRow, result: MatchResult) -> None:
        if row.archived:
            return
        if not self._dry_run:
            await self._store.archive_row(row.row_id)
        result.archived_row_ids.append(row.row_id)
