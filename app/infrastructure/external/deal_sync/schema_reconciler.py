"""
Alineación del esquema de la base de Notion con las propiedades de los deals.

Reglas:
- Columnas obligatorias: título (tipo title) y referencia (tipo url).
- Cada propiedad de deal tiene una columna rich_text del mismo nombre.
- Columnas que ya no existen en HubSpot se eliminan de Notion (nunca una
  columna title).
- Solo se llama a Notion si hay drift; una segunda corrida sin cambios no
  genera llamadas.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Iterable, Optional, Sequence

from loguru import logger

from app.application.interfaces.record_stores import DestinationStore

from .types import ColumnDescriptor, SourceRecord


@dataclass(frozen=True)
class SchemaDiff:
    added: tuple[str, ...]
    removed: tuple[str, ...]
    missing_required: tuple[str, ...] = ()
    retyped: tuple[str, ...] = ()
    # Nombre actual de la columna title cuando difiere del configurado
    title_rename_from: Optional[str] = None
    ref_column_exists: bool = True
    # Columna con el nombre del title pero de otro tipo, cuando ya hay otra
    # columna title: se elimina antes del renombre.
    displaced_title: Optional[str] = None

    @property
    def up_to_date(self) -> bool:
        return not (
            self.added
            or self.removed
            or self.missing_required
            or self.retyped
            or self.title_rename_from
            or self.displaced_title
        )


def collect_source_fields(records: Iterable[SourceRecord]) -> list[str]:
    """Unión ordenada (primera aparición) de los nombres de campo de todos los deals."""
    seen: dict[str, None] = {}
    for record in records:
        for name in record.fields:
            seen.setdefault(name, None)
    return list(seen)


def compute_schema_diff(
    columns: Sequence[ColumnDescriptor],
    source_fields: Sequence[str],
    *,
    title_column: str,
    ref_column: str,
    allow_removals: bool = True,
) -> SchemaDiff:
    """
    Compara columnas de Notion vs propiedades de HubSpot (más las obligatorias).

    added   = (source ∪ {title, ref}) - destino
    removed = destino - (source ∪ {title, ref})
    """
    by_name = {c.name: c for c in columns}
    existing_title = next((c.name for c in columns if c.type == "title"), None)

    # Notion admite una sola columna title; si existe con otro nombre se renombra.
    title_rename_from: Optional[str] = None
    displaced_title: Optional[str] = None
    if title_column not in by_name:
        title_rename_from = existing_title
    elif by_name[title_column].type != "title" and existing_title:
        displaced_title = title_column
        title_rename_from = existing_title

    expected: dict[str, None] = dict.fromkeys(source_fields)
    expected.setdefault(title_column, None)
    expected.setdefault(ref_column, None)

    present = set(by_name)
    if title_rename_from:
        present.discard(title_rename_from)
        present.add(title_column)

    added = tuple(name for name in expected if name not in present)
    removed: tuple[str, ...] = ()
    if allow_removals:
        # Una columna title nunca se elimina (Notion lo rechaza).
        removed = tuple(
            c.name
            for c in columns
            if c.name not in expected and c.name != title_rename_from and c.type != "title"
        )

    missing_required = tuple(name for name in (title_column, ref_column) if name not in present)

    retyped = []
    if title_column in by_name and by_name[title_column].type != "title" and not displaced_title:
        retyped.append(title_column)
    if ref_column in by_name and by_name[ref_column].type != "url":
        retyped.append(ref_column)

    return SchemaDiff(
        added=added,
        removed=removed,
        missing_required=missing_required,
        retyped=tuple(retyped),
        title_rename_from=title_rename_from,
        ref_column_exists=ref_column in by_name,
        displaced_title=displaced_title,
    )


def build_schema_update(
    diff: SchemaDiff,
    *,
    title_column: str,
    ref_column: str,
) -> dict[str, Optional[dict[str, Any]]]:
    """
    Payload `properties` principal para PATCH /databases/{id}.

    La columna de referencia nunca se renombra: si existe se envía con su
    mismo nombre y si se crea de cero se omite "name".

    Ninguna entrada reutiliza la clave de la columna title que se renombra;
    las columnas que se llaman como el nombre viejo del title van en un
    PATCH posterior (ver `build_schema_updates`).
    """
    properties: dict[str, Optional[dict[str, Any]]] = {}
    renamed = diff.title_rename_from

    if renamed:
        properties[renamed] = {"name": title_column, "title": {}}
    else:
        properties[title_column] = {"title": {}}

    if ref_column != renamed:
        if diff.ref_column_exists:
            properties[ref_column] = {"name": ref_column, "url": {}}
        else:
            properties[ref_column] = {"url": {}}

    for name in diff.added:
        if name in (title_column, ref_column, renamed):
            continue
        properties[name] = {"rich_text": {}}

    for name in diff.removed:
        properties[name] = None

    return properties


def build_schema_updates(
    diff: SchemaDiff,
    *,
    title_column: str,
    ref_column: str,
) -> list[dict[str, Optional[dict[str, Any]]]]:
    """
    Secuencia de payloads a aplicar en orden.

    1. Si hay una columna no-title con el nombre configurado, se elimina.
    2. Payload principal (renombre del title, referencia, altas y bajas).
    3. Columnas que reutilizan el nombre viejo del title, ya liberado.
    """
    updates: list[dict[str, Optional[dict[str, Any]]]] = []
    if diff.displaced_title:
        updates.append({diff.displaced_title: None})

    updates.append(build_schema_update(diff, title_column=title_column, ref_column=ref_column))

    renamed = diff.title_rename_from
    if renamed and renamed in diff.added:
        updates.append({renamed: {"url": {}} if renamed == ref_column else {"rich_text": {}}})
    return updates


class SchemaReconciler:
    """
    Verifica el esquema una vez por corrida y lo actualiza si hay drift.

    Un fallo en la actualización se propaga: la corrida se aborta.
    """

    def __init__(
        self,
        store: DestinationStore,
        *,
        database_id: str,
        title_column: str,
        ref_column: str,
        dry_run: bool = False,
    ) -> None:
        self._store = store
        self._database_id = database_id
        self._title_column = title_column
        self._ref_column = ref_column
        self._dry_run = dry_run

    async def reconcile(self, source_fields: Sequence[str]) -> SchemaDiff:
        columns = await self._store.get_schema(self._database_id)
        # Sin deals no hay muestra representativa: no se borra nada.
        diff = compute_schema_diff(
            columns,
            source_fields,
            title_column=self._title_column,
            ref_column=self._ref_column,
            allow_removals=bool(source_fields),
        )

        if diff.up_to_date:
            logger.info(f"Esquema de Notion al día ({len(columns)} columnas)")
            return diff

        logger.info(
            f"Drift de esquema detectado: agregar={list(diff.added)}, "
            f"eliminar={list(diff.removed)}, retipar={list(diff.retyped)}, "
            f"renombrar_title={diff.title_rename_from}"
        )
        if self._dry_run:
            logger.info("dry-run: no se actualiza el esquema")
            return diff

        if diff.displaced_title:
            logger.warning(
                f"La columna '{diff.displaced_title}' no es de tipo title; se elimina y "
                f"se renombra '{diff.title_rename_from}' en su lugar"
            )
        updates = build_schema_updates(
            diff, title_column=self._title_column, ref_column=self._ref_column
        )
        for properties in updates:
            await self._store.update_schema(self._database_id, properties)
        logger.info(f"Esquema de Notion actualizado ({len(updates)} PATCH)")
        return diff
