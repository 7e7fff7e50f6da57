"""
Servicio de sincronización HubSpot -> Notion.

Diseño (resumen):
- Lista todos los deals de HubSpot (full scan, sin cursor)
- Alinea el esquema de la base de Notion con las propiedades de los deals
- Lee las filas de Notion y construye el mapa deal id -> page id
  (archivando filas sin referencia válida)
- Particiona los deals en updates / creates
- Escribe ambas particiones en lotes con concurrencia acotada

Estrategia de errores:
- Cualquier error se propaga y aborta el resto de la corrida.
- No hay reintentos ni checkpoint: los lotes ya escritos quedan aplicados y
  la próxima corrida completa lo que falte.
"""

from __future__ import annotations

from typing import Optional

from loguru import logger

from app.application.interfaces.record_stores import DestinationStore, SourceStore
from app.core.config import Settings

from .batch_writer import BatchWriter
from .hubspot_client import HubspotClient, HubspotCredentials
from .matcher import Matcher
from .notion_client import NotionClient, NotionCredentials
from .partitioner import partition
from .schema_reconciler import SchemaReconciler, collect_source_fields
from .sync_config import DealSyncConfig
from .types import SyncResult


class HubspotToNotionSync:
    """
    Orquestador del pipeline para una base de Notion.
    """

    def __init__(
        self,
        *,
        source: SourceStore,
        destination: DestinationStore,
        config: DealSyncConfig,
    ) -> None:
        self._source = source
        self._destination = destination
        self._config = config

    async def run_once(self, *, dry_run: bool = False) -> SyncResult:
        """
        Ejecuta una corrida completa.

        Con dry_run=True no se escribe nada en Notion (ni esquema, ni
        archivado, ni filas); solo se reporta lo que se haría.
        """
        cfg = self._config
        logger.info(
            f"Sync HubSpot (portal {cfg.portal_id}) -> Notion (base {cfg.database_id})"
            + (" [dry-run]" if dry_run else "")
        )

        records = await self._source.list_all_records()
        source_fields = collect_source_fields(records)

        logger.info(f"Verificando esquema: {len(source_fields)} propiedad(es) de deal")
        schema = SchemaReconciler(
            self._destination,
            database_id=cfg.database_id,
            title_column=cfg.title_column,
            ref_column=cfg.ref_column,
            dry_run=dry_run,
        )
        diff = await schema.reconcile(source_fields)

        logger.info("Matching de filas existentes en Notion...")
        rows = await self._destination.query_rows(cfg.database_id)
        matcher = Matcher(
            self._destination,
            namespace=cfg.portal_id,
            ref_column=cfg.ref_column,
            strict_identifier_validation=cfg.strict_identifier_validation,
            dry_run=dry_run,
        )
        match = await matcher.match(rows)

        updates, creates = partition(records, match.identifier_map)
        logger.info(f"Partición: updates={len(updates)}, creates={len(creates)}")

        updated = created = 0
        if dry_run:
            logger.info("dry-run: no se escriben filas")
        else:
            writer = BatchWriter(
                self._destination,
                database_id=cfg.database_id,
                namespace=cfg.portal_id,
                title_field=cfg.title_field,
                title_column=cfg.title_column,
                ref_column=cfg.ref_column,
                projected_fields=[
                    name for name in source_fields if name not in (cfg.title_column, cfg.ref_column)
                ],
                batch_size=cfg.batch_size,
            )
            updated = await writer.write_updates(updates)
            created = await writer.write_creates(creates)

        result = SyncResult(
            created_rows=created if not dry_run else len(creates),
            updated_rows=updated if not dry_run else len(updates),
            archived_rows=len(match.archived_row_ids),
            schema_updated=not diff.up_to_date and not dry_run,
            duplicate_refs=len(match.duplicates),
            dry_run=dry_run,
        )
        logger.info(
            f"Sync completado. creadas={result.created_rows}, actualizadas={result.updated_rows}, "
            f"archivadas={result.archived_rows}, esquema_actualizado={result.schema_updated}"
        )
        return result


def build_from_settings(
    settings: Settings,
    *,
    config: Optional[DealSyncConfig] = None,
) -> tuple[HubspotToNotionSync, HubspotClient, NotionClient]:
    """
    Constructor "oficial" del pipeline a partir de Settings.

    El caller es responsable de cerrar los clientes (aclose) al terminar.
    """
    config = config or DealSyncConfig.from_settings(settings)

    hubspot = HubspotClient(
        HubspotCredentials(access_token=config.hubspot_token),
        base_url=config.hubspot_base_url,
        timeout_s=config.http_timeout_s,
        properties=config.deal_properties,
    )
    notion = NotionClient(
        NotionCredentials(token=config.notion_token),
        base_url=config.notion_base_url,
        timeout_s=config.http_timeout_s,
    )
    service = HubspotToNotionSync(source=hubspot, destination=notion, config=config)
    return service, hubspot, notion


async def run_sync_from_settings(settings: Settings, *, dry_run: bool = False) -> SyncResult:
    """Construye el pipeline, ejecuta una corrida y cierra los clientes HTTP."""
    service, hubspot, notion = build_from_settings(settings)
    try:
        return await service.run_once(dry_run=dry_run)
    finally:
        await hubspot.aclose()
        await notion.aclose()
