"""
Casos de uso para la sincronizacion HubSpot -> Notion.
"""
from loguru import logger

from app.application.dto.sync_dto import SyncResultDTO
from app.core.config import Settings
from app.infrastructure.external.deal_sync.sync_service import run_sync_from_settings


class DealSyncUseCases:
    """
    Orquesta una corrida de sync desde la API.

    La corrida completa ocurre dentro del request; para bases grandes se
    recomienda el script de scripts/ ejecutado como job.
    """

    def __init__(self, settings: Settings):
        self.settings = settings

    async def run_sync(self, dry_run: bool = False) -> SyncResultDTO:
        """
        Ejecuta una corrida de sync.

        Args:
            dry_run: Si True, no escribe nada en Notion

        Returns:
            SyncResultDTO: Resumen de la corrida
        """
        sync_type = "dry-run" if dry_run else "real"
        logger.info(f"Iniciando sincronizacion ({sync_type}) HubSpot -> Notion desde API")
        result = await run_sync_from_settings(self.settings, dry_run=dry_run)
        return SyncResultDTO.from_result(result)
