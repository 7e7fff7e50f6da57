"""
Endpoints para sincronizacion de datos externos.
Permite disparar el sync HubSpot -> Notion desde la UI.
"""
from fastapi import APIRouter, Depends, Query, status

from app.api.v1.dependencies.use_case_deps import get_deal_sync_use_cases
from app.application.dto.sync_dto import SyncResultDTO
from app.application.use_cases.deal_sync_use_cases import DealSyncUseCases


router = APIRouter(prefix="/sync", tags=["Sync"])


@router.post(
    "/hubspot-notion",
    response_model=SyncResultDTO,
    status_code=status.HTTP_200_OK,
    summary="Sincronizar deals de HubSpot con Notion"
)
async def sync_hubspot_notion(
    dry_run: bool = Query(
        default=False,
        description="Si True, calcula los cambios sin escribir en Notion."
    ),
    use_cases: DealSyncUseCases = Depends(get_deal_sync_use_cases),
) -> SyncResultDTO:
    """
    Ejecuta una corrida completa del sync.

    Los errores de configuracion, de identificadores o de llamadas remotas se
    propagan como AppException y se responden con su codigo de error.
    """
    return await use_cases.run_sync(dry_run=dry_run)
