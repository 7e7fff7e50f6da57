"""
Dependencias para inyeccion de casos de uso.
"""
from app.application.use_cases.deal_sync_use_cases import DealSyncUseCases
from app.core.config import settings


def get_deal_sync_use_cases() -> DealSyncUseCases:
    """
    Dependencia para obtener los casos de uso de sincronizacion.
    
    Returns:
        DealSyncUseCases: Instancia con la configuracion global
    """
    return DealSyncUseCases(settings)
