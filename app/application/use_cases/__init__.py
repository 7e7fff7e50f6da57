"""
Casos de uso de la aplicacion.
"""
from .deal_sync_use_cases import DealSyncUseCases

__all__ = ["DealSyncUseCases"]
