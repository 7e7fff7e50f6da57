"""
Data Transfer Objects (DTOs) para la capa de aplicacion.
"""
from .sync_dto import SyncResultDTO

__all__ = ["SyncResultDTO"]
