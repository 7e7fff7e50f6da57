"""
Manejadores de eventos de inicio y cierre de la aplicacion, y configuracion
de logging compartida con el script de sync.
"""
import sys
from typing import Callable
from fastapi import FastAPI
from loguru import logger

from app.core.config import settings


def configure_logging(level: str = "INFO", log_file: str = "") -> None:
    """
    Configura los sinks de loguru: consola + archivo rotativo (opcional).

    Args:
        level: Nivel minimo de log
        log_file: Ruta del archivo de log; vacio = solo consola
    """
    logger.remove()
    logger.add(sys.stderr, level=level)
    if log_file:
        logger.add(
            log_file,
            rotation="10 MB",
            retention="10 days",
            level=level
        )


def startup_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de inicio de la aplicacion.
    
    Args:
        app: Instancia de FastAPI
        
    Returns:
        Callable: Funcion asincrona de inicio
    """
    async def startup() -> None:
        """Inicializa recursos al inicio de la aplicacion."""
        configure_logging(settings.LOG_LEVEL, settings.LOG_FILE)
        logger.info(f"Iniciando {settings.APP_NAME} v{settings.APP_VERSION}")
        logger.info(f"Entorno: {settings.ENVIRONMENT}")
        _validate_config()
        logger.success("Aplicacion iniciada correctamente")
    
    return startup


def _validate_config() -> None:
    """Advierte (sin abortar) si faltan credenciales del sync."""
    required = {
        "HUBSPOT_API_KEY": settings.HUBSPOT_API_KEY,
        "NOTION_TOKEN": settings.NOTION_TOKEN,
        "NOTION_INTCUBE_PROJECT_DB": settings.NOTION_INTCUBE_PROJECT_DB,
        "HUBSPOT_PORTAL_ID": settings.HUBSPOT_PORTAL_ID,
    }
    for name, value in required.items():
        if not value:
            logger.warning(f"CONFIG: {name} no configurada - el sync fallara")


def shutdown_handler(app: FastAPI) -> Callable:
    """
    Manejador de eventos de cierre de la aplicacion.
    
    Args:
        app: Instancia de FastAPI
        
    Returns:
        Callable: Funcion asincrona de cierre
    """
    async def shutdown() -> None:
        """Libera recursos al cerrar la aplicacion."""
        logger.info("Aplicacion cerrada")
    
    return shutdown
