"""
Configuracion central de la aplicacion.
Gestiona variables de entorno y configuraciones globales.

Las credenciales de HubSpot/Notion se leen aqui, pero los componentes del sync
no dependen de esta instancia global: reciben un DealSyncConfig explicito
(ver app.infrastructure.external.deal_sync.sync_config).
"""
from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field, computed_field


class Settings(BaseSettings):
    """
    Clase de configuracion de la aplicacion.
    Lee variables de entorno (o .env) y proporciona valores por defecto.

    Las variables de credenciales son opcionales a nivel de Settings para que
    la API y los tests puedan arrancar sin ellas; la validacion de obligatorias
    ocurre al construir el sync.
    """

    # Configuracion de la aplicacion
    APP_NAME: str = Field(default="HubSpot -> Notion Deal Sync")
    APP_VERSION: str = Field(default="1.0.0")
    DEBUG: bool = Field(default=False)
    ENVIRONMENT: str = Field(default="production")

    # Configuracion del servidor
    HOST: str = Field(default="0.0.0.0")
    PORT: int = Field(default=8000)

    # HubSpot (origen)
    HUBSPOT_API_KEY: str = Field(default="")
    HUBSPOT_PORTAL_ID: str = Field(default="")
    HUBSPOT_BASE_URL: str = Field(default="https://api.hubapi.com")
    # Lista separada por comas; vacio = propiedades por defecto de HubSpot
    HUBSPOT_DEAL_PROPERTIES: str = Field(default="")
    HUBSPOT_TITLE_FIELD: str = Field(default="dealname")

    # Notion (destino)
    NOTION_TOKEN: str = Field(default="")
    NOTION_INTCUBE_PROJECT_DB: str = Field(default="")
    NOTION_BASE_URL: str = Field(default="https://api.notion.com/v1")
    NOTION_TITLE_PROPERTY: str = Field(default="Name")
    NOTION_EXTERNAL_REF_PROPERTY: str = Field(default="HubSpot URL")

    # Sync
    SYNC_BATCH_SIZE: int = Field(default=10, ge=1)
    STRICT_IDENTIFIER_VALIDATION: bool = Field(default=False)
    HTTP_TIMEOUT_SECONDS: float = Field(default=30.0)

    # Logging
    LOG_LEVEL: str = Field(default="INFO")
    LOG_FILE: str = Field(default="logs/deal_sync.log")

    @computed_field
    @property
    def deal_properties(self) -> List[str]:
        """Propiedades de deal a pedir a HubSpot (lista limpia, sin vacios)."""
        return parse_csv_list(self.HUBSPOT_DEAL_PROPERTIES)

    @computed_field
    @property
    def is_development(self) -> bool:
        """Indica si el entorno es de desarrollo."""
        return self.ENVIRONMENT.lower() == "development"

    class Config:
        """Configuracion de Pydantic."""
        env_file = ".env"
        case_sensitive = True
        extra = "ignore"  # Ignorar campos extra del .env


def parse_csv_list(raw: str) -> List[str]:
    """Parsea "a, b,,c" -> ["a", "b", "c"]."""
    return [item.strip() for item in (raw or "").split(",") if item.strip()]


# Instancia global de configuracion
settings = Settings()
