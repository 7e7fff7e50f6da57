"""
Configuración del sync (HubSpot deals -> base de Notion).

Se construye una vez al arrancar y se pasa explícitamente a cada componente;
ningún componente lee variables de entorno por su cuenta.

Este módulo no realiza I/O: solo define configuración.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from app.core.config import Settings
from app.shared.exceptions.base import AppException

from . import identifier_codec


class SyncConfigError(AppException):
    """Error de configuración del pipeline (falta una variable obligatoria, etc.)."""

    def __init__(self, message: str, missing: list[str] | None = None) -> None:
        super().__init__(
            message=message,
            status_code=500,
            error_code="SYNC_CONFIG_ERROR",
            details={"missing": missing or []},
        )


@dataclass(frozen=True)
class DealSyncConfig:
    """
    Config de una corrida HubSpot -> Notion.

    - portal_id: namespace de las URLs de referencia (portal de HubSpot)
    - title_field: propiedad del deal que alimenta la columna title
    - strict_identifier_validation: si True, una referencia que no decodifica
      aborta la corrida en lugar de archivar la fila
    """

    hubspot_token: str
    notion_token: str
    database_id: str
    portal_id: str
    deal_properties: list[str] = field(default_factory=list)
    title_field: str = "dealname"
    title_column: str = "Name"
    ref_column: str = "HubSpot URL"
    batch_size: int = 10
    strict_identifier_validation: bool = False
    http_timeout_s: float = 30.0
    hubspot_base_url: str = "https://api.hubapi.com"
    notion_base_url: str = "https://api.notion.com/v1"

    @classmethod
    def from_settings(cls, settings: Settings) -> "DealSyncConfig":
        """
        Valida y copia los valores necesarios desde Settings.

        Raises:
            SyncConfigError: con la lista completa de variables faltantes.
        """
        required = {
            "HUBSPOT_API_KEY": settings.HUBSPOT_API_KEY,
            "NOTION_TOKEN": settings.NOTION_TOKEN,
            "NOTION_INTCUBE_PROJECT_DB": settings.NOTION_INTCUBE_PROJECT_DB,
            "HUBSPOT_PORTAL_ID": settings.HUBSPOT_PORTAL_ID,
        }
        missing = [name for name, value in required.items() if not (value or "").strip()]
        if missing:
            raise SyncConfigError(
                f"Faltan variables de entorno obligatorias: {', '.join(missing)}",
                missing=missing,
            )

        portal_id = settings.HUBSPOT_PORTAL_ID.strip()
        if not identifier_codec.is_valid_namespace(portal_id):
            raise SyncConfigError(f"HUBSPOT_PORTAL_ID debe ser numérico. Valor actual: {portal_id}")

        return cls(
            hubspot_token=settings.HUBSPOT_API_KEY.strip(),
            notion_token=settings.NOTION_TOKEN.strip(),
            database_id=settings.NOTION_INTCUBE_PROJECT_DB.strip(),
            portal_id=portal_id,
            deal_properties=list(settings.deal_properties),
            title_field=settings.HUBSPOT_TITLE_FIELD,
            title_column=settings.NOTION_TITLE_PROPERTY,
            ref_column=settings.NOTION_EXTERNAL_REF_PROPERTY,
            batch_size=settings.SYNC_BATCH_SIZE,
            strict_identifier_validation=settings.STRICT_IDENTIFIER_VALIDATION,
            http_timeout_s=settings.HTTP_TIMEOUT_SECONDS,
            hubspot_base_url=settings.HUBSPOT_BASE_URL,
            notion_base_url=settings.NOTION_BASE_URL,
        )
