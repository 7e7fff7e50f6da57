"""
DTOs para la sincronizacion HubSpot -> Notion.
"""
from pydantic import BaseModel, Field

from app.infrastructure.external.deal_sync.types import SyncResult


class SyncResultDTO(BaseModel):
    """Resultado de una corrida de sincronizacion."""

    success: bool = Field(..., description="True si la corrida termino sin errores")
    created_rows: int = Field(0, description="Filas creadas en Notion")
    updated_rows: int = Field(0, description="Filas actualizadas en Notion")
    archived_rows: int = Field(0, description="Filas archivadas por referencia invalida")
    schema_updated: bool = Field(False, description="Si se modifico el esquema de la base")
    duplicate_refs: int = Field(0, description="Filas ignoradas por referenciar un deal repetido")
    dry_run: bool = Field(False, description="Si la corrida fue solo de simulacion")
    message: str = Field("", description="Resumen legible")

    @classmethod
    def from_result(cls, result: SyncResult) -> "SyncResultDTO":
        changes = result.created_rows + result.updated_rows + result.archived_rows
        prefix = "Simulacion" if result.dry_run else "Sincronizacion"
        message = (
            f"{prefix} completada: {result.created_rows} creada(s), "
            f"{result.updated_rows} actualizada(s), {result.archived_rows} archivada(s)"
            if changes > 0
            else "Sin deals para sincronizar"
        )
        return cls(
            success=True,
            created_rows=result.created_rows,
            updated_rows=result.updated_rows,
            archived_rows=result.archived_rows,
            schema_updated=result.schema_updated,
            duplicate_refs=result.duplicate_refs,
            dry_run=result.dry_run,
            message=message,
        )
