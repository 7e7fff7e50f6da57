"""
Excepciones relacionadas con la lógica de dominio del sync HubSpot -> Notion.
"""
from app.shared.exceptions.base import AppException


class DomainException(AppException):
    """Excepción base para errores de dominio."""
    
    def __init__(self, message: str, error_code: str = "DOMAIN_ERROR", details=None):
        super().__init__(
            message=message,
            status_code=400,
            error_code=error_code,
            details=details
        )


class InvalidIdentifierException(DomainException):
    """Un identificador (deal id o portal id) o una URL de referencia no tiene el formato esperado."""
    
    def __init__(self, value: str, reason: str):
        super().__init__(
            message=f"Identificador inválido '{value}': {reason}",
            error_code="INVALID_IDENTIFIER",
            details={"value": value, "reason": reason}
        )


class NamespaceMismatchException(DomainException):
    """La URL de referencia pertenece a otro portal de HubSpot."""
    
    def __init__(self, expected: str, found: str):
        super().__init__(
            message=f"El portal de la referencia ({found}) no coincide con el configurado ({expected})",
            error_code="NAMESPACE_MISMATCH",
            details={"expected": expected, "found": found}
        )


class UnexpectedRowKindException(DomainException):
    """
    El listado de Notion devolvió una entrada que no es una página.

    Indica que la llamada de listado está mal formada (no es un dato
    corregible por el usuario), por eso se reporta como error interno.
    """
    
    def __init__(self, row_id: str, kind: str):
        super().__init__(
            message=f"Se esperaba una fila de tipo 'page' y se recibió '{kind}' (id={row_id})",
            error_code="UNEXPECTED_ROW_KIND",
            details={"row_id": row_id, "kind": kind}
        )
        self.status_code = 500
