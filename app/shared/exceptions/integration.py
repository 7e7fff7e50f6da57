"""
Excepciones de integración con servicios externos (HubSpot, Notion).
"""
from typing import Optional

from app.shared.exceptions.base import AppException


class RemoteCallException(AppException):
    """Una llamada a un store externo fue rechazada o no pudo completarse."""
    
    def __init__(
        self,
        message: str,
        service: str,
        status: Optional[int] = None,
        error_code: str = "REMOTE_CALL_FAILURE",
    ):
        super().__init__(
            message=message,
            status_code=502,
            error_code=error_code,
            details={"service": service, "status": status}
        )
        self.service = service
        self.status = status
