"""
Excepción base de la aplicación.

Cada excepción sabe su status HTTP y su codigo de error; el handler global
de main.py las convierte en {error, message, details}.
"""
from typing import Optional, Dict, Any


class AppException(Exception):
    """
    Excepción base. Las excepciones que deben llegar al cliente HTTP con un
    status distinto de 500 heredan de esta clase.
    """

    def __init__(
        self,
        message: str,
        status_code: int = 500,
        error_code: str = "INTERNAL_ERROR",
        details: Optional[Dict[str, Any]] = None
    ):
        """
        Args:
            message: Mensaje de error descriptivo
            status_code: Código de estado HTTP
            error_code: Código estable para clientes (ej. SYNC_FAILED)
            details: Contexto adicional (etapa, campo, ID...)
        """
        self.message = message
        self.status_code = status_code
        self.error_code = error_code
        self.details = details or {}
        super().__init__(self.message)

    def to_response(self) -> Dict[str, Any]:
        """Cuerpo JSON de la respuesta de error."""
        return {
            "error": self.error_code,
            "message": self.message,
            "details": self.details,
        }
