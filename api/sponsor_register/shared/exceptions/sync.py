"""
Excepciones del proceso de sincronizacion con el registro de sponsors.
"""
from sponsor_register.shared.exceptions.base import AppException


class FeedFetchError(RuntimeError):
    """Error obteniendo o interpretando el CSV publicado en gov.uk."""


class SyncFatalError(AppException):
    """
    Error que aborta una corrida completa de sincronizacion.

    Se usa para fallos de infraestructura que no pueden aislarse por
    registro: descarga del feed y lectura/escritura del marcador de
    bootstrap.
    """

    def __init__(self, stage: str, message: str):
        super().__init__(
            message=f"{stage}: {message}",
            status_code=502,
            error_code="SYNC_FAILED",
            details={"stage": stage}
        )
        self.stage = stage


class SyncInProgressError(AppException):
    """Excepcion cuando ya hay una sincronizacion en curso."""

    def __init__(self):
        super().__init__(
            message="Ya hay una sincronizacion en curso",
            status_code=409,
            error_code="SYNC_IN_PROGRESS"
        )
