"""
Casos de uso de la aplicacion.
"""
from sponsor_register.application.use_cases.register_use_cases import RegisterUseCases
from sponsor_register.application.use_cases.sync_use_cases import SyncUseCases

__all__ = ["RegisterUseCases", "SyncUseCases"]
