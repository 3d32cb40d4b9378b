"""
Data Transfer Objects (DTOs) de la aplicacion.
"""
from sponsor_register.application.dto.register_dto import (
    LicenceDTO,
    LicenceHistoryDTO,
    OrganisationDTO,
    RegisterPageDTO,
)
from sponsor_register.application.dto.sync_dto import SyncErrorDTO, SyncResultDTO, SyncRunDTO

__all__ = [
    "LicenceDTO",
    "LicenceHistoryDTO",
    "OrganisationDTO",
    "RegisterPageDTO",
    "SyncErrorDTO",
    "SyncResultDTO",
    "SyncRunDTO",
]
