"""
Casos de uso de lectura del registro.
"""
from __future__ import annotations

from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.application.dto.register_dto import (
    LicenceDTO,
    LicenceHistoryDTO,
    OrganisationDTO,
    RegisterPageDTO,
)
from sponsor_register.core.config import settings
from sponsor_register.infrastructure.repositories.register_reader import RegisterReader
from sponsor_register.shared.exceptions.domain import EntityNotFoundException, ValidationException

MAX_POSITION = 1_000_000_000


class RegisterUseCases:
    """Consulta paginada del estado actual y del historial de licencias."""

    def __init__(self, db: AsyncSession):
        self.db = db
        self.reader = RegisterReader(db)

    @staticmethod
    def validate_page_request(from_position: int, to_position: int, search: str) -> None:
        """
        Valida los parametros de paginacion y busqueda.

        Raises:
            ValidationException: si algun parametro esta fuera de rango
        """
        if not 1 <= from_position <= MAX_POSITION:
            raise ValidationException(
                f"'from' debe estar entre 1 y {MAX_POSITION}", field="from"
            )
        if not 1 <= to_position <= MAX_POSITION:
            raise ValidationException(
                f"'to' debe estar entre 1 y {MAX_POSITION}", field="to"
            )
        if to_position < from_position:
            raise ValidationException("'to' debe ser mayor o igual que 'from'", field="to")
        if to_position - from_position + 1 > settings.MAX_PAGE_SIZE:
            raise ValidationException(
                f"El tamaño de pagina no puede superar {settings.MAX_PAGE_SIZE}", field="to"
            )
        if len(search) > settings.MAX_SEARCH_LENGTH:
            raise ValidationException(
                f"'search' no puede superar {settings.MAX_SEARCH_LENGTH} caracteres", field="search"
            )

    async def get_page(self, from_position: int, to_position: int, search: str = "") -> RegisterPageDTO:
        """Obtiene una pagina de organizaciones activas con sus licencias activas."""
        search = search.strip()
        self.validate_page_request(from_position, to_position, search)

        page = await self.reader.get_page(from_position, to_position, search)
        return RegisterPageDTO(
            initial_run_time=page.initial_run_time,
            total_organisations=page.total_organisations,
            from_position=page.from_position,
            to_position=page.to_position,
            organisations=[OrganisationDTO.model_validate(o) for o in page.organisations],
            licences=[LicenceDTO.model_validate(lic) for lic in page.licences],
        )

    async def get_licence_history(self, organisation_id: int) -> LicenceHistoryDTO:
        """
        Obtiene una organizacion y todas las versiones de sus licencias.

        Raises:
            EntityNotFoundException: si la organizacion no existe
        """
        organisation = await self.reader.get_organisation(organisation_id)
        if organisation is None:
            raise EntityNotFoundException("Organisation", organisation_id)

        licences = await self.reader.get_licence_history(organisation_id)
        return LicenceHistoryDTO(
            organisation=OrganisationDTO.model_validate(organisation),
            licences=[LicenceDTO.model_validate(lic) for lic in licences],
        )
