"""
Lectura paginada del estado actual del registro.

Solo lee filas activas (deleted_at / valid_to NULL). Todas las consultas
de una pagina se ejecutan en la misma transaccion de la sesion, de modo que
el conteo, las organizaciones y sus licencias son consistentes entre si.
"""
from dataclasses import dataclass, field
from typing import List, Optional
from sqlalchemy import select, func, or_
from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.domain.entities.licence import Licence
from sponsor_register.domain.entities.organisation import Organisation
from sponsor_register.infrastructure.database.models import OrganisationModel
from sponsor_register.infrastructure.repositories.licence_repository_impl import LicenceRepositoryImpl
from sponsor_register.infrastructure.repositories.organisation_repository_impl import OrganisationRepositoryImpl
from sponsor_register.infrastructure.repositories.run_state_repository_impl import RunStateRepositoryImpl


def escape_like(term: str) -> str:
    """Escapa los caracteres especiales de LIKE/ILIKE (\\, %, _)."""
    return term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")


@dataclass
class RegisterPage:
    """Vista paginada del estado actual."""

    initial_run_time: Optional[str]
    total_organisations: int
    from_position: int
    to_position: int
    organisations: List[Organisation] = field(default_factory=list)
    licences: List[Licence] = field(default_factory=list)


class RegisterReader:
    """Acceso de solo lectura al estado actual del registro."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self._licences = LicenceRepositoryImpl(session)
        self._run_state = RunStateRepositoryImpl(session)

    def _search_filter(self, search: str):
        pattern = f"%{escape_like(search)}%"
        return or_(
            OrganisationModel.name.ilike(pattern, escape="\\"),
            OrganisationModel.town_city.ilike(pattern, escape="\\"),
        )

    async def count_active(self, search: str = "") -> int:
        """Cuenta las organizaciones activas, opcionalmente filtradas."""
        query = select(func.count()).select_from(OrganisationModel).where(
            OrganisationModel.deleted_at.is_(None)
        )
        if search:
            query = query.where(self._search_filter(search))
        result = await self.session.execute(query)
        return int(result.scalar_one())

    async def list_active(self, from_position: int, to_position: int, search: str = "") -> List[Organisation]:
        """
        Lista organizaciones activas ordenadas por nombre.

        Args:
            from_position: Posicion inicial (1-based, inclusiva)
            to_position: Posicion final (inclusiva)
            search: Filtro por nombre o ciudad (sin distinguir mayusculas)
        """
        query = select(OrganisationModel).where(OrganisationModel.deleted_at.is_(None))
        if search:
            query = query.where(self._search_filter(search))
        query = (
            query.order_by(OrganisationModel.name, OrganisationModel.id)
            .offset(from_position - 1)
            .limit(to_position - from_position + 1)
        )

        result = await self.session.execute(query)
        return [OrganisationRepositoryImpl._to_entity(row) for row in result.scalars().all()]

    async def get_page(self, from_position: int, to_position: int, search: str = "") -> RegisterPage:
        """Construye la pagina completa: marcador, total, organizaciones y licencias."""
        initial_run_time = await self._run_state.get_bootstrap_marker()
        total = await self.count_active(search)
        organisations = await self.list_active(from_position, to_position, search)
        licences = await self._licences.list_active_for_organisations([o.id for o in organisations])

        return RegisterPage(
            initial_run_time=initial_run_time,
            total_organisations=total,
            from_position=from_position,
            to_position=to_position,
            organisations=organisations,
            licences=licences,
        )

    async def get_organisation(self, organisation_id: int) -> Optional[Organisation]:
        """Obtiene una organizacion por ID, este activa o cerrada."""
        db_org = await self.session.get(OrganisationModel, organisation_id)
        if db_org is None:
            return None
        return OrganisationRepositoryImpl._to_entity(db_org)

    async def get_licence_history(self, organisation_id: int) -> List[Licence]:
        """Obtiene todas las versiones de licencias de una organizacion."""
        return await self._licences.list_history_for_organisation(organisation_id)
