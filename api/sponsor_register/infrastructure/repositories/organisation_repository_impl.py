"""
Implementación del repositorio de organizaciones usando SQLAlchemy.

Cada operacion de escritura confirma su propia transaccion: el motor de
sincronizacion no envuelve la corrida en una transaccion unica.
"""
from typing import List, Optional
from sqlalchemy import select, update, or_
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.domain.entities.organisation import Organisation
from sponsor_register.domain.repositories.organisation_repository import IOrganisationRepository
from sponsor_register.infrastructure.database.models import OrganisationModel
from sponsor_register.shared.utils.datetime_utils import DateTimeUtils


def _optional_text_matches(column, value: Optional[str]):
    """Compara una columna opcional tratando "" y NULL como equivalentes."""
    if not value:
        return or_(column.is_(None), column == "")
    return column == value


class OrganisationRepositoryImpl(IOrganisationRepository):
    """Implementación del repositorio de organizaciones con SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        """
        Inicializa el repositorio con una sesión de base de datos.

        Args:
            session: Sesión de SQLAlchemy
        """
        self.session = session

    async def find_active(
        self,
        name: str,
        town_city: Optional[str],
        county: Optional[str]
    ) -> Optional[Organisation]:
        """Busca la version activa por (name, town_city, county)."""
        try:
            result = await self.session.execute(
                select(OrganisationModel)
                .where(OrganisationModel.name == name)
                .where(_optional_text_matches(OrganisationModel.town_city, town_city))
                .where(_optional_text_matches(OrganisationModel.county, county))
                .where(OrganisationModel.deleted_at.is_(None))
                .order_by(OrganisationModel.id)
            )
            db_org = result.scalars().first()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        if db_org is None:
            return None

        return self._to_entity(db_org)

    async def insert(self, organisation: Organisation, bootstrap_mode: bool) -> int:
        """Crea una nueva version activa y retorna su ID."""
        db_org = OrganisationModel(
            name=organisation.name,
            town_city=organisation.town_city,
            county=organisation.county,
            created_at=None if bootstrap_mode else DateTimeUtils.now_utc(),
        )

        try:
            self.session.add(db_org)
            await self.session.flush()
            org_id = db_org.id
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return org_id

    async def close(self, organisation_id: int) -> None:
        """Marca deleted_at en la organizacion si sigue activa."""
        try:
            await self.session.execute(
                update(OrganisationModel)
                .where(OrganisationModel.id == organisation_id)
                .where(OrganisationModel.deleted_at.is_(None))
                .values(deleted_at=DateTimeUtils.now_utc())
            )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def list_active(self) -> List[Organisation]:
        """Lista todas las organizaciones activas ordenadas por nombre."""
        try:
            result = await self.session.execute(
                select(OrganisationModel)
                .where(OrganisationModel.deleted_at.is_(None))
                .order_by(OrganisationModel.name, OrganisationModel.id)
            )
            db_orgs = result.scalars().all()
        except SQLAlchemyError:
            await self.session.rollback()
            raise
        return [self._to_entity(db_org) for db_org in db_orgs]

    @staticmethod
    def _to_entity(db_org: OrganisationModel) -> Organisation:
        """
        Convierte un modelo de base de datos a entidad de dominio.

        Args:
            db_org: Modelo de SQLAlchemy

        Returns:
            Organisation: Entidad de dominio
        """
        return Organisation(
            id=db_org.id,
            name=db_org.name,
            town_city=db_org.town_city,
            county=db_org.county,
            created_at=db_org.created_at,
            deleted_at=db_org.deleted_at
        )
