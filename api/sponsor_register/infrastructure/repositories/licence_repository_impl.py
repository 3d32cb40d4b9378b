"""
Implementación del repositorio de licencias usando SQLAlchemy.
"""
from typing import List, Optional
from sqlalchemy import select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.domain.entities.licence import Licence
from sponsor_register.domain.repositories.licence_repository import ILicenceRepository
from sponsor_register.infrastructure.database.models import LicenceModel
from sponsor_register.shared.utils.datetime_utils import DateTimeUtils


class LicenceRepositoryImpl(ILicenceRepository):
    """Implementación del repositorio de licencias con SQLAlchemy."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def find_active(
        self,
        organisation_id: int,
        licence_type: str,
        route: str
    ) -> Optional[Licence]:
        """Busca la licencia activa para (organizacion, tipo, ruta)."""
        db_licences = await self._fetch(
            select(LicenceModel)
            .where(LicenceModel.organisation_id == organisation_id)
            .where(LicenceModel.licence_type == licence_type)
            .where(LicenceModel.route == route)
            .where(LicenceModel.valid_to.is_(None))
            .order_by(LicenceModel.id)
        )
        db_licence = db_licences[0] if db_licences else None

        if db_licence is None:
            return None

        return self._to_entity(db_licence)

    async def insert(self, licence: Licence, bootstrap_mode: bool) -> int:
        """Crea una licencia activa y retorna su ID."""
        db_licence = LicenceModel(
            organisation_id=licence.organisation_id,
            licence_type=licence.licence_type,
            rating=licence.rating,
            route=licence.route,
            valid_from=None if bootstrap_mode else DateTimeUtils.now_utc(),
        )

        try:
            self.session.add(db_licence)
            await self.session.flush()
            licence_id = db_licence.id
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

        return licence_id

    async def close(self, licence_id: int) -> None:
        """Marca valid_to en la licencia si sigue activa."""
        try:
            await self.session.execute(
                update(LicenceModel)
                .where(LicenceModel.id == licence_id)
                .where(LicenceModel.valid_to.is_(None))
                .values(valid_to=DateTimeUtils.now_utc())
            )
            await self.session.commit()
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    async def list_active(self) -> List[Licence]:
        """Lista las licencias activas ordenadas por organizacion."""
        db_licences = await self._fetch(
            select(LicenceModel)
            .where(LicenceModel.valid_to.is_(None))
            .order_by(LicenceModel.organisation_id, LicenceModel.id)
        )
        return [self._to_entity(db_licence) for db_licence in db_licences]

    async def list_active_for_organisations(self, organisation_ids: List[int]) -> List[Licence]:
        """
        Lista las licencias activas de un conjunto de organizaciones.

        Args:
            organisation_ids: IDs de organizaciones

        Returns:
            List[Licence]: Licencias activas, ordenadas por organizacion
        """
        if not organisation_ids:
            return []
        db_licences = await self._fetch(
            select(LicenceModel)
            .where(LicenceModel.organisation_id.in_(organisation_ids))
            .where(LicenceModel.valid_to.is_(None))
            .order_by(LicenceModel.organisation_id, LicenceModel.id)
        )
        return [self._to_entity(db_licence) for db_licence in db_licences]

    async def list_history_for_organisation(self, organisation_id: int) -> List[Licence]:
        """Lista todas las versiones (incluidas cerradas) de las licencias de una organizacion."""
        db_licences = await self._fetch(
            select(LicenceModel)
            .where(LicenceModel.organisation_id == organisation_id)
            .order_by(LicenceModel.valid_from.is_not(None), LicenceModel.valid_from, LicenceModel.id)
        )
        return [self._to_entity(db_licence) for db_licence in db_licences]

    async def _fetch(self, statement) -> List[LicenceModel]:
        """Ejecuta una consulta de licencias; revierte la transaccion si falla."""
        try:
            result = await self.session.execute(statement)
            return list(result.scalars().all())
        except SQLAlchemyError:
            await self.session.rollback()
            raise

    @staticmethod
    def _to_entity(db_licence: LicenceModel) -> Licence:
        """Convierte un modelo de base de datos a entidad de dominio."""
        return Licence(
            id=db_licence.id,
            organisation_id=db_licence.organisation_id,
            licence_type=db_licence.licence_type,
            rating=db_licence.rating,
            route=db_licence.route,
            valid_from=db_licence.valid_from,
            valid_to=db_licence.valid_to
        )
