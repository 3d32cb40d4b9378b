"""
Repositorio de estado de sincronizacion.
Gestiona la tabla config (marcador de bootstrap) y la tabla sync_runs.
"""
from typing import List, Optional
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession
from loguru import logger

from sponsor_register.domain.entities.sync_stats import SyncStats
from sponsor_register.domain.repositories.run_state_repository import IRunStateRepository
from sponsor_register.infrastructure.database.models import ConfigModel, SyncRunModel
from sponsor_register.shared.constants.sync_constants import BOOTSTRAP_MARKER_NAME, BOOTSTRAP_MARKER_KEY


class RunStateRepositoryImpl(IRunStateRepository):
    """
    Gestiona el marcador de bootstrap y la auditoria de corridas.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_value(self, name: str, key: str) -> Optional[str]:
        """
        Obtiene un valor de la tabla config por (name, key).
        """
        try:
            result = await self.db.execute(
                select(ConfigModel.value)
                .where(ConfigModel.name == name)
                .where(ConfigModel.key == key)
            )
            return result.scalar_one_or_none()
        except SQLAlchemyError:
            await self.db.rollback()
            raise

    async def set_value(self, name: str, key: str, value: str) -> None:
        """
        Inserta un valor nuevo en config.

        No actualiza: si (name, key) ya existe la restriccion unica falla.
        """
        try:
            self.db.add(ConfigModel(name=name, key=key, value=value))
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        logger.info(f"Config '{name}/{key}' establecida a: {value}")

    async def get_bootstrap_marker(self) -> Optional[str]:
        return await self.get_value(BOOTSTRAP_MARKER_NAME, BOOTSTRAP_MARKER_KEY)

    async def set_bootstrap_marker(self, value: str) -> None:
        await self.set_value(BOOTSTRAP_MARKER_NAME, BOOTSTRAP_MARKER_KEY, value)

    async def record_run(self, stats: SyncStats) -> int:
        """Inserta una fila en sync_runs con los contadores de la corrida."""
        run = SyncRunModel(
            start_time=stats.started_at,
            end_time=stats.finished_at,
            bootstrap=stats.bootstrap,
            new_organisations=stats.new_organisations,
            new_licences=stats.new_licences,
            changed_licences=stats.changed_licences,
            closed_organisations=stats.closed_organisations,
            closed_licences=stats.closed_licences,
            error_count=stats.error_count,
        )
        try:
            self.db.add(run)
            await self.db.flush()
            run_id = run.id
            await self.db.commit()
        except SQLAlchemyError:
            await self.db.rollback()
            raise
        return run_id

    async def list_recent_runs(self, limit: int = 20) -> List[SyncRunModel]:
        """
        Obtiene las ultimas corridas registradas, mas recientes primero.
        """
        try:
            result = await self.db.execute(
                select(SyncRunModel)
                .order_by(SyncRunModel.start_time.desc(), SyncRunModel.id.desc())
                .limit(limit)
            )
            return list(result.scalars().all())
        except SQLAlchemyError:
            await self.db.rollback()
            raise
