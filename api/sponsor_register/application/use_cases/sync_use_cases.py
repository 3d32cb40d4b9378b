"""
Casos de uso para la sincronizacion del registro de sponsors.
"""
from __future__ import annotations

import asyncio
from typing import List, Optional

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.application.dto.sync_dto import SyncResultDTO, SyncRunDTO
from sponsor_register.application.services.sponsor_syncer import SponsorSyncer
from sponsor_register.domain.repositories.feed_source import IFeedSource
from sponsor_register.infrastructure.external.govuk_register.feed_source import build_from_settings
from sponsor_register.infrastructure.repositories.licence_repository_impl import LicenceRepositoryImpl
from sponsor_register.infrastructure.repositories.organisation_repository_impl import OrganisationRepositoryImpl
from sponsor_register.infrastructure.repositories.run_state_repository_impl import RunStateRepositoryImpl
from sponsor_register.shared.exceptions.sync import SyncInProgressError


class SyncRunGuard:
    """
    Serializa las corridas dentro del proceso.

    El motor no es seguro para corridas concurrentes sobre la misma base:
    dos corridas en paralelo podrian insertar la misma organizacion dos
    veces. Una segunda peticion mientras hay una corrida en curso se rechaza.
    """

    _lock: Optional[asyncio.Lock] = None

    @classmethod
    def get_lock(cls) -> asyncio.Lock:
        if cls._lock is None:
            cls._lock = asyncio.Lock()
        return cls._lock

    @classmethod
    def is_running(cls) -> bool:
        return cls._lock is not None and cls._lock.locked()

    @classmethod
    def reset(cls) -> None:
        """Descarta el lock actual (usado por tests con event loops nuevos)."""
        cls._lock = None


class SyncUseCases:
    """Casos de uso para disparar y auditar corridas."""

    def __init__(self, db: AsyncSession, feed: Optional[IFeedSource] = None):
        self.db = db
        self.feed = feed
        self.run_state = RunStateRepositoryImpl(db)

    def _build_syncer(self) -> SponsorSyncer:
        return SponsorSyncer(
            feed=self.feed or build_from_settings(),
            organisations=OrganisationRepositoryImpl(self.db),
            licences=LicenceRepositoryImpl(self.db),
            run_state=self.run_state,
        )

    async def run_sync(self) -> SyncResultDTO:
        """
        Ejecuta una corrida completa.

        Raises:
            SyncInProgressError: si ya hay una corrida en curso
            SyncFatalError: si la corrida aborta
        """
        lock = SyncRunGuard.get_lock()
        # Sin await entre la comprobacion y el acquire: no hay carrera en el loop
        if lock.locked():
            logger.warning("Sync rechazado: ya hay una corrida en curso")
            raise SyncInProgressError()

        async with lock:
            stats = await self._build_syncer().run()
        return SyncResultDTO.from_stats(stats)

    async def list_runs(self, limit: int = 20) -> List[SyncRunDTO]:
        """Lista las ultimas corridas registradas."""
        runs = await self.run_state.list_recent_runs(limit=limit)
        return [SyncRunDTO.model_validate(run) for run in runs]
