"""
Motor de reconciliacion del registro de sponsors.

Diseño (resumen):
- Lee el marcador de bootstrap (ausente => primera corrida)
- Descarga el snapshot completo del registro
- Reconcilia cada registro: organizacion y luego licencia
- Cierra lo activo que no aparecio en el snapshot (salvo en bootstrap)
- Marca el bootstrap y persiste estadisticas

Historia temporal append-only:
- Nunca se actualiza una fila salvo para cerrarla (deleted_at / valid_to)
- Un cambio de identidad o de rating abre una fila nueva

Estrategia de idempotencia:
- Cada llamada al store es independiente, no hay transaccion por corrida.
- Re-ejecutar con el mismo feed da 0 nuevos, 0 cambiados y 0 cerrados, por
  lo que re-ejecutar es siempre el camino de recuperacion.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Optional, Set, Tuple

from loguru import logger

from sponsor_register.domain.entities.feed_record import FeedRecord
from sponsor_register.domain.entities.licence import Licence
from sponsor_register.domain.entities.organisation import Organisation
from sponsor_register.domain.entities.sync_stats import SyncError, SyncStats, SyncTally
from sponsor_register.domain.repositories.feed_source import IFeedSource
from sponsor_register.domain.repositories.licence_repository import ILicenceRepository
from sponsor_register.domain.repositories.organisation_repository import IOrganisationRepository
from sponsor_register.domain.repositories.run_state_repository import IRunStateRepository
from sponsor_register.shared.constants.sync_constants import LicenceOutcome, SyncStage
from sponsor_register.shared.exceptions.sync import SyncFatalError
from sponsor_register.shared.utils.datetime_utils import DateTimeUtils


class RecordSyncError(Exception):
    """Fallo de store al reconciliar un registro concreto."""

    def __init__(self, stage: SyncStage, record: FeedRecord, cause: Exception):
        self.stage = stage
        self.record = record
        self.cause = cause
        super().__init__(f"{stage.value} {record.organisation_name!r}: {cause}")

    def to_sync_error(self) -> SyncError:
        return SyncError(
            stage=self.stage.value,
            message=str(self),
            organisation=self.record.organisation_name,
        )


class SponsorSyncer:
    """
    Orquestador de una corrida de sincronizacion.

    Procesa los registros de forma secuencial en el orden del feed. La
    cancelacion de la tarea que lo espera aborta la corrida en la siguiente
    llamada al store, sin rollback compensatorio.

    No serializa invocaciones concurrentes: eso queda en manos del caller.
    """

    def __init__(
        self,
        *,
        feed: IFeedSource,
        organisations: IOrganisationRepository,
        licences: ILicenceRepository,
        run_state: IRunStateRepository,
    ) -> None:
        self._feed = feed
        self._orgs = organisations
        self._licences = licences
        self._run_state = run_state

    async def run(self) -> SyncStats:
        """
        Ejecuta una corrida completa.

        Returns:
            SyncStats: Estadisticas congeladas de la corrida

        Raises:
            SyncFatalError: fallo del feed o del marcador de bootstrap
        """
        started_at = DateTimeUtils.now_utc()

        try:
            marker = await self._run_state.get_bootstrap_marker()
        except Exception as e:
            logger.error(f"No se pudo leer el marcador de bootstrap: {e}")
            raise SyncFatalError(SyncStage.BOOTSTRAP_CHECK.value, str(e)) from e

        bootstrap_mode = marker is None
        logger.info(f"Sync iniciando (bootstrap={bootstrap_mode})")

        try:
            records = await self._feed.fetch_records()
        except Exception as e:
            logger.error(f"No se pudo obtener el registro de sponsors: {e}")
            raise SyncFatalError(SyncStage.FETCH.value, str(e)) from e
        logger.info(f"Registro de sponsors obtenido: {len(records)} filas")

        tally = SyncTally(started_at=started_at, bootstrap=bootstrap_mode)
        seen_orgs: Set[int] = set()
        seen_licences: Set[int] = set()

        for record in records:
            try:
                org_id, licence_id = await self._reconcile_record(record, bootstrap_mode, tally)
            except RecordSyncError as e:
                logger.warning(f"Registro omitido: {e}")
                tally.add_error(e.to_sync_error())
                continue
            seen_orgs.add(org_id)
            seen_licences.add(licence_id)

        if not bootstrap_mode:
            await self._close_stale_organisations(seen_orgs, tally)
            await self._close_stale_licences(seen_licences, tally)

        if bootstrap_mode:
            marker_value = DateTimeUtils.to_iso_string(DateTimeUtils.now_utc())
            try:
                await self._run_state.set_bootstrap_marker(marker_value)
            except Exception as e:
                logger.error(f"No se pudo escribir el marcador de bootstrap: {e}")
                raise SyncFatalError(SyncStage.BOOTSTRAP_MARK.value, str(e)) from e

        stats = tally.freeze(finished_at=DateTimeUtils.now_utc())
        stats = await self._record_run(stats)

        logger.info(
            f"Sync completado. new_organisations={stats.new_organisations}, "
            f"new_licences={stats.new_licences}, changed_licences={stats.changed_licences}, "
            f"closed_organisations={stats.closed_organisations}, "
            f"closed_licences={stats.closed_licences}, errors={stats.error_count}"
        )
        if not stats.has_changes:
            logger.info("Sin cambios en el registro respecto a la corrida anterior")
        return stats

    async def _reconcile_record(
        self,
        record: FeedRecord,
        bootstrap_mode: bool,
        tally: SyncTally,
    ) -> Tuple[int, int]:
        """Reconcilia un registro y retorna (org_id, licence_id) activos."""
        try:
            org_id, is_new = await self.reconcile_organisation(record, bootstrap_mode)
        except Exception as e:
            raise RecordSyncError(SyncStage.ORGANISATION, record, e) from e
        if is_new:
            tally.new_organisations += 1

        try:
            licence_id, outcome = await self.reconcile_licence(org_id, record, bootstrap_mode)
        except Exception as e:
            raise RecordSyncError(SyncStage.LICENCE, record, e) from e
        if outcome is LicenceOutcome.NEW:
            tally.new_licences += 1
        elif outcome is LicenceOutcome.CHANGED:
            tally.changed_licences += 1

        return org_id, licence_id

    async def reconcile_organisation(
        self,
        record: FeedRecord,
        bootstrap_mode: bool,
    ) -> Tuple[int, bool]:
        """
        Busca la organizacion activa o la crea.

        Returns:
            Tuple[int, bool]: (ID activo, si se creo en esta llamada)
        """
        found = await self._orgs.find_active(record.organisation_name, record.town_city, record.county)
        if found is not None:
            return found.id, False

        organisation = Organisation(
            name=record.organisation_name,
            town_city=record.town_city,
            county=record.county,
        )
        org_id = await self._orgs.insert(organisation, bootstrap_mode)
        return org_id, True

    async def reconcile_licence(
        self,
        organisation_id: int,
        record: FeedRecord,
        bootstrap_mode: bool,
    ) -> Tuple[int, LicenceOutcome]:
        """
        Busca la licencia activa por (organizacion, tipo, ruta) y aplica el rating.

        Returns:
            Tuple[int, LicenceOutcome]: (ID activo, que paso)
        """
        current = await self._licences.find_active(organisation_id, record.licence_type, record.route)
        replacement = Licence(
            organisation_id=organisation_id,
            licence_type=record.licence_type,
            rating=record.rating,
            route=record.route,
        )

        if current is None:
            licence_id = await self._licences.insert(replacement, bootstrap_mode)
            return licence_id, LicenceOutcome.NEW

        if current.rating == record.rating:
            return current.id, LicenceOutcome.UNCHANGED

        # Un cambio de rating solo ocurre fuera de bootstrap: valid_from siempre es ahora
        await self._licences.close(current.id)
        licence_id = await self._licences.insert(replacement, False)
        return licence_id, LicenceOutcome.CHANGED

    async def _close_stale_organisations(self, seen: Set[int], tally: SyncTally) -> None:
        """Cierra las organizaciones activas que no aparecieron en el feed."""
        try:
            active = await self._orgs.list_active()
        except Exception as e:
            logger.error(f"No se pudieron listar organizaciones activas: {e}")
            tally.add_error(SyncError(
                stage=SyncStage.CLOSE_ORGANISATIONS.value,
                message=f"get active organisations: {e}",
            ))
            return

        for organisation in active:
            if organisation.id in seen:
                continue
            try:
                await self._orgs.close(organisation.id)
            except Exception as e:
                logger.warning(f"No se pudo cerrar la organizacion {organisation.name!r}: {e}")
                tally.add_error(SyncError(
                    stage=SyncStage.CLOSE_ORGANISATIONS.value,
                    message=f"close organisation {organisation.name!r}: {e}",
                    organisation=organisation.name,
                    entity_id=organisation.id,
                ))
                continue
            tally.closed_organisations += 1

    async def _close_stale_licences(self, seen: Set[int], tally: SyncTally) -> None:
        """Cierra las licencias activas que no aparecieron en el feed."""
        try:
            active = await self._licences.list_active()
        except Exception as e:
            logger.error(f"No se pudieron listar licencias activas: {e}")
            tally.add_error(SyncError(
                stage=SyncStage.CLOSE_LICENCES.value,
                message=f"get active licences: {e}",
            ))
            return

        for licence in active:
            if licence.id in seen:
                continue
            try:
                await self._licences.close(licence.id)
            except Exception as e:
                logger.warning(f"No se pudo cerrar la licencia {licence.id}: {e}")
                tally.add_error(SyncError(
                    stage=SyncStage.CLOSE_LICENCES.value,
                    message=f"close licence {licence.id}: {e}",
                    entity_id=licence.id,
                ))
                continue
            tally.closed_licences += 1

    async def _record_run(self, stats: SyncStats) -> SyncStats:
        """
        Persiste la auditoria de la corrida.

        Un fallo aqui no invalida los cambios ya aplicados: se agrega a la
        lista de errores del resultado retornado.
        """
        try:
            run_id: Optional[int] = await self._run_state.record_run(stats)
        except Exception as e:
            logger.error(f"No se pudo registrar la corrida: {e}")
            error = SyncError(stage=SyncStage.RECORD_RUN.value, message=f"record run: {e}")
            return replace(stats, errors=stats.errors + (error,))
        logger.debug(f"Corrida registrada en sync_runs (id={run_id})")
        return stats
