"""
Estadisticas de una corrida de sincronizacion.

SyncTally se usa como acumulador mutable durante la corrida; al terminar
se congela en un SyncStats inmutable que es lo que ve el caller y lo que
se persiste en sync_runs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SyncError:
    """
    Error aislado de un registro o de un cierre concreto.

    La corrida continua; un error aqui significa perdida parcial de datos
    para ese registro y se recomienda volver a ejecutar.
    """

    stage: str
    message: str
    organisation: Optional[str] = None
    entity_id: Optional[int] = None

    def __str__(self) -> str:
        return f"{self.stage}: {self.message}"


@dataclass(frozen=True)
class SyncStats:
    """Resultado inmutable de una corrida."""

    started_at: datetime
    finished_at: datetime
    bootstrap: bool
    new_organisations: int = 0
    new_licences: int = 0
    changed_licences: int = 0
    closed_organisations: int = 0
    closed_licences: int = 0
    errors: tuple[SyncError, ...] = ()

    @property
    def error_count(self) -> int:
        return len(self.errors)

    @property
    def has_changes(self) -> bool:
        return any(
            (
                self.new_organisations,
                self.new_licences,
                self.changed_licences,
                self.closed_organisations,
                self.closed_licences,
            )
        )


@dataclass
class SyncTally:
    """Acumulador de contadores durante la corrida."""

    started_at: datetime
    bootstrap: bool
    new_organisations: int = 0
    new_licences: int = 0
    changed_licences: int = 0
    closed_organisations: int = 0
    closed_licences: int = 0
    errors: list[SyncError] = field(default_factory=list)

    def add_error(self, error: SyncError) -> None:
        self.errors.append(error)

    def freeze(self, finished_at: datetime) -> SyncStats:
        return SyncStats(
            started_at=self.started_at,
            finished_at=finished_at,
            bootstrap=self.bootstrap,
            new_organisations=self.new_organisations,
            new_licences=self.new_licences,
            changed_licences=self.changed_licences,
            closed_organisations=self.closed_organisations,
            closed_licences=self.closed_licences,
            errors=tuple(self.errors),
        )
