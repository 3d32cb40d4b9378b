"""
DTOs de la sincronizacion del registro de sponsors.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from sponsor_register.domain.entities.sync_stats import SyncStats


class SyncErrorDTO(BaseModel):
    """Error aislado de un registro o de un cierre."""

    stage: str = Field(..., description="Etapa donde ocurrio el error")
    message: str = Field(..., description="Detalle del error")
    organisation: Optional[str] = Field(None, description="Organizacion afectada, si aplica")
    entity_id: Optional[int] = Field(None, description="ID de la fila afectada, si aplica")

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True


class SyncResultDTO(BaseModel):
    """Resultado de una corrida de sincronizacion."""

    bootstrap: bool = Field(..., description="Si la corrida fue la de bootstrap")
    started_at: datetime
    finished_at: datetime
    new_organisations: int = 0
    new_licences: int = 0
    changed_licences: int = 0
    closed_organisations: int = 0
    closed_licences: int = 0
    errors: List[SyncErrorDTO] = Field(default_factory=list)

    @classmethod
    def from_stats(cls, stats: SyncStats) -> "SyncResultDTO":
        return cls(
            bootstrap=stats.bootstrap,
            started_at=stats.started_at,
            finished_at=stats.finished_at,
            new_organisations=stats.new_organisations,
            new_licences=stats.new_licences,
            changed_licences=stats.changed_licences,
            closed_organisations=stats.closed_organisations,
            closed_licences=stats.closed_licences,
            errors=[SyncErrorDTO.model_validate(e) for e in stats.errors],
        )


class SyncRunDTO(BaseModel):
    """Fila de auditoria de sync_runs."""

    id: int
    start_time: datetime
    end_time: datetime
    bootstrap: bool
    new_organisations: int
    new_licences: int
    changed_licences: int
    closed_organisations: int
    closed_licences: int
    error_count: int

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True
