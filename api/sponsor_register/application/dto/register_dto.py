"""
DTOs de lectura del estado actual del registro.
"""
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class OrganisationDTO(BaseModel):
    """Organizacion sponsor (una version)."""

    id: int
    name: str
    town_city: Optional[str] = None
    county: Optional[str] = None
    created_at: Optional[datetime] = Field(
        None,
        description="Inicio de la version; null si ya existia antes del tracking"
    )
    deleted_at: Optional[datetime] = Field(None, description="Cierre de la version; null si esta activa")

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True


class LicenceDTO(BaseModel):
    """Licencia de una organizacion (una version)."""

    id: int
    organisation_id: int
    licence_type: str
    rating: str
    route: str
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True


class RegisterPageDTO(BaseModel):
    """
    Pagina del estado actual del registro.

    `from` y `to` son posiciones 1-based inclusivas sobre las organizaciones
    activas ordenadas por nombre.
    """

    initial_run_time: Optional[str] = Field(None, description="Fecha del bootstrap (ISO 8601)")
    total_organisations: int
    from_position: int = Field(..., alias="from")
    to_position: int = Field(..., alias="to")
    organisations: List[OrganisationDTO] = Field(default_factory=list)
    licences: List[LicenceDTO] = Field(default_factory=list)

    class Config:
        """Configuración de Pydantic."""
        from_attributes = True
        populate_by_name = True


class LicenceHistoryDTO(BaseModel):
    """Organizacion con todas las versiones de sus licencias."""

    organisation: OrganisationDTO
    licences: List[LicenceDTO] = Field(default_factory=list)
