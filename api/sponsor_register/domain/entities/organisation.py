"""
Entidad de dominio: Organisation (organizacion sponsor).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Organisation:
    """
    Organizacion con licencia de sponsor.

    La identidad es (name, town_city, county). Cambiar cualquiera de esos
    campos produce otra organizacion, nunca una actualizacion.

    - created_at None: existia antes de empezar el tracking (bootstrap)
    - deleted_at None: version activa
    """

    name: str
    town_city: Optional[str] = None
    county: Optional[str] = None
    id: Optional[int] = None
    created_at: Optional[datetime] = None
    deleted_at: Optional[datetime] = None

    def __post_init__(self):
        """Validaciones después de la inicialización."""
        if not self.name:
            raise ValueError("El nombre de la organizacion no puede estar vacío")
