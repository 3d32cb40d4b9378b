"""
Entidad de dominio: Licence (licencia de sponsor de una organizacion).
"""
from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass
class Licence:
    """
    Licencia de una organizacion para un tipo y ruta concretos.

    La busqueda de la version activa usa (organisation_id, licence_type, route).
    Un cambio de rating cierra la version activa y abre una nueva.

    - licence_type: "Worker" o "Temporary Worker"
    - rating: "A rating", "B rating", ...
    - route: "Skilled Worker", "Creative Worker", ...
    """

    organisation_id: int
    licence_type: str
    rating: str
    route: str
    id: Optional[int] = None
    valid_from: Optional[datetime] = None
    valid_to: Optional[datetime] = None
