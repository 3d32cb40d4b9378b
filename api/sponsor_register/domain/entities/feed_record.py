"""
Registro plano del CSV publicado por el Home Office.
"""
from dataclasses import dataclass


@dataclass(frozen=True)
class FeedRecord:
    """Una fila del registro: organizacion + una licencia."""

    organisation_name: str
    town_city: str
    county: str
    licence_type: str
    rating: str
    route: str
