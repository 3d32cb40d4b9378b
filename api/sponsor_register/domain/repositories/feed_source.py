"""
Interfaz de la fuente de registros de sponsors.
"""
from abc import ABC, abstractmethod
from typing import List

from sponsor_register.domain.entities.feed_record import FeedRecord


class IFeedSource(ABC):
    """Fuente del snapshot completo del registro (sin paginacion)."""

    @abstractmethod
    async def fetch_records(self) -> List[FeedRecord]:
        """
        Descarga el snapshot completo.

        Returns:
            List[FeedRecord]: Registros en el orden del feed, sin garantia
            de unicidad
        """
        pass
