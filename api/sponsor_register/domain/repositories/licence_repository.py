"""
Interfaz del repositorio de licencias.
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sponsor_register.domain.entities.licence import Licence


class ILicenceRepository(ABC):
    """Interfaz del repositorio de licencias."""

    @abstractmethod
    async def find_active(
        self,
        organisation_id: int,
        licence_type: str,
        route: str
    ) -> Optional[Licence]:
        """
        Busca la licencia activa de una organizacion para un tipo y ruta.

        Returns:
            Optional[Licence]: Licencia activa o None
        """
        pass

    @abstractmethod
    async def insert(self, licence: Licence, bootstrap_mode: bool) -> int:
        """
        Inserta una nueva licencia activa.

        Args:
            licence: Licencia a crear
            bootstrap_mode: Si True, valid_from queda en None

        Returns:
            int: ID asignado
        """
        pass

    @abstractmethod
    async def close(self, licence_id: int) -> None:
        """Cierra una licencia (valid_to = ahora)."""
        pass

    @abstractmethod
    async def list_active(self) -> List[Licence]:
        """Lista todas las licencias activas."""
        pass
