"""
Interfaz del repositorio de organizaciones.
Define el contrato que debe cumplir cualquier implementación.
"""
from abc import ABC, abstractmethod
from typing import List, Optional

from sponsor_register.domain.entities.organisation import Organisation


class IOrganisationRepository(ABC):
    """
    Interfaz del repositorio de organizaciones.
    Las filas solo se crean o se cierran, nunca se actualizan ni se borran.
    """

    @abstractmethod
    async def find_active(
        self,
        name: str,
        town_city: Optional[str],
        county: Optional[str]
    ) -> Optional[Organisation]:
        """
        Busca la version activa de una organizacion por su identidad.

        Args:
            name: Nombre exacto (sensible a mayusculas)
            town_city: Ciudad; "" y None son equivalentes
            county: Condado; "" y None son equivalentes

        Returns:
            Optional[Organisation]: Organizacion activa o None
        """
        pass

    @abstractmethod
    async def insert(self, organisation: Organisation, bootstrap_mode: bool) -> int:
        """
        Inserta una nueva version activa.

        Args:
            organisation: Organizacion a crear
            bootstrap_mode: Si True, created_at queda en None

        Returns:
            int: ID asignado
        """
        pass

    @abstractmethod
    async def close(self, organisation_id: int) -> None:
        """
        Cierra una organizacion (deleted_at = ahora).

        Args:
            organisation_id: ID de la organizacion
        """
        pass

    @abstractmethod
    async def list_active(self) -> List[Organisation]:
        """
        Lista todas las organizaciones activas.

        Returns:
            List[Organisation]: Organizaciones con deleted_at None
        """
        pass
