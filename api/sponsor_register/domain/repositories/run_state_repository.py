"""
Interfaz del repositorio de estado de corridas.
Guarda el marcador de bootstrap y la auditoria de cada corrida.
"""
from abc import ABC, abstractmethod
from typing import Optional

from sponsor_register.domain.entities.sync_stats import SyncStats


class IRunStateRepository(ABC):
    """Interfaz del repositorio de estado de sincronizacion."""

    @abstractmethod
    async def get_bootstrap_marker(self) -> Optional[str]:
        """
        Obtiene el marcador de bootstrap.

        Returns:
            Optional[str]: Timestamp ISO de la primera corrida o None si
            nunca se completo una corrida
        """
        pass

    @abstractmethod
    async def set_bootstrap_marker(self, value: str) -> None:
        """
        Escribe el marcador de bootstrap. Solo se escribe una vez.

        Args:
            value: Timestamp ISO de la corrida inicial
        """
        pass

    @abstractmethod
    async def record_run(self, stats: SyncStats) -> int:
        """
        Persiste las estadisticas de una corrida para auditoria.

        Returns:
            int: ID de la fila sync_runs creada
        """
        pass
