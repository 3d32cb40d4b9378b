"""
Dependencias para inyeccion de casos de uso.
"""
from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from sponsor_register.application.use_cases.register_use_cases import RegisterUseCases
from sponsor_register.application.use_cases.sync_use_cases import SyncUseCases
from sponsor_register.infrastructure.database.session import get_db


async def get_sync_use_cases(
    db: AsyncSession = Depends(get_db)
) -> SyncUseCases:
    """
    Dependencia para obtener los casos de uso de sincronizacion.

    Args:
        db: Sesion de base de datos

    Returns:
        SyncUseCases: Instancia con el feed de gov.uk configurado
    """
    return SyncUseCases(db)


async def get_register_use_cases(
    db: AsyncSession = Depends(get_db)
) -> RegisterUseCases:
    """Dependencia para obtener los casos de uso de lectura del registro."""
    return RegisterUseCases(db)
