"""
Script para inicializar la base de datos (crea las tablas si no existen).

Para entornos gestionados usar Alembic: `alembic upgrade head`.
"""
import asyncio
import sys
from pathlib import Path

from loguru import logger

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from sponsor_register.infrastructure.database.session import init_db, close_db  # noqa: E402


async def main():
    """Crea organisations, licences, config y sync_runs."""
    logger.info("Inicializando base de datos...")

    try:
        await init_db()
        logger.success("Base de datos inicializada correctamente")
    except Exception as e:
        logger.error(f"Error al inicializar base de datos: {e}")
        raise
    finally:
        await close_db()


if __name__ == "__main__":
    asyncio.run(main())
