"""
Engine y sesiones de base de datos.

Los repositorios confirman cada escritura por separado (no hay transaccion
por corrida), por lo que las sesiones de request solo hacen rollback ante
errores y nunca confirman por su cuenta.
"""
from contextlib import asynccontextmanager
from typing import AsyncGenerator, AsyncIterator
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    create_async_engine,
    async_sessionmaker
)
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import StaticPool

from sponsor_register.core.config import settings


Base = declarative_base()


def _create_engine_args(database_url: str) -> dict:
    """
    Argumentos del engine segun el motor.

    - PostgreSQL: pool con pre-ping.
    - SQLite en memoria (desarrollo local): una sola conexion compartida,
      si no cada conexion veria una base vacia.
    """
    args = {"echo": settings.DEBUG}

    if database_url.startswith("postgresql"):
        args.update({
            "pool_size": settings.DB_POOL_SIZE,
            "max_overflow": settings.DB_MAX_OVERFLOW,
            "pool_pre_ping": True,
        })
    elif database_url.startswith("sqlite") and ":memory:" in database_url:
        args["poolclass"] = StaticPool

    return args


engine = create_async_engine(
    settings.effective_database_url,
    **_create_engine_args(settings.effective_database_url)
)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Sesion por request (dependencia de FastAPI).

    Yields:
        AsyncSession: Sesión de base de datos
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def session_scope() -> AsyncIterator[AsyncSession]:
    """Sesion para scripts y jobs fuera del ciclo de request."""
    async with AsyncSessionLocal() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise


async def init_db() -> None:
    """Crea las tablas que no existan (desarrollo y tests; en produccion Alembic)."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db() -> None:
    """Cierra las conexiones del pool."""
    await engine.dispose()
