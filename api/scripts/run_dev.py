"""
Script para ejecutar el servidor en modo desarrollo (desde la carpeta api/).
"""
import uvicorn
from sponsor_register.core.config import settings


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.HOST,
        port=settings.PORT,
        reload=True,
        reload_dirs=["sponsor_register"],
        log_level=settings.LOG_LEVEL.lower()
    )
