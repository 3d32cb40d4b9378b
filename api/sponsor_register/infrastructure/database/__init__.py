"""
Configuración de base de datos.

Importa todos los modelos para que se registren con Base
antes de crear las tablas.
"""
from sponsor_register.infrastructure.database.models import (
    OrganisationModel,
    LicenceModel,
    ConfigModel,
    SyncRunModel
)
