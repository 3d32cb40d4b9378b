"""
Modelos de base de datos (ORM).

Las tablas organisations y licences guardan historia temporal: una fila
nunca se actualiza salvo para cerrarla (deleted_at / valid_to).
"""
from sqlalchemy import Column, String, Integer, DateTime, Text, Boolean, ForeignKey, UniqueConstraint, Index
from sqlalchemy.sql import func

from sponsor_register.infrastructure.database.session import Base


class OrganisationModel(Base):
    """
    Modelo de base de datos para organizaciones sponsor.

    - created_at NULL: existia antes de empezar el tracking
    - deleted_at NULL: version activa
    """

    __tablename__ = "organisations"
    __table_args__ = (
        Index("ix_organisations_identity", "name", "town_city", "county"),
    )

    id = Column(Integer, primary_key=True, index=True)
    name = Column(Text, nullable=False)
    town_city = Column(Text, nullable=True)
    county = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=True)
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Organisation(id={self.id}, name={self.name}, town_city={self.town_city})>"


class LicenceModel(Base):
    """
    Modelo de base de datos para licencias de sponsor.

    - valid_from NULL: existia antes de empezar el tracking
    - valid_to NULL: licencia activa
    """

    __tablename__ = "licences"
    __table_args__ = (
        Index("ix_licences_lookup", "organisation_id", "licence_type", "route"),
    )

    id = Column(Integer, primary_key=True, index=True)
    organisation_id = Column(Integer, ForeignKey("organisations.id"), nullable=False)
    licence_type = Column(String(100), nullable=False)
    rating = Column(String(100), nullable=False)
    route = Column(String(255), nullable=False)
    valid_from = Column(DateTime(timezone=True), nullable=True)
    valid_to = Column(DateTime(timezone=True), nullable=True, index=True)

    def __repr__(self):
        return f"<Licence(id={self.id}, organisation_id={self.organisation_id}, rating={self.rating})>"


class ConfigModel(Base):
    """Valores de configuracion persistidos (ej. marcador de bootstrap)."""

    __tablename__ = "config"
    __table_args__ = (
        UniqueConstraint("name", "key", name="uq_config_name_key"),
    )

    id = Column(Integer, primary_key=True)
    name = Column(String(255), nullable=False)
    key = Column(String(255), nullable=False)
    value = Column(Text, nullable=False)

    def __repr__(self):
        return f"<Config(name={self.name}, key={self.key})>"


class SyncRunModel(Base):
    """Auditoria de cada corrida de sincronizacion."""

    __tablename__ = "sync_runs"

    id = Column(Integer, primary_key=True, index=True)
    start_time = Column(DateTime(timezone=True), nullable=False)
    end_time = Column(DateTime(timezone=True), nullable=False)
    bootstrap = Column(Boolean, nullable=False, default=False)
    new_organisations = Column(Integer, nullable=False, default=0)
    new_licences = Column(Integer, nullable=False, default=0)
    changed_licences = Column(Integer, nullable=False, default=0)
    closed_organisations = Column(Integer, nullable=False, default=0)
    closed_licences = Column(Integer, nullable=False, default=0)
    error_count = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self):
        return f"<SyncRun(id={self.id}, start_time={self.start_time}, errors={self.error_count})>"
