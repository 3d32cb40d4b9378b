"""
Constantes relacionadas con la sincronizacion del registro de sponsors.
"""
from enum import Enum


# Marcador de bootstrap en la tabla config (name, key)
BOOTSTRAP_MARKER_NAME = "InitialRunDateTime"
BOOTSTRAP_MARKER_KEY = "Default"


class LicenceOutcome(str, Enum):
    """Resultado de reconciliar una licencia contra la historia persistida."""
    UNCHANGED = "unchanged"
    NEW = "new"
    CHANGED = "changed"


class SyncStage(str, Enum):
    """Etapas de una corrida, usadas para etiquetar errores."""
    BOOTSTRAP_CHECK = "bootstrap_check"
    FETCH = "fetch"
    ORGANISATION = "organisation"
    LICENCE = "licence"
    CLOSE_ORGANISATIONS = "close_organisations"
    CLOSE_LICENCES = "close_licences"
    BOOTSTRAP_MARK = "bootstrap_mark"
    RECORD_RUN = "record_run"
