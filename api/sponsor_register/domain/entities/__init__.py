"""
Entidades del dominio.
"""
from sponsor_register.domain.entities.organisation import Organisation
from sponsor_register.domain.entities.licence import Licence
from sponsor_register.domain.entities.feed_record import FeedRecord
from sponsor_register.domain.entities.sync_stats import SyncError, SyncStats, SyncTally

__all__ = [
    "Organisation",
    "Licence",
    "FeedRecord",
    "SyncError",
    "SyncStats",
    "SyncTally",
]
