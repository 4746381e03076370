"""
db/ - Database Layer
====================
Connection providers and the errors raised while talking to the store.
This layer is the lowest in the architecture and has no dependencies on other layers.
"""

from db.connection import ConnectionProvider, PoolConnectionProvider, SQLiteConnectionProvider
from db.errors import DataAccessError, ProviderError

__all__ = [
    "ConnectionProvider",
    "PoolConnectionProvider",
    "SQLiteConnectionProvider",
    "DataAccessError",
    "ProviderError",
]
