"""Database model type definitions."""

from couplesflix.models.connection import Connection, ConnectionCreate, ConnectionStatus
from couplesflix.models.profile import Profile, ProfileUpdate
from couplesflix.models.watchlist import WatchlistCreate, WatchlistEntry, WatchlistUpdate

__all__ = [
    "Profile",
    "ProfileUpdate",
    "Connection",
    "ConnectionCreate",
    "ConnectionStatus",
    "WatchlistEntry",
    "WatchlistCreate",
    "WatchlistUpdate",
]
