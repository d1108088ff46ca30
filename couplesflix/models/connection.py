"""Connection model type definitions for database operations."""

from enum import Enum
from typing import TypedDict


class ConnectionStatus(str, Enum):
    """Connection status values stored in the connections table."""

    CONNECTED = "connected"


class Connection(TypedDict):
    """Connection table row representation."""

    id: str
    user_id: str
    partner_id: str | None
    status: str
    created_at: str


class ConnectionCreate(TypedDict):
    """Data required to pair two profiles."""

    user_id: str
    partner_id: str
    status: str
