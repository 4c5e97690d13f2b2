"""Persistence collaborators for the booking services."""

from carwash.stores.base import BookingStore, ChangeNotifier, Snapshot
from carwash.stores.memory import MemoryStore
from carwash.stores.sqlalchemy_store import SqlAlchemyStore

__all__ = [
    "BookingStore",
    "ChangeNotifier",
    "MemoryStore",
    "Snapshot",
    "SqlAlchemyStore",
]
