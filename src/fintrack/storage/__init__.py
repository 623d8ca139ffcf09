"""Persistence layer for fintrack application."""

from fintrack.storage.base import SlotStore
from fintrack.storage.gateway import PersistenceGateway
from fintrack.storage.factories import create_sqlite_gateway, create_sqlite_store

__all__ = ["SlotStore", "PersistenceGateway", "create_sqlite_gateway", "create_sqlite_store"]
