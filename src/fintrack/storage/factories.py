"""Factory functions for creating slot stores."""

import os
from pathlib import Path
from typing import Optional

from fintrack.storage.gateway import PersistenceGateway
from fintrack.storage.sqlalchemy_store import SQLAlchemySlotStore


def create_sqlite_store(database_path: Optional[str] = None) -> SQLAlchemySlotStore:
    """Create a SQLite-backed slot store.

    Args:
        database_path: Path to SQLite database file. If None, checks FINTRACK_DB_PATH
            environment variable, then defaults to ~/.fintrack/fintrack.db

    Returns:
        SQLAlchemySlotStore instance configured for SQLite
    """
    if database_path is None:
        database_path = os.environ.get("FINTRACK_DB_PATH")

    if database_path is None:
        db_dir = Path.home() / ".fintrack"
        db_dir.mkdir(exist_ok=True)
        database_path = str(db_dir / "fintrack.db")

    return SQLAlchemySlotStore(f"sqlite:///{database_path}")


def create_sqlite_gateway(database_path: Optional[str] = None) -> PersistenceGateway:
    """Create a connected persistence gateway over a SQLite slot store."""
    slots = create_sqlite_store(database_path)
    slots.connect()
    slots.initialize_schema()
    return PersistenceGateway(slots)
