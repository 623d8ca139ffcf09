"""Generic SQLAlchemy slot store implementation."""

from typing import Optional
from sqlalchemy.orm import Session

from fintrack.storage.base import SlotStore
from fintrack.storage.models import Slot, create_session_factory


class SQLAlchemySlotStore(SlotStore):
    """SQLAlchemy-based implementation of the SlotStore interface."""

    def __init__(self, database_url: str):
        """Initialize SQLAlchemy slot store.

        Args:
            database_url: SQLAlchemy database URL (e.g., 'sqlite:///path/to.db')
        """
        self.database_url = database_url
        self.session_factory = create_session_factory(database_url)
        self._session: Optional[Session] = None

    def _get_session(self) -> Session:
        """Get current session, creating one if needed."""
        if self._session is None:
            self._session = self.session_factory()
        return self._session

    def connect(self) -> None:
        """Connect to the store."""
        # Connection is lazy, so this is a no-op
        pass

    def disconnect(self) -> None:
        """Disconnect from the store."""
        if self._session is not None:
            self._session.close()
            self._session = None

    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        # Schema is created automatically by create_session_factory
        pass

    def read_slot(self, key: str) -> Optional[str]:
        """Return the raw value of a slot, or None if it was never written."""
        session = self._get_session()
        # Another process may have written since this session last looked
        slot = session.get(Slot, key, populate_existing=True)
        if slot is None:
            return None
        return slot.value

    def write_slots(self, values: dict[str, str]) -> None:
        """Overwrite several slots in one database transaction."""
        session = self._get_session()
        try:
            for key, value in values.items():
                slot = session.get(Slot, key)
                if slot is None:
                    session.add(Slot(key=key, value=value))
                else:
                    slot.value = value
            session.commit()
        except Exception:
            session.rollback()
            raise

    def list_slots(self) -> list[str]:
        """List the keys of all written slots."""
        session = self._get_session()
        return [slot.key for slot in session.query(Slot).order_by(Slot.key).all()]
