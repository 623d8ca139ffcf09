"""Abstract key-value slot store interface."""

from abc import ABC, abstractmethod
from typing import Optional


class SlotStore(ABC):
    """Abstract key-value store holding serialized slots."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the store."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the store."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize storage schema (create tables)."""
        pass

    @abstractmethod
    def read_slot(self, key: str) -> Optional[str]:
        """Return the raw value of a slot, or None if it was never written."""
        pass

    @abstractmethod
    def write_slots(self, values: dict[str, str]) -> None:
        """Overwrite several slots at once.

        Either every slot in ``values`` is written or none is.
        """
        pass

    @abstractmethod
    def list_slots(self) -> list[str]:
        """List the keys of all written slots."""
        pass
