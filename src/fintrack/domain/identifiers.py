"""Integer id allocation for in-memory collections."""

from typing import Iterable, Protocol

from fintrack.domain.entities import Transaction


class HasId(Protocol):
    id: int


def next_id(entities: Iterable[HasId]) -> int:
    """Return the next free id: the largest existing id plus one, or 1."""
    return max((entity.id for entity in entities), default=0) + 1


def next_transfer_id(transactions: Iterable[Transaction]) -> int:
    """Return the next free transfer id among the transfer legs."""
    return (
        max(
            (txn.transfer_id for txn in transactions if txn.transfer_id is not None),
            default=0,
        )
        + 1
    )
