"""In-memory state shared by the domain services."""

from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Iterator, Optional, Protocol

from fintrack.domain.entities import Account, Budget, Transaction, User


class StoreGateway(Protocol):
    """Anything that can persist a LedgerStore."""

    def save(self, store: "LedgerStore") -> None: ...


@dataclass
class LedgerStore:
    """Aggregate holding users, accounts, transactions, budgets and the session slot.

    One instance is owned by the running process and passed by reference to
    every service. Mutations run inside ``transaction()``, which commits once
    at the end and puts everything back if the changes or the save fail.
    """

    users: list[User] = field(default_factory=list)
    accounts: list[Account] = field(default_factory=list)
    transactions: list[Transaction] = field(default_factory=list)
    budgets: list[Budget] = field(default_factory=list)
    current_user_id: Optional[int] = None
    gateway: Optional[StoreGateway] = field(default=None, compare=False, repr=False)

    def commit(self) -> None:
        """Persist the current state, if a gateway is attached."""
        if self.gateway is not None:
            self.gateway.save(self)

    @contextmanager
    def transaction(self) -> Iterator["LedgerStore"]:
        """Apply a group of changes and commit them together.

        If the block or the commit raises, the collections and the session
        slot are restored to what they held on entry and the error
        propagates.
        """
        users = list(self.users)
        accounts = list(self.accounts)
        transactions = list(self.transactions)
        budgets = list(self.budgets)
        current_user_id = self.current_user_id
        try:
            yield self
            self.commit()
        except Exception:
            # Restore in place; services hold references to these lists
            self.users[:] = users
            self.accounts[:] = accounts
            self.transactions[:] = transactions
            self.budgets[:] = budgets
            self.current_user_id = current_user_id
            raise
