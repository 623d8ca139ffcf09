"""Transaction log domain service."""

from datetime import UTC, date
from decimal import Decimal
from typing import Optional

from fintrack.domain.entities import Transaction
from fintrack.domain.errors import ValidationError
from fintrack.domain.identifiers import next_id
from fintrack.domain.store import LedgerStore

DEFAULT_HISTORY_LIMIT = 20


class TransactionLog:
    """Append-only log of ledger operations."""

    def __init__(self, store: LedgerStore):
        """Initialize transaction log.

        Args:
            store: LedgerStore instance
        """
        self.store = store

    def next_id(self) -> int:
        """Return the id the next appended transaction should use."""
        return next_id(self.store.transactions)

    def append(self, transaction: Transaction) -> Transaction:
        """Add a transaction to the end of the log.

        Does not commit; the ledger operation that produced the transaction
        commits once all of its changes are in place.
        """
        self.store.transactions.append(transaction)
        return transaction

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID, or None if not found."""
        for txn in self.store.transactions:
            if txn.id == transaction_id:
                return txn
        return None

    def list_for_account(self, account_id: int) -> list[Transaction]:
        """List an account's transactions in insertion order."""
        return [txn for txn in self.store.transactions if txn.account_id == account_id]

    def history(self, account_id: int, limit: int = DEFAULT_HISTORY_LIMIT) -> list[Transaction]:
        """Return an account's most recent transactions first.

        Args:
            account_id: Account ID
            limit: Maximum number of transactions to return

        Returns:
            Transactions sorted by timestamp descending. Transactions with
            equal timestamps keep their insertion order.

        Raises:
            ValidationError: If limit is negative
        """
        if limit < 0:
            raise ValidationError(f"History limit must not be negative, got {limit}")
        ordered = sorted(
            self.list_for_account(account_id),
            key=lambda txn: txn.timestamp,
            reverse=True,
        )
        return ordered[:limit]

    def daily_volume(self, account_id: int, day: date) -> Decimal:
        """Total money moved through an account on one UTC calendar day.

        Credits and debits both count towards the volume.
        """
        return sum(
            (
                abs(txn.amount)
                for txn in self.list_for_account(account_id)
                if txn.timestamp.astimezone(UTC).date() == day
            ),
            Decimal("0"),
        )

    def average_amount(self, account_id: int) -> Decimal:
        """Mean signed amount of an account's transactions, 0 when it has none."""
        transactions = self.list_for_account(account_id)
        if not transactions:
            return Decimal("0")
        total = sum((txn.amount for txn in transactions), Decimal("0"))
        return total / len(transactions)
