"""Domain layer for fintrack application."""

from fintrack.domain.store import LedgerStore
from fintrack.domain.users import UserDirectory
from fintrack.domain.ledger import AccountLedger
from fintrack.domain.transactions import TransactionLog
from fintrack.domain.session import Session
from fintrack.domain.budgets import BudgetManager

__all__ = [
    "LedgerStore",
    "UserDirectory",
    "AccountLedger",
    "TransactionLog",
    "Session",
    "BudgetManager",
]
