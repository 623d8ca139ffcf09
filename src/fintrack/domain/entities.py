"""Domain model entities for fintrack.

These are pure data classes, independent of how the slots are stored.
Entities are frozen: ledger operations replace a record with an updated
copy rather than mutating it in place.
"""

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Kind of account. Only CREDIT may be debited below zero."""

    CHECKING = "CHECKING"
    SAVINGS = "SAVINGS"
    CREDIT = "CREDIT"
    INVESTMENT = "INVESTMENT"

    @property
    def allows_overdraft(self) -> bool:
        return self is AccountType.CREDIT


class TransactionKind(str, Enum):
    """Ledger operation that produced a transaction."""

    DEPOSIT = "DEPOSIT"
    WITHDRAWAL = "WITHDRAWAL"
    TRANSFER_OUT = "TRANSFER_OUT"
    TRANSFER_IN = "TRANSFER_IN"

    @property
    def is_credit(self) -> bool:
        """True for kinds recorded with a positive amount."""
        return self in (TransactionKind.DEPOSIT, TransactionKind.TRANSFER_IN)


class TransactionCategory(str, Enum):
    """Spending category a deposit or withdrawal may be tagged with."""

    FOOD = "FOOD"
    TRAVEL = "TRAVEL"
    BILLS = "BILLS"
    ENTERTAINMENT = "ENTERTAINMENT"
    SHOPPING = "SHOPPING"
    HEALTHCARE = "HEALTHCARE"
    INVESTMENT = "INVESTMENT"
    SALARY = "SALARY"
    OTHER = "OTHER"


@dataclass(frozen=True)
class User:
    """Registered user."""

    id: int
    name: str
    email: str
    password_hash: str


@dataclass(frozen=True)
class Account:
    """Account owned by a user."""

    id: int
    user_id: int
    type: AccountType
    balance: Decimal


@dataclass(frozen=True)
class Transaction:
    """Append-only ledger record.

    DEPOSIT and TRANSFER_IN carry positive amounts, WITHDRAWAL and
    TRANSFER_OUT negative ones. Transfer legs share ``transfer_id`` and point
    at each other's account through ``counterparty_account_id``. Transfer
    legs are never categorized.
    """

    id: int
    account_id: int
    kind: TransactionKind
    amount: Decimal
    description: str
    timestamp: datetime
    transfer_id: Optional[int] = None
    counterparty_account_id: Optional[int] = None
    category: Optional[TransactionCategory] = None


@dataclass(frozen=True)
class Budget:
    """Monthly spending limit for one user and category.

    ``alert_threshold`` is the share of the limit (0 to 1) at which the
    budget starts asking for attention.
    """

    id: int
    user_id: int
    category: TransactionCategory
    monthly_limit: Decimal
    alert_threshold: Decimal = Decimal("0.8")
    alert_enabled: bool = True


@dataclass(frozen=True)
class Transfer:
    """The two linked legs of a transfer."""

    id: int
    outgoing: Transaction
    incoming: Transaction

    @property
    def from_account_id(self) -> int:
        return self.outgoing.account_id

    @property
    def to_account_id(self) -> int:
        return self.incoming.account_id

    @property
    def amount(self) -> Decimal:
        return self.incoming.amount
