"""Account ledger domain service.

Every operation validates first and then applies its changes inside one
store transaction, which commits once at the end. A raised error, from
validation or from the save, leaves the store exactly as it was. A
transfer's two balance changes and two transaction legs therefore land
together or not at all.
"""

from dataclasses import replace
from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Callable, Optional

from fintrack.domain.entities import (
    Account,
    AccountType,
    Transaction,
    TransactionKind,
    Transfer,
    TransactionCategory,
)
from fintrack.domain.errors import (
    AccountNotFoundError,
    InsufficientFundsError,
    InvalidAmountError,
    SameAccountError,
    ValidationError,
    UserNotFoundError,
    account_not_found,
    insufficient_funds,
    same_account,
    user_not_found,
)
from fintrack.domain.identifiers import next_id, next_transfer_id
from fintrack.domain.store import LedgerStore
from fintrack.domain.transactions import TransactionLog
from fintrack.logging import get_logger

logger = get_logger(__name__)

MAX_AMOUNT = Decimal("1000000000000")

DEFAULT_DESCRIPTIONS = {
    TransactionKind.DEPOSIT: "Deposit",
    TransactionKind.WITHDRAWAL: "Withdrawal",
    TransactionKind.TRANSFER_OUT: "Transfer",
}


def to_amount(value: Decimal | int | float | str) -> Decimal:
    """Convert a user-supplied amount to Decimal.

    Floats go through their shortest repr so 0.1 becomes Decimal("0.1").
    Magnitudes above MAX_AMOUNT are refused so balance arithmetic stays
    exact.

    Raises:
        InvalidAmountError: If the value is not a finite number, or is too
            large
    """
    if isinstance(value, bool):
        raise InvalidAmountError(f"Invalid amount {value!r}")
    try:
        amount = value if isinstance(value, Decimal) else Decimal(str(value))
    except (InvalidOperation, ValueError) as e:
        raise InvalidAmountError(f"Invalid amount {value!r}") from e
    if not amount.is_finite():
        raise InvalidAmountError(f"Invalid amount {value!r}")
    if abs(amount) > MAX_AMOUNT:
        raise InvalidAmountError(f"Amount {amount} exceeds the limit of {MAX_AMOUNT}")
    return amount


def _positive_amount(value: Decimal | int | float | str) -> Decimal:
    amount = to_amount(value)
    if amount <= 0:
        raise InvalidAmountError(f"Amount must be positive, got {amount}")
    return amount


def _describe(description: Optional[str], kind: TransactionKind) -> str:
    if description is None or not description.strip():
        return DEFAULT_DESCRIPTIONS[kind]
    return description.strip()


def _category(value: TransactionCategory | str | None) -> Optional[TransactionCategory]:
    if value is None:
        return None
    try:
        return TransactionCategory(value.upper() if isinstance(value, str) else value)
    except ValueError as e:
        raise ValidationError(f"Unknown category '{value}'") from e


class AccountLedger:
    """Service for accounts, balances and money movements."""

    def __init__(self, store: LedgerStore, clock: Optional[Callable[[], datetime]] = None):
        """Initialize account ledger.

        Args:
            store: LedgerStore instance
            clock: Returns the timestamp for new transactions (defaults to
                the current UTC time)
        """
        self.store = store
        self.log = TransactionLog(store)
        self.clock = clock or (lambda: datetime.now(UTC))

    # Queries
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID, or None if not found."""
        for account in self.store.accounts:
            if account.id == account_id:
                return account
        return None

    def require_account(self, account_id: int) -> Account:
        """Get account by ID.

        Raises:
            AccountNotFoundError: If the account does not exist
        """
        account = self.get_account(account_id)
        if account is None:
            raise AccountNotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self, owner_id: int) -> list[Account]:
        """List an owner's accounts in creation order."""
        return [acc for acc in self.store.accounts if acc.user_id == owner_id]

    def total_balance(self, owner_id: int) -> Decimal:
        """Sum of the balances of an owner's accounts."""
        return sum((acc.balance for acc in self.list_accounts(owner_id)), Decimal("0"))

    # Mutations
    def create_account(
        self,
        owner_id: int,
        account_type: AccountType | str,
        initial_balance: Decimal | int | float | str = Decimal("0"),
    ) -> Account:
        """Create a new account.

        Args:
            owner_id: ID of the owning user
            account_type: Account type (enum member or its name)
            initial_balance: Opening balance

        Returns:
            The new account

        Raises:
            UserNotFoundError: If the owner does not exist
            ValidationError: If the account type is unknown
            InvalidAmountError: If the opening balance is negative on a
                non-credit account
        """
        if not any(user.id == owner_id for user in self.store.users):
            raise UserNotFoundError(user_not_found(owner_id))
        try:
            acc_type = AccountType(account_type)
        except ValueError as e:
            raise ValidationError(f"Unknown account type '{account_type}'") from e
        balance = to_amount(initial_balance)
        if balance < 0 and not acc_type.allows_overdraft:
            raise InvalidAmountError(
                f"Opening balance of a {acc_type.value} account must not be negative"
            )

        account = Account(
            id=next_id(self.store.accounts),
            user_id=owner_id,
            type=acc_type,
            balance=balance,
        )
        with self.store.transaction():
            self.store.accounts.append(account)
        logger.info("Created %s account %d for user %d", acc_type.value, account.id, owner_id)
        return account

    def deposit(
        self,
        account_id: int,
        amount: Decimal | int | float | str,
        description: Optional[str] = None,
        category: TransactionCategory | str | None = None,
    ) -> Transaction:
        """Add money to an account.

        Returns:
            The DEPOSIT transaction, with a positive amount

        Raises:
            InvalidAmountError: If the amount is not positive
            AccountNotFoundError: If the account does not exist
            ValidationError: If the category is unknown
        """
        value = _positive_amount(amount)
        account = self.require_account(account_id)
        tag = _category(category)

        txn = Transaction(
            id=self.log.next_id(),
            account_id=account_id,
            kind=TransactionKind.DEPOSIT,
            amount=value,
            description=_describe(description, TransactionKind.DEPOSIT),
            timestamp=self.clock(),
            category=tag,
        )
        with self.store.transaction():
            self._set_balance(account, account.balance + value)
            self.log.append(txn)
        logger.info("Deposited %s into account %d", value, account_id)
        return txn

    def withdraw(
        self,
        account_id: int,
        amount: Decimal | int | float | str,
        description: Optional[str] = None,
        category: TransactionCategory | str | None = None,
    ) -> Transaction:
        """Take money out of an account.

        Returns:
            The WITHDRAWAL transaction, with a negative amount

        Raises:
            InvalidAmountError: If the amount is not positive
            AccountNotFoundError: If the account does not exist
            ValidationError: If the category is unknown
            InsufficientFundsError: If the balance is below the amount and
                the account is not a credit account
        """
        value = _positive_amount(amount)
        account = self.require_account(account_id)
        tag = _category(category)
        self._check_funds(account, value)

        txn = Transaction(
            id=self.log.next_id(),
            account_id=account_id,
            kind=TransactionKind.WITHDRAWAL,
            amount=-value,
            description=_describe(description, TransactionKind.WITHDRAWAL),
            timestamp=self.clock(),
            category=tag,
        )
        with self.store.transaction():
            self._set_balance(account, account.balance - value)
            self.log.append(txn)
        logger.info("Withdrew %s from account %d", value, account_id)
        return txn

    def transfer(
        self,
        from_id: int,
        to_id: int,
        amount: Decimal | int | float | str,
        description: Optional[str] = None,
    ) -> Transfer:
        """Move money between two accounts.

        Returns:
            Transfer holding the TRANSFER_OUT leg on the source and the
            TRANSFER_IN leg on the destination

        Raises:
            SameAccountError: If source and destination are the same
            InvalidAmountError: If the amount is not positive
            AccountNotFoundError: If either account does not exist
            InsufficientFundsError: If the source cannot cover the amount
        """
        if from_id == to_id:
            raise SameAccountError(same_account(from_id))
        value = _positive_amount(amount)
        source = self.require_account(from_id)
        destination = self.require_account(to_id)
        self._check_funds(source, value)

        text = _describe(description, TransactionKind.TRANSFER_OUT)
        transfer_id = next_transfer_id(self.store.transactions)
        timestamp = self.clock()
        out_id = self.log.next_id()
        outgoing = Transaction(
            id=out_id,
            account_id=from_id,
            kind=TransactionKind.TRANSFER_OUT,
            amount=-value,
            description=f"{text} to Account {to_id}",
            timestamp=timestamp,
            transfer_id=transfer_id,
            counterparty_account_id=to_id,
        )
        incoming = Transaction(
            id=out_id + 1,
            account_id=to_id,
            kind=TransactionKind.TRANSFER_IN,
            amount=value,
            description=f"{text} from Account {from_id}",
            timestamp=timestamp,
            transfer_id=transfer_id,
            counterparty_account_id=from_id,
        )

        with self.store.transaction():
            self._set_balance(source, source.balance - value)
            self._set_balance(destination, destination.balance + value)
            self.log.append(outgoing)
            self.log.append(incoming)
        logger.info("Transferred %s from account %d to account %d", value, from_id, to_id)
        return Transfer(id=transfer_id, outgoing=outgoing, incoming=incoming)

    def _check_funds(self, account: Account, amount: Decimal) -> None:
        if account.balance < amount and not account.type.allows_overdraft:
            raise InsufficientFundsError(insufficient_funds(account.id, account.balance, amount))

    def _set_balance(self, account: Account, balance: Decimal) -> None:
        for index, stored in enumerate(self.store.accounts):
            if stored.id == account.id:
                self.store.accounts[index] = replace(stored, balance=balance)
                return
        raise AccountNotFoundError(account_not_found(account.id))
