"""Shared pytest fixtures for fintrack tests."""

import logging
import tempfile
import os
from datetime import datetime, timedelta, UTC
from decimal import Decimal
import pytest

from fintrack.domain.budgets import BudgetManager
from fintrack.domain.entities import AccountType
from fintrack.domain.ledger import AccountLedger
from fintrack.domain.session import Session
from fintrack.domain.transactions import TransactionLog
from fintrack.domain.users import UserDirectory
from fintrack.storage.factories import create_sqlite_store
from fintrack.storage.gateway import PersistenceGateway


class FakeClock:
    """Clock that moves forward one minute per reading."""

    def __init__(self, start: datetime = datetime(2024, 1, 15, 9, 0, tzinfo=UTC)):
        self.now = start

    def __call__(self) -> datetime:
        current = self.now
        self.now = self.now + timedelta(minutes=1)
        return current


@pytest.fixture
def temp_db():
    """Create a temporary slot store for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_store(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def gateway(temp_db):
    """Create a PersistenceGateway over the temporary slot store."""
    return PersistenceGateway(temp_db)


@pytest.fixture
def store(gateway):
    """Load a LedgerStore attached to the temporary slot store."""
    return gateway.load()


@pytest.fixture
def clock():
    """Create a deterministic clock."""
    return FakeClock()


@pytest.fixture
def user_directory(store):
    """Create a UserDirectory over the test store."""
    return UserDirectory(store)


@pytest.fixture
def ledger(store, clock):
    """Create an AccountLedger over the test store."""
    return AccountLedger(store, clock=clock)


@pytest.fixture
def budget_manager(store, clock):
    """Create a BudgetManager over the test store."""
    return BudgetManager(store, clock=clock)


@pytest.fixture
def transaction_log(store):
    """Create a TransactionLog over the test store."""
    return TransactionLog(store)


@pytest.fixture
def session(store):
    """Create a Session over the test store."""
    return Session(store)


@pytest.fixture
def sample_user(user_directory):
    """Register a sample user."""
    return user_directory.register(name="Test User", email="test@example.com", password="secret123")


@pytest.fixture
def other_user(user_directory):
    """Register a second user."""
    return user_directory.register(name="Other User", email="other@example.com", password="hunter22")


@pytest.fixture
def sample_account(ledger, sample_user):
    """Create a checking account with 100.00."""
    return ledger.create_account(sample_user.id, AccountType.CHECKING, Decimal("100.00"))


@pytest.fixture
def empty_account(ledger, sample_user):
    """Create a savings account with a zero balance."""
    return ledger.create_account(sample_user.id, AccountType.SAVINGS, Decimal("0"))


@pytest.fixture
def credit_account(ledger, sample_user):
    """Create a credit account with a zero balance."""
    return ledger.create_account(sample_user.id, AccountType.CREDIT, Decimal("0"))


@pytest.fixture
def logged_in(session, sample_user):
    """Log the sample user in and return it."""
    session.login(sample_user)
    return sample_user


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()


@pytest.fixture(autouse=True)
def reset_fintrack_logger():
    """Drop handlers installed by setup_logging so tests don't leak them."""
    yield
    logger = logging.getLogger("fintrack")
    for handler in logger.handlers[:]:
        logger.removeHandler(handler)
    logger.setLevel(logging.NOTSET)
