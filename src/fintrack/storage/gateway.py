"""Persistence gateway between LedgerStore and a SlotStore.

State lives in five slots. ``load`` runs once at startup and ``save`` after
every successful mutation, overwriting all of them together.
"""

import json
from typing import Any, Callable, Optional, TypeVar

from fintrack.domain.store import LedgerStore
from fintrack.logging import get_logger
from fintrack.storage.base import SlotStore
from fintrack.storage.mappers import (
    MalformedRecordError,
    account_from_record,
    account_to_record,
    budget_from_record,
    budget_to_record,
    transaction_from_record,
    transaction_to_record,
    user_from_record,
    user_to_record,
)

logger = get_logger(__name__)

T = TypeVar("T")

USERS_SLOT = "fintrack_users"
ACCOUNTS_SLOT = "fintrack_accounts"
TRANSACTIONS_SLOT = "fintrack_transactions"
BUDGETS_SLOT = "fintrack_budgets"
CURRENT_USER_SLOT = "fintrack_current_user"

SLOT_KEYS = (USERS_SLOT, ACCOUNTS_SLOT, TRANSACTIONS_SLOT, BUDGETS_SLOT, CURRENT_USER_SLOT)


class PersistenceGateway:
    """Loads and saves LedgerStore state through a SlotStore."""

    def __init__(self, slots: SlotStore):
        """Initialize persistence gateway.

        Args:
            slots: SlotStore instance
        """
        self.slots = slots

    def load(self) -> LedgerStore:
        """Build a LedgerStore from the stored slots.

        Slots that are missing or unreadable load as empty. Startup never
        fails on bad data.

        Returns:
            LedgerStore attached to this gateway
        """
        users = self._load_list(USERS_SLOT, user_from_record)
        accounts = self._load_list(ACCOUNTS_SLOT, account_from_record)
        transactions = self._load_list(TRANSACTIONS_SLOT, transaction_from_record)
        budgets = self._load_list(BUDGETS_SLOT, budget_from_record)
        current_user_id = self._load_current_user(user_ids={user.id for user in users})

        logger.debug(
            "Loaded %d users, %d accounts, %d transactions, %d budgets",
            len(users),
            len(accounts),
            len(transactions),
            len(budgets),
        )
        return LedgerStore(
            users=users,
            accounts=accounts,
            transactions=transactions,
            budgets=budgets,
            current_user_id=current_user_id,
            gateway=self,
        )

    def save(self, store: LedgerStore) -> None:
        """Serialize and overwrite every slot."""
        self.slots.write_slots(
            {
                USERS_SLOT: json.dumps([user_to_record(u) for u in store.users]),
                ACCOUNTS_SLOT: json.dumps([account_to_record(a) for a in store.accounts]),
                TRANSACTIONS_SLOT: json.dumps(
                    [transaction_to_record(t) for t in store.transactions]
                ),
                BUDGETS_SLOT: json.dumps([budget_to_record(b) for b in store.budgets]),
                CURRENT_USER_SLOT: json.dumps(store.current_user_id),
            }
        )
        logger.debug("Saved state to slots")

    def _read_json(self, key: str) -> Any:
        raw = self.slots.read_slot(key)
        if raw is None:
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError:
            logger.warning("Slot '%s' is not valid JSON, treating it as empty", key)
            return None

    def _load_list(self, key: str, from_record: Callable[[Any], T]) -> list[T]:
        data = self._read_json(key)
        if data is None:
            return []
        if not isinstance(data, list):
            logger.warning("Slot '%s' does not hold a list, treating it as empty", key)
            return []
        try:
            return [from_record(record) for record in data]
        except MalformedRecordError as e:
            logger.warning("Slot '%s' has a malformed record (%s), treating it as empty", key, e)
            return []

    def _load_current_user(self, user_ids: set[int]) -> Optional[int]:
        data = self._read_json(CURRENT_USER_SLOT)
        if data is None:
            return None
        if isinstance(data, bool) or not isinstance(data, int):
            logger.warning("Slot '%s' does not hold a user id, ignoring it", CURRENT_USER_SLOT)
            return None
        if data not in user_ids:
            logger.warning("Current user %d is not registered, ignoring session", data)
            return None
        return data
