"""Mapper functions to convert between domain entities and slot records.

Records are plain JSON-compatible dicts. Decimals travel as strings and
timestamps as ISO 8601, so a save followed by a load gives back equal
entities.
"""

from datetime import datetime, UTC
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

from dateutil.parser import isoparse

from fintrack.domain.entities import (
    Account,
    AccountType,
    Budget,
    Transaction,
    TransactionCategory,
    TransactionKind,
    User,
)


class MalformedRecordError(ValueError):
    """A stored record is missing fields or holds invalid values."""


def _field(record: dict[str, Any], name: str) -> Any:
    if not isinstance(record, dict):
        raise MalformedRecordError(f"Expected an object, got {type(record).__name__}")
    if name not in record:
        raise MalformedRecordError(f"Missing field '{name}'")
    return record[name]


def _int(record: dict[str, Any], name: str) -> int:
    value = _field(record, name)
    if isinstance(value, bool) or not isinstance(value, int):
        raise MalformedRecordError(f"Field '{name}' must be an integer")
    return value


def _optional_int(record: dict[str, Any], name: str) -> Optional[int]:
    if record.get(name) is None:
        return None
    return _int(record, name)


def _str(record: dict[str, Any], name: str) -> str:
    value = _field(record, name)
    if not isinstance(value, str):
        raise MalformedRecordError(f"Field '{name}' must be a string")
    return value


def _decimal(record: dict[str, Any], name: str) -> Decimal:
    value = _field(record, name)
    try:
        amount = Decimal(str(value))
    except InvalidOperation as e:
        raise MalformedRecordError(f"Field '{name}' is not a number") from e
    if not amount.is_finite():
        raise MalformedRecordError(f"Field '{name}' is not a finite number")
    return amount


def _timestamp(record: dict[str, Any], name: str) -> datetime:
    try:
        value = isoparse(_str(record, name))
    except ValueError as e:
        raise MalformedRecordError(f"Field '{name}' is not an ISO timestamp") from e
    # Timestamps without an offset were written as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value


def _bool(record: dict[str, Any], name: str) -> bool:
    value = _field(record, name)
    if not isinstance(value, bool):
        raise MalformedRecordError(f"Field '{name}' must be true or false")
    return value


def _category(record: dict[str, Any], name: str) -> Optional[TransactionCategory]:
    value = record.get(name) if isinstance(record, dict) else None
    if value is None:
        return None
    try:
        return TransactionCategory(value)
    except ValueError as e:
        raise MalformedRecordError(f"Unknown category '{value}'") from e


def user_to_record(user: User) -> dict[str, Any]:
    """Convert domain User to a slot record."""
    return {
        "id": user.id,
        "name": user.name,
        "email": user.email,
        "passwordHash": user.password_hash,
    }


def user_from_record(record: dict[str, Any]) -> User:
    """Convert a slot record to domain User."""
    return User(
        id=_int(record, "id"),
        name=_str(record, "name"),
        email=_str(record, "email"),
        password_hash=_str(record, "passwordHash"),
    )


def account_to_record(account: Account) -> dict[str, Any]:
    """Convert domain Account to a slot record."""
    return {
        "id": account.id,
        "userId": account.user_id,
        "type": account.type.value,
        "balance": str(account.balance),
    }


def account_from_record(record: dict[str, Any]) -> Account:
    """Convert a slot record to domain Account."""
    type_name = _str(record, "type")
    try:
        account_type = AccountType(type_name)
    except ValueError as e:
        raise MalformedRecordError(f"Unknown account type '{type_name}'") from e
    return Account(
        id=_int(record, "id"),
        user_id=_int(record, "userId"),
        type=account_type,
        balance=_decimal(record, "balance"),
    )


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    """Convert domain Transaction to a slot record."""
    return {
        "id": txn.id,
        "accountId": txn.account_id,
        "type": txn.kind.value,
        "amount": str(txn.amount),
        "description": txn.description,
        "timestamp": txn.timestamp.isoformat(),
        "transferId": txn.transfer_id,
        "counterpartyAccountId": txn.counterparty_account_id,
        "category": txn.category.value if txn.category else None,
    }


def transaction_from_record(record: dict[str, Any]) -> Transaction:
    """Convert a slot record to domain Transaction."""
    type_name = _str(record, "type")
    try:
        kind = TransactionKind(type_name)
    except ValueError as e:
        raise MalformedRecordError(f"Unknown transaction type '{type_name}'") from e
    return Transaction(
        id=_int(record, "id"),
        account_id=_int(record, "accountId"),
        kind=kind,
        amount=_decimal(record, "amount"),
        description=_str(record, "description"),
        timestamp=_timestamp(record, "timestamp"),
        transfer_id=_optional_int(record, "transferId"),
        counterparty_account_id=_optional_int(record, "counterpartyAccountId"),
        category=_category(record, "category"),
    )


def budget_to_record(budget: Budget) -> dict[str, Any]:
    """Convert domain Budget to a slot record."""
    return {
        "id": budget.id,
        "userId": budget.user_id,
        "category": budget.category.value,
        "monthlyLimit": str(budget.monthly_limit),
        "alertThreshold": str(budget.alert_threshold),
        "alertEnabled": budget.alert_enabled,
    }


def budget_from_record(record: dict[str, Any]) -> Budget:
    """Convert a slot record to domain Budget."""
    category = _category(record, "category")
    if category is None:
        raise MalformedRecordError("Missing field 'category'")
    return Budget(
        id=_int(record, "id"),
        user_id=_int(record, "userId"),
        category=category,
        monthly_limit=_decimal(record, "monthlyLimit"),
        alert_threshold=_decimal(record, "alertThreshold"),
        alert_enabled=_bool(record, "alertEnabled"),
    )
