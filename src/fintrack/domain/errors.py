"""Shared domain error messages and error types."""

from decimal import Decimal


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class AuthenticationError(DomainError):
    """Credentials were rejected or no user is logged in."""


class EmailTakenError(ConflictError):
    """A user with the same email is already registered."""


class InvalidCredentialsError(AuthenticationError):
    """Unknown email or wrong password. The two are not distinguished."""


class NotAuthenticatedError(AuthenticationError):
    """An operation needs a logged-in user and there is none."""


class AccountNotFoundError(NotFoundError):
    """Referenced account does not exist."""


class UserNotFoundError(NotFoundError):
    """Referenced user does not exist."""


class BudgetNotFoundError(NotFoundError):
    """No budget exists for the requested category."""


class InsufficientFundsError(DomainError):
    """A debit would take a non-credit account below its balance."""


class SameAccountError(ValidationError):
    """Transfer source and destination are the same account."""


class InvalidAmountError(ValidationError):
    """Amount is not a usable positive quantity."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def user_not_found(user_id: int) -> str:
    """Return message for missing user."""
    return f"User {user_id} not found"


def email_taken(email: str) -> str:
    """Return message for an already registered email."""
    return f"A user with email '{email}' already exists"


def invalid_credentials() -> str:
    """Return the generic login failure message."""
    return "Invalid email or password"


def insufficient_funds(account_id: int, balance: Decimal, amount: Decimal) -> str:
    """Return message for a debit larger than the available balance."""
    return (
        f"Insufficient funds in account {account_id}: "
        f"balance {balance:.2f}, requested {amount:.2f}"
    )


def same_account(account_id: int) -> str:
    """Return message for a transfer onto its own source."""
    return f"Cannot transfer from account {account_id} to itself"


def budget_not_found(category: str) -> str:
    """Return message for a category without a budget."""
    return f"No budget set for category {category}"
