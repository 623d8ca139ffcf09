"""User directory domain service."""

import re
from typing import Optional

from fintrack.domain.entities import User
from fintrack.domain.errors import (
    EmailTakenError,
    InvalidCredentialsError,
    ValidationError,
    email_taken,
    invalid_credentials,
)
from fintrack.domain.identifiers import next_id
from fintrack.domain.passwords import hash_password, verify_password
from fintrack.domain.store import LedgerStore
from fintrack.logging import get_logger

logger = get_logger(__name__)

EMAIL_PATTERN = re.compile(r"[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}")


class UserDirectory:
    """Service for registering and authenticating users."""

    def __init__(self, store: LedgerStore):
        """Initialize user directory.

        Args:
            store: LedgerStore instance
        """
        self.store = store

    def register(self, name: str, email: str, password: str) -> User:
        """Register a new user.

        Args:
            name: Display name
            email: Email address, unique across users (exact match)
            password: Plaintext password, stored only as a salted hash

        Returns:
            The new user

        Raises:
            ValidationError: If the name is blank or the email is malformed
            EmailTakenError: If a user with the same email exists
        """
        if not name or not name.strip():
            raise ValidationError("Name must not be empty")
        if not EMAIL_PATTERN.fullmatch(email):
            raise ValidationError(f"Invalid email address '{email}'")
        if self.get_user_by_email(email) is not None:
            raise EmailTakenError(email_taken(email))

        user = User(
            id=next_id(self.store.users),
            name=name,
            email=email,
            password_hash=hash_password(password),
        )
        with self.store.transaction():
            self.store.users.append(user)
        logger.info("Registered user %d", user.id)
        return user

    def authenticate(self, email: str, password: str) -> User:
        """Check credentials and return the matching user.

        Raises:
            InvalidCredentialsError: If the email is unknown or the password
                is wrong. Both cases produce the same message.
        """
        user = self.get_user_by_email(email)
        if user is None or not verify_password(password, user.password_hash):
            raise InvalidCredentialsError(invalid_credentials())
        return user

    def get_user(self, user_id: int) -> Optional[User]:
        """Get user by ID, or None if not found."""
        for user in self.store.users:
            if user.id == user_id:
                return user
        return None

    def get_user_by_email(self, email: str) -> Optional[User]:
        """Get user by exact email, or None if not found."""
        for user in self.store.users:
            if user.email == email:
                return user
        return None

    def list_users(self) -> list[User]:
        """List all users in registration order."""
        return list(self.store.users)
