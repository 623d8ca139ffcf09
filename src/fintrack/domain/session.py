"""Current-user session."""

from typing import Optional

from fintrack.domain.entities import User
from fintrack.domain.errors import NotAuthenticatedError, UserNotFoundError, user_not_found
from fintrack.domain.store import LedgerStore
from fintrack.logging import get_logger

logger = get_logger(__name__)


class Session:
    """Single process-wide slot for the logged-in user.

    Only the user id is held; ``current`` resolves it against the store.
    """

    def __init__(self, store: LedgerStore):
        self.store = store

    def login(self, user: User) -> None:
        """Make ``user`` the current user.

        Raises:
            UserNotFoundError: If ``user`` is not registered in the store
        """
        if user not in self.store.users:
            raise UserNotFoundError(user_not_found(user.id))
        with self.store.transaction():
            self.store.current_user_id = user.id
        logger.info("User %d logged in", user.id)

    def logout(self) -> None:
        """Clear the current user."""
        previous = self.store.current_user_id
        with self.store.transaction():
            self.store.current_user_id = None
        if previous is not None:
            logger.info("User %d logged out", previous)

    def current(self) -> Optional[User]:
        """Return the current user, or None."""
        user_id = self.store.current_user_id
        if user_id is None:
            return None
        for user in self.store.users:
            if user.id == user_id:
                return user
        return None

    def require_current(self) -> User:
        """Return the current user.

        Raises:
            NotAuthenticatedError: If nobody is logged in
        """
        user = self.current()
        if user is None:
            raise NotAuthenticatedError("Not logged in. Run 'fintrack login' first.")
        return user
