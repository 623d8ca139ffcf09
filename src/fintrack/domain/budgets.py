"""Monthly category budgets.

Spending is not stored on the budget. It is the sum of the user's
categorized withdrawals in the current calendar month (UTC), read from the
transaction log, so a new month starts from zero without a reset.
"""

from dataclasses import dataclass, replace
from datetime import datetime, UTC
from decimal import Decimal
from typing import Callable, Optional

from fintrack.domain.entities import Budget, TransactionCategory, TransactionKind
from fintrack.domain.errors import (
    BudgetNotFoundError,
    InvalidAmountError,
    UserNotFoundError,
    ValidationError,
    budget_not_found,
    user_not_found,
)
from fintrack.domain.identifiers import next_id
from fintrack.domain.ledger import to_amount
from fintrack.domain.store import LedgerStore
from fintrack.logging import get_logger

logger = get_logger(__name__)

DEFAULT_ALERT_THRESHOLD = Decimal("0.8")


@dataclass(frozen=True)
class BudgetStatus:
    """A budget together with this month's spending against it."""

    budget: Budget
    spent: Decimal

    @property
    def remaining(self) -> Decimal:
        return self.budget.monthly_limit - self.spent

    @property
    def spent_ratio(self) -> Decimal:
        """Spent share of the limit; 0 for a zero limit."""
        if self.budget.monthly_limit <= 0:
            return Decimal("0")
        return self.spent / self.budget.monthly_limit

    @property
    def is_over(self) -> bool:
        return self.spent > self.budget.monthly_limit

    @property
    def should_alert(self) -> bool:
        return self.budget.alert_enabled and self.spent_ratio >= self.budget.alert_threshold

    @property
    def label(self) -> str:
        if self.is_over:
            return "OVER BUDGET"
        if self.should_alert:
            return "APPROACHING LIMIT"
        if self.spent_ratio < Decimal("0.5"):
            return "GOOD"
        return "ON TRACK"


def _category(value: TransactionCategory | str) -> TransactionCategory:
    try:
        return TransactionCategory(value.upper() if isinstance(value, str) else value)
    except ValueError as e:
        raise ValidationError(f"Unknown category '{value}'") from e


class BudgetManager:
    """Service for a user's monthly category budgets."""

    def __init__(self, store: LedgerStore, clock: Optional[Callable[[], datetime]] = None):
        """Initialize budget manager.

        Args:
            store: LedgerStore instance
            clock: Returns the current time, which selects the month being
                reported (defaults to the current UTC time)
        """
        self.store = store
        self.clock = clock or (lambda: datetime.now(UTC))

    def get_budget(self, user_id: int, category: TransactionCategory | str) -> Optional[Budget]:
        """Get a user's budget for a category, or None if there is none."""
        cat = _category(category)
        for budget in self.store.budgets:
            if budget.user_id == user_id and budget.category == cat:
                return budget
        return None

    def list_budgets(self, user_id: int) -> list[Budget]:
        """List a user's budgets in creation order."""
        return [b for b in self.store.budgets if b.user_id == user_id]

    def set_budget(
        self,
        user_id: int,
        category: TransactionCategory | str,
        monthly_limit: Decimal | int | float | str,
        alert_threshold: Decimal | int | float | str = DEFAULT_ALERT_THRESHOLD,
        alert_enabled: bool = True,
    ) -> Budget:
        """Create a budget, or replace the user's existing one for the category.

        Args:
            user_id: ID of the owning user
            category: Category the budget limits
            monthly_limit: Spending limit per calendar month
            alert_threshold: Share of the limit (0 to 1) that triggers an alert
            alert_enabled: Whether the budget raises alerts at all

        Returns:
            The stored budget

        Raises:
            UserNotFoundError: If the user does not exist
            ValidationError: If the category is unknown or the threshold is
                outside 0 to 1
            InvalidAmountError: If the limit is negative
        """
        if not any(user.id == user_id for user in self.store.users):
            raise UserNotFoundError(user_not_found(user_id))
        cat = _category(category)
        limit = to_amount(monthly_limit)
        if limit < 0:
            raise InvalidAmountError(f"Monthly limit must not be negative, got {limit}")
        threshold = to_amount(alert_threshold)
        if not Decimal("0") <= threshold <= Decimal("1"):
            raise ValidationError(f"Alert threshold must be between 0 and 1, got {threshold}")

        existing = self.get_budget(user_id, cat)
        with self.store.transaction():
            if existing is None:
                budget = Budget(
                    id=next_id(self.store.budgets),
                    user_id=user_id,
                    category=cat,
                    monthly_limit=limit,
                    alert_threshold=threshold,
                    alert_enabled=alert_enabled,
                )
                self.store.budgets.append(budget)
            else:
                budget = replace(
                    existing,
                    monthly_limit=limit,
                    alert_threshold=threshold,
                    alert_enabled=alert_enabled,
                )
                index = self.store.budgets.index(existing)
                self.store.budgets[index] = budget
        logger.info("Set %s budget %d for user %d to %s", cat.value, budget.id, user_id, limit)
        return budget

    def remove_budget(self, user_id: int, category: TransactionCategory | str) -> Budget:
        """Delete a user's budget for a category.

        Raises:
            BudgetNotFoundError: If the user has no budget for the category
        """
        cat = _category(category)
        budget = self.get_budget(user_id, cat)
        if budget is None:
            raise BudgetNotFoundError(budget_not_found(cat.value))
        with self.store.transaction():
            self.store.budgets.remove(budget)
        logger.info("Removed %s budget %d for user %d", cat.value, budget.id, user_id)
        return budget

    def spent(self, user_id: int, category: TransactionCategory | str) -> Decimal:
        """This month's categorized withdrawals across the user's accounts."""
        cat = _category(category)
        now = self.clock().astimezone(UTC)
        account_ids = {acc.id for acc in self.store.accounts if acc.user_id == user_id}
        total = Decimal("0")
        for txn in self.store.transactions:
            if txn.kind is not TransactionKind.WITHDRAWAL or txn.category != cat:
                continue
            if txn.account_id not in account_ids:
                continue
            when = txn.timestamp.astimezone(UTC)
            if (when.year, when.month) == (now.year, now.month):
                total += -txn.amount
        return total

    def status(self, budget: Budget) -> BudgetStatus:
        """Report this month's spending against a budget."""
        return BudgetStatus(budget=budget, spent=self.spent(budget.user_id, budget.category))

    def statuses(self, user_id: int) -> list[BudgetStatus]:
        return [self.status(b) for b in self.list_budgets(user_id)]

    def over_budgets(self, user_id: int) -> list[BudgetStatus]:
        """Budgets whose spending exceeds the limit."""
        return [s for s in self.statuses(user_id) if s.is_over]

    def alerts_needed(self, user_id: int) -> list[BudgetStatus]:
        """Budgets past their alert threshold but not yet over the limit."""
        return [s for s in self.statuses(user_id) if s.should_alert and not s.is_over]

    def total_budget(self, user_id: int) -> Decimal:
        return sum((b.monthly_limit for b in self.list_budgets(user_id)), Decimal("0"))

    def total_spent(self, user_id: int) -> Decimal:
        return sum((s.spent for s in self.statuses(user_id)), Decimal("0"))
