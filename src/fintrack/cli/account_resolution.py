"""CLI helpers for session and account ownership checks."""

from __future__ import annotations

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import Account, User
from fintrack.domain.errors import DomainError, account_not_found


def require_user_or_exit(ctx: click.Context) -> User:
    """Return the logged-in user, or exit with a CLI error."""
    try:
        return ctx.obj["session"].require_current()
    except DomainError as exc:
        handle_domain_error(ctx, exc)


def resolve_owned_account_or_exit(ctx: click.Context, user: User, account_id: int) -> Account:
    """Return one of ``user``'s accounts, or exit with a CLI error.

    Accounts owned by someone else are reported as not found.
    """
    account = ctx.obj["ledger"].get_account(account_id)
    if account is None or account.user_id != user.id:
        click.echo(f"Error: {account_not_found(account_id)}", err=True)
        ctx.exit(1)
    return account
