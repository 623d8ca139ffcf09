"""Deposit, withdrawal, transfer and history commands."""

from datetime import UTC, datetime

import click
from dateutil.parser import isoparse
from fintrack.cli.account_resolution import (
    require_user_or_exit,
    resolve_owned_account_or_exit,
)
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import TransactionCategory
from fintrack.domain.errors import DomainError
from fintrack.domain.transactions import DEFAULT_HISTORY_LIMIT
from fintrack.utils.amount_parser import format_amount, parse_amount


def _parse_amount_or_exit(ctx: click.Context, amount: str):
    try:
        return parse_amount(amount)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)


def _warn_about_budget(ctx: click.Context, user_id: int, category: str) -> None:
    budgets = ctx.obj["budgets"]
    budget = budgets.get_budget(user_id, category)
    if budget is None:
        return
    status = budgets.status(budget)
    spent = f"{format_amount(status.spent)} of {format_amount(budget.monthly_limit)}"
    if status.is_over:
        click.echo(f"Warning: {budget.category.value} budget exceeded ({spent})", err=True)
    elif status.should_alert:
        click.echo(
            f"Note: {budget.category.value} budget at {status.spent_ratio:.0%} ({spent})", err=True
        )

category_option = click.option(
    "--category",
    "-c",
    type=click.Choice([c.value for c in TransactionCategory], case_sensitive=False),
    help="Spending category",
)


@click.command("deposit")
@click.argument("account_id", type=int)
@click.argument("amount")
@click.option("--description", "-d", help="Transaction description")
@category_option
@click.pass_context
def deposit(ctx, account_id: int, amount: str, description: str | None, category: str | None):
    """Deposit AMOUNT into one of your accounts.

    Examples:
        fintrack deposit 1 250.00 --description "Paycheck"
    """
    ledger = ctx.obj["ledger"]
    user = require_user_or_exit(ctx)
    resolve_owned_account_or_exit(ctx, user, account_id)
    value = _parse_amount_or_exit(ctx, amount)

    try:
        ledger.deposit(account_id, value, description, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)
    balance = ledger.require_account(account_id).balance
    click.echo(f"Deposit successful! New balance: {format_amount(balance)}")


@click.command("withdraw")
@click.argument("account_id", type=int)
@click.argument("amount")
@click.option("--description", "-d", help="Transaction description")
@category_option
@click.pass_context
def withdraw(ctx, account_id: int, amount: str, description: str | None, category: str | None):
    """Withdraw AMOUNT from one of your accounts."""
    ledger = ctx.obj["ledger"]
    user = require_user_or_exit(ctx)
    resolve_owned_account_or_exit(ctx, user, account_id)
    value = _parse_amount_or_exit(ctx, amount)

    try:
        ledger.withdraw(account_id, value, description, category=category)
    except DomainError as e:
        handle_domain_error(ctx, e)
    balance = ledger.require_account(account_id).balance
    click.echo(f"Withdrawal successful! New balance: {format_amount(balance)}")
    if category is not None:
        _warn_about_budget(ctx, user.id, category)


@click.command("transfer")
@click.argument("from_id", type=int)
@click.argument("to_id", type=int)
@click.argument("amount")
@click.option("--description", "-d", help="Transaction description")
@click.pass_context
def transfer(ctx, from_id: int, to_id: int, amount: str, description: str | None):
    """Transfer AMOUNT from one of your accounts to any account.

    The destination may belong to another user.

    Examples:
        fintrack transfer 1 2 50 --description "Rent share"
    """
    ledger = ctx.obj["ledger"]
    user = require_user_or_exit(ctx)
    resolve_owned_account_or_exit(ctx, user, from_id)
    value = _parse_amount_or_exit(ctx, amount)

    try:
        result = ledger.transfer(from_id, to_id, value, description)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Transfer successful! Moved {format_amount(result.amount)} "
        f"from account {result.from_account_id} to account {result.to_account_id}"
    )


@click.command("history")
@click.argument("account_id", type=int)
@click.option(
    "--limit",
    type=click.IntRange(min=0),
    default=DEFAULT_HISTORY_LIMIT,
    show_default=True,
    help="Number of transactions to show",
)
@click.pass_context
def history(ctx, account_id: int, limit: int):
    """Show the most recent transactions of one of your accounts."""
    log = ctx.obj["log"]
    user = require_user_or_exit(ctx)
    resolve_owned_account_or_exit(ctx, user, account_id)

    transactions = log.history(account_id, limit=limit)
    if not transactions:
        click.echo("No transactions yet.")
        return

    click.echo(f"\nTransaction history for account {account_id}:")
    click.echo("-" * 90)
    for txn in transactions:
        when = txn.timestamp.astimezone().strftime("%Y-%m-%d %H:%M:%S")
        kind = txn.kind.value.replace("_", " ")
        tag = f" [{txn.category.value}]" if txn.category else ""
        click.echo(
            f"{when} | {kind:12s} | {format_amount(txn.amount, signed=True):>12s} | {txn.description}{tag}"
        )


@click.command("stats")
@click.argument("account_id", type=int)
@click.option("--date", "day", help="Day to report volume for (YYYY-MM-DD, default: today in UTC)")
@click.pass_context
def stats(ctx, account_id: int, day: str | None):
    """Show activity figures for one of your accounts.

    Examples:
        fintrack stats 1
        fintrack stats 1 --date 2024-01-15
    """
    log = ctx.obj["log"]
    user = require_user_or_exit(ctx)
    account = resolve_owned_account_or_exit(ctx, user, account_id)

    if day is None:
        on = datetime.now(UTC).date()
    else:
        try:
            on = isoparse(day).date()
        except ValueError as e:
            click.echo(f"Error: Invalid date '{day}': {e}", err=True)
            ctx.exit(1)

    click.echo(f"\nAccount {account.id} ({account.type.value})")
    click.echo("-" * 40)
    click.echo(f"Balance:            {format_amount(account.balance)}")
    click.echo(f"Transactions:       {len(log.list_for_account(account.id))}")
    click.echo(f"Average amount:     {format_amount(log.average_amount(account.id), signed=True)}")
    click.echo(f"Volume on {on.isoformat()}: {format_amount(log.daily_volume(account.id, on))}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(deposit)
    cli.add_command(withdraw)
    cli.add_command(transfer)
    cli.add_command(history)
    cli.add_command(stats)
