"""Account management commands."""

import click
from fintrack.cli.account_resolution import require_user_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.entities import AccountType
from fintrack.domain.errors import DomainError
from fintrack.utils.amount_parser import format_amount, parse_amount


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.option(
    "--type",
    "account_type",
    type=click.Choice([t.value for t in AccountType], case_sensitive=False),
    default=AccountType.CHECKING.value,
    show_default=True,
    help="Account type",
)
@click.option("--balance", default="0", help="Opening balance (e.g., 100.00)")
@click.pass_context
def create_account(ctx, account_type: str, balance: str):
    """Open a new account for the logged-in user.

    Examples:
        fintrack account create --type savings --balance 250
        fintrack account create --type credit
    """
    ledger = ctx.obj["ledger"]
    user = require_user_or_exit(ctx)

    try:
        opening = parse_amount(balance)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        account = ledger.create_account(
            owner_id=user.id, account_type=account_type.upper(), initial_balance=opening
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Created {account.type.value} account (ID: {account.id})")
    click.echo(f"  Balance: {format_amount(account.balance)}")


@account_group.command("list")
@click.pass_context
def list_accounts(ctx):
    """List the logged-in user's accounts."""
    ledger = ctx.obj["ledger"]
    user = require_user_or_exit(ctx)

    accounts = ledger.list_accounts(user.id)
    if not accounts:
        click.echo("No accounts yet. Create one with 'fintrack account create'.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 50)
    for acc in accounts:
        click.echo(f"ID: {acc.id:3d} | {acc.type.value:12s} | {format_amount(acc.balance):>14s}")
    click.echo("-" * 50)
    click.echo(f"Total: {format_amount(ledger.total_balance(user.id))}")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
