"""Main CLI entry point."""

import click
from fintrack.domain import AccountLedger, BudgetManager, Session, TransactionLog, UserDirectory
from fintrack.logging import setup_logging
from fintrack.storage.factories import create_sqlite_gateway

# Import and register all commands at module level
from fintrack.cli.commands import account, budget, transaction, user


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides FINTRACK_DB_PATH environment variable)",
    envvar="FINTRACK_DB_PATH",
)
@click.option(
    "--log-level",
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
    default="WARNING",
    envvar="FINTRACK_LOG_LEVEL",
    help="Log level for diagnostics written to stderr",
)
@click.pass_context
def cli(ctx, db_path: str | None, log_level: str):
    """Fintrack - Personal finance tracker.

    Register, log in, open accounts, and move money between them with
    deposits, withdrawals and transfers. Tag spending with categories and
    track it against monthly budgets.
    """
    ctx.ensure_object(dict)
    setup_logging(level=log_level)

    # Load state only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is not None:
        gateway = create_sqlite_gateway(database_path=db_path)
        store = gateway.load()
        ctx.obj["gateway"] = gateway
        ctx.obj["store"] = store
        ctx.obj["users"] = UserDirectory(store)
        ctx.obj["ledger"] = AccountLedger(store)
        ctx.obj["log"] = TransactionLog(store)
        ctx.obj["session"] = Session(store)
        ctx.obj["budgets"] = BudgetManager(store)
        ctx.call_on_close(gateway.slots.disconnect)


# Register all commands
user.register_commands(cli)
account.register_commands(cli)
transaction.register_commands(cli)
budget.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
