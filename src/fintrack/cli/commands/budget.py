"""Monthly budget commands."""

import click
from fintrack.cli.account_resolution import require_user_or_exit
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.budgets import DEFAULT_ALERT_THRESHOLD
from fintrack.domain.entities import TransactionCategory
from fintrack.domain.errors import DomainError
from fintrack.utils.amount_parser import format_amount, parse_amount

CATEGORY_CHOICE = click.Choice([c.value for c in TransactionCategory], case_sensitive=False)


@click.group()
def budget_group():
    """Manage monthly spending budgets."""
    pass


@budget_group.command("set")
@click.argument("category", type=CATEGORY_CHOICE)
@click.argument("limit")
@click.option(
    "--threshold",
    type=click.FloatRange(0, 1),
    default=float(DEFAULT_ALERT_THRESHOLD),
    show_default=True,
    help="Share of the limit that triggers an alert",
)
@click.option("--alerts/--no-alerts", default=True, help="Warn when spending nears the limit")
@click.pass_context
def set_budget(ctx, category: str, limit: str, threshold: float, alerts: bool):
    """Set the monthly LIMIT for a spending CATEGORY.

    Withdrawals tagged with the category count against the limit.

    Examples:
        fintrack budget set food 400
        fintrack budget set bills 1,200 --threshold 0.9
    """
    budgets = ctx.obj["budgets"]
    user = require_user_or_exit(ctx)

    try:
        value = parse_amount(limit)
    except ValueError as e:
        click.echo(f"Error: Invalid amount format: {e}", err=True)
        ctx.exit(1)

    try:
        budget = budgets.set_budget(
            user.id, category, value, alert_threshold=threshold, alert_enabled=alerts
        )
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(
        f"Budget for {budget.category.value} set to {format_amount(budget.monthly_limit)} per month"
    )


@budget_group.command("remove")
@click.argument("category", type=CATEGORY_CHOICE)
@click.pass_context
def remove_budget(ctx, category: str):
    """Remove the budget for a CATEGORY."""
    budgets = ctx.obj["budgets"]
    user = require_user_or_exit(ctx)

    try:
        budget = budgets.remove_budget(user.id, category)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Removed budget for {budget.category.value}")


@budget_group.command("list")
@click.pass_context
def list_budgets(ctx):
    """Show this month's spending against each budget."""
    budgets = ctx.obj["budgets"]
    user = require_user_or_exit(ctx)

    statuses = budgets.statuses(user.id)
    if not statuses:
        click.echo("No budgets yet. Set one with 'fintrack budget set'.")
        return

    click.echo("\nBudgets this month:")
    click.echo("-" * 78)
    for status in statuses:
        click.echo(
            f"{status.budget.category.value:13s} | "
            f"{format_amount(status.spent):>12s} of {format_amount(status.budget.monthly_limit):>12s} | "
            f"{status.spent_ratio:6.1%} | {status.label}"
        )
    click.echo("-" * 78)
    click.echo(
        f"Total: {format_amount(budgets.total_spent(user.id))} "
        f"of {format_amount(budgets.total_budget(user.id))}"
    )


@budget_group.command("alerts")
@click.pass_context
def budget_alerts(ctx):
    """List budgets that are over the limit or close to it."""
    budgets = ctx.obj["budgets"]
    user = require_user_or_exit(ctx)

    over = budgets.over_budgets(user.id)
    near = budgets.alerts_needed(user.id)
    if not over and not near:
        click.echo("All budgets are within their limits.")
        return

    for status in over:
        click.echo(
            f"OVER BUDGET: {status.budget.category.value} "
            f"({format_amount(status.spent)} of {format_amount(status.budget.monthly_limit)})"
        )
    for status in near:
        click.echo(
            f"APPROACHING LIMIT: {status.budget.category.value} "
            f"({format_amount(status.spent)} of {format_amount(status.budget.monthly_limit)})"
        )


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(budget_group, name="budget")
