"""User registration and session commands."""

import click
from fintrack.cli.error_handling import handle_domain_error
from fintrack.domain.errors import DomainError


@click.command("register")
@click.argument("name")
@click.argument("email")
@click.password_option(help="Password (prompted twice if omitted)")
@click.pass_context
def register_user(ctx, name: str, email: str, password: str):
    """Register a new user.

    Examples:
        fintrack register "Ada Lovelace" ada@example.com
    """
    users = ctx.obj["users"]

    try:
        user = users.register(name=name, email=email, password=password)
    except DomainError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Registered user '{user.name}' (ID: {user.id})")
    click.echo("You can now log in with 'fintrack login'.")


@click.command("login")
@click.argument("email")
@click.option("--password", prompt=True, hide_input=True, help="Password (prompted if omitted)")
@click.pass_context
def login(ctx, email: str, password: str):
    """Log in as a registered user."""
    users = ctx.obj["users"]
    session = ctx.obj["session"]

    try:
        user = users.authenticate(email=email, password=password)
    except DomainError as e:
        handle_domain_error(ctx, e)
    session.login(user)
    click.echo(f"Welcome, {user.name}!")


@click.command("logout")
@click.pass_context
def logout(ctx):
    """Log out the current user."""
    session = ctx.obj["session"]

    if session.current() is None:
        click.echo("Nobody is logged in.")
        return
    session.logout()
    click.echo("Logged out successfully.")


@click.command("whoami")
@click.pass_context
def whoami(ctx):
    """Show the logged-in user."""
    user = ctx.obj["session"].current()
    if user is None:
        click.echo("Not logged in.")
        return
    click.echo(f"{user.name} <{user.email}> (ID: {user.id})")


def register_commands(cli):
    """Register user commands with main CLI."""
    cli.add_command(register_user)
    cli.add_command(login)
    cli.add_command(logout)
    cli.add_command(whoami)
