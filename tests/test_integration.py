"""Integration tests for end-to-end workflows."""

from decimal import Decimal

from fintrack.cli.main import cli


def _invoke(cli_runner, db_path, *args, **kwargs):
    result = cli_runner.invoke(cli, ["--db-path", db_path, *args], **kwargs)
    assert result.exit_code == 0, result.output
    return result


def test_full_workflow(cli_runner, temp_db, gateway):
    """Test register → login → accounts → deposit → withdraw → transfer → history → logout."""
    db_path = temp_db.database_path

    _invoke(cli_runner, db_path, "register", "Ada", "ada@example.com", "--password", "pw1")
    _invoke(cli_runner, db_path, "register", "Bob", "bob@example.com", "--password", "pw2")

    _invoke(cli_runner, db_path, "login", "ada@example.com", "--password", "pw1")
    _invoke(cli_runner, db_path, "account", "create", "--type", "checking", "--balance", "100")
    _invoke(cli_runner, db_path, "account", "create", "--type", "savings")

    _invoke(cli_runner, db_path, "deposit", "1", "25.50", "-d", "Gift")
    _invoke(cli_runner, db_path, "withdraw", "1", "5.50")
    _invoke(cli_runner, db_path, "transfer", "1", "2", "70", "-d", "Rainy day")

    result = _invoke(cli_runner, db_path, "account", "list")
    assert "Total: $120.00" in result.output

    result = _invoke(cli_runner, db_path, "history", "2")
    assert "TRANSFER IN" in result.output
    assert "Rainy day from Account 1" in result.output

    _invoke(cli_runner, db_path, "logout")

    _invoke(cli_runner, db_path, "login", "bob@example.com", "--password", "pw2")
    result = _invoke(cli_runner, db_path, "account", "list")
    assert "No accounts yet" in result.output

    result = cli_runner.invoke(cli, ["--db-path", db_path, "history", "1"])
    assert result.exit_code == 1
    assert "Account 1 not found" in result.output

    store = gateway.load()
    assert [acc.balance for acc in store.accounts] == [Decimal("50.00"), Decimal("70.00")]
    assert len(store.transactions) == 4
    assert store.current_user_id == 2


def test_help_does_not_touch_database(cli_runner, tmp_path):
    """Test --help works without creating the database."""
    db_path = tmp_path / "never.db"

    result = cli_runner.invoke(cli, ["--db-path", str(db_path), "--help"])

    assert result.exit_code == 0
    assert "Personal finance tracker" in result.output
    assert not db_path.exists()
