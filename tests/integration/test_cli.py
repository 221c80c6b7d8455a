import json

from typer.testing import CliRunner

from jobboard.cli.app import app

runner = CliRunner()


def test_init_reports_schema_state() -> None:
    result = runner.invoke(app, ["init"])
    assert result.exit_code == 0, result.output
    payload = json.loads(result.stdout)
    assert payload["ok"] is True
    assert payload["added_columns"] == []


def test_users_create_and_jobs_list() -> None:
    result = runner.invoke(
        app,
        ["users", "create", "--name", "Erin", "--email", "erin@acme.com", "--password", "secret123", "--role", "employer"],
    )
    assert result.exit_code == 0, result.output
    assert json.loads(result.stdout)["role"] == "employer"

    duplicate = runner.invoke(
        app,
        ["users", "create", "--name", "Erin", "--email", "erin@acme.com", "--password", "secret123"],
    )
    assert duplicate.exit_code != 0

    listing = runner.invoke(app, ["jobs", "list"])
    assert listing.exit_code == 0
    assert json.loads(listing.stdout) == []
