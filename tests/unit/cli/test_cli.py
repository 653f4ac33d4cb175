"""Tests for the command line interface."""

from unittest.mock import patch

from typer.testing import CliRunner

from src.cli import app as cli_app
from src.cli.server_commands import APP_IMPORT_PATH

runner = CliRunner()


def test_help_lists_commands():
    result = runner.invoke(cli_app, ["--help"])

    assert result.exit_code == 0
    assert "serve" in result.output
    assert "db" in result.output


def test_serve_runs_uvicorn():
    with patch("uvicorn.run") as run:
        result = runner.invoke(cli_app, ["serve", "--port", "9001", "--host", "127.0.0.1"])

    assert result.exit_code == 0
    run.assert_called_once()
    args, kwargs = run.call_args
    assert args == (APP_IMPORT_PATH,)
    assert kwargs["host"] == "127.0.0.1"
    assert kwargs["port"] == 9001
    assert kwargs["reload"] is False


def test_db_init_creates_tables():
    with patch("src.user_api.runtime.init_db.init_db") as init_db:
        result = runner.invoke(cli_app, ["db", "init"])

    assert result.exit_code == 0, result.output
    init_db.assert_called_once_with(drop_existing=False)


def test_db_init_drop_requires_confirmation():
    with patch("src.user_api.runtime.init_db.init_db") as init_db:
        result = runner.invoke(cli_app, ["db", "init", "--drop"], input="n\n")

    assert result.exit_code != 0
    init_db.assert_not_called()


def test_init_db_against_configured_database():
    from src.user_api.runtime.init_db import init_db

    # conftest points the configuration at an in-memory database
    init_db(drop_existing=True)


def test_serve_defaults_to_configured_host_and_port():
    from src.user_api.runtime.config.config_data import ConfigData
    from src.user_api.runtime.context import with_context

    override = ConfigData(app={"host": "10.0.0.5", "port": 9100})
    with with_context(override), patch("uvicorn.run") as run:
        result = runner.invoke(cli_app, ["serve"])

    assert result.exit_code == 0, result.output
    _, kwargs = run.call_args
    assert kwargs["host"] == "10.0.0.5"
    assert kwargs["port"] == 9100
