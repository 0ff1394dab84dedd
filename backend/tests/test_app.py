"""
Records Service - Application Lifecycle and CLI Tests
======================================================

What:  Startup database check, app factory wiring, access log levels, and the
       typer command line.
"""

import logging
from unittest.mock import patch

import pytest
from typer.testing import CliRunner

from records_service import __version__
from records_service.cli import app as cli_app
from records_service.config import Settings
from records_service.database import DatabaseSessionManager
from records_service.main import create_app, lifespan
from records_service.middleware.logging import level_for_status

runner = CliRunner()


class TestLifespan:

    @pytest.mark.asyncio
    async def test_startup_with_reachable_database(self, settings):
        app = create_app(settings)

        async with lifespan(app):
            assert isinstance(app.state.db, DatabaseSessionManager)

    @pytest.mark.asyncio
    async def test_startup_fails_when_database_unreachable(self, tmp_path, caplog):
        settings = Settings(
            db={"url": f"sqlite+aiosqlite:///{tmp_path / 'missing' / 'dir' / 'records.db'}"}
        )
        app = create_app(settings)

        with caplog.at_level(logging.CRITICAL):
            with pytest.raises(Exception):
                async with lifespan(app):
                    pass

        assert any("Unable to connect to database" in r.getMessage() for r in caplog.records)

    def test_settings_are_injected(self, settings):
        app = create_app(settings)

        assert app.state.settings is settings
        assert str(app.state.db.url) == settings.db.url


class TestAccessLogLevels:

    @pytest.mark.parametrize(
        "status,level",
        [(200, logging.INFO), (400, logging.WARNING), (404, logging.WARNING), (500, logging.ERROR)],
    )
    def test_level_for_status(self, status, level):
        assert level_for_status(status) == level


class TestCli:

    @pytest.fixture(autouse=True)
    def isolated(self, monkeypatch, tmp_path):
        for name in ("RECORDS_LOGLEVEL", "RECORDS_LISTEN", "RECORDS_DB_URL"):
            monkeypatch.delenv(name, raising=False)
        monkeypatch.chdir(tmp_path)
        with patch("records_service.cli.setup_logging"):
            yield

    def test_version(self):
        result = runner.invoke(cli_app, ["--version"])

        assert result.exit_code == 0
        assert __version__ in result.output

    def test_serves_on_listen_address(self, tmp_path):
        config = tmp_path / "config.toml"
        config.write_text('listen = "127.0.0.1:9099"\nloglevel = "info"\n')

        with patch("records_service.cli.uvicorn.run") as run:
            result = runner.invoke(cli_app, ["--config", str(config)])

        assert result.exit_code == 0
        run.assert_called_once()
        assert run.call_args.kwargs["host"] == "127.0.0.1"
        assert run.call_args.kwargs["port"] == 9099

    def test_invalid_loglevel_is_fatal(self, monkeypatch):
        monkeypatch.setenv("RECORDS_LOGLEVEL", "loud")

        with patch("records_service.cli.uvicorn.run") as run:
            result = runner.invoke(cli_app, [])

        assert result.exit_code == 1
        run.assert_not_called()

    def test_unknown_database_driver_is_fatal(self, monkeypatch):
        monkeypatch.setenv("RECORDS_DB_URL", "nosuchdb://localhost/records")

        with patch("records_service.cli.uvicorn.run") as run:
            result = runner.invoke(cli_app, [])

        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        run.assert_not_called()

    def test_missing_config_file_is_fatal(self, tmp_path):
        with patch("records_service.cli.uvicorn.run") as run:
            result = runner.invoke(cli_app, ["--config", str(tmp_path / "nope.toml")])

        assert result.exit_code == 1
        run.assert_not_called()
