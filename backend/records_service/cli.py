"""CLI entry point for the records service.

Usage:
    records-service                          # defaults + RECORDS_* environment
    records-service --config ./config.toml   # overlay a TOML, JSON or YAML file
    records-service --version
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

import typer
import uvicorn
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from records_service import __version__
from records_service.config import ConfigFileError, load_settings
from records_service.main import create_app, setup_logging

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="records-service",
    help="HTTP CRUD service for the records table",
    add_completion=False,
)


def _version_callback(value: bool) -> None:
    if value:
        typer.echo(f"records-service v{__version__}")
        raise typer.Exit()


@app.command()
def serve(
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file (.toml, .json or .yaml)"
    ),
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show the version and exit",
    ),
) -> None:
    """Load the configuration and serve the records API."""
    setup_logging(logging.INFO)

    if config is not None:
        logger.info("Parsing config: %s", config)
    else:
        logger.info("Config file is not specified.")

    try:
        settings = load_settings(config)
    except (ConfigFileError, ValidationError) as e:
        logger.critical("Invalid configuration: %s", e)
        raise typer.Exit(1)

    setup_logging(settings.log_level)

    try:
        application = create_app(settings)
    except (SQLAlchemyError, ImportError) as e:
        # Unknown URL scheme or missing database driver
        logger.critical("Unable to set up database engine: %s", e)
        raise typer.Exit(1)

    logger.info("Starting HTTP server at %s...", settings.listen)
    uvicorn.run(
        application,
        host=settings.listen_host,
        port=settings.listen_port,
        lifespan="on",
        log_config=None,
    )
    logger.info("HTTP server terminated")


def main() -> None:
    app()
