"""Logging setup shared by the CLI and library consumers."""

import logging

from pathwise.shared.config import Settings, get_settings


def setup_logging(settings: Settings | None = None, *, verbose: bool = False) -> None:
    """Configure application logging.

    Sets up JSON-line logging for production
    and human-readable format for development.

    Args:
        settings: Settings to read the level and environment from
        verbose: Force DEBUG level regardless of settings
    """
    settings = settings or get_settings()
    if verbose:
        log_level = logging.DEBUG
    else:
        log_level = getattr(logging, settings.log_level.upper(), logging.INFO)

    if settings.is_production:
        log_format = (
            '{"timestamp": "%(asctime)s", "level": "%(levelname)s", '
            '"logger": "%(name)s", "message": "%(message)s"}'
        )
    else:
        log_format = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    logging.basicConfig(
        level=log_level,
        format=log_format,
        datefmt="%Y-%m-%dT%H:%M:%S%z",
        force=True,
    )

    # httpx logs every request at INFO, which would echo URLs into the wizard
    logging.getLogger("httpx").setLevel(logging.DEBUG if verbose else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
