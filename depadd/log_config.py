"""Logging configuration for DepAdd."""

import logging


def configure_logging(level: str | None = None) -> None:
    """Configure Python logging for the process.

    ``level`` normally comes from the validated ``log_level`` setting.
    Diagnostics go to stderr; user-facing output is printed by the CLI.
    """
    logging.basicConfig(
        level=(level or "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )
