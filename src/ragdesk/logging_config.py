# src/ragdesk/logging_config.py
"""Logging setup for applications embedding ragdesk.

The library only creates module loggers; handlers are installed here, by
the CLI or by the host application.
"""

import logging
import os
import sys

from rich.console import Console
from rich.logging import RichHandler

LOG_LEVEL_ENV = "RAGDESK_LOG_LEVEL"

# Third-party loggers that are chatty at INFO
NOISY_LOGGERS = ("httpx", "httpcore", "LiteLLM", "litellm", "chromadb", "urllib3")


def configure_logging(level: str | int | None = None, plain: bool = False) -> None:
    """Configure the root logger.

    Args:
        level: Log level name or number. Defaults to RAGDESK_LOG_LEVEL, then WARNING.
        plain: Use a plain stream handler with ISO timestamps instead of Rich.
    """
    if level is None:
        level = os.environ.get(LOG_LEVEL_ENV, "WARNING")
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.WARNING

    # Remove any existing handlers to avoid duplicates
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    handler: logging.Handler
    if plain:
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(
            logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                datefmt="%Y-%m-%dT%H:%M:%S",
            )
        )
    else:
        handler = RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))

    root_logger.setLevel(level)
    root_logger.addHandler(handler)

    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))
