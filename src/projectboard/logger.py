# SPDX-License-Identifier: MIT

import logging

from rich.logging import RichHandler

LOG_FORMAT = "%(message)s"


def configure_logging(level: str = "WARNING") -> None:
    """Route the package's module loggers through rich."""
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[RichHandler(rich_tracebacks=True, show_path=False)],
        force=True,
    )
