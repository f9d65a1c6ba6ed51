"""Logging setup for the toolbridge package"""

import logging
from pathlib import Path

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(
    level: str = "WARNING", log_file: str | None = None, console: Console | None = None
) -> logging.Logger:
    """Attach console (and optionally file) handlers to the toolbridge logger.

    Calling it again replaces the handlers installed by a previous call.
    """
    logger = logging.getLogger("toolbridge")
    logger.setLevel(level.upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_toolbridge_handler", False):
            logger.removeHandler(handler)
            handler.close()

    console_handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    console_handler._toolbridge_handler = True
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file).expanduser()
        log_path.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(log_path)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
        file_handler._toolbridge_handler = True
        logger.addHandler(file_handler)

    logger.propagate = False
    return logger
