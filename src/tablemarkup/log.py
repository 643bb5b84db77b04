import logging

from rich.console import Console
from rich.logging import RichHandler

from tablemarkup.settings import get_settings


LOGGER_NAME = "tablemarkup"

def configure_logging(level: str | None = None, console: Console | None = None) -> logging.Logger:
    """Attach a RichHandler to the package logger at the configured level.

    Calling it again replaces the handler instead of stacking a second one.
    """
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(console=console, show_path=False, rich_tracebacks=True)
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    logger.setLevel(level or get_settings().app.log_level)
    return logger
