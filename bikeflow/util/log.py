# bikeflow/util/log.py
import logging

from colorama import Fore, Style

_LEVEL_COLORS = {
    logging.DEBUG: Fore.WHITE,
    logging.INFO: Fore.CYAN,
    logging.WARNING: Fore.YELLOW,
    logging.ERROR: Fore.RED,
    logging.CRITICAL: Fore.RED + Style.BRIGHT,
}

_HANDLER_NAME = "bikeflow-console"


class ColorFormatter(logging.Formatter):
    """
    Prefixes each record with its level name in a per-level colour.
    """

    def format(self, record: logging.LogRecord) -> str:
        color = _LEVEL_COLORS.get(record.levelno, "")
        prefix = f"{color}{record.levelname:<7}{Style.RESET_ALL}"
        msg = super().format(record)
        return f"{prefix} {msg}"


def setup_logging(level="INFO") -> logging.Logger:
    """
    Attach a single coloured console handler to the package logger.
    Calling it again only updates the level.
    """
    logger = logging.getLogger("bikeflow")
    logger.setLevel(level)

    for h in logger.handlers:
        if h.get_name() == _HANDLER_NAME:
            return logger

    handler = logging.StreamHandler()
    handler.set_name(_HANDLER_NAME)
    handler.setFormatter(ColorFormatter("%(name)s: %(message)s"))
    logger.addHandler(handler)
    return logger
