import logging

from .config import get_log_level

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str | int | None = None) -> logging.Logger:
    """
    Attach a stream handler to the package logger. For applications; the
    library itself only ever logs through module loggers.
    """
    if level is None:
        level = get_log_level()

    logger = logging.getLogger("nostr_sdk")
    logger.setLevel(level)
    if not any(isinstance(h, logging.StreamHandler) for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
    return logger
