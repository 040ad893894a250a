# core/log_config.py
"""
Logging setup for the service.

All modules log under the ``repair_tracker`` hierarchy. configure_logging()
attaches a console handler and, when LOG_FILE is set, a rotating file handler.
Calling it again replaces the handlers it installed before.
"""
import logging
from logging.handlers import RotatingFileHandler

LOGGER_NAME = "repair_tracker"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: str = "INFO", log_file: str | None = None) -> logging.Logger:
    logger = logging.getLogger(LOGGER_NAME)
    for handler in list(logger.handlers):
        if getattr(handler, "_repair_tracker", False):
            logger.removeHandler(handler)
            handler.close()

    logger.setLevel(getattr(logging, level.upper(), logging.INFO))
    formatter = logging.Formatter(LOG_FORMAT)

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    console._repair_tracker = True
    logger.addHandler(console)

    if log_file:
        fh = RotatingFileHandler(log_file, maxBytes=2_000_000, backupCount=2, encoding="utf-8")
        fh.setFormatter(formatter)
        fh._repair_tracker = True
        logger.addHandler(fh)

    return logger
