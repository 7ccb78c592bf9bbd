"""
Unified logging configuration for the calendar gateway.

Usage:
    from calendar_gateway.utils.logging_utils import get_logger

    logger = get_logger(__name__)
    logger.info("Starting process...")
    logger.error("Error occurred", exc_info=True)
"""

import logging
import sys
from typing import Optional

from colorlog import ColoredFormatter

from calendar_gateway.config import Config


# ═══════════════════════════════════════════════════════════════════════
# Logger Configuration
# ═══════════════════════════════════════════════════════════════════════

_loggers: dict[str, logging.Logger] = {}
_configured = False


def configure_logging():
    """
    Configure the root logger with consistent settings.

    Safe to call more than once; only the first call has an effect.
    """
    global _configured

    if _configured:
        return

    log_level = Config.get_log_level()

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(log_level)

    if Config.is_development():
        formatter = ColoredFormatter(
            "%(log_color)s%(asctime)s - %(name)s - %(levelname)s%(reset)s - %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            log_colors={
                'DEBUG': 'cyan',
                'INFO': 'green',
                'WARNING': 'yellow',
                'ERROR': 'red',
                'CRITICAL': 'red,bg_white',
            }
        )
    else:
        formatter = logging.Formatter(
            Config.LOG_FORMAT,
            datefmt="%Y-%m-%d %H:%M:%S"
        )

    console_handler.setFormatter(formatter)
    root_logger.addHandler(console_handler)

    # Silence noisy third-party loggers
    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("googleapiclient").setLevel(logging.WARNING)
    logging.getLogger("google.auth").setLevel(logging.WARNING)
    logging.getLogger("requests_oauthlib").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)

    _configured = True


def get_logger(name: str, level: Optional[int] = None) -> logging.Logger:
    """
    Get a logger instance for the specified module.

    Parameters
    ----------
    name : str
        Logger name (typically __name__)
    level : int, optional
        Override log level for this logger

    Returns
    -------
    logging.Logger
        Configured logger instance
    """
    if not _configured:
        configure_logging()

    if name in _loggers:
        return _loggers[name]

    logger = logging.getLogger(name)

    if level is not None:
        logger.setLevel(level)

    _loggers[name] = logger
    return logger
