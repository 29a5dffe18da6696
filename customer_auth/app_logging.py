"""JSON log output for services that embed this package."""

import logging
from typing import Optional

from pythonjsonlogger import jsonlogger

from . import config


def setup_logger(level: Optional[str] = None) -> logging.Logger:
    """Attach a JSON formatter to the root logger and return it."""
    handler = logging.StreamHandler()
    formatter = jsonlogger.JsonFormatter(
        '%(asctime)s %(levelname)s %(name)s %(message)s',
        rename_fields={'levelname': 'level', 'asctime': 'timestamp'}
    )
    handler.setFormatter(formatter)
    logger = logging.getLogger()
    logger.addHandler(handler)
    logger.setLevel(level or config.LOG_LEVEL)
    return logger
