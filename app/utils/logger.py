# app/utils/logger.py
import logging
import sys

from app.config import settings

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def _build_logger(name: str = "copygen") -> logging.Logger:
    log = logging.getLogger(name)
    if not log.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(_FORMAT))
        log.addHandler(handler)
    log.setLevel(getattr(logging, (settings.log_level or "INFO").upper(), logging.INFO))
    log.propagate = False
    return log


logger = _build_logger()
