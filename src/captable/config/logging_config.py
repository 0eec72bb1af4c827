"""Logging configuration."""

import logging
import sys
from datetime import datetime
from typing import Optional

from captable.config.settings import get_settings
from captable.core.timezone import EASTERN_TZ

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


class EasternFormatter(logging.Formatter):
    """Stamps records in US/Eastern so log times line up with posting dates."""

    def formatTime(self, record: logging.LogRecord, datefmt: Optional[str] = None) -> str:
        stamp = datetime.fromtimestamp(record.created, EASTERN_TZ)
        return stamp.strftime(datefmt or "%Y-%m-%d %H:%M:%S %Z")


def setup_logging(level: Optional[str] = None) -> None:
    """Configure application logging once, at startup."""
    level_name = (level or get_settings().log_level).upper()

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(EasternFormatter(LOG_FORMAT))
    logging.basicConfig(level=getattr(logging, level_name), handlers=[handler])

    # SQL echo is only useful when debugging the ledger queries themselves
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("uvicorn.access").setLevel(logging.WARNING)
