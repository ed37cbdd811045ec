import logging
import sys
from typing import Optional

from triage.core.config import settings


def setup_logging(level: Optional[str] = None) -> None:
    """Send service logs to stdout at the configured level."""
    log_level = (level or settings.LOG_LEVEL).upper()
    logging.basicConfig(
        level=getattr(logging, log_level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
