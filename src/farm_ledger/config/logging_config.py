"""Logging configuration."""

import logging
import sys

from farm_ledger.config.settings import get_settings

LEDGER_LOGGER = "farm_ledger"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging() -> None:
    """
    Configure application logging.

    ``log_level`` applies to the ledger's own loggers only; third-party
    libraries stay at WARNING. ``log_sql`` turns on SQLAlchemy statement
    logging, which shows the row locks and version checks behind each command.
    """
    settings = get_settings()

    logging.basicConfig(
        level=logging.WARNING,
        format=LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    logging.getLogger(LEDGER_LOGGER).setLevel(getattr(logging, settings.log_level.upper()))
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.log_sql else logging.WARNING
    )
