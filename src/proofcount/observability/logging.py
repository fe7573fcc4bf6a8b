from __future__ import annotations

import logging
import sys
from typing import Optional

from proofcount.settings import get_settings

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s - %(message)s"

# Connector internals are chatty at INFO; they follow the service level only when debugging.
_NOISY_LOGGERS = ("databricks.sql", "urllib3")


def configure_logging(level: Optional[str] = None) -> None:
    log_level = (level or get_settings().log_level).upper()
    logging.basicConfig(level=log_level, format=LOG_FORMAT, stream=sys.stdout)

    library_level = logging.DEBUG if log_level == "DEBUG" else logging.WARNING
    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)
