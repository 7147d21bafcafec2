from __future__ import annotations

import logging
import sys

LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(level: str) -> None:
    logging.basicConfig(
        level=(level or "INFO").upper(),
        format=LOG_FORMAT,
        stream=sys.stdout,
        force=True,
    )
    # aiogram's event log is noisy at INFO.
    logging.getLogger("aiogram.event").setLevel(logging.WARNING)
