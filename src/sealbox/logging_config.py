"""Opt-in logging setup for applications embedding SealBox.

The library itself only emits records on its module loggers; it never
installs handlers on import.
"""

import logging
import os
import sys

LOG_LEVEL_ENV = "SEALBOX_LOG_LEVEL"


def configure_logging(level: int | None = None) -> None:
    # Configure root logger once; keep output simple for terminals.
    if level is None:
        name = os.getenv(LOG_LEVEL_ENV, "INFO").upper()
        level = logging.getLevelName(name)
        if not isinstance(level, int):
            level = logging.INFO
    logging.basicConfig(
        level=level,
        format="[%(asctime)s] %(levelname)s %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        stream=sys.stdout,
    )
