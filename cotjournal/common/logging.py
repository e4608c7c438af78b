from __future__ import annotations

import logging

LOGGER_NAME = "cot_journal"


def setup_logging(level: str = "INFO") -> logging.Logger:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s | %(message)s",
    )
    return logging.getLogger(LOGGER_NAME)
