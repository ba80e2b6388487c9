from __future__ import annotations

import logging
from typing import IO, Mapping

LOG_PREFIX = "PR-Bot"
LOGGER_NAMES = ("pr_bot", "pr_bot_size")


def configure_logging(
    level: int | str = logging.INFO,
    prefix: str = LOG_PREFIX,
    stream: IO[str] | None = None,
) -> None:
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(f"[{prefix}]: %(message)s"))
    for name in LOGGER_NAMES:
        logger = logging.getLogger(name)
        logger.handlers.clear()
        logger.addHandler(handler)
        logger.setLevel(level)
        logger.propagate = False


def log_key_values(logger: logging.Logger, values: Mapping[str, object]) -> None:
    if not values:
        return
    width = max(len(key) for key in values)
    for key, value in values.items():
        logger.info("  %s  '%s'", key.ljust(width), value)
