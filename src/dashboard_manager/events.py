"""Structured event logging."""

from __future__ import annotations

import json
import logging
from typing import Any


def emit(logger: logging.Logger, level: int, event: str, **fields: Any) -> None:
    record = {"event": event}
    record.update(fields)
    logger.log(level, json.dumps(record, default=str))


__all__ = ["emit"]
