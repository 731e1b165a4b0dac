from __future__ import annotations

import json
import logging
from datetime import datetime, timezone


def get_logger(name: str = "resto_admin") -> logging.Logger:
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(logging.INFO)
    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    return logger


def log_action(
    logger: logging.Logger,
    module: str,
    action: str,
    user_id: int | None,
    restaurant_id: int | None,
    trace_id: str | None,
    outcome: str,
    level: int = logging.INFO,
) -> None:
    logger.log(
        level,
        json.dumps(
            {
                "ts": datetime.now(timezone.utc).isoformat(),
                "level": logging.getLevelName(level),
                "module": module,
                "action": action,
                "user_id": user_id,
                "restaurant_id": restaurant_id,
                "trace_id": trace_id,
                "outcome": outcome,
            }
        ),
    )
