"""Configuration objects for the dashboard manager client."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Tuple

DEFAULT_TIMEOUT = 0.2
DEFAULT_MAX_RETRIES = 10
DEFAULT_INITIAL_DELAY = 0.5
# Truncated binary exponential backoff, max_delay is the ceiling.
DEFAULT_MAX_DELAY = 1.0
DEFAULT_MULTIPLIER = 2.0


@dataclass(frozen=True)
class BackoffPolicy:
    initial_delay: float = DEFAULT_INITIAL_DELAY
    max_delay: float = DEFAULT_MAX_DELAY
    multiplier: float = DEFAULT_MULTIPLIER

    def __post_init__(self) -> None:
        if self.initial_delay < 0 or self.max_delay < 0:
            raise ValueError("Backoff delays must not be negative")
        if self.multiplier < 1:
            raise ValueError("Backoff multiplier must be at least 1")


@dataclass(frozen=True)
class ClientConfig:
    """Connection parameters shared read-only by every operation.

    Durations are in seconds.
    """

    uri: str
    credentials: Optional[Tuple[str, str]] = None
    api_key: Optional[str] = None
    logger: logging.Logger = field(
        default_factory=lambda: logging.getLogger("dashboard_manager"), compare=False, repr=False
    )
    timeout: float = DEFAULT_TIMEOUT
    max_retries: int = DEFAULT_MAX_RETRIES
    backoff: BackoffPolicy = field(default_factory=BackoffPolicy)
    user_agent: str = "dashboard-manager-python/0.1.0"

    def __post_init__(self) -> None:
        if not self.uri:
            raise ValueError("uri must be configured for the dashboard manager client")
        if self.max_retries < 0:
            raise ValueError("max_retries must not be negative")
        if self.timeout <= 0:
            raise ValueError("timeout must be positive")

    @classmethod
    def from_env(cls, logger: Optional[logging.Logger] = None) -> "ClientConfig":
        uri = os.environ.get("GRAFANA_URI", "")
        user = os.environ.get("GRAFANA_USER")
        password = os.environ.get("GRAFANA_PASSWORD", "")
        credentials = (user, password) if user else None

        backoff = BackoffPolicy(
            initial_delay=float(os.environ.get("GRAFANA_BACKOFF_INITIAL", DEFAULT_INITIAL_DELAY)),
            max_delay=float(os.environ.get("GRAFANA_BACKOFF_MAX", DEFAULT_MAX_DELAY)),
            multiplier=float(os.environ.get("GRAFANA_BACKOFF_MULTIPLIER", DEFAULT_MULTIPLIER)),
        )
        extra = {"logger": logger} if logger is not None else {}
        return cls(
            uri=uri.rstrip("/"),
            credentials=credentials,
            api_key=os.environ.get("GRAFANA_API_KEY") or None,
            timeout=float(os.environ.get("GRAFANA_TIMEOUT", DEFAULT_TIMEOUT)),
            max_retries=int(os.environ.get("GRAFANA_MAX_RETRIES", DEFAULT_MAX_RETRIES)),
            backoff=backoff,
            **extra,
        )


__all__ = [
    "BackoffPolicy",
    "ClientConfig",
    "DEFAULT_INITIAL_DELAY",
    "DEFAULT_MAX_DELAY",
    "DEFAULT_MAX_RETRIES",
    "DEFAULT_MULTIPLIER",
    "DEFAULT_TIMEOUT",
]
