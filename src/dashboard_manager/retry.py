"""Bounded retry with truncated exponential backoff for transport failures."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Tuple, Type, TypeVar, Union

import httpx
from tenacity import RetryCallState, Retrying, retry_if_exception_type, stop_after_attempt

from .config import BackoffPolicy
from .events import emit
from .models import RawResponse
from .status import Status

T = TypeVar("T")

# Timeouts and aborted exchanges only. Anything else (refused connection,
# bad URL, ...) is a configuration defect and propagates.
RETRYABLE_ERRORS: Tuple[Type[BaseException], ...] = (
    httpx.TimeoutException,
    httpx.ReadError,
    httpx.WriteError,
    httpx.RemoteProtocolError,
)


def backoff_delay(attempt: int, policy: BackoffPolicy) -> float:
    """Delay in seconds before retry number ``attempt`` (1-based)."""
    return min(policy.initial_delay * policy.multiplier ** (attempt - 1), policy.max_delay)


class RetryEngine:
    def __init__(
        self,
        max_retries: int,
        backoff: BackoffPolicy,
        logger: logging.Logger,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._max_retries = max_retries
        self._backoff = backoff
        self._logger = logger
        self._sleep = sleep

    def call(self, attempt: Callable[[], T], **context: Any) -> Union[T, RawResponse]:
        """Run ``attempt`` until it returns, fails non-retryably or the budget is spent.

        An exhausted budget returns ``RawResponse(Status.CONNECTION_ERROR)``
        instead of raising. ``context`` fields are added to every retry event.
        """
        retrying = Retrying(
            stop=stop_after_attempt(self._max_retries + 1),
            wait=self._wait,
            retry=retry_if_exception_type(RETRYABLE_ERRORS),
            before_sleep=lambda state: self._on_retry(state, context),
            retry_error_callback=lambda state: self._fallback(state, context),
            sleep=self._sleep,
        )
        return retrying(attempt)

    def _wait(self, state: RetryCallState) -> float:
        return backoff_delay(state.attempt_number, self._backoff)

    def _on_retry(self, state: RetryCallState, context: Dict[str, Any]) -> None:
        exc = state.outcome.exception() if state.outcome else None
        emit(
            self._logger,
            logging.WARNING,
            "request_retry",
            reason=type(exc).__name__,
            retries_remaining=self._max_retries + 1 - state.attempt_number,
            delay=state.next_action.sleep if state.next_action else None,
            **context,
        )

    def _fallback(self, state: RetryCallState, context: Dict[str, Any]) -> RawResponse:
        exc = state.outcome.exception() if state.outcome else None
        emit(
            self._logger,
            logging.ERROR,
            "request_exhausted",
            reason=type(exc).__name__,
            attempts=state.attempt_number,
            **context,
        )
        return RawResponse(status=Status.CONNECTION_ERROR)


__all__ = ["RETRYABLE_ERRORS", "RetryEngine", "backoff_delay"]
