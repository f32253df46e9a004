"""Single entry point for every request sent to the dashboarding service."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, Optional

import httpx

from .config import ClientConfig
from .events import emit
from .models import RawResponse, RequestDescriptor
from .retry import RetryEngine

logger = logging.getLogger(__name__)


class RequestExecutor:
    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._client = httpx.Client(auth=config.credentials, timeout=config.timeout, transport=transport)
        self._retry = RetryEngine(config.max_retries, config.backoff, config.logger, sleep=sleep)

    def __enter__(self) -> "RequestExecutor":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _headers(self, request: RequestDescriptor) -> Dict[str, str]:
        headers = {"Accept": "application/json", "User-Agent": self._config.user_agent}
        if self._config.api_key:
            headers["Authorization"] = f"Bearer {self._config.api_key}"
        headers.update(request.headers)
        return headers

    def _decode(self, response: httpx.Response, request: RequestDescriptor) -> Any:
        if not response.content:
            return None
        try:
            return json.loads(response.content)
        except ValueError:
            emit(
                self._config.logger,
                logging.WARNING,
                "body_decode_failed",
                method=request.method,
                path=request.path,
                status=response.status_code,
            )
            return None

    def execute(self, request: RequestDescriptor) -> RawResponse:
        url = self._config.uri + request.path
        headers = self._headers(request)

        def attempt() -> RawResponse:
            response = self._client.request(
                request.method,
                url,
                headers=headers,
                params=request.params or None,
                content=request.content,
            )
            logger.debug("%s %s -> %s", request.method, request.path, response.status_code)
            return RawResponse(status=response.status_code, body=self._decode(response, request))

        return self._retry.call(attempt, method=request.method, path=request.path)

    def close(self) -> None:
        self._client.close()


__all__ = ["RequestExecutor"]
