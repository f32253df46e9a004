from __future__ import annotations

import json
import logging
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest

from dashboard_manager.config import BackoffPolicy, ClientConfig

Route = Tuple[str, str]


def make_config(**overrides: Any) -> ClientConfig:
    defaults: Dict[str, Any] = dict(
        uri="http://grafana.test",
        credentials=("admin", "secret"),
        logger=logging.getLogger("tests.grafana"),
        max_retries=2,
        backoff=BackoffPolicy(initial_delay=0.0, max_delay=0.0, multiplier=2.0),
    )
    defaults.update(overrides)
    return ClientConfig(**defaults)


class FakeGrafana:
    """Routes requests by (method, path) and records every request seen."""

    def __init__(self, routes: Dict[Route, Any]) -> None:
        self.routes = routes
        self.requests: List[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        route = self.routes.get((request.method, request.url.path))
        if route is None:
            return httpx.Response(404, json={"message": "Not found"})
        if callable(route):
            return route(request)
        status, body = route
        if body is None:
            return httpx.Response(status)
        return httpx.Response(status, json=body)

    def calls(self, method: str, path: str) -> int:
        return sum(1 for r in self.requests if r.method == method and r.url.path == path)

    def body(self, index: int = -1) -> Any:
        return json.loads(self.requests[index].content)


def logged_events(caplog: pytest.LogCaptureFixture, event: Optional[str] = None) -> List[Dict[str, Any]]:
    events = []
    for record in caplog.records:
        try:
            payload = json.loads(record.getMessage())
        except ValueError:
            continue
        if isinstance(payload, dict) and (event is None or payload.get("event") == event):
            events.append(payload)
    return events
