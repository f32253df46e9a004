from __future__ import annotations

from typing import Any, Callable, List

import httpx
import pytest

from dashboard_manager.grafana import GrafanaClient

from tests.helpers import make_config


@pytest.fixture()
def sleeps() -> List[float]:
    return []


@pytest.fixture()
def make_client(sleeps: List[float]):
    clients: List[GrafanaClient] = []

    def factory(handler: Callable[[httpx.Request], httpx.Response], **overrides: Any) -> GrafanaClient:
        client = GrafanaClient(
            make_config(**overrides),
            transport=httpx.MockTransport(handler),
            sleep=sleeps.append,
        )
        clients.append(client)
        return client

    yield factory
    for client in clients:
        client.close()
