"""Grafana implementation of the dashboard manager capabilities."""

from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Dict, List, Mapping, Optional

import httpx

from .base import DashboardManager
from .config import ClientConfig
from .events import emit
from .executor import RequestExecutor
from .models import DashboardSummary, Outcome, Panel, RawResponse, RequestDescriptor
from .status import Status, classify

JSON_HEADERS = {"Content-Type": "application/json"}

SWITCH_ORG_OVERRIDES = {401: Status.NOT_FOUND}
CREATE_ORG_OVERRIDES = {409: Status.ALREADY_EXISTS}
UPDATE_ORG_OVERRIDES = {400: Status.ALREADY_EXISTS}
ADD_ORG_USER_OVERRIDES = {
    400: Status.ORG_NOT_FOUND,
    404: Status.USER_NOT_FOUND,
    409: Status.ALREADY_EXISTS,
}
CREATE_USER_OVERRIDES = {409: Status.ALREADY_EXISTS, 400: Status.INVALID_DATA}
UPDATE_USER_OVERRIDES = {
    409: Status.ALREADY_EXISTS,
    400: Status.MISSING_MANDATORY_DATA,
    422: Status.MISSING_MANDATORY_DATA,
}


def _json_request(method: str, path: str, payload: Any) -> RequestDescriptor:
    return RequestDescriptor(
        path=path,
        method=method,
        headers=dict(JSON_HEADERS),
        content=json.dumps(payload, separators=(",", ":")),
    )


def _outcome(
    response: RawResponse,
    overrides: Optional[Mapping[int, Status]] = None,
    payload: Optional[Callable[[Any], Dict[str, Any]]] = None,
) -> Outcome:
    status = classify(response.status, overrides)
    if status is Status.OK and payload is not None:
        return Outcome(status=status, **payload(response.body))
    return Outcome(status=status)


def _body_get(body: Any, key: str) -> Any:
    return body.get(key) if isinstance(body, dict) else None


class GrafanaClient(DashboardManager):
    """Administrative client for a Grafana server.

    Every operation returns an :class:`Outcome`; transport timeouts are
    retried and degrade to ``Status.CONNECTION_ERROR`` rather than raising.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        transport: Optional[httpx.BaseTransport] = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self._config = config
        self._executor = RequestExecutor(config, transport=transport, sleep=sleep)

    def __enter__(self) -> "GrafanaClient":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def close(self) -> None:
        self._executor.close()

    # Organization context

    def switch_org(self, org_id: int) -> Outcome:
        response = self._executor.execute(
            RequestDescriptor(path=f"/api/user/using/{org_id}", method="POST", headers=dict(JSON_HEADERS))
        )
        return _outcome(response, SWITCH_ORG_OVERRIDES)

    def with_org(self, org_id: int, operation: Callable[..., Outcome], *args: Any) -> Outcome:
        """Run ``operation(*args)`` after switching the active organization.

        The operation is skipped and the switch status returned when the
        switch does not succeed.
        """
        switched = self.switch_org(org_id)
        if switched.status is not Status.OK:
            return Outcome(status=switched.status)
        return operation(*args)

    # Dashboards and panels in the current organization

    def get_current_dashboard_panels(self, uid: str) -> Outcome:
        response = self._executor.execute(RequestDescriptor(path=f"/api/dashboards/uid/{uid}"))

        def shape(body: Any) -> Dict[str, Any]:
            panels = _body_get(_body_get(body, "dashboard"), "panels")
            if not isinstance(panels, list):
                panels = []
            ds_url = _body_get(_body_get(body, "meta"), "url")
            return {
                "panels": [
                    Panel(id=panel.get("id"), title=panel.get("title"), ds_url=ds_url)
                    for panel in panels
                    if isinstance(panel, dict)
                ]
            }

        return _outcome(response, payload=shape)

    def _search_dashboards(self) -> RawResponse:
        return self._executor.execute(RequestDescriptor(path="/api/search", params={"type": "dash-db"}))

    def _listed_dashboards(self, body: Any) -> Optional[List[Dict[str, Any]]]:
        """Search hits that identify a dashboard, or None when the body is not a listing."""
        if not isinstance(body, list):
            emit(self._config.logger, logging.WARNING, "search_body_invalid", body_type=type(body).__name__)
            return None
        items = []
        for position, item in enumerate(body):
            if isinstance(item, dict) and item.get("uid"):
                items.append(item)
            else:
                emit(self._config.logger, logging.WARNING, "search_item_skipped", position=position)
        return items

    def get_current_org_panels(self) -> Outcome:
        response = self._search_dashboards()
        status = classify(response.status)
        if status is not Status.OK:
            return Outcome(status=status)
        items = self._listed_dashboards(response.body)
        if items is None:
            return Outcome(status=Status.ERROR)

        panels: List[Panel] = []
        degraded: List[str] = []
        for item in items:
            uid = item["uid"]
            result = self.get_current_dashboard_panels(uid)
            if result.ok:
                panels.extend(result.panels)
            else:
                degraded.append(uid)
        return Outcome(status=status, panels=panels, degraded=degraded)

    def get_current_org_dashboards(self) -> Outcome:
        response = self._search_dashboards()
        status = classify(response.status)
        if status is not Status.OK:
            return Outcome(status=status)
        items = self._listed_dashboards(response.body)
        if items is None:
            return Outcome(status=Status.ERROR)

        dashboards: List[DashboardSummary] = []
        for item in items:
            result = self.get_current_dashboard_panels(item["uid"])
            dashboards.append(
                DashboardSummary(
                    uid=item.get("uid"),
                    title=item.get("title"),
                    url=item.get("url"),
                    panels=result.panels if result.ok else [],
                    panels_status=result.status,
                )
            )
        return Outcome(status=status, dashboards=dashboards)

    def get_dashboard_panels(self, org_id: int, uid: str) -> Outcome:
        return self.with_org(org_id, self.get_current_dashboard_panels, uid)

    def get_org_panels(self, org_id: int) -> Outcome:
        return self.with_org(org_id, self.get_current_org_panels)

    def get_org_dashboards(self, org_id: int) -> Outcome:
        return self.with_org(org_id, self.get_current_org_dashboards)

    # Organizations

    def get_orgs(self) -> Outcome:
        response = self._executor.execute(RequestDescriptor(path="/api/orgs"))
        return _outcome(response, payload=lambda body: {"orgs": body})

    def create_org(self, name: str) -> Outcome:
        response = self._executor.execute(_json_request("POST", "/api/orgs", {"name": name}))
        return _outcome(response, CREATE_ORG_OVERRIDES, lambda body: {"id": _body_get(body, "orgId")})

    def delete_org(self, org_id: int) -> Outcome:
        response = self._executor.execute(RequestDescriptor(path=f"/api/orgs/{org_id}", method="DELETE"))
        return _outcome(response)

    def update_org(self, org_id: int, name: str) -> Outcome:
        response = self._executor.execute(_json_request("PUT", f"/api/orgs/{org_id}", {"name": name}))
        return _outcome(response, UPDATE_ORG_OVERRIDES)

    def add_org_user(self, org_id: int, login: str, role: str) -> Outcome:
        response = self._executor.execute(
            _json_request("POST", f"/api/orgs/{org_id}/users", {"loginOrEmail": login, "role": role})
        )
        return _outcome(response, ADD_ORG_USER_OVERRIDES)

    def get_org_users(self, org_id: int) -> Outcome:
        response = self._executor.execute(RequestDescriptor(path=f"/api/orgs/{org_id}/users"))
        return _outcome(response, payload=lambda body: {"users": body})

    # Users

    def create_user(self, user_data: Dict[str, Any]) -> Outcome:
        response = self._executor.execute(_json_request("POST", "/api/admin/users/", user_data))
        return _outcome(response, CREATE_USER_OVERRIDES, lambda body: {"id": _body_get(body, "id")})

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Outcome:
        response = self._executor.execute(_json_request("PUT", f"/api/users/{user_id}", changes))
        return _outcome(response, UPDATE_USER_OVERRIDES)

    def get_user(self, login: str) -> Outcome:
        response = self._executor.execute(
            RequestDescriptor(path="/api/users/lookup", params={"loginOrEmail": login})
        )
        return _outcome(response, payload=lambda body: {"user": body})

    def get_user_orgs(self, user_id: int) -> Outcome:
        response = self._executor.execute(RequestDescriptor(path=f"/api/users/{user_id}/orgs"))
        return _outcome(response, payload=lambda body: {"orgs": body})


__all__ = ["GrafanaClient"]
