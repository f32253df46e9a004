"""Capability interfaces a dashboarding backend implements."""

from __future__ import annotations

from typing import Any, Dict

from .models import Outcome


class DashboardProvider:
    """Dashboard and panel retrieval scoped to an organization."""

    def get_dashboard_panels(self, org_id: int, uid: str) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_org_panels(self, org_id: int) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_org_dashboards(self, org_id: int) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError


class OrganizationProvider:
    def create_org(self, name: str) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_orgs(self) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def update_org(self, org_id: int, name: str) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def delete_org(self, org_id: int) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def add_org_user(self, org_id: int, login: str, role: str) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_org_users(self, org_id: int) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError


class UserProvider:
    def create_user(self, user_data: Dict[str, Any]) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def update_user(self, user_id: int, changes: Dict[str, Any]) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_user(self, login: str) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError

    def get_user_orgs(self, user_id: int) -> Outcome:  # pragma: no cover - interface
        raise NotImplementedError


class DashboardManager(DashboardProvider, OrganizationProvider, UserProvider):
    def close(self) -> None:  # pragma: no cover - optional override
        return None


__all__ = ["DashboardManager", "DashboardProvider", "OrganizationProvider", "UserProvider"]
