"""Resilient client for the Grafana administrative HTTP API."""

from .base import DashboardManager, DashboardProvider, OrganizationProvider, UserProvider
from .config import BackoffPolicy, ClientConfig
from .grafana import GrafanaClient
from .models import DashboardSummary, Outcome, Panel
from .status import Status, classify

__all__ = [
    "BackoffPolicy",
    "ClientConfig",
    "DashboardManager",
    "DashboardProvider",
    "DashboardSummary",
    "GrafanaClient",
    "OrganizationProvider",
    "Outcome",
    "Panel",
    "Status",
    "UserProvider",
    "classify",
]
