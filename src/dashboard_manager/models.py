"""Request, response and outcome types."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .status import Status, StatusCode


@dataclass(frozen=True)
class RequestDescriptor:
    path: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    params: Dict[str, Any] = field(default_factory=dict)
    content: Optional[str] = None


@dataclass(frozen=True)
class RawResponse:
    status: StatusCode
    body: Any = None


class Outcome(BaseModel):
    """Result of every public operation: a status plus operation payload."""

    model_config = ConfigDict(extra="allow", frozen=True)

    status: Status

    @property
    def ok(self) -> bool:
        return self.status == Status.OK


class Panel(BaseModel):
    id: Optional[int] = None
    title: Optional[str] = None
    ds_url: Optional[str] = None


class DashboardSummary(BaseModel):
    uid: Optional[str] = None
    title: Optional[str] = None
    url: Optional[str] = None
    panels: List[Panel] = Field(default_factory=list)
    panels_status: Status = Status.OK


__all__ = ["DashboardSummary", "Outcome", "Panel", "RawResponse", "RequestDescriptor"]
