"""Symbolic request outcomes and the HTTP status classifier."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Optional, Union


class Status(str, Enum):
    OK = "ok"
    ACCESS_DENIED = "access-denied"
    NOT_FOUND = "not-found"
    ERROR = "error"
    CONNECTION_ERROR = "connection-error"
    # Endpoint specific
    ALREADY_EXISTS = "already-exists"
    ORG_NOT_FOUND = "org-not-found"
    USER_NOT_FOUND = "user-not-found"
    INVALID_DATA = "invalid-data"
    MISSING_MANDATORY_DATA = "missing-mandatory-data"

    def __str__(self) -> str:
        return self.value


StatusCode = Union[int, str, Status]


def classify(code: StatusCode, overrides: Optional[Mapping[int, Status]] = None) -> Status:
    """Map a raw HTTP status code to a :class:`Status`.

    Symbolic input is returned unchanged. The symbol set is closed, so a
    string that names no :class:`Status` raises ``ValueError``. ``overrides``
    are consulted before the default table so each endpoint can refine
    individual codes.
    """
    if isinstance(code, str):
        return Status(code)
    if overrides and code in overrides:
        return overrides[code]
    if 200 <= code < 300:
        return Status.OK
    if code in (401, 403):
        return Status.ACCESS_DENIED
    if code == 404:
        return Status.NOT_FOUND
    return Status.ERROR


__all__ = ["Status", "StatusCode", "classify"]
