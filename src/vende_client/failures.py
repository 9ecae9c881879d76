"""Tagged failure variants for outbound requests."""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any

import httpx

from .exceptions import ApiError, ApiErrorCodes


@dataclass(frozen=True)
class HttpFailure:
    """The server answered with a non-2xx status."""

    status: int
    body: Any = None


@dataclass(frozen=True)
class NetworkFailure:
    """No response was received."""

    reason: str = ""


@dataclass(frozen=True)
class UnknownFailure:
    """A failure whose shape is not recognised."""

    raw: BaseException | None = None


Failure = HttpFailure | NetworkFailure | UnknownFailure


def _response_body(resp: httpx.Response) -> Any:
    try:
        return resp.json()
    except (json.JSONDecodeError, UnicodeDecodeError):
        return resp.text or None


def classify(exc: BaseException) -> Failure:
    """Map a raised exception onto a failure variant."""
    if isinstance(exc, ApiError):
        if exc.status is not None:
            return HttpFailure(status=exc.status, body=exc.to_dict())
        if exc.code == ApiErrorCodes.NETWORK_ERROR:
            return NetworkFailure(reason=exc.message)
        return UnknownFailure(raw=exc)
    if isinstance(exc, httpx.HTTPStatusError):
        return HttpFailure(status=exc.response.status_code, body=_response_body(exc.response))
    if isinstance(exc, httpx.TransportError):
        return NetworkFailure(reason=f"{type(exc).__name__}: {exc}")
    return UnknownFailure(raw=exc)
