"""Error normalization."""

from __future__ import annotations

from typing import Any

from .exceptions import ApiError, ApiErrorCodes, ErrorMessages
from .failures import Failure, HttpFailure, NetworkFailure, UnknownFailure, classify


def _body_field(body: Any, name: str) -> Any:
    if isinstance(body, dict):
        return body.get(name) or None
    return None


def _server_message(body: Any) -> str | None:
    message = _body_field(body, "message")
    # class-validator style bodies carry a list of messages
    if isinstance(message, list):
        return "; ".join(str(m) for m in message) or None
    return str(message) if message is not None else None


def _message_for_status(status: int, body: Any) -> str:
    if status == 400:
        return _server_message(body) or ErrorMessages.VALIDATION_ERROR
    if status == 404:
        return ErrorMessages.NOT_FOUND
    if status in (401, 403):
        return ErrorMessages.UNAUTHORIZED
    return _server_message(body) or ErrorMessages.SERVER_ERROR


def normalize_error(failure: Failure | BaseException) -> ApiError:
    """Convert a failure into an :class:`ApiError`.

    Raw exceptions are classified first; an ``ApiError`` is returned as is.
    This function never raises.
    """
    if isinstance(failure, ApiError):
        return failure

    cause: BaseException | None = None
    if isinstance(failure, BaseException):
        cause = failure
        failure = classify(failure)

    if isinstance(failure, HttpFailure):
        message = _message_for_status(failure.status, failure.body)
        details = _body_field(failure.body, "details")
        return ApiError(
            code=ApiErrorCodes.http(failure.status),
            message=message,
            details=details,
            status=failure.status,
            cause=cause,
        )
    if isinstance(failure, NetworkFailure):
        return ApiError(
            code=ApiErrorCodes.NETWORK_ERROR,
            message=ErrorMessages.NETWORK_ERROR,
            cause=cause,
        )
    if isinstance(failure, UnknownFailure):
        return ApiError(
            code=ApiErrorCodes.UNKNOWN_ERROR,
            message=ErrorMessages.SERVER_ERROR,
            cause=cause if cause is not None else failure.raw,
        )
    return ApiError(code=ApiErrorCodes.UNKNOWN_ERROR, message=ErrorMessages.SERVER_ERROR)
