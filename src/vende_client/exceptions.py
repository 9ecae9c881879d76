"""Exception types for the products client."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


class ApiErrorCodes:
    """Error code constants for ApiError."""

    NETWORK_ERROR: str = "HTTP_NETWORK_ERROR"
    UNKNOWN_ERROR: str = "UNKNOWN_ERROR"

    @staticmethod
    def http(status: int) -> str:
        """Return the code for an HTTP status."""
        return f"HTTP_{status}_ERROR"


class ErrorMessages:
    """User-facing messages shown by the admin frontend."""

    NETWORK_ERROR: str = "Error de conexión. Por favor, inténtalo de nuevo."
    VALIDATION_ERROR: str = "Los datos ingresados no son válidos."
    NOT_FOUND: str = "El recurso solicitado no fue encontrado."
    UNAUTHORIZED: str = "No tienes permisos para realizar esta acción."
    SERVER_ERROR: str = "Error del servidor. Por favor, contacta al soporte."


def _now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class ApiError(Exception):
    """Uniform error surfaced by the products client.

    Every failure that leaves :class:`~vende_client.http_client.HttpProductsClient`
    is an ``ApiError``; transport exceptions are chained through ``__cause__``.
    """

    def __init__(
        self,
        code: str,
        message: str,
        details: Any = None,
        status: int | None = None,
        timestamp: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details
        self.status = status
        self.timestamp = timestamp if timestamp is not None else _now_iso()
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {self.message}"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "code": self.code,
            "message": self.message,
            "timestamp": self.timestamp,
        }
        if self.details is not None:
            data["details"] = self.details
        return data


class ConfigError(Exception):
    """Raised when client configuration cannot be loaded."""

    def __init__(
        self,
        code: str,
        message: str,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.code = code
        if cause is not None:
            self.__cause__ = cause

    def __str__(self) -> str:
        return f"{self.code}: {super().__str__()}"


class ConfigErrorCodes:
    """Error code constants for ConfigError."""

    READ_FILE: str = "READ_FILE_ERROR"
    PARSE_YAML: str = "PARSE_YAML_ERROR"
    VALIDATION: str = "VALIDATION_ERROR"
