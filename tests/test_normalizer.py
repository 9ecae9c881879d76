"""Error normalizer unit tests."""

from datetime import datetime

import httpx
import pytest
from vende_client.exceptions import ApiError, ApiErrorCodes, ErrorMessages
from vende_client.failures import HttpFailure, NetworkFailure, UnknownFailure, classify
from vende_client.normalizer import normalize_error


def _status_error(status: int, **kwargs) -> httpx.HTTPStatusError:
    request = httpx.Request("GET", "http://products:3000/products")
    response = httpx.Response(status, request=request, **kwargs)
    return httpx.HTTPStatusError("error", request=request, response=response)


def test_not_found_uses_fixed_message() -> None:
    """404 maps to HTTP_404_ERROR with the not-found message."""
    err = normalize_error(HttpFailure(status=404, body={"message": "Product xyz missing"}))
    assert err.code == "HTTP_404_ERROR"
    assert err.message == ErrorMessages.NOT_FOUND
    assert err.status == 404


def test_bad_request_prefers_server_message() -> None:
    """400 uses the server message when one is provided."""
    err = normalize_error(HttpFailure(status=400, body={"message": "name is required"}))
    assert err.code == "HTTP_400_ERROR"
    assert err.message == "name is required"


def test_bad_request_joins_message_list() -> None:
    """A list of validation messages is joined into one."""
    err = normalize_error(HttpFailure(status=400, body={"message": ["a", "b"]}))
    assert err.message == "a; b"


def test_bad_request_without_body() -> None:
    """400 without a body falls back to the validation message."""
    err = normalize_error(HttpFailure(status=400))
    assert err.message == ErrorMessages.VALIDATION_ERROR


@pytest.mark.parametrize("status", [401, 403])
def test_unauthorized(status: int) -> None:
    """401 and 403 map to the unauthorized message."""
    err = normalize_error(HttpFailure(status=status, body={"message": "ignored"}))
    assert err.code == f"HTTP_{status}_ERROR"
    assert err.message == ErrorMessages.UNAUTHORIZED


def test_server_error_generic_and_override() -> None:
    """5xx uses the server message when present, otherwise the generic one."""
    assert normalize_error(HttpFailure(status=502)).message == ErrorMessages.SERVER_ERROR
    err = normalize_error(HttpFailure(status=500, body={"message": "db down"}))
    assert err.message == "db down"


def test_details_are_attached() -> None:
    """details from the body are carried on the error."""
    err = normalize_error(
        HttpFailure(status=422, body={"message": "bad", "details": {"field": "unitPrice"}})
    )
    assert err.details == {"field": "unitPrice"}
    assert err.to_dict()["details"] == {"field": "unitPrice"}


def test_network_failure() -> None:
    """No response maps to HTTP_NETWORK_ERROR."""
    err = normalize_error(NetworkFailure(reason="ConnectError"))
    assert err.code == ApiErrorCodes.NETWORK_ERROR
    assert err.message == ErrorMessages.NETWORK_ERROR
    assert err.status is None


def test_unknown_failure() -> None:
    """Unrecognised failures map to UNKNOWN_ERROR."""
    err = normalize_error(UnknownFailure(raw=RuntimeError("boom")))
    assert err.code == ApiErrorCodes.UNKNOWN_ERROR
    assert isinstance(err.__cause__, RuntimeError)


def test_raw_exceptions_are_classified() -> None:
    """Raw httpx exceptions are classified before normalization."""
    assert normalize_error(_status_error(404)).code == "HTTP_404_ERROR"
    assert normalize_error(httpx.ConnectError("refused")).code == "HTTP_NETWORK_ERROR"
    assert normalize_error(httpx.ReadTimeout("slow")).code == "HTTP_NETWORK_ERROR"
    assert normalize_error(KeyError("id")).code == "UNKNOWN_ERROR"


def test_classify_reads_json_and_text_bodies() -> None:
    """Response bodies are parsed as JSON, falling back to text."""
    failure = classify(_status_error(400, json={"message": "x"}))
    assert failure == HttpFailure(status=400, body={"message": "x"})
    failure = classify(_status_error(500, text="Internal Server Error"))
    assert failure == HttpFailure(status=500, body="Internal Server Error")


def test_api_error_passes_through() -> None:
    """An ApiError is returned unchanged."""
    original = ApiError(code="HTTP_404_ERROR", message="x", status=404)
    assert normalize_error(original) is original


def test_timestamp_is_iso8601() -> None:
    """timestamp is an ISO-8601 string."""
    err = normalize_error(NetworkFailure())
    assert datetime.fromisoformat(err.timestamp).tzinfo is not None
    assert str(err).startswith("HTTP_NETWORK_ERROR: ")
