"""Tests for classifying failed network calls."""

import httpx
import pytest

from staffhub.core.exceptions import (
    BackendRejectedError,
    FailureKind,
    classify_failure,
    rejected_error,
)

_REQUEST = httpx.Request("GET", "http://test/api/leaves/all")


def _status_error(status_code: int, **kwargs) -> httpx.HTTPStatusError:
    response = httpx.Response(status_code, request=_REQUEST, **kwargs)
    return httpx.HTTPStatusError("boom", request=_REQUEST, response=response)


@pytest.mark.parametrize(
    "exc",
    [
        httpx.ConnectError("Connection refused", request=_REQUEST),
        httpx.ConnectTimeout("Timed out", request=_REQUEST),
        httpx.ReadTimeout("Timed out", request=_REQUEST),
        httpx.RemoteProtocolError("Server disconnected", request=_REQUEST),
    ],
)
def test_transport_errors_are_unreachable(exc):
    failure = classify_failure(exc)
    assert failure.kind is FailureKind.UNREACHABLE
    assert failure.is_unreachable
    assert failure.status_code is None
    assert failure.url == "http://test/api/leaves/all"


def test_transport_error_without_request_is_still_unreachable():
    """DNS failures can surface before a request object is attached."""
    failure = classify_failure(httpx.ConnectError("Name or service not known"))
    assert failure.kind is FailureKind.UNREACHABLE
    assert failure.url is None


def test_status_error_is_rejected_with_json_body():
    failure = classify_failure(_status_error(409, json={"detail": "Duplicate"}))
    assert failure.kind is FailureKind.REJECTED
    assert failure.status_code == 409
    assert failure.body == {"detail": "Duplicate"}


def test_status_error_keeps_text_body():
    failure = classify_failure(_status_error(502, text="Bad Gateway"))
    assert failure.kind is FailureKind.REJECTED
    assert failure.status_code == 502
    assert failure.body == "Bad Gateway"


def test_non_network_errors_are_not_classified():
    with pytest.raises(TypeError):
        classify_failure(ValueError("not a network failure"))


def test_rejected_error_carries_status_and_body():
    failure = classify_failure(_status_error(400, json={"detail": "Invalid date"}))
    err = rejected_error(failure)
    assert isinstance(err, BackendRejectedError)
    assert err.status_code == 400
    assert err.body == {"detail": "Invalid date"}
    assert err.url == "http://test/api/leaves/all"


def test_unsupported_protocol_is_a_configuration_error():
    """A base URL without an http(s) scheme must not look like an outage."""
    exc = httpx.UnsupportedProtocol("Request URL has an unsupported protocol 'localhost://'.")
    with pytest.raises(TypeError):
        classify_failure(exc)
