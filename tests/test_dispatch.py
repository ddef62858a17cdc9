"""
Tests for HttpClient dispatch over a mocked requests session.
"""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest
import requests

from sagemaker_runtime.core.dispatch import HttpClient, HttpResponse
from sagemaker_runtime.core.errors import HttpDispatchError
from sagemaker_runtime.core.region import Region
from sagemaker_runtime.core.signature import SignedRequest


@pytest.fixture
def request_() -> SignedRequest:
    req = SignedRequest("POST", "sagemaker", Region("us-east-1"), "/endpoints/e/invocations")
    req.set_endpoint_prefix("runtime.sagemaker")
    req.set_payload(b"payload")
    req.complement()
    return req


def test_http_response_helpers() -> None:
    r = HttpResponse(204, {"Content-Type": "text/plain"}, b"ok")
    assert r.is_success()
    assert r.header("content-type") == "text/plain"
    assert r.text() == "ok"
    assert not HttpResponse(424).is_success()


def test_dispatch_sends_signed_request(request_: SignedRequest) -> None:
    session = MagicMock()
    session.request.return_value = MagicMock(status_code=200, headers={"Content-Type": "application/json"}, content=b"{}")
    client = HttpClient(tls_backend="native-tls", session=session)

    out = client.dispatch(request_, timeout=5)

    session.mount.assert_called_once()
    args, kwargs = session.request.call_args
    assert args == ("POST", "https://runtime.sagemaker.us-east-1.amazonaws.com/endpoints/e/invocations")
    assert kwargs["data"] == b"payload"
    assert kwargs["timeout"] == 5
    assert kwargs["allow_redirects"] is False
    assert kwargs["headers"]["host"] == "runtime.sagemaker.us-east-1.amazonaws.com"
    assert out.status == 200
    assert out.body == b"{}"
    assert out.header("content-type") == "application/json"


def test_dispatch_wraps_transport_errors(request_: SignedRequest) -> None:
    session = MagicMock()
    session.request.side_effect = requests.ConnectionError("connection refused")
    client = HttpClient(session=session)
    with pytest.raises(HttpDispatchError, match="connection refused") as exc:
        client.dispatch(request_)
    assert isinstance(exc.value.original, requests.ConnectionError)


def test_client_records_backend(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SAGEMAKER_RUNTIME_TLS_BACKEND", "bundled-tls")
    assert HttpClient().tls_backend == "bundled-tls"


def test_dispatch_wraps_unencodable_headers(request_: SignedRequest) -> None:
    session = MagicMock()
    session.request.side_effect = UnicodeEncodeError("latin-1", "trace=日", 6, 7, "ordinal not in range(256)")
    client = HttpClient(session=session)
    with pytest.raises(HttpDispatchError, match="could not be encoded") as exc:
        client.dispatch(request_)
    assert isinstance(exc.value.original, UnicodeEncodeError)


def test_dispatch_wraps_invalid_header(request_: SignedRequest) -> None:
    session = MagicMock()
    session.request.side_effect = requests.exceptions.InvalidHeader("Invalid leading whitespace")
    client = HttpClient(session=session)
    with pytest.raises(HttpDispatchError) as exc:
        client.dispatch(request_)
    assert isinstance(exc.value.original, ValueError)
