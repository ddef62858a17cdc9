"""
Mock credentials and request dispatchers for tests.

Usage:
    dispatcher = MockRequestDispatcher(200).with_body(b'{"score": 0.9}')
    client = SageMakerRuntimeClient.new_with(dispatcher, MockCredentialsProvider(), "us-east-1")
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable, Iterable

from sagemaker_runtime.core.credentials import AwsCredentials
from sagemaker_runtime.core.dispatch import HttpResponse
from sagemaker_runtime.core.errors import HttpDispatchError
from sagemaker_runtime.core.signature import SignedRequest


class MockCredentialsProvider:
    def credentials(self) -> AwsCredentials:
        return AwsCredentials("mock_key", "mock_secret")


class MockRequestDispatcher:
    """Returns a canned response; records every request it was given."""

    def __init__(self, status: int = 200, body: bytes | str = b"", headers: dict[str, str] | None = None) -> None:
        self.status = status
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        self.headers: dict[str, str] = dict(headers or {})
        self.requests: list[SignedRequest] = []
        self.timeouts: list[float | None] = []
        self._checker: Callable[[SignedRequest], None] | None = None

    def with_body(self, body: bytes | str) -> MockRequestDispatcher:
        self.body = body.encode("utf-8") if isinstance(body, str) else body
        return self

    def with_header(self, key: str, value: str) -> MockRequestDispatcher:
        self.headers[key] = value
        return self

    def with_request_checker(self, checker: Callable[[SignedRequest], None]) -> MockRequestDispatcher:
        self._checker = checker
        return self

    def dispatch(self, request: SignedRequest, timeout: float | None = None) -> HttpResponse:
        self.requests.append(request)
        self.timeouts.append(timeout)
        if self._checker is not None:
            self._checker(request)
        return HttpResponse(self.status, self.headers, self.body)


class MultipleMockRequestDispatcher:
    """
    Replays one entry per dispatch. An entry is either a dispatcher or an
    HttpDispatchError to raise.
    """

    def __init__(self, dispatchers: Iterable[MockRequestDispatcher | HttpDispatchError]) -> None:
        self._queue = list(dispatchers)
        self.requests: list[SignedRequest] = []

    def dispatch(self, request: SignedRequest, timeout: float | None = None) -> HttpResponse:
        if not self._queue:
            raise AssertionError("MultipleMockRequestDispatcher ran out of responses")
        self.requests.append(request)
        item = self._queue.pop(0)
        if isinstance(item, HttpDispatchError):
            raise item
        return item.dispatch(request, timeout)


def read_test_resource(name: str, root: Path | str) -> bytes:
    """Fixture bytes from the caller's resource directory."""
    path = Path(root) / name
    if not path.is_file():
        raise FileNotFoundError(f"Test resource not found: {path}")
    return path.read_bytes()
