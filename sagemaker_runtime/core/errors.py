"""
Error taxonomy shared by every operation.

Operation-specific service errors (e.g. `InvokeEndpointError`) arrive wrapped in
`ServiceError`; everything else is a transport, credential or protocol failure.
"""

from __future__ import annotations

from typing import Any


class SageMakerRuntimeError(Exception):
    """Base class for all errors raised by this package."""


class ServiceError(SageMakerRuntimeError):
    """The service returned an error that the operation knows about."""

    def __init__(self, error: Any) -> None:
        super().__init__(str(error))
        self.error = error


class CredentialsError(SageMakerRuntimeError):
    """No usable credentials could be resolved."""


class HttpDispatchError(SageMakerRuntimeError):
    """The request could not be sent or the response could not be read."""

    def __init__(self, message: str, original: Exception | None = None) -> None:
        super().__init__(message)
        self.original = original


class ValidationError(SageMakerRuntimeError):
    """Input rejected, either locally or by the service's ValidationException."""


class ParseError(SageMakerRuntimeError):
    """A response could not be decoded."""


class ParseRegionError(SageMakerRuntimeError, ValueError):
    """An unknown region name."""


class UnknownError(SageMakerRuntimeError):
    """A failed response whose error type is not recognised. Keeps the response."""

    def __init__(self, response: Any) -> None:
        status = getattr(response, "status", None)
        body = getattr(response, "body", b"") or b""
        preview = body[:200].decode("utf-8", errors="replace")
        super().__init__(f"Unknown error (HTTP {status}): {preview}")
        self.response = response
