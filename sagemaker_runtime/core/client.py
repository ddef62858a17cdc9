"""
Re-usable sign-and-dispatch logic for all service clients.
"""

from __future__ import annotations

import threading
import time
import weakref
from typing import Any

from sagemaker_runtime.core.credentials import DefaultCredentialsProvider
from sagemaker_runtime.core.dispatch import HttpClient, HttpResponse
from sagemaker_runtime.core.errors import CredentialsError, HttpDispatchError
from sagemaker_runtime.core.proto_json import parse_json_error
from sagemaker_runtime.core.signature import SignedRequest
from sagemaker_runtime.utils import config
from sagemaker_runtime.utils.logger import get_logger

logger = get_logger("client")

RETRYABLE_STATUS = frozenset({429, 500, 502, 503, 504})
THROTTLING_ERRORS = frozenset(
    {
        "Throttling",
        "ThrottlingException",
        "ThrottledException",
        "RequestThrottledException",
        "TooManyRequestsException",
        "ProvisionedThroughputExceededException",
        "RequestLimitExceeded",
    }
)

_shared_lock = threading.Lock()
_shared_inner: weakref.ReferenceType[_ClientInner] | None = None


class _ClientInner:
    def __init__(self, credentials_provider: Any, dispatcher: Any) -> None:
        self.credentials_provider = credentials_provider
        self.dispatcher = dispatcher


def _is_retryable(response: HttpResponse) -> bool:
    if response.status in RETRYABLE_STATUS:
        return True
    if response.status == 400:
        err = parse_json_error(response)
        return err is not None and err.typ in THROTTLING_ERRORS
    return False


def _is_retryable_error(err: HttpDispatchError) -> bool:
    # Malformed headers or URLs (requests' InvalidHeader, InvalidURL, ... are
    # ValueErrors) fail the same way on every attempt.
    return not isinstance(err.original, ValueError)


class Client:
    """
    Fetches credentials, signs and dispatches requests, retrying transient failures.

    `credentials_provider` is anything with `credentials() -> AwsCredentials`;
    `dispatcher` is anything with `dispatch(request, timeout) -> HttpResponse`.
    A client without a credentials provider never signs.
    """

    def __init__(
        self,
        credentials_provider: Any,
        dispatcher: Any,
        max_retries: int | None = None,
        retry_base_delay: float | None = None,
    ) -> None:
        self._inner = _ClientInner(credentials_provider, dispatcher)
        self.max_retries = max_retries if max_retries is not None else config.max_retries()
        self.retry_base_delay = (
            retry_base_delay if retry_base_delay is not None else config.retry_base_delay()
        )

    @classmethod
    def _from_inner(cls, inner: _ClientInner) -> Client:
        client = cls.__new__(cls)
        client._inner = inner
        client.max_retries = config.max_retries()
        client.retry_base_delay = config.retry_base_delay()
        return client

    @classmethod
    def shared(cls) -> Client:
        """
        The process-wide default client (default credentials chain + HttpClient).

        Rebuilt once every holder has released it.
        """
        global _shared_inner
        with _shared_lock:
            inner = _shared_inner() if _shared_inner is not None else None
            if inner is None:
                inner = _ClientInner(DefaultCredentialsProvider(), HttpClient())
                _shared_inner = weakref.ref(inner)
            return cls._from_inner(inner)

    @classmethod
    def not_signing(cls, dispatcher: Any, **kwargs: Any) -> Client:
        """
        A client that neither fetches credentials nor signs. Useful for endpoints
        that authenticate some other way.
        """
        return cls(None, dispatcher, **kwargs)

    @property
    def credentials_provider(self) -> Any:
        return self._inner.credentials_provider

    @property
    def dispatcher(self) -> Any:
        return self._inner.dispatcher

    def _prepare(self, request: SignedRequest) -> None:
        provider = self._inner.credentials_provider
        if provider is None:
            request.complement()
            return
        try:
            creds = provider.credentials()
        except CredentialsError:
            raise
        except Exception as e:
            raise CredentialsError(f"Credentials provider failed: {e}") from e
        request.sign(creds)

    def sign_and_dispatch(self, request: SignedRequest, timeout: float | None = None) -> HttpResponse:
        """
        Sign (on every attempt, so x-amz-date stays fresh) and dispatch.

        Returns the last response, successful or not; raises HttpDispatchError if
        the final attempt could not reach the service.
        """
        for attempt in range(max(self.max_retries, 0)):
            self._prepare(request)
            try:
                response = self._inner.dispatcher.dispatch(request, timeout)
            except HttpDispatchError as e:
                if not _is_retryable_error(e):
                    raise
                logger.warning("Request attempt %d failed: %s", attempt + 1, e)
            else:
                if not _is_retryable(response):
                    return response
                logger.warning(
                    "Request attempt %d got retryable status %d", attempt + 1, response.status
                )
            delay = self.retry_base_delay * (2 ** attempt)
            if delay > 0:
                time.sleep(delay)

        self._prepare(request)
        return self._inner.dispatcher.dispatch(request, timeout)
