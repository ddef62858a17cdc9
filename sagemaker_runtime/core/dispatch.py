"""
HTTP dispatch of signed requests over `requests`.
"""

from __future__ import annotations

from typing import Mapping

import requests
from requests.structures import CaseInsensitiveDict

from sagemaker_runtime.core.signature import SignedRequest
from sagemaker_runtime.core.errors import HttpDispatchError
from sagemaker_runtime.core.tls import TlsAdapter
from sagemaker_runtime.utils.logger import get_logger

logger = get_logger("dispatch")


class HttpResponse:
    """A fully buffered HTTP response."""

    def __init__(self, status: int, headers: Mapping[str, str] | None = None, body: bytes = b"") -> None:
        self.status = status
        self.headers = CaseInsensitiveDict(headers or {})
        self.body = body

    def __repr__(self) -> str:
        return f"HttpResponse(status={self.status}, body={len(self.body)} bytes)"

    def is_success(self) -> bool:
        return 200 <= self.status < 300

    def header(self, key: str) -> str | None:
        return self.headers.get(key)

    def text(self) -> str:
        return self.body.decode("utf-8", errors="replace")


class HttpClient:
    """
    Sends a SignedRequest and buffers the response.

    Redirects are never followed: a redirected request would need re-signing.
    """

    def __init__(self, tls_backend: str | None = None, session: requests.Session | None = None) -> None:
        self.adapter = TlsAdapter(tls_backend)
        self.tls_backend = self.adapter.backend
        self._session = session or requests.Session()
        self._session.mount("https://", self.adapter)

    def close(self) -> None:
        self._session.close()

    def dispatch(self, request: SignedRequest, timeout: float | None = None) -> HttpResponse:
        url = request.url()
        logger.debug("Dispatching %s %s", request.method, url)
        try:
            r = self._session.request(
                request.method,
                url,
                headers=request.flat_headers(),
                data=request.payload if request.payload is not None else b"",
                timeout=timeout,
                allow_redirects=False,
            )
            body = r.content
        except requests.RequestException as e:
            raise HttpDispatchError(f"Error during dispatch: {e}", e) from e
        except ValueError as e:
            # Header or URL values http.client refuses to encode.
            raise HttpDispatchError(f"Request could not be encoded: {e}", e) from e
        logger.debug("Response %s for %s %s", r.status_code, request.method, url)
        return HttpResponse(r.status_code, dict(r.headers), body)
