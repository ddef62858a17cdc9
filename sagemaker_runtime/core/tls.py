"""
TLS backend selection.

Two interchangeable backends; exactly one is active per HTTP client:

- `native-tls` (default): the operating system trust store.
- `bundled-tls`: the Mozilla CA bundle shipped by `certifi` (a `requests` dependency).
"""

from __future__ import annotations

import ssl
from typing import Any

import certifi
from requests.adapters import HTTPAdapter

from sagemaker_runtime.utils import config

NATIVE_TLS = "native-tls"
BUNDLED_TLS = "bundled-tls"
TLS_BACKENDS: tuple[str, ...] = (NATIVE_TLS, BUNDLED_TLS)
DEFAULT_TLS_BACKEND = NATIVE_TLS


def resolve_tls_backend(name: str | None = None) -> str:
    """
    Pick the active backend: explicit name, else SAGEMAKER_RUNTIME_TLS_BACKEND,
    else the default.

    Raises:
        ValueError: If the name is not one of TLS_BACKENDS.
    """
    backend = (name or config.tls_backend() or DEFAULT_TLS_BACKEND).strip().lower()
    if backend not in TLS_BACKENDS:
        raise ValueError(
            f"Unknown TLS backend {backend!r}; expected one of: {', '.join(TLS_BACKENDS)}"
        )
    return backend


def build_ssl_context(backend: str) -> ssl.SSLContext:
    backend = resolve_tls_backend(backend)
    if backend == BUNDLED_TLS:
        return ssl.create_default_context(cafile=certifi.where())
    return ssl.create_default_context()


class TlsAdapter(HTTPAdapter):
    """HTTPAdapter whose connection pools use the selected backend's SSL context."""

    def __init__(self, backend: str | None = None, **kwargs: Any) -> None:
        self.backend = resolve_tls_backend(backend)
        self.ssl_context = build_ssl_context(self.backend)
        super().__init__(**kwargs)

    def init_poolmanager(self, *args: Any, **kwargs: Any) -> None:
        kwargs["ssl_context"] = self.ssl_context
        super().init_poolmanager(*args, **kwargs)

    def proxy_manager_for(self, *args: Any, **kwargs: Any):
        kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(*args, **kwargs)
