"""
Tests for TLS backend selection.
"""

from __future__ import annotations

import ssl
from unittest.mock import patch

import pytest

from sagemaker_runtime.core.tls import (
    BUNDLED_TLS,
    DEFAULT_TLS_BACKEND,
    NATIVE_TLS,
    TLS_BACKENDS,
    TlsAdapter,
    build_ssl_context,
    resolve_tls_backend,
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("SAGEMAKER_RUNTIME_TLS_BACKEND", raising=False)


def test_two_backends_native_default() -> None:
    assert TLS_BACKENDS == (NATIVE_TLS, BUNDLED_TLS)
    assert len(set(TLS_BACKENDS)) == 2
    assert DEFAULT_TLS_BACKEND == "native-tls"
    assert resolve_tls_backend() == "native-tls"


def test_resolve_explicit_and_env(monkeypatch: pytest.MonkeyPatch) -> None:
    assert resolve_tls_backend("BUNDLED-TLS") == BUNDLED_TLS
    monkeypatch.setenv("SAGEMAKER_RUNTIME_TLS_BACKEND", "bundled-tls")
    assert resolve_tls_backend() == BUNDLED_TLS
    assert resolve_tls_backend("native-tls") == NATIVE_TLS


def test_unknown_backend_rejected(monkeypatch: pytest.MonkeyPatch) -> None:
    with pytest.raises(ValueError, match="Unknown TLS backend"):
        resolve_tls_backend("openssl-1.0")
    monkeypatch.setenv("SAGEMAKER_RUNTIME_TLS_BACKEND", "rustls")
    with pytest.raises(ValueError):
        resolve_tls_backend()


def test_bundled_context_uses_certifi() -> None:
    with patch("sagemaker_runtime.core.tls.ssl.create_default_context") as create, \
            patch("sagemaker_runtime.core.tls.certifi.where", return_value="/tmp/cacert.pem"):
        build_ssl_context(BUNDLED_TLS)
        create.assert_called_once_with(cafile="/tmp/cacert.pem")


def test_native_context_uses_system_store() -> None:
    with patch("sagemaker_runtime.core.tls.ssl.create_default_context") as create:
        build_ssl_context(NATIVE_TLS)
        create.assert_called_once_with()


def test_adapter_installs_context_on_pool() -> None:
    adapter = TlsAdapter(BUNDLED_TLS)
    assert adapter.backend == BUNDLED_TLS
    assert isinstance(adapter.ssl_context, ssl.SSLContext)
    assert adapter.poolmanager.connection_pool_kw["ssl_context"] is adapter.ssl_context
