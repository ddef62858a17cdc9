"""
Tests for the sagemaker-runtime-invoke command.
"""

from __future__ import annotations

from unittest.mock import MagicMock, patch

import pytest

from sagemaker_runtime import cli
from sagemaker_runtime.core.errors import ServiceError
from sagemaker_runtime.services.sagemaker_runtime import InvokeEndpointError, InvokeEndpointOutput


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for key in (
        "AWS_DEFAULT_REGION",
        "AWS_REGION",
        "SAGEMAKER_RUNTIME_ENDPOINT_URL",
        "SAGEMAKER_RUNTIME_TLS_BACKEND",
    ):
        monkeypatch.delenv(key, raising=False)
    monkeypatch.setattr(cli, "setup_logger", MagicMock())


def test_check_region_and_tls() -> None:
    assert cli.check_region("eu-west-1") == (True, "[OK] Region eu-west-1")
    ok, msg = cli.check_region("nowhere-1")
    assert not ok and msg.startswith("[X]")
    assert cli.check_tls_backend(None) == (True, "[OK] TLS backend native-tls")
    assert cli.check_tls_backend("bogus")[0] is False


def test_check_mode(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]) -> None:
    monkeypatch.setenv("AWS_ACCESS_KEY_ID", "AKIDCHECK")
    monkeypatch.setenv("AWS_SECRET_ACCESS_KEY", "secret")
    assert cli.main(["--check", "--region", "us-east-1"]) == 0
    out = capsys.readouterr().out
    assert "[OK] Credentials from EnvironmentProvider: AKID..." in out
    assert "secret" not in out


def test_missing_endpoint(capsys: pytest.CaptureFixture[str]) -> None:
    assert cli.main([]) == 1
    assert "Endpoint name is required" in capsys.readouterr().err


@patch("sagemaker_runtime.cli.Client")
@patch("sagemaker_runtime.cli.SageMakerRuntimeClient")
def test_invoke_writes_body(mock_runtime: MagicMock, mock_client: MagicMock, capsysbinary: pytest.CaptureFixture[bytes]) -> None:
    mock_runtime.return_value.invoke_endpoint.return_value = InvokeEndpointOutput(b'{"ok": true}')
    code = cli.main(["my-endpoint", "--body", '{"x": 1}', "--content-type", "application/json", "--region", "us-west-2"])
    assert code == 0
    assert capsysbinary.readouterr().out == b'{"ok": true}'
    sent = mock_runtime.return_value.invoke_endpoint.call_args.args[0]
    assert sent.endpoint_name == "my-endpoint"
    assert sent.body == b'{"x": 1}'
    assert sent.content_type == "application/json"
    assert mock_runtime.call_args.args[0].name == "us-west-2"


@patch("sagemaker_runtime.cli.Client")
@patch("sagemaker_runtime.cli.SageMakerRuntimeClient")
def test_invoke_reports_errors(mock_runtime: MagicMock, mock_client: MagicMock, capsys: pytest.CaptureFixture[str]) -> None:
    mock_runtime.return_value.invoke_endpoint.side_effect = ServiceError(
        InvokeEndpointError("ModelError", "model crashed")
    )
    assert cli.main(["my-endpoint", "--body", "x"]) == 1
    assert "[X] ServiceError: model crashed" in capsys.readouterr().err
