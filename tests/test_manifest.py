"""
Packaging checks: version, dependency declarations and published contents.
"""

from __future__ import annotations

import tomllib
from pathlib import Path

import sagemaker_runtime
from sagemaker_runtime.core.tls import DEFAULT_TLS_BACKEND, TLS_BACKENDS

ROOT = Path(__file__).resolve().parent.parent


def _pyproject() -> dict:
    with open(ROOT / "pyproject.toml", "rb") as f:
        return tomllib.load(f)


def test_version_matches_package() -> None:
    project = _pyproject()["project"]
    assert project["version"] == "0.41.0" == sagemaker_runtime.__version__
    assert project["license"]["text"] == "MIT"


def test_dependency_names_unique() -> None:
    deps = _pyproject()["project"]["dependencies"]
    names = [d.split(">")[0].split("=")[0].split("<")[0].strip().lower() for d in deps]
    assert len(names) == len(set(names))
    assert "requests" in names


def test_exactly_one_default_tls_backend() -> None:
    assert DEFAULT_TLS_BACKEND in TLS_BACKENDS
    assert [b for b in TLS_BACKENDS if b == DEFAULT_TLS_BACKEND] == ["native-tls"]


def test_test_resources_excluded_and_unused_by_package() -> None:
    find = _pyproject()["tool"]["setuptools"]["packages"]["find"]
    assert find["include"] == ["sagemaker_runtime*"]
    pkg = ROOT / "sagemaker_runtime"
    for path in pkg.rglob("*.py"):
        assert "test_resources" not in path.read_text(encoding="utf-8"), path
