"""Load and validate environment variables. Uses python-dotenv.

This module is thin and side-effect free except for loading `.env`.
Callers should use the accessor functions below rather than reading `os.environ`
directly, to keep environment handling consistent.
"""

from __future__ import annotations

import os
from pathlib import Path

from dotenv import find_dotenv, load_dotenv


def load_config() -> None:
    """
    Load .env from the working directory (or a parent). Idempotent; safe to call
    multiple times. Real environment variables win over .env values.
    """
    env_path = find_dotenv(usecwd=True)
    if env_path:
        load_dotenv(env_path, override=False)


def get_required(key: str) -> str:
    """
    Get required env var. Raises if missing or empty.

    Raises:
        ValueError: If key is missing or empty after trimming.
    """
    load_config()
    val = os.getenv(key, "").strip()
    if not val:
        raise ValueError(
            f"Missing required environment variable: {key}. "
            "Set it in .env or export it."
        )
    return val


def get_optional(key: str, default: str = "") -> str:
    """Get optional env var; return default if missing or empty."""
    load_config()
    val = os.getenv(key, "").strip()
    return val if val else default


def get_optional_int(key: str, default: int) -> int:
    """Get optional env var as int; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return int(raw)
    except ValueError:
        return default


def get_optional_float(key: str, default: float) -> float:
    """Get optional env var as float; return default if missing or invalid."""
    load_config()
    raw = os.getenv(key, "").strip()
    if not raw:
        return default
    try:
        return float(raw)
    except ValueError:
        return default


# --- Public config accessors ---

def aws_region() -> str | None:
    """
    Optional: region name. Checks AWS_DEFAULT_REGION first, then AWS_REGION.
    """
    val = get_optional("AWS_DEFAULT_REGION", "") or get_optional("AWS_REGION", "")
    return val or None


def endpoint_url() -> str | None:
    """Optional: custom endpoint (e.g. a local mock server)."""
    val = get_optional("SAGEMAKER_RUNTIME_ENDPOINT_URL", "")
    return val or None


def tls_backend() -> str | None:
    """Optional: TLS backend name. None means the package default."""
    val = get_optional("SAGEMAKER_RUNTIME_TLS_BACKEND", "")
    return val.lower() or None


def max_retries() -> int:
    """Optional: retries after the first attempt. Default 3."""
    return max(0, get_optional_int("SAGEMAKER_RUNTIME_MAX_RETRIES", 3))


def retry_base_delay() -> float:
    """Optional: backoff base delay in seconds. Default 0.5."""
    return max(0.0, get_optional_float("SAGEMAKER_RUNTIME_RETRY_BASE_DELAY", 0.5))


def request_timeout() -> float:
    """Optional: HTTP timeout in seconds. Default 60."""
    return get_optional_float("SAGEMAKER_RUNTIME_TIMEOUT", 60.0)


def log_level() -> str:
    """Optional: package log level. Default INFO."""
    return get_optional("SAGEMAKER_RUNTIME_LOG_LEVEL", "INFO").upper()


def aws_profile() -> str:
    """Optional: shared credentials profile. Default `default`."""
    return get_optional("AWS_PROFILE", "default")


def shared_credentials_file() -> Path:
    """Shared credentials file; AWS_SHARED_CREDENTIALS_FILE or ~/.aws/credentials."""
    val = get_optional("AWS_SHARED_CREDENTIALS_FILE", "")
    if val:
        return Path(val).expanduser()
    return Path.home() / ".aws" / "credentials"
