"""
AWS credentials and the providers that resolve them.

Resolution order for the default provider: environment, then the shared
credentials file. Resolved credentials are cached until they expire.
"""

from __future__ import annotations

import configparser
import os
import threading
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from sagemaker_runtime.core.errors import CredentialsError
from sagemaker_runtime.utils import config
from sagemaker_runtime.utils.logger import get_logger

logger = get_logger("credentials")


@dataclass(frozen=True)
class AwsCredentials:
    access_key_id: str
    secret_access_key: str
    token: str | None = None
    expires_at: datetime | None = None

    def is_expired(self, now: datetime | None = None) -> bool:
        if self.expires_at is None:
            return False
        now = now or datetime.now(timezone.utc)
        return now >= self.expires_at

    def __repr__(self) -> str:
        # Secret and token stay out of logs and tracebacks.
        return f"AwsCredentials(access_key_id={self.access_key_id!r}, expires_at={self.expires_at!r})"


def _non_empty(value: str | None) -> str | None:
    value = (value or "").strip()
    return value or None


def _parse_expiration(raw: str | None) -> datetime | None:
    raw = _non_empty(raw)
    if raw is None:
        return None
    try:
        parsed = datetime.fromisoformat(raw.replace("Z", "+00:00"))
    except ValueError as e:
        raise CredentialsError(f"Invalid credential expiration: {raw!r}") from e
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


class StaticProvider:
    """Always returns the same credentials."""

    def __init__(
        self,
        access_key_id: str,
        secret_access_key: str,
        token: str | None = None,
        expires_at: datetime | None = None,
    ) -> None:
        self._credentials = AwsCredentials(access_key_id, secret_access_key, token, expires_at)

    def credentials(self) -> AwsCredentials:
        return self._credentials


class EnvironmentProvider:
    """Reads AWS_ACCESS_KEY_ID / AWS_SECRET_ACCESS_KEY / AWS_SESSION_TOKEN."""

    def credentials(self) -> AwsCredentials:
        config.load_config()
        key = _non_empty(os.getenv("AWS_ACCESS_KEY_ID"))
        secret = _non_empty(os.getenv("AWS_SECRET_ACCESS_KEY"))
        if not key:
            raise CredentialsError("No AWS_ACCESS_KEY_ID in environment")
        if not secret:
            raise CredentialsError("No AWS_SECRET_ACCESS_KEY in environment")
        token = _non_empty(os.getenv("AWS_SESSION_TOKEN")) or _non_empty(os.getenv("AWS_SECURITY_TOKEN"))
        expires_at = _parse_expiration(os.getenv("AWS_CREDENTIAL_EXPIRATION"))
        return AwsCredentials(key, secret, token, expires_at)


class ProfileProvider:
    """Reads a profile from the INI shared credentials file."""

    def __init__(self, file_path: Path | None = None, profile: str | None = None) -> None:
        self.file_path = Path(file_path) if file_path else config.shared_credentials_file()
        self.profile = profile or config.aws_profile()

    def credentials(self) -> AwsCredentials:
        if not self.file_path.is_file():
            raise CredentialsError(f"Credentials file not found: {self.file_path}")
        parser = configparser.RawConfigParser()
        try:
            parser.read(self.file_path, encoding="utf-8")
        except configparser.Error as e:
            raise CredentialsError(f"Could not parse {self.file_path}: {e}") from e
        if not parser.has_section(self.profile):
            raise CredentialsError(f"Profile {self.profile!r} not found in {self.file_path}")
        section = parser[self.profile]
        key = _non_empty(section.get("aws_access_key_id"))
        secret = _non_empty(section.get("aws_secret_access_key"))
        if not key or not secret:
            raise CredentialsError(f"Profile {self.profile!r} is missing access key or secret")
        token = _non_empty(section.get("aws_session_token")) or _non_empty(section.get("aws_security_token"))
        return AwsCredentials(key, secret, token)


class ChainProvider:
    """Tries each provider in order; the first one that succeeds wins."""

    def __init__(self, providers: list | None = None) -> None:
        self.providers = providers if providers is not None else [EnvironmentProvider(), ProfileProvider()]

    def credentials(self) -> AwsCredentials:
        failures: list[str] = []
        for provider in self.providers:
            try:
                creds = provider.credentials()
            except CredentialsError as e:
                failures.append(f"{type(provider).__name__}: {e}")
                continue
            logger.info("Resolved AWS credentials from %s", type(provider).__name__)
            return creds
        raise CredentialsError(
            "Couldn't find AWS credentials in environment or credentials file. "
            + "; ".join(failures)
        )


class DefaultCredentialsProvider:
    """ChainProvider with caching until expiry. Thread-safe."""

    def __init__(self, chain: ChainProvider | None = None) -> None:
        self._chain = chain or ChainProvider()
        self._cached: AwsCredentials | None = None
        self._lock = threading.Lock()

    def credentials(self) -> AwsCredentials:
        with self._lock:
            if self._cached is None or self._cached.is_expired():
                self._cached = self._chain.credentials()
            return self._cached
