"""
Tools for signing a request to AWS.

Follows the AWS Signature Version 4 algorithm:
http://docs.aws.amazon.com/general/latest/gr/signature-version-4.html
"""

from __future__ import annotations

import hashlib
import hmac
from datetime import datetime, timezone
from typing import Iterable, Mapping
from urllib.parse import parse_qsl, quote, unquote, urlsplit

import requests
from requests.auth import AuthBase

from sagemaker_runtime.core.credentials import AwsCredentials
from sagemaker_runtime.core.region import Region, build_hostname, endpoint_scheme

ALGORITHM = "AWS4-HMAC-SHA256"
DEFAULT_CONTENT_TYPE = "application/octet-stream"
LONG_DATE_FORMAT = "%Y%m%dT%H%M%SZ"
SHORT_DATE_FORMAT = "%Y%m%d"

# Never part of the signature: proxies and clients are free to rewrite them.
SKIPPED_HEADERS = frozenset({"authorization", "content-length", "user-agent"})

# RFC 3986 unreserved characters, the only ones left as-is.
_UNRESERVED = "-_.~"


def hex_digest(data: bytes | str) -> str:
    if isinstance(data, str):
        data = data.encode("utf-8")
    return hashlib.sha256(data).hexdigest()


EMPTY_PAYLOAD_HASH = hex_digest(b"")


def _hmac(key: bytes, msg: str) -> bytes:
    return hmac.new(key, msg.encode("utf-8"), hashlib.sha256).digest()


def signing_key(secret: str, date: datetime, region: str, service: str) -> bytes:
    k_date = _hmac(f"AWS4{secret}".encode("utf-8"), date.strftime(SHORT_DATE_FORMAT))
    k_region = _hmac(k_date, region)
    k_service = _hmac(k_region, service)
    return _hmac(k_service, "aws4_request")


def signature(string_to_sign: str, key: bytes) -> str:
    return hmac.new(key, string_to_sign.encode("utf-8"), hashlib.sha256).hexdigest()


def credential_scope(date: datetime, region: str, service: str) -> str:
    return f"{date.strftime(SHORT_DATE_FORMAT)}/{region}/{service}/aws4_request"


def string_to_sign(date: datetime, hashed_canonical_request: str, scope: str) -> str:
    """Mark string as AWS4-HMAC-SHA256 hashed."""
    return f"{ALGORITHM}\n{date.strftime(LONG_DATE_FORMAT)}\n{scope}\n{hashed_canonical_request}"


def encode_uri_strict(value: str) -> str:
    return quote(value, safe=_UNRESERVED)


def encode_uri_path(value: str) -> str:
    return quote(value, safe=_UNRESERVED + "/")


def canonical_uri(path: str) -> str:
    if not path:
        return "/"
    return encode_uri_path(path)


def canonical_query_string(params: Mapping[str, Iterable[str]]) -> str:
    pairs: list[tuple[str, str]] = []
    for key, values in params.items():
        for value in values:
            pairs.append((encode_uri_strict(key), encode_uri_strict(value)))
    pairs.sort()
    return "&".join(f"{k}={v}" for k, v in pairs)


def canonical_values(values: Iterable[str]) -> str:
    out: list[str] = []
    for v in values:
        if v.startswith('"'):
            out.append(v)
        else:
            out.append(" ".join(v.split()))
    return ",".join(out)


def canonical_headers(headers: Mapping[str, list[str]]) -> str:
    lines = []
    for key in sorted(headers):
        if key in SKIPPED_HEADERS:
            continue
        lines.append(f"{key}:{canonical_values(headers[key])}\n")
    return "".join(lines)


def signed_headers(headers: Mapping[str, list[str]]) -> str:
    return ";".join(k for k in sorted(headers) if k not in SKIPPED_HEADERS)


def canonical_request(
    method: str,
    uri: str,
    query: str,
    headers: Mapping[str, list[str]],
    payload_hash: str,
) -> str:
    return "\n".join(
        [
            method,
            uri,
            query,
            canonical_headers(headers),
            signed_headers(headers),
            payload_hash,
        ]
    )


class SignedRequest:
    """
    Every element of an HTTP request that takes part in Signature Version 4.

    Headers are kept lower-cased; values for the same key accumulate, so use
    `set_header` to replace. Query params accumulate the same way.
    """

    def __init__(self, method: str, service: str, region: Region, path: str) -> None:
        self.method = method.upper()
        self.service = service
        self.region = region
        self.path = path
        self.endpoint_prefix = service
        self.headers: dict[str, list[str]] = {}
        self.params: dict[str, list[str]] = {}
        self.payload: bytes | None = None
        self.content_type: str | None = None
        self._hostname: str | None = None

    def __repr__(self) -> str:
        return f"SignedRequest({self.method} {self.hostname()}{canonical_uri(self.path)})"

    def set_endpoint_prefix(self, prefix: str) -> None:
        """Hostname prefix, when it differs from the signing name."""
        self.endpoint_prefix = prefix

    def set_content_type(self, content_type: str) -> None:
        self.content_type = content_type

    def set_hostname(self, hostname: str | None) -> None:
        self._hostname = hostname

    def hostname(self) -> str:
        if self._hostname:
            return self._hostname
        return build_hostname(self.endpoint_prefix, self.region)

    def set_payload(self, payload: bytes | str | None) -> None:
        if isinstance(payload, str):
            payload = payload.encode("utf-8")
        self.payload = payload

    def add_header(self, key: str, value: str) -> None:
        self.headers.setdefault(key.lower(), []).append(value)

    def remove_header(self, key: str) -> None:
        self.headers.pop(key.lower(), None)

    def set_header(self, key: str, value: str) -> None:
        self.remove_header(key)
        self.add_header(key, value)

    def header(self, key: str) -> str | None:
        values = self.headers.get(key.lower())
        if not values:
            return None
        return ",".join(values)

    def add_param(self, key: str, value: str) -> None:
        self.params.setdefault(key, []).append(value)

    def set_params(self, params: Mapping[str, str | list[str]]) -> None:
        self.params = {}
        for key, value in params.items():
            values = value if isinstance(value, list) else [value]
            for v in values:
                self.add_param(key, v)

    def canonical_uri(self) -> str:
        return canonical_uri(self.path)

    def canonical_query_string(self) -> str:
        return canonical_query_string(self.params)

    def payload_hash(self) -> str:
        if self.payload is None:
            return EMPTY_PAYLOAD_HASH
        return hex_digest(self.payload)

    def url(self) -> str:
        url = f"{endpoint_scheme(self.region)}://{self.hostname()}{self.canonical_uri()}"
        query = self.canonical_query_string()
        if query:
            url = f"{url}?{query}"
        return url

    def flat_headers(self) -> dict[str, str]:
        """Headers as sent on the wire, one value per key."""
        return {k: ",".join(v) for k, v in self.headers.items()}

    def complement(self) -> None:
        """Set the transport headers without signing."""
        self.set_header("host", self.hostname())
        self.set_header("content-type", self.content_type or DEFAULT_CONTENT_TYPE)
        if self.payload is not None:
            self.set_header("content-length", str(len(self.payload)))
        else:
            self.remove_header("content-length")

    def sign(self, credentials: AwsCredentials, now: datetime | None = None) -> None:
        """
        Compute the signature and add it, with every header it covers, to the request.

        Safe to call repeatedly (e.g. on retry): each header is replaced, never appended.
        """
        date = (now or datetime.now(timezone.utc)).astimezone(timezone.utc)

        self.complement()
        if credentials.token:
            self.set_header("x-amz-security-token", credentials.token)
        else:
            self.remove_header("x-amz-security-token")
        self.set_header("x-amz-date", date.strftime(LONG_DATE_FORMAT))
        payload_hash = self.payload_hash()
        self.set_header("x-amz-content-sha256", payload_hash)
        self.remove_header("authorization")

        creq = canonical_request(
            self.method,
            self.canonical_uri(),
            self.canonical_query_string(),
            self.headers,
            payload_hash,
        )
        scope = credential_scope(date, self.region.name, self.service)
        sts = string_to_sign(date, hex_digest(creq), scope)
        key = signing_key(credentials.secret_access_key, date, self.region.name, self.service)
        sig = signature(sts, key)

        self.add_header(
            "authorization",
            f"{ALGORITHM} Credential={credentials.access_key_id}/{scope}, "
            f"SignedHeaders={signed_headers(self.headers)}, Signature={sig}",
        )


class SigV4Auth(AuthBase):
    """
    `requests` auth hook that signs an arbitrary prepared request.

    Usage:
        requests.post(url, data=b"...", auth=SigV4Auth("sagemaker", region, creds))
    """

    def __init__(self, service: str, region: Region | str, credentials: AwsCredentials) -> None:
        self.service = service
        self.region_name = region.name if isinstance(region, Region) else region
        self.credentials = credentials

    def __call__(self, r: requests.PreparedRequest) -> requests.PreparedRequest:
        parts = urlsplit(r.url)
        region = Region.custom(self.region_name, f"{parts.scheme}://{parts.netloc}")
        signer = SignedRequest(r.method or "GET", self.service, region, unquote(parts.path))
        for key, value in r.headers.items():
            if key.lower() == "content-type":
                signer.set_content_type(value)
            elif key.lower() not in SKIPPED_HEADERS:
                signer.add_header(key, value)
        for key, value in parse_qsl(parts.query, keep_blank_values=True):
            signer.add_param(key, value)
        if r.body is not None and not isinstance(r.body, (bytes, str)):
            raise ValueError("SigV4Auth can only sign bytes or str bodies, not streams")
        signer.set_payload(r.body)
        signer.sign(self.credentials)

        r.url = signer.url()
        for key, value in signer.flat_headers().items():
            r.headers[key] = value
        return r
