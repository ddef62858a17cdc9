"""
AWS regions and endpoint hostnames.
"""

from __future__ import annotations

from sagemaker_runtime.core.errors import ParseRegionError
from sagemaker_runtime.utils import config

DEFAULT_REGION = "us-east-1"

KNOWN_REGIONS: tuple[str, ...] = (
    "ap-east-1",
    "ap-northeast-1",
    "ap-northeast-2",
    "ap-northeast-3",
    "ap-south-1",
    "ap-southeast-1",
    "ap-southeast-2",
    "ca-central-1",
    "eu-central-1",
    "eu-west-1",
    "eu-west-2",
    "eu-west-3",
    "eu-north-1",
    "me-south-1",
    "sa-east-1",
    "us-east-1",
    "us-east-2",
    "us-west-1",
    "us-west-2",
    "us-gov-east-1",
    "us-gov-west-1",
    "cn-north-1",
    "cn-northwest-1",
)


class Region:
    """
    A region name plus an optional custom endpoint.

    The name is always what goes into the signing scope; the endpoint, when set,
    replaces the generated hostname.
    """

    __slots__ = ("name", "endpoint")

    def __init__(self, name: str, endpoint: str | None = None) -> None:
        self.name = name
        self.endpoint = endpoint

    @classmethod
    def from_name(cls, name: str) -> Region:
        n = (name or "").strip().lower()
        if n not in KNOWN_REGIONS:
            raise ParseRegionError(f"Not a valid AWS region: {name!r}")
        return cls(n)

    @classmethod
    def custom(cls, name: str, endpoint: str) -> Region:
        return cls(name, endpoint.rstrip("/"))

    @classmethod
    def default(cls) -> Region:
        """Region from AWS_DEFAULT_REGION / AWS_REGION, else us-east-1."""
        name = config.aws_region() or DEFAULT_REGION
        endpoint = config.endpoint_url()
        if endpoint:
            return cls.custom(name, endpoint)
        try:
            return cls.from_name(name)
        except ParseRegionError:
            return cls(DEFAULT_REGION)

    @property
    def is_custom(self) -> bool:
        return self.endpoint is not None

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Region):
            return NotImplemented
        return self.name == other.name and self.endpoint == other.endpoint

    def __hash__(self) -> int:
        return hash((self.name, self.endpoint))

    def __repr__(self) -> str:
        if self.endpoint:
            return f"Region.custom({self.name!r}, {self.endpoint!r})"
        return f"Region({self.name!r})"

    def __str__(self) -> str:
        return self.name


def _strip_scheme(endpoint: str) -> str:
    for scheme in ("https://", "http://"):
        if endpoint.startswith(scheme):
            return endpoint[len(scheme):]
    return endpoint


def build_hostname(endpoint_prefix: str, region: Region) -> str:
    """Hostname (no scheme) for a service endpoint prefix in a region."""
    if region.endpoint:
        return _strip_scheme(region.endpoint)
    suffix = "amazonaws.com.cn" if region.name.startswith("cn-") else "amazonaws.com"
    return f"{endpoint_prefix}.{region.name}.{suffix}"


def endpoint_scheme(region: Region) -> str:
    """`http` only when a custom endpoint asks for it."""
    if region.endpoint and region.endpoint.startswith("http://"):
        return "http"
    return "https"
