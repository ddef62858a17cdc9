"""Shared core: regions, credentials, SigV4 signing, TLS selection and dispatch."""

from sagemaker_runtime.core.client import Client
from sagemaker_runtime.core.credentials import (
    AwsCredentials,
    ChainProvider,
    DefaultCredentialsProvider,
    EnvironmentProvider,
    ProfileProvider,
    StaticProvider,
)
from sagemaker_runtime.core.dispatch import HttpClient, HttpResponse
from sagemaker_runtime.core.errors import (
    CredentialsError,
    HttpDispatchError,
    ParseError,
    ParseRegionError,
    SageMakerRuntimeError,
    ServiceError,
    UnknownError,
    ValidationError,
)
from sagemaker_runtime.core.region import Region
from sagemaker_runtime.core.signature import SignedRequest, SigV4Auth
from sagemaker_runtime.core.tls import DEFAULT_TLS_BACKEND, TLS_BACKENDS

__all__ = [
    "AwsCredentials",
    "ChainProvider",
    "Client",
    "CredentialsError",
    "DEFAULT_TLS_BACKEND",
    "DefaultCredentialsProvider",
    "EnvironmentProvider",
    "HttpClient",
    "HttpDispatchError",
    "HttpResponse",
    "ParseError",
    "ParseRegionError",
    "ProfileProvider",
    "Region",
    "SageMakerRuntimeError",
    "ServiceError",
    "SigV4Auth",
    "SignedRequest",
    "StaticProvider",
    "TLS_BACKENDS",
    "UnknownError",
    "ValidationError",
]
