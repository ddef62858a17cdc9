"""
Python client for Amazon SageMaker Runtime @ 2017-05-13.

If you're using the service, you're probably looking for SageMakerRuntimeClient.
"""

from sagemaker_runtime.core import (
    AwsCredentials,
    Client,
    CredentialsError,
    HttpDispatchError,
    Region,
    SageMakerRuntimeError,
    ServiceError,
    UnknownError,
    ValidationError,
)
from sagemaker_runtime.services import (
    InvokeEndpointError,
    InvokeEndpointInput,
    InvokeEndpointOutput,
    SageMakerRuntimeClient,
)

__version__ = "0.41.0"

__all__ = [
    "AwsCredentials",
    "Client",
    "CredentialsError",
    "HttpDispatchError",
    "InvokeEndpointError",
    "InvokeEndpointInput",
    "InvokeEndpointOutput",
    "Region",
    "SageMakerRuntimeClient",
    "SageMakerRuntimeError",
    "ServiceError",
    "UnknownError",
    "ValidationError",
    "__version__",
]
