"""Service clients built on the shared core."""

from sagemaker_runtime.services.sagemaker_runtime import (
    InvokeEndpointError,
    InvokeEndpointInput,
    InvokeEndpointOutput,
    SageMakerRuntimeClient,
)

__all__ = [
    "InvokeEndpointError",
    "InvokeEndpointInput",
    "InvokeEndpointOutput",
    "SageMakerRuntimeClient",
]
