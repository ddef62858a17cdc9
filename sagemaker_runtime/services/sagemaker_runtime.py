"""
Amazon SageMaker Runtime @ 2017-05-13.

The SageMaker runtime API: get inferences from a model hosted at an endpoint.
Protocol: rest-json. Signing name `sagemaker`, endpoint prefix `runtime.sagemaker`.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from sagemaker_runtime.core.client import Client
from sagemaker_runtime.core.dispatch import HttpResponse
from sagemaker_runtime.core.errors import ServiceError, UnknownError, ValidationError
from sagemaker_runtime.core.proto_json import parse_json_error
from sagemaker_runtime.core.region import Region
from sagemaker_runtime.core.signature import SignedRequest, encode_uri_strict
from sagemaker_runtime.utils import config
from sagemaker_runtime.utils.logger import get_logger

logger = get_logger("services")

API_VERSION = "2017-05-13"
SIGNING_NAME = "sagemaker"
ENDPOINT_PREFIX = "runtime.sagemaker"

MAX_ENDPOINT_NAME_LENGTH = 63
MAX_BODY_BYTES = 5 * 1024 * 1024
MAX_CUSTOM_ATTRIBUTES_LENGTH = 1024
MAX_HEADER_LENGTH = 1024
ENDPOINT_NAME_PATTERN = re.compile(r"[a-zA-Z0-9](-*[a-zA-Z0-9])*")
# Header values: printable ASCII and tab. Anything else cannot go on the wire as-is.
HEADER_VALUE_PATTERN = re.compile(r"[\t\x20-\x7e]*")
HEADER_FIELDS = ("content_type", "accept", "custom_attributes", "target_model")


@dataclass
class InvokeEndpointInput:
    """
    endpoint_name: name of the endpoint given to CreateEndpoint.
    body: input data in the format given by content_type; passed to the model as-is.
    content_type: MIME type of the input data.
    accept: desired MIME type of the inference.
    custom_attributes: opaque information forwarded verbatim to the model container.
    target_model: model to request on a multi-model endpoint.
    """

    endpoint_name: str
    body: bytes
    content_type: str | None = None
    accept: str | None = None
    custom_attributes: str | None = None
    target_model: str | None = None

    def validate(self) -> None:
        """Raises ValidationError before any network I/O."""
        name = self.endpoint_name or ""
        if not name:
            raise ValidationError("endpoint_name is required")
        if len(name) > MAX_ENDPOINT_NAME_LENGTH:
            raise ValidationError(
                f"endpoint_name must be at most {MAX_ENDPOINT_NAME_LENGTH} characters"
            )
        if not ENDPOINT_NAME_PATTERN.fullmatch(name):
            raise ValidationError(f"endpoint_name {name!r} contains invalid characters")
        if self.body is None:
            raise ValidationError("body is required")
        if len(self.body) > MAX_BODY_BYTES:
            raise ValidationError(f"body must be at most {MAX_BODY_BYTES} bytes")
        for field in HEADER_FIELDS:
            value = getattr(self, field)
            if value is None:
                continue
            limit = MAX_CUSTOM_ATTRIBUTES_LENGTH if field == "custom_attributes" else MAX_HEADER_LENGTH
            if len(value) > limit:
                raise ValidationError(f"{field} must be at most {limit} characters")
            if not HEADER_VALUE_PATTERN.fullmatch(value):
                raise ValidationError(f"{field} must be printable ASCII")


@dataclass
class InvokeEndpointOutput:
    """
    body: inference returned by the model.
    content_type: MIME type of the inference.
    invoked_production_variant: variant that served the request.
    custom_attributes: opaque information returned by the model container.
    """

    body: bytes
    content_type: str | None = None
    invoked_production_variant: str | None = None
    custom_attributes: str | None = None


class InvokeEndpointError:
    """Errors returned by InvokeEndpoint."""

    # An internal failure occurred.
    INTERNAL_FAILURE = "InternalFailure"
    # Model (owned by the customer in the container) returned 4xx or 5xx.
    MODEL_ERROR = "ModelError"
    # The service is unavailable. Try your call again.
    SERVICE_UNAVAILABLE = "ServiceUnavailable"
    # Inspect your request and try again.
    VALIDATION_ERROR = "ValidationError"

    KINDS = (INTERNAL_FAILURE, MODEL_ERROR, SERVICE_UNAVAILABLE, VALIDATION_ERROR)

    def __init__(self, kind: str, message: str) -> None:
        self.kind = kind
        self.message = message

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, InvokeEndpointError):
            return NotImplemented
        return (self.kind, self.message) == (other.kind, other.message)

    def __repr__(self) -> str:
        return f"InvokeEndpointError({self.kind!r}, {self.message!r})"

    def __str__(self) -> str:
        return self.message or self.kind

    @classmethod
    def from_response(cls, response: HttpResponse) -> Exception:
        """Map a failed response to the exception the caller should see."""
        err = parse_json_error(response)
        if err is not None:
            if err.typ in cls.KINDS:
                return ServiceError(cls(err.typ, err.msg))
            if err.typ == "ValidationException":
                return ValidationError(err.msg)
        return UnknownError(response)


class SageMakerRuntimeClient:
    """
    A client for the Amazon SageMaker Runtime API.

    With no arguments it uses the shared client (default credentials chain and
    TLS backend) and the default region.
    """

    def __init__(self, region: Region | str | None = None, client: Client | None = None) -> None:
        if region is None:
            region = Region.default()
        elif isinstance(region, str):
            region = Region.from_name(region)
        self.region = region
        self.client = client or Client.shared()

    @classmethod
    def new_with(cls, request_dispatcher: Any, credentials_provider: Any, region: Region | str) -> SageMakerRuntimeClient:
        return cls(region, Client(credentials_provider, request_dispatcher))

    def _new_request(self, method: str, path: str) -> SignedRequest:
        request = SignedRequest(method, SIGNING_NAME, self.region, path)
        request.set_endpoint_prefix(ENDPOINT_PREFIX)
        return request

    def invoke_endpoint(self, input: InvokeEndpointInput, timeout: float | None = None) -> InvokeEndpointOutput:
        """
        After you deploy a model into production using Amazon SageMaker hosting
        services, your client applications use this API to get inferences from
        the model hosted at the specified endpoint.

        Raises:
            ValidationError: Invalid input, or the service's ValidationException.
            ServiceError: Wrapping an InvokeEndpointError.
            UnknownError: Any other failed response.
            HttpDispatchError / CredentialsError: Transport or credential failure.
        """
        input.validate()
        path = f"/endpoints/{encode_uri_strict(input.endpoint_name)}/invocations"
        request = self._new_request("POST", path)
        request.set_content_type(input.content_type or "application/octet-stream")
        if input.accept is not None:
            request.add_header("Accept", input.accept)
        if input.custom_attributes is not None:
            request.add_header("X-Amzn-SageMaker-Custom-Attributes", input.custom_attributes)
        if input.target_model is not None:
            request.add_header("X-Amzn-SageMaker-Target-Model", input.target_model)
        request.set_payload(input.body)

        if timeout is None:
            timeout = config.request_timeout()
        response = self.client.sign_and_dispatch(request, timeout)

        if not response.is_success():
            err = InvokeEndpointError.from_response(response)
            logger.info(
                "InvokeEndpoint %s failed with HTTP %d: %s", input.endpoint_name, response.status, err
            )
            raise err

        return InvokeEndpointOutput(
            body=response.body,
            content_type=response.header("Content-Type"),
            invoked_production_variant=response.header("x-Amzn-Invoked-Production-Variant"),
            custom_attributes=response.header("X-Amzn-SageMaker-Custom-Attributes"),
        )
