"""Ilios API Python client."""

from .client import IliosClient
from .config import IliosClientConfig, RetryConfig, TelemetryConfig
from .core.token_validator import TokenValidator
from .errors import (
    ApiError,
    EmptyResponseError,
    ErrorCode,
    IliosClientError,
    InvalidRequestError,
    NetworkError,
    ResponseDecodeError,
    ResponseError,
    TokenDecodeError,
    TokenEmptyError,
    TokenError,
    TokenExpiredError,
    TokenInvalidSegmentsError,
    UnexpectedResponseError,
)
from .models import AccessToken, ListFilter, ScalarFilter, SortDirection, TokenClaims
from .telemetry import configure_telemetry
from .transport import HttpxTransport, Transport

__all__ = [
    "IliosClient",
    "IliosClientConfig",
    "RetryConfig",
    "TelemetryConfig",
    "TokenValidator",
    "ApiError",
    "EmptyResponseError",
    "ErrorCode",
    "IliosClientError",
    "InvalidRequestError",
    "NetworkError",
    "ResponseDecodeError",
    "ResponseError",
    "TokenDecodeError",
    "TokenEmptyError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidSegmentsError",
    "UnexpectedResponseError",
    "AccessToken",
    "ListFilter",
    "ScalarFilter",
    "SortDirection",
    "TokenClaims",
    "configure_telemetry",
    "HttpxTransport",
    "Transport",
]

__version__ = "0.1.0"
