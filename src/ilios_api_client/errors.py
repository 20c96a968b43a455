"""Error classes for the Ilios API client.

Structured error hierarchy with stable error codes. Token errors are raised
before any request is sent; response errors after the transport returns.
"""

from __future__ import annotations

from enum import StrEnum
from typing import Any


class ErrorCode(StrEnum):
    """Standardized error codes for the Ilios API client."""

    # Access token errors (1xxx)
    TOKEN_EMPTY = "TOKEN_1001"
    TOKEN_INVALID_SEGMENTS = "TOKEN_1002"
    TOKEN_DECODE_FAILED = "TOKEN_1003"
    TOKEN_EXPIRED = "TOKEN_1004"

    # Response errors (2xxx)
    EMPTY_RESPONSE = "RESP_2001"
    RESPONSE_DECODE_FAILED = "RESP_2002"
    API_ERROR = "RESP_2003"
    UNEXPECTED_RESPONSE = "RESP_2004"

    # Network errors (3xxx)
    NETWORK_ERROR = "NET_3001"
    TIMEOUT_ERROR = "NET_3002"

    # Request errors (4xxx)
    INVALID_REQUEST = "REQ_4001"


class IliosClientError(Exception):
    """Base error for the Ilios API client with structured error information."""

    def __init__(
        self,
        message: str,
        code: ErrorCode | str,
        *,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.code = code if isinstance(code, str) else code.value
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert error to dictionary for logging/serialization."""
        return {
            "error": self.message,
            "code": self.code,
            "details": self.details,
        }

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class TokenError(IliosClientError):
    """Access token failed client-side validation."""


class TokenEmptyError(TokenError):
    """Access token is missing, empty or whitespace only."""

    def __init__(self, message: str = "API token is empty.") -> None:
        super().__init__(message, ErrorCode.TOKEN_EMPTY)


class TokenInvalidSegmentsError(TokenError):
    """Access token does not have exactly three segments."""

    def __init__(
        self,
        message: str = "API token has an incorrect number of segments.",
        *,
        segments: int | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TOKEN_INVALID_SEGMENTS,
            details={"segments": segments} if segments is not None else None,
        )
        self.segments = segments


class TokenDecodeError(TokenError):
    """Access token payload could not be decoded into claims."""

    def __init__(
        self,
        message: str = "Failed to decode API token.",
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TOKEN_DECODE_FAILED,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TokenExpiredError(TokenError):
    """Access token has expired."""

    def __init__(
        self,
        message: str = "API token is expired.",
        *,
        expired_at: int | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.TOKEN_EXPIRED,
            details={"expired_at": expired_at} if expired_at is not None else None,
        )
        self.expired_at = expired_at


class ResponseError(IliosClientError):
    """API response could not be turned into a result page."""


class EmptyResponseError(ResponseError):
    """API returned an empty body."""

    def __init__(self, message: str = "Empty response.", *, url: str | None = None) -> None:
        super().__init__(
            message,
            ErrorCode.EMPTY_RESPONSE,
            details={"url": url} if url else None,
        )


class ResponseDecodeError(ResponseError):
    """API response body is not a JSON object."""

    def __init__(
        self,
        message: str = "Failed to decode response.",
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            ErrorCode.RESPONSE_DECODE_FAILED,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class ApiError(ResponseError):
    """API responded with an error payload."""

    def __init__(
        self,
        message: str,
        *,
        api_code: Any = None,
        api_message: Any = None,
        errors: list[Any] | None = None,
    ) -> None:
        details: dict[str, Any] = {}
        if api_code is not None:
            details["api_code"] = api_code
        if api_message is not None:
            details["api_message"] = api_message
        if errors:
            details["errors"] = errors
        super().__init__(message, ErrorCode.API_ERROR, details=details)
        self.api_code = api_code
        self.api_message = api_message
        self.errors = errors or []

    @classmethod
    def from_errors(cls, errors: list[Any]) -> ApiError:
        """Create error from an ``errors`` list payload."""
        return cls(
            f"The API responded with the following error: {errors[0]}.",
            errors=errors,
        )

    @classmethod
    def from_code_and_message(cls, code: Any, message: Any) -> ApiError:
        """Create error from a ``code``/``message`` payload."""
        return cls(
            f"Request failed. The API responded with the code: {code} and message: {message}.",
            api_code=code,
            api_message=message,
        )


class UnexpectedResponseError(ResponseError):
    """API response does not hold the requested collection."""

    def __init__(self, object_type: str) -> None:
        super().__init__(
            f"Cannot find {object_type} object in response.",
            ErrorCode.UNEXPECTED_RESPONSE,
            details={"object_type": object_type},
        )
        self.object_type = object_type


class NetworkError(IliosClientError):
    """Network request failed."""

    def __init__(
        self,
        message: str = "Network request failed",
        *,
        code: ErrorCode = ErrorCode.NETWORK_ERROR,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(
            message,
            code,
            details={"cause": str(cause)} if cause else None,
        )
        self.__cause__ = cause


class TimeoutError(NetworkError):
    """Request timed out."""

    def __init__(
        self,
        message: str = "Request timed out",
        *,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message, code=ErrorCode.TIMEOUT_ERROR, cause=cause)


class InvalidRequestError(IliosClientError):
    """Request parameters are invalid."""

    def __init__(self, message: str, *, field: str | None = None) -> None:
        super().__init__(
            message,
            ErrorCode.INVALID_REQUEST,
            details={"field": field} if field else None,
        )
