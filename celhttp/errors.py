"""
Error Taxonomy

Standard errors raised by the HTTP library.
Defines both Pydantic models for structured error communication
with the expression runtime and Python exceptions for control flow.

Note: a response body that is not valid JSON is NOT an error. It is
absorbed into a null body so that policies can still read statusCode.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


# =============================================================================
# Error Codes (Machine-Readable Constants)
# =============================================================================

class ErrorCodes:
    """Stable machine-readable error codes used by the HTTP library."""

    # Local, pre-dispatch failures
    REQUEST_BUILD_ERROR = "REQUEST_BUILD_ERROR"
    ENCODING_ERROR = "ENCODING_ERROR"

    # Dispatch failures (DNS, refused connection, timeout, TLS handshake)
    TRANSPORT_ERROR = "TRANSPORT_ERROR"

    # Client derivation
    INVALID_CA_BUNDLE = "INVALID_CA_BUNDLE"


# =============================================================================
# Pydantic Error Model (Structured Communication)
# =============================================================================

class CelHttpError(BaseModel):
    """
    Error model handed to the expression runtime.

    The runtime fails evaluation of the expression that invoked the
    failing call; this model is what it reports.
    """

    model_config = ConfigDict(extra="forbid")

    code: str = Field(
        ...,
        description="Stable machine-readable error code",
        examples=[ErrorCodes.TRANSPORT_ERROR],
    )
    message: str = Field(
        ...,
        description="Human-readable error message",
    )
    details: dict[str, Any] = Field(
        default_factory=dict,
        description="Additional structured details about the error",
    )
    retryable: bool = Field(
        default=False,
        description="Whether the caller may retry (the library never does)",
    )

    def to_exception(self) -> "CelHttpException":
        """Convert this error model to a raised exception."""
        return CelHttpException(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )


# =============================================================================
# Python Exceptions (Control Flow)
# =============================================================================

class CelHttpException(Exception):
    """
    Base exception for all HTTP library errors.

    Carries structured error information and can be converted
    to/from CelHttpError models.
    """

    def __init__(
        self,
        message: str,
        code: str = "CEL_HTTP_ERROR",
        details: dict[str, Any] | None = None,
        retryable: bool = False,
    ) -> None:
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}
        self.retryable = retryable

    def to_error_model(self) -> CelHttpError:
        """Convert this exception to a CelHttpError model."""
        return CelHttpError(
            code=self.code,
            message=self.message,
            details=self.details,
            retryable=self.retryable,
        )

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(code={self.code!r}, message={self.message!r})"


class RequestBuildError(CelHttpException):
    """Raised when a request cannot be constructed (e.g. malformed URL)."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if method:
            full_details["method"] = method
        if url is not None:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.REQUEST_BUILD_ERROR,
            details=full_details,
            retryable=False,
        )


class EncodingError(CelHttpException):
    """Raised when a POST payload cannot be represented as JSON."""

    def __init__(
        self,
        message: str,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.ENCODING_ERROR,
            details=details,
            retryable=False,
        )


class TransportError(CelHttpException):
    """Raised when dispatching a request fails before any HTTP exchange."""

    def __init__(
        self,
        message: str,
        method: str | None = None,
        url: str | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        full_details = details or {}
        if method:
            full_details["method"] = method
        if url is not None:
            full_details["url"] = url
        super().__init__(
            message=message,
            code=ErrorCodes.TRANSPORT_ERROR,
            details=full_details,
            retryable=True,
        )


class InvalidCABundleError(CelHttpException):
    """Raised when a CA bundle contains no parseable certificate."""

    def __init__(
        self,
        message: str = "failed to parse PEM CA bundle",
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(
            message=message,
            code=ErrorCodes.INVALID_CA_BUNDLE,
            details=details,
            retryable=False,
        )
