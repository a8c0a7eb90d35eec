"""
cel-http

HTTP GET/POST functions for policy expressions.
"""

from celhttp.errors import (
    CelHttpError,
    CelHttpException,
    EncodingError,
    ErrorCodes,
    InvalidCABundleError,
    RequestBuildError,
    TransportError,
)
from celhttp.http import HttpExecutor, default_executor, derive_client
from celhttp.library import HttpLibrary

__version__ = "0.1.0"

__all__ = [
    "CelHttpError",
    "CelHttpException",
    "EncodingError",
    "ErrorCodes",
    "InvalidCABundleError",
    "RequestBuildError",
    "TransportError",
    "HttpExecutor",
    "default_executor",
    "derive_client",
    "HttpLibrary",
]
