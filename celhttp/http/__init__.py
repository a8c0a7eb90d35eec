"""
HTTP Module

Minimal GET/POST executor for policy expressions, plus the client
factory that derives executors trusting a custom CA bundle.
"""

from .client import Dispatcher, HttpExecutor, execute_and_normalize, normalize_response
from .encoding import build_request_data
from .tls import CABundleAdapter, build_ssl_context, default_executor, derive_client

__all__ = [
    "Dispatcher",
    "HttpExecutor",
    "execute_and_normalize",
    "normalize_response",
    "build_request_data",
    "CABundleAdapter",
    "build_ssl_context",
    "default_executor",
    "derive_client",
]
