"""
Configuration Module

Provides configuration loading for the HTTP library.
"""

from .runtime import HttpConfig, TLS_VERSIONS

__all__ = [
    "HttpConfig",
    "TLS_VERSIONS",
]
