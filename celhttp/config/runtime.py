"""
Runtime Configuration

Settings for executors built by the client factory.
"""

from __future__ import annotations

import os
import ssl
from dataclasses import dataclass
from typing import Any, Optional

from dotenv import load_dotenv

from celhttp.tracing.recorder import DEFAULT_MAX_SPANS


# Accepted TLS floors. Anything older is rejected.
TLS_VERSIONS: dict[str, ssl.TLSVersion] = {
    "TLSv1_2": ssl.TLSVersion.TLSv1_2,
    "TLSv1_3": ssl.TLSVersion.TLSv1_3,
}

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass(frozen=True)
class HttpConfig:
    """
    Configuration for HTTP executors.

    Defaults impose no timeout and a TLS 1.2 floor, with outbound tracing on.
    """
    timeout: Optional[float] = None
    min_tls_version: str = "TLSv1_2"
    trace_outbound: bool = True
    max_spans: int = DEFAULT_MAX_SPANS

    def __post_init__(self):
        if self.min_tls_version not in TLS_VERSIONS:
            raise ValueError(
                f"Unsupported minimum TLS version {self.min_tls_version!r}, "
                f"expected one of {sorted(TLS_VERSIONS)}"
            )
        if self.timeout is not None and self.timeout <= 0:
            raise ValueError(f"timeout must be positive, got {self.timeout}")
        if self.max_spans <= 0:
            raise ValueError(f"max_spans must be positive, got {self.max_spans}")

    @property
    def tls_version(self) -> ssl.TLSVersion:
        """The configured floor as an ssl.TLSVersion."""
        return TLS_VERSIONS[self.min_tls_version]

    @staticmethod
    def _get_env_overrides() -> dict[str, Any]:
        """
        Get configuration overrides from environment variables.

        Supported variables:
        - CELHTTP_TIMEOUT: dispatch timeout in seconds
        - CELHTTP_MIN_TLS_VERSION: TLSv1_2 or TLSv1_3
        - CELHTTP_TRACE_OUTBOUND: record outbound spans (true/false)
        - CELHTTP_MAX_SPANS: completed spans kept in memory
        """
        overrides: dict[str, Any] = {}

        timeout = os.getenv("CELHTTP_TIMEOUT")
        if timeout:
            overrides["timeout"] = float(timeout)

        min_tls = os.getenv("CELHTTP_MIN_TLS_VERSION")
        if min_tls:
            overrides["min_tls_version"] = min_tls

        max_spans = os.getenv("CELHTTP_MAX_SPANS")
        if max_spans:
            overrides["max_spans"] = int(max_spans)

        trace = os.getenv("CELHTTP_TRACE_OUTBOUND")
        if trace:
            value = trace.strip().lower()
            if value in _TRUE_VALUES:
                overrides["trace_outbound"] = True
            elif value in _FALSE_VALUES:
                overrides["trace_outbound"] = False
            else:
                raise ValueError(f"Invalid CELHTTP_TRACE_OUTBOUND value: {trace!r}")

        return overrides

    @classmethod
    def from_env(cls) -> "HttpConfig":
        """Load configuration from the environment (and a .env file, if any)."""
        load_dotenv()
        return cls(**cls._get_env_overrides())
