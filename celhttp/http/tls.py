"""
Client Factory

Derives executors whose transport trusts only a caller-supplied set of
certificate authorities, with a TLS version floor and outbound tracing.
"""

from __future__ import annotations

import logging
import re
import ssl
import threading
from typing import Optional, Union

import requests
from requests.adapters import HTTPAdapter

from celhttp.config import HttpConfig
from celhttp.errors import InvalidCABundleError
from celhttp.tracing import get_recorder, request_filter_is_in_span, traced_transport

from .client import HttpExecutor

logger = logging.getLogger(__name__)

_PEM_CERTIFICATE_RE = re.compile(
    r"-----BEGIN CERTIFICATE-----.*?-----END CERTIFICATE-----",
    re.DOTALL,
)

_default_executor: Optional[HttpExecutor] = None
_default_lock = threading.Lock()


def default_executor(config: Optional[HttpConfig] = None) -> HttpExecutor:
    """
    Return the process-wide default executor, building it on first use.

    `config` only matters for the call that builds it.
    """
    global _default_executor
    if _default_executor is None:
        with _default_lock:
            if _default_executor is None:
                config = config or HttpConfig()
                _default_executor = HttpExecutor(
                    dispatcher=requests.Session(),
                    timeout=config.timeout,
                )
    return _default_executor


def build_ssl_context(
    ca_bundle: Union[str, bytes],
    min_version: ssl.TLSVersion = ssl.TLSVersion.TLSv1_2,
) -> ssl.SSLContext:
    """
    Build a client TLS context trusting only the certificates in `ca_bundle`.

    Each PEM certificate block is loaded on its own; blocks that fail to
    parse are skipped.

    Raises:
        InvalidCABundleError: If no certificate could be loaded.
    """
    if isinstance(ca_bundle, bytes):
        ca_bundle = ca_bundle.decode("ascii", errors="ignore")

    context = ssl.SSLContext(ssl.PROTOCOL_TLS_CLIENT)
    context.minimum_version = min_version

    blocks = _PEM_CERTIFICATE_RE.findall(ca_bundle)
    loaded = 0
    for index, block in enumerate(blocks):
        try:
            context.load_verify_locations(cadata=block)
        except (ssl.SSLError, ValueError) as e:
            logger.warning(f"Skipping unparseable certificate #{index} in CA bundle: {e}")
            continue
        loaded += 1

    if loaded == 0:
        raise InvalidCABundleError(
            "failed to parse PEM CA bundle",
            details={"pem_blocks": len(blocks)},
        )
    logger.debug(f"Loaded {loaded} CA certificate(s) from bundle")
    return context


class CABundleAdapter(HTTPAdapter):
    """HTTPAdapter whose connection pools use a fixed SSL context."""

    def __init__(self, ssl_context: ssl.SSLContext, **kwargs):
        # init_poolmanager runs inside HTTPAdapter.__init__
        self.ssl_context = ssl_context
        super().__init__(**kwargs)

    def init_poolmanager(self, connections, maxsize, block=False, **pool_kwargs):
        pool_kwargs["ssl_context"] = self.ssl_context
        super().init_poolmanager(connections, maxsize, block=block, **pool_kwargs)

    def proxy_manager_for(self, proxy, **proxy_kwargs):
        proxy_kwargs["ssl_context"] = self.ssl_context
        return super().proxy_manager_for(proxy, **proxy_kwargs)

    def build_connection_pool_key_attributes(self, request, verify, cert=None):
        host_params, pool_kwargs = super().build_connection_pool_key_attributes(request, verify, cert)
        pool_kwargs.pop("ca_certs", None)
        pool_kwargs.pop("ca_cert_dir", None)
        pool_kwargs["cert_reqs"] = "CERT_REQUIRED"
        return host_params, pool_kwargs

    def cert_verify(self, conn, url, verify, cert):
        super().cert_verify(conn, url, verify, cert)
        # Any CA file set here would be loaded into the shared ssl_context.
        if url.lower().startswith("https"):
            conn.cert_reqs = "CERT_REQUIRED"
            conn.ca_certs = None
            conn.ca_cert_dir = None


def derive_client(
    ca_bundle: Union[str, bytes],
    executor: Optional[HttpExecutor] = None,
    config: Optional[HttpConfig] = None,
) -> HttpExecutor:
    """
    Derive an executor for `ca_bundle`.

    Args:
        ca_bundle: PEM-encoded CA certificates; empty means "no custom CAs"
        executor: Executor returned unchanged for an empty bundle
            (defaults to the process-wide default executor)
        config: Timeout, TLS floor and tracing settings; `max_spans`
            resizes the process-wide span recorder

    Returns:
        `executor` itself for an empty bundle, otherwise a new executor

    Raises:
        InvalidCABundleError: If the bundle holds no parseable certificate.
    """
    if executor is None:
        executor = default_executor()
    if not ca_bundle:
        return executor

    config = config or HttpConfig()
    context = build_ssl_context(ca_bundle, config.tls_version)

    transport = CABundleAdapter(context)
    if config.trace_outbound:
        recorder = get_recorder()
        recorder.resize(config.max_spans)
        transport = traced_transport(
            transport,
            request_filter=request_filter_is_in_span,
            recorder=recorder,
        )

    session = requests.Session()
    session.mount("https://", transport)
    session.mount("http://", transport)

    logger.info(f"Derived HTTP client with custom CA bundle (min TLS {config.min_tls_version})")
    return HttpExecutor(dispatcher=session, timeout=config.timeout)
