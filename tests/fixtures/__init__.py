"""
Test fixtures package for cel-http tests.

- http_doubles.py: dispatcher, response and transport doubles
- certs.py: test CA certificates and helpers

Usage:
    from fixtures import FakeDispatcher, root_ca_pem

    def test_something():
        executor = HttpExecutor(dispatcher=FakeDispatcher(body={"ok": True}))
"""

from .http_doubles import (
    BrokenBodyDispatcher,
    EchoDispatcher,
    ExplodingRaw,
    FakeAdapter,
    FakeDispatcher,
    TrackingResponse,
    make_response,
    prepare,
)

from .certs import (
    ROOT_CA_CN,
    SECOND_CA_CN,
    common_names,
    root_ca_pem,
    second_ca_pem,
)

__all__ = [
    # HTTP doubles
    "BrokenBodyDispatcher",
    "EchoDispatcher",
    "ExplodingRaw",
    "FakeAdapter",
    "FakeDispatcher",
    "TrackingResponse",
    "make_response",
    "prepare",
    # Certificates
    "ROOT_CA_CN",
    "SECOND_CA_CN",
    "common_names",
    "root_ca_pem",
    "second_ca_pem",
]
