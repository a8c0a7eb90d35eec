"""
Tracing Transport

Decorator that wraps a requests transport adapter so that outbound
calls are recorded as spans.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

import requests
from requests.adapters import BaseAdapter

from .recorder import SpanRecorder, current_span, get_recorder

logger = logging.getLogger(__name__)

RequestFilter = Callable[[requests.PreparedRequest], bool]


def request_filter_is_in_span(request: requests.PreparedRequest) -> bool:
    """Trace only requests sent while a span is current."""
    return current_span() is not None


class TracingTransport(BaseAdapter):
    """
    Transport adapter that records spans around a wrapped adapter.

    Requests rejected by `request_filter` pass through unrecorded.
    """

    def __init__(
        self,
        transport: BaseAdapter,
        *,
        request_filter: Optional[RequestFilter] = None,
        recorder: Optional[SpanRecorder] = None,
    ) -> None:
        super().__init__()
        self.transport = transport
        self.request_filter = request_filter
        self.recorder = recorder or get_recorder()

    def send(self, request, stream=False, timeout=None, verify=True, cert=None, proxies=None):
        if self.request_filter is not None and not self.request_filter(request):
            return self.transport.send(
                request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies
            )

        span = self.recorder.start_http_span(method=request.method or "", url=request.url or "")
        try:
            response = self.transport.send(
                request, stream=stream, timeout=timeout, verify=verify, cert=cert, proxies=proxies
            )
        except Exception as e:
            self.recorder.complete(span, error=str(e))
            raise
        self.recorder.complete(span, status_code=response.status_code)
        logger.debug(f"Recorded span {span.span_id} for {request.method} {request.url}")
        return response

    def close(self):
        self.transport.close()


def traced_transport(
    transport: BaseAdapter,
    request_filter: Optional[RequestFilter] = None,
    recorder: Optional[SpanRecorder] = None,
) -> TracingTransport:
    """Wrap `transport` so that its outbound calls are recorded as spans."""
    return TracingTransport(transport, request_filter=request_filter, recorder=recorder)
