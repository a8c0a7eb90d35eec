"""
Tracing Module

Records outbound HTTP calls as spans. Executors built by the client
factory wrap their transport with `traced_transport`.
"""

from .models import HTTPSpan, Span, SpanTiming
from .recorder import DEFAULT_MAX_SPANS, SpanRecorder, current_span, get_recorder
from .transport import TracingTransport, request_filter_is_in_span, traced_transport

__all__ = [
    "HTTPSpan",
    "Span",
    "SpanTiming",
    "DEFAULT_MAX_SPANS",
    "SpanRecorder",
    "current_span",
    "get_recorder",
    "TracingTransport",
    "request_filter_is_in_span",
    "traced_transport",
]
