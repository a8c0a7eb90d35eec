"""
Span Recorder

Keeps track of the current span and collects completed spans.
The current span lives in a ContextVar, so concurrent callers on
different threads each see their own.
"""

from __future__ import annotations

import threading
import uuid
from collections import deque
from contextlib import contextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Iterator, Optional

from .models import HTTPSpan, Span, SpanTiming


# Oldest spans are dropped once a recorder holds this many.
DEFAULT_MAX_SPANS = 1000

_current_span: ContextVar[Optional[Span]] = ContextVar("celhttp_current_span", default=None)


def _check_max_spans(max_spans: int) -> None:
    if max_spans <= 0:
        raise ValueError(f"max_spans must be positive, got {max_spans}")


def generate_span_id() -> str:
    """Format: sp_{16 hex chars}"""
    return f"sp_{uuid.uuid4().hex[:16]}"


def current_span() -> Optional[Span]:
    """Return the span current in this context, if any."""
    return _current_span.get()


class SpanRecorder:
    """
    Records spans for traced work.

    Usage:
        recorder = SpanRecorder()

        with recorder.span("evaluate-policy"):
            executor.get("https://example.com/api")

        spans = recorder.get_spans()

    Only the newest `max_spans` completed spans are kept.
    """

    def __init__(self, max_spans: int = DEFAULT_MAX_SPANS) -> None:
        _check_max_spans(max_spans)
        self._spans: deque[Span] = deque(maxlen=max_spans)
        self._lock = threading.Lock()

    @property
    def max_spans(self) -> int:
        return self._spans.maxlen

    def resize(self, max_spans: int) -> None:
        """Change the bound, keeping the newest spans."""
        _check_max_spans(max_spans)
        with self._lock:
            if max_spans != self._spans.maxlen:
                self._spans = deque(self._spans, maxlen=max_spans)

    @contextmanager
    def span(self, name: str) -> Iterator[Span]:
        """Open a span and make it current for the duration of the block."""
        parent = _current_span.get()
        span = Span(
            span_id=generate_span_id(),
            parent_id=parent.span_id if parent else None,
            name=name,
            timing=SpanTiming(started_at=datetime.now(timezone.utc)),
        )
        token = _current_span.set(span)
        try:
            yield span
        except Exception as e:
            span.error = str(e)
            raise
        finally:
            _current_span.reset(token)
            self.complete(span)

    def start_http_span(self, *, method: str, url: str) -> HTTPSpan:
        """Start recording an outbound HTTP request."""
        parent = _current_span.get()
        return HTTPSpan(
            span_id=generate_span_id(),
            parent_id=parent.span_id if parent else None,
            name=f"HTTP {method}",
            method=method,
            url=url,
            timing=SpanTiming(started_at=datetime.now(timezone.utc)),
        )

    def complete(
        self,
        span: Span,
        *,
        error: Optional[str] = None,
        **extra_fields: Any,
    ) -> Span:
        """
        Complete a span and store it.

        Args:
            span: The span to complete
            error: Error message if failed
            **extra_fields: Additional fields to set on the span (e.g. status_code)

        Returns:
            The completed span
        """
        now = datetime.now(timezone.utc)
        span.timing.ended_at = now
        if span.timing.started_at:
            delta = now - span.timing.started_at
            span.timing.duration_ms = delta.total_seconds() * 1000

        if error is not None:
            span.error = error

        for key, value in extra_fields.items():
            if hasattr(span, key):
                setattr(span, key, value)

        with self._lock:
            self._spans.append(span)
        return span

    def get_spans(self) -> list[Span]:
        """Get all completed spans."""
        with self._lock:
            return list(self._spans)

    def clear(self) -> None:
        """Clear all spans."""
        with self._lock:
            self._spans.clear()

    def to_dict_list(self) -> list[dict[str, Any]]:
        """Convert all spans to JSON-serializable dicts."""
        return [s.model_dump(mode="json", exclude_none=True) for s in self.get_spans()]


_recorder = SpanRecorder()


def get_recorder() -> SpanRecorder:
    """Return the process-wide recorder."""
    return _recorder
