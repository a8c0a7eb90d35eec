"""
Span Models

Schemas for recorded spans. A span covers one unit of work; HTTP spans
cover a single outbound request and are children of the span that was
current when the request was sent.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field


SpanKind = Literal["internal", "http"]


class SpanTiming(BaseModel):
    """Timing information for a span."""

    model_config = ConfigDict(extra="forbid")

    started_at: Optional[datetime] = Field(
        default=None,
        description="When the operation started",
    )
    ended_at: Optional[datetime] = Field(
        default=None,
        description="When the operation completed",
    )
    duration_ms: Optional[float] = Field(
        default=None,
        description="Duration in milliseconds",
    )


class Span(BaseModel):
    """
    Base span for any traced unit of work.
    """

    model_config = ConfigDict(extra="forbid")

    span_id: str = Field(
        ...,
        description="Unique identifier for this span",
    )
    parent_id: Optional[str] = Field(
        default=None,
        description="Identifier of the enclosing span, if any",
    )
    kind: SpanKind = Field(
        default="internal",
        description="Type of traced work",
    )
    name: str = Field(
        ...,
        description="Span name",
    )
    timing: SpanTiming = Field(
        default_factory=SpanTiming,
        description="Timing metadata",
    )
    error: Optional[str] = Field(
        default=None,
        description="Error message if the operation failed",
    )

    @property
    def is_successful(self) -> bool:
        """Check if the operation completed without error."""
        return self.error is None


class HTTPSpan(Span):
    """
    Span for an outbound HTTP request.

    Captures method, URL and status. Bodies and headers are not recorded.
    """

    kind: Literal["http"] = "http"

    method: str = Field(
        ...,
        description="HTTP method (GET, POST)",
    )
    url: str = Field(
        ...,
        description="Request URL",
    )
    status_code: Optional[int] = Field(
        default=None,
        description="HTTP status code",
    )
