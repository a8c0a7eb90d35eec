"""
Request Body Encoding

Serializes POST payloads to JSON.
"""

from __future__ import annotations

import json
from typing import Any

from celhttp.errors import EncodingError


def build_request_data(data: Any) -> bytes:
    """
    Encode `data` as a compact JSON document terminated by a newline.

    Args:
        data: Any JSON-serializable value

    Returns:
        UTF-8 encoded request body

    Raises:
        EncodingError: If `data` holds unsupported types, non-finite
            floats or circular references.
    """
    try:
        encoded = json.dumps(data, allow_nan=False, ensure_ascii=False, separators=(",", ":"))
        return (encoded + "\n").encode("utf-8")
    except (TypeError, ValueError, RecursionError) as e:
        raise EncodingError(
            f"failed to encode HTTP POST data: {e}",
            details={"type": type(data).__name__, "error": str(e)},
        ) from e
