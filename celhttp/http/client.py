"""
HTTP Executor

Builds GET/POST requests, dispatches them and normalizes the outcome
into a single value for expression evaluation.

Normalized response shape:
- JSON object body: the object itself, with "statusCode" set
- anything else (array, scalar, missing or malformed body):
  {"body": <value or None>, "statusCode": <int>}

4xx/5xx responses are ordinary values. Only dispatch failures raise.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Mapping, Optional, Protocol, runtime_checkable

import requests

from celhttp.errors import RequestBuildError, TransportError

from .encoding import build_request_data

if TYPE_CHECKING:
    from celhttp.config import HttpConfig

logger = logging.getLogger(__name__)

STATUS_CODE_KEY = "statusCode"
BODY_KEY = "body"

_JSON_WHITESPACE = " \t\r\n"


def _reject_constant(name: str) -> Any:
    raise ValueError(f"invalid JSON literal {name!r}")


_DECODER = json.JSONDecoder(parse_constant=_reject_constant)


@runtime_checkable
class Dispatcher(Protocol):
    """Anything that can send a prepared request (e.g. requests.Session)."""

    def send(self, request: requests.PreparedRequest, **kwargs: Any) -> requests.Response:
        ...


def decode_json_body(content: Optional[bytes]) -> Any:
    """
    Decode the first JSON value in `content`; trailing data is ignored.

    Raises:
        ValueError: If there is no valid JSON value to decode.
    """
    if not content:
        raise ValueError("empty response body")
    text = content.decode("utf-8", errors="replace").lstrip(_JSON_WHITESPACE)
    value, _ = _DECODER.raw_decode(text)
    return value


def _read_body(response: requests.Response) -> Any:
    try:
        return decode_json_body(response.content)
    except (ValueError, RecursionError, requests.RequestException) as e:
        # statusCode must stay reachable, so a bad body is just a null body
        logger.debug(f"Discarding undecodable response body (status {response.status_code}): {e}")
        return None


def normalize_response(body: Any, status_code: int) -> dict[str, Any]:
    """Attach the status code to a decoded body."""
    if isinstance(body, dict):
        body[STATUS_CODE_KEY] = status_code
        return body
    return {
        BODY_KEY: body,
        STATUS_CODE_KEY: status_code,
    }


def execute_and_normalize(
    dispatcher: Dispatcher,
    request: requests.PreparedRequest,
    *,
    timeout: Optional[float] = None,
) -> dict[str, Any]:
    """
    Dispatch `request` and normalize the response.

    The response is closed before returning, whatever happens while reading it.

    Raises:
        TransportError: If the dispatcher fails to produce a response.
    """
    try:
        response = dispatcher.send(request, timeout=timeout)
    except (requests.RequestException, OSError) as e:
        logger.warning(f"{request.method} {request.url} failed: {e}")
        raise TransportError(
            f"request failed: {e}",
            method=request.method,
            url=request.url,
        ) from e

    with response:
        status_code = int(response.status_code)
        body = _read_body(response)

    logger.debug(f"{request.method} {request.url} -> {status_code}")
    return normalize_response(body, status_code)


def _build_request(
    method: str,
    url: str,
    headers: Optional[Mapping[str, str]],
    body: Optional[bytes] = None,
) -> requests.PreparedRequest:
    try:
        return requests.Request(
            method=method,
            url=url,
            headers=dict(headers or {}),
            data=body,
        ).prepare()
    except (requests.RequestException, ValueError) as e:
        raise RequestBuildError(
            f"failed to create request: {e}",
            method=method,
            url=url,
        ) from e


@dataclass(frozen=True)
class HttpExecutor:
    """
    Executes GET/POST requests for policy expressions.

    Holds no per-request state, so one instance can serve concurrent
    callers. Deriving a client returns a new executor.

    Usage:
        executor = HttpExecutor(dispatcher=requests.Session())

        response = executor.get("https://api.example.com/data")
        if response["statusCode"] == 200:
            ...
    """
    dispatcher: Dispatcher
    timeout: Optional[float] = None

    def get(self, url: str, headers: Optional[Mapping[str, str]] = None) -> dict[str, Any]:
        """
        Perform a GET request.

        Args:
            url: Request URL
            headers: Headers applied verbatim to the request

        Returns:
            The normalized response value

        Raises:
            RequestBuildError: If the URL is invalid
            TransportError: If dispatching fails
        """
        request = _build_request("GET", url, headers)
        return execute_and_normalize(self.dispatcher, request, timeout=self.timeout)

    def post(
        self,
        url: str,
        data: Any,
        headers: Optional[Mapping[str, str]] = None,
    ) -> dict[str, Any]:
        """
        Perform a POST request with `data` encoded as JSON.

        Raises:
            EncodingError: If `data` is not JSON-serializable (nothing is sent)
            RequestBuildError: If the URL is invalid
            TransportError: If dispatching fails
        """
        body = build_request_data(data)
        request = _build_request("POST", url, headers, body)
        return execute_and_normalize(self.dispatcher, request, timeout=self.timeout)

    def client(self, ca_bundle: str, config: Optional["HttpConfig"] = None) -> "HttpExecutor":
        """Derive an executor trusting `ca_bundle`; an empty bundle returns self."""
        from .tls import derive_client
        return derive_client(ca_bundle, executor=self, config=config)
