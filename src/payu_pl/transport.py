"""HTTP transport for the PayU REST API.

Thin adapter over ``httpx.Client``: builds the request (JSON or form body,
bearer authorization), sends it and maps the response status onto the
``payu_pl.errors`` hierarchy.

Status codes below 400 are successes. PayU answers order creation with
``302 Found`` and a JSON body, so redirects are never followed.
"""

from __future__ import annotations

import json as jsonlib
from collections.abc import Callable, Mapping
from typing import Any
from urllib.parse import urlencode, urljoin, urlparse

import httpx
import structlog

from payu_pl.errors import (
    ClientError,
    ForbiddenError,
    NetworkError,
    NotFoundError,
    RateLimitedError,
    ResponseError,
    ServerError,
    UnauthorizedError,
)

logger = structlog.get_logger()

SUPPORTED_METHODS = frozenset({"get", "post", "put", "delete"})
ERROR_PREVIEW_LENGTH = 300

_NO_BODY: Any = object()


def validate_base_url(base_url: str) -> None:
    """Raise ValueError unless ``base_url`` is an absolute http(s) URL."""
    try:
        parsed = urlparse(base_url)
    except ValueError as e:
        raise ValueError("base_url is invalid") from e
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError("base_url must be http(s)")


class Transport:
    """Sends requests to PayU and decodes the responses."""

    def __init__(
        self,
        base_url: str,
        access_token_provider: Callable[[], str | None],
        open_timeout: float = 10.0,
        read_timeout: float = 30.0,
        http_client: httpx.Client | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            base_url: API root, e.g. ``https://secure.snd.payu.com``.
            access_token_provider: Callable returning the current bearer token.
            open_timeout: Connect timeout in seconds.
            read_timeout: Read timeout in seconds.
            http_client: Pre-built client (custom transports, proxies, tests).
        """
        validate_base_url(base_url)
        self.base_url = base_url
        self._access_token_provider = access_token_provider
        self._http = http_client or httpx.Client(
            timeout=httpx.Timeout(read_timeout, connect=open_timeout),
            follow_redirects=False,
        )

    def close(self) -> None:
        self._http.close()

    def __enter__(self) -> Transport:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def request(
        self,
        method: str,
        path: str,
        headers: Mapping[str, str] | None = None,
        json: Any = _NO_BODY,
        form: Mapping[str, Any] | None = None,
        authorize: bool = True,
        return_headers: bool = False,
    ) -> Any:
        """Send a request and return the decoded response body.

        Args:
            method: HTTP method (get, post, put, delete).
            path: Path relative to the base URL.
            headers: Extra headers; they override the defaults.
            json: JSON body. ``None`` sends an explicit empty body.
            form: Form fields, sent url-encoded.
            authorize: Attach the bearer token.
            return_headers: Return a dict with ``http_status``, ``headers``
                and raw ``body`` bytes instead of the decoded body.

        Raises:
            ValueError: Unsupported method, GET with a body, missing token.
            NetworkError: Timeout or connection failure.
            ResponseError: HTTP status >= 400 (see subclasses).
        """
        verb = method.lower()
        if verb not in SUPPORTED_METHODS:
            raise ValueError(f"Unsupported HTTP method: {method!r}")

        request_headers = httpx.Headers({"Accept": "application/json"})

        if authorize:
            token = self._access_token_provider()
            if not token:
                raise ValueError(
                    "access_token is required for this request "
                    "(call oauth_token first or pass access_token=)"
                )
            request_headers["Authorization"] = f"Bearer {token}"

        request_headers.update(headers or {})

        if verb == "get":
            # PayU rejects GET requests carrying a body with HTTP 403.
            if json is not _NO_BODY and json is not None:
                raise ValueError("GET requests must not include a JSON body")
            if form:
                raise ValueError("GET requests must not include a form body")

        content: str | None = None
        if form:
            request_headers.setdefault("Content-Type", "application/x-www-form-urlencoded")
            content = urlencode(form)
        elif json is not _NO_BODY:
            request_headers.setdefault("Content-Type", "application/json")
            content = None if json is None else jsonlib.dumps(json, separators=(",", ":"))

        url = urljoin(self.base_url, path)
        logger.debug("PayU request", method=verb.upper(), url=url)

        try:
            response = self._http.request(verb.upper(), url, headers=request_headers, content=content)
        except httpx.TimeoutException as e:
            raise NetworkError("Request timed out", original=e) from e
        except httpx.TransportError as e:
            raise NetworkError("Network failure", original=e) from e

        return self._handle_response(response, return_headers)

    def _handle_response(self, response: httpx.Response, return_headers: bool) -> Any:
        status = response.status_code

        if status < 400:
            if return_headers:
                return {
                    "http_status": status,
                    "headers": {k.lower(): v for k, v in response.headers.items()},
                    "body": response.content,
                }
            return _parse_body(response)

        raw_body = response.text
        parsed = _parse_body(response)
        message = _build_error_message(status, parsed, raw_body)
        correlation_id = response.headers.get("Correlation-Id")

        logger.warning(
            "PayU request failed",
            http_status=status,
            correlation_id=correlation_id,
        )

        raise _error_class_for(status)(
            message,
            http_status=status,
            correlation_id=correlation_id,
            raw_body=raw_body,
            parsed_body=parsed,
        )


def _error_class_for(status: int) -> type[ResponseError]:
    if status == 401:
        return UnauthorizedError
    if status == 403:
        return ForbiddenError
    if status == 404:
        return NotFoundError
    if status == 429:
        return RateLimitedError
    if 400 <= status < 500:
        return ClientError
    return ServerError


def _parse_body(response: httpx.Response) -> Any:
    body = response.text
    if not body:
        return None

    content_type = response.headers.get("Content-Type", "")
    if "application/json" in content_type or body.lstrip().startswith(("{", "[")):
        try:
            return jsonlib.loads(body)
        except ValueError:
            return body
    return body


def _build_error_message(status: int, parsed: Any, raw_body: str) -> str:
    parts = [f"HTTP {status}"]

    if isinstance(parsed, dict) and isinstance(parsed.get("status"), dict):
        status_code = parsed["status"].get("statusCode")
        status_desc = parsed["status"].get("statusDesc")
        parts.extend(str(p) for p in (status_code, status_desc) if p)

    if len(parts) == 1:
        preview = (raw_body or "").strip()
        if len(preview) > ERROR_PREVIEW_LENGTH:
            preview = f"{preview[:ERROR_PREVIEW_LENGTH]}…"
        if preview:
            parts.append(preview)

    return " - ".join(parts)
