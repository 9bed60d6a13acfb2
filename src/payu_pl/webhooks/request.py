"""Request abstraction consumed by the webhook processor.

The processor needs two things from an inbound request: a case-insensitive
header lookup and the raw body bytes, readable more than once. Web
frameworks differ in how they expose both, so integrations adapt their
request type to ``RawRequest`` (``BufferedRequest`` covers the common
cases: a header mapping plus bytes, a file-like stream, or a WSGI environ).
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import IO, Any, Protocol, runtime_checkable

SIGNATURE_HEADER = "OpenPayU-Signature"


@runtime_checkable
class RawRequest(Protocol):
    """Capabilities the webhook processor relies on."""

    def header(self, name: str) -> str | None:
        """Return the header value, looked up case-insensitively."""
        ...

    def body(self) -> bytes:
        """Return the full body; repeated calls return identical bytes."""
        ...


class BufferedRequest:
    """``RawRequest`` over a header mapping and a bytes body or stream.

    A stream is read on the first ``body()`` call and kept in memory. When
    the stream is seekable it is rewound to where it started, so later
    middleware in the same request can still read it.
    """

    def __init__(
        self,
        headers: Mapping[str, str] | None = None,
        body: bytes | str | IO[bytes] | None = None,
    ) -> None:
        self._headers = {str(k).lower(): v for k, v in (headers or {}).items()}
        self._stream: IO[bytes] | None = None
        self._body: bytes | None = None

        if body is None:
            self._body = b""
        elif isinstance(body, str):
            self._body = body.encode("utf-8")
        elif isinstance(body, (bytes, bytearray, memoryview)):
            self._body = bytes(body)
        else:
            self._stream = body

    @classmethod
    def from_wsgi(cls, environ: Mapping[str, Any]) -> BufferedRequest:
        """Adapt a WSGI environ (``HTTP_OPENPAYU_SIGNATURE`` etc.)."""
        headers: dict[str, str] = {}
        for key, value in environ.items():
            if key.startswith("HTTP_"):
                headers[key[5:].replace("_", "-")] = value
            elif key in ("CONTENT_TYPE", "CONTENT_LENGTH"):
                headers[key.replace("_", "-")] = value
        return cls(headers=headers, body=environ.get("wsgi.input"))

    def header(self, name: str) -> str | None:
        return self._headers.get(name.lower())

    def body(self) -> bytes:
        if self._body is None:
            self._body = self._read_stream(self._stream)
        return self._body

    def _read_stream(self, stream: IO[bytes] | None) -> bytes:
        if stream is None:
            return b""

        start = None
        if _seekable(stream):
            start = stream.tell()

        length = self._content_length()
        data = stream.read(length) if length is not None else stream.read()

        if start is not None:
            stream.seek(start)
        if isinstance(data, str):
            data = data.encode("utf-8")
        return bytes(data or b"")

    def _content_length(self) -> int | None:
        value = self._headers.get("content-length")
        if not value:
            return None
        try:
            return max(int(value), 0)
        except ValueError:
            return None


def _seekable(stream: Any) -> bool:
    seekable = getattr(stream, "seekable", None)
    if seekable is None:
        return False
    try:
        return bool(seekable())
    except OSError:
        return False


def as_raw_request(request: Any) -> RawRequest:
    """Coerce supported request shapes to ``RawRequest``.

    Accepts a ``RawRequest`` as is, or a ``(headers, body)`` tuple.
    """
    if isinstance(request, RawRequest):
        return request
    if isinstance(request, tuple) and len(request) == 2:
        headers, body = request
        return BufferedRequest(headers=headers, body=body)
    raise TypeError(
        f"Unsupported request type {type(request).__name__}; "
        "adapt it to payu_pl.webhooks.RawRequest"
    )
