"""URL and request helpers used by generated clients.

This module only depends on the standard library: it is copied into every
generated package as ``_url.py``.
"""

from dataclasses import dataclass, field
from typing import Any
from urllib.parse import quote

# RFC 3986 pchar minus unreserved characters and percent-encodings.
PARTS_SAFE = "!$&'()*+,;=:@"


def percent_encode(value: str) -> str:
    """Percent-encode a value for use as a single path segment."""
    return quote(value, safe=PARTS_SAFE)


class UrlBuffer:
    """A fixed-size buffer that must be filled exactly to its capacity."""

    __slots__ = ("_buf", "_pos")

    def __init__(self, capacity: int):
        self._buf = bytearray(capacity)
        self._pos = 0

    @property
    def capacity(self) -> int:
        return len(self._buf)

    def __len__(self) -> int:
        return self._pos

    def push_char(self, char: str) -> None:
        if self._pos >= len(self._buf):
            raise OverflowError(f"url buffer of {len(self._buf)} bytes is full")
        self._buf[self._pos] = ord(char)
        self._pos += 1

    def push_str(self, value: str) -> None:
        data = value.encode("utf-8")
        end = self._pos + len(data)
        if end > len(self._buf):
            raise OverflowError(f"{len(data)} bytes do not fit in url buffer of {len(self._buf)} bytes")
        self._buf[self._pos:end] = data
        self._pos = end

    def finish(self) -> str:
        if self._pos != len(self._buf):
            raise ValueError(f"url buffer filled {self._pos} of {len(self._buf)} bytes")
        return self._buf.decode("utf-8")


def serialize_param(value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, (list, tuple)):
        return ",".join(serialize_param(v) for v in value)
    return str(value)


@dataclass(frozen=True)
class Request:
    """A fully built API request, ready to hand to a transport."""

    method: str
    path: str
    params: dict[str, Any] = field(default_factory=dict)
    body: Any = None

    def query(self) -> dict[str, str]:
        """Query string parameters, serialized, skipping unset values."""
        return {k: serialize_param(v) for k, v in self.params.items() if v is not None}
