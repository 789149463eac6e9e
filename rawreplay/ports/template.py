"""Request template port definition (DTO)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from urllib.parse import urlsplit

__all__ = ["RequestTemplate"]


@dataclass(slots=True, frozen=True)
class RequestTemplate:
    """Immutable blueprint of one HTTP request, replayed every round.

    Decouples the dispatch loop from the raw file format and from the
    HTTP implementation.

    Attributes:
        method: HTTP verb, taken verbatim from the request line.
        url: Absolute URL (scheme, host and path).
        headers: Read-only header mapping, keys in parsed case.
        body: Raw body bytes, possibly empty.
        name: Identifier assigned by the loader after parsing.
    """

    method: str
    url: str
    headers: Mapping[str, str] = field(default_factory=dict)
    body: bytes = b""
    name: str = ""

    def __post_init__(self) -> None:
        """Validate the template and freeze its headers.

        Raises:
            ValueError: If method or url is empty, or url is not absolute.
        """
        if not self.method:
            raise ValueError("Request method must not be empty")
        if not self.url:
            raise ValueError("Request URL must not be empty")
        parts = urlsplit(self.url)
        if not parts.scheme or not parts.netloc:
            raise ValueError(f"Request URL must be absolute (got: {self.url!r})")

        # Own a private read-only copy
        object.__setattr__(self, "headers", MappingProxyType(dict(self.headers)))
