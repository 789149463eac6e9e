"""Send outcome port definition (DTO)."""

from __future__ import annotations

from dataclasses import dataclass

__all__ = ["SendOutcome"]


@dataclass(slots=True, frozen=True)
class SendOutcome:
    """Immutable result of one successful HTTP exchange.

    Attributes:
        template_name: Name of the template that was sent.
        status_code: HTTP status code of the response.
        body: Whitespace-trimmed response body, truncated for logging.
    """

    template_name: str
    status_code: int
    body: str
