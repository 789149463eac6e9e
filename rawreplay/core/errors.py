"""Error types raised or reported by the replay pipeline."""

from __future__ import annotations

from enum import Enum

__all__ = [
    "ReplayError",
    "ParseError",
    "ParseErrorKind",
    "LoadError",
    "LoadErrorKind",
    "SendError",
    "SendErrorKind",
]


class ParseErrorKind(str, Enum):
    MISSING_REQUEST_LINE = "missing_request_line"
    MALFORMED_REQUEST_LINE = "malformed_request_line"
    MISSING_HOST_HEADER = "missing_host_header"
    HEADER_READ_FAILURE = "header_read_failure"


class LoadErrorKind(str, Enum):
    NO_TEMPLATES_FOUND = "no_templates_found"
    FILE_READ_FAILURE = "file_read_failure"
    TEMPLATE_PARSE_FAILURE = "template_parse_failure"


class SendErrorKind(str, Enum):
    BUILD_FAILED = "build_failed"
    TRANSPORT_FAILED = "transport_failed"
    RESPONSE_READ_FAILED = "response_read_failed"


class ReplayError(Exception):
    """Base error carrying a machine-readable kind.

    Attributes:
        kind: Enum member classifying the failure.
        message: Human-readable description.
    """

    def __init__(self, kind: Enum, message: str) -> None:
        super().__init__(message)
        self.kind = kind
        self.message = message

    def __str__(self) -> str:
        return f"{self.kind.value}: {self.message}"


class ParseError(ReplayError):
    """Raw request bytes could not be turned into a template. Fatal at startup."""

    kind: ParseErrorKind


class LoadError(ReplayError):
    """Templates could not be discovered, read or parsed. Fatal at startup."""

    kind: LoadErrorKind


class SendError(ReplayError):
    """One send failed. Reported and swallowed, never fatal."""

    kind: SendErrorKind
