"""Parser turning raw HTTP request bytes into replayable templates."""

from __future__ import annotations

from rawreplay.core.errors import ParseError, ParseErrorKind
from rawreplay.ports.template import RequestTemplate

__all__ = ["parse_raw_request"]

DEFAULT_SCHEME = "https"


def parse_raw_request(data: bytes) -> RequestTemplate:
    """Parse a raw HTTP request into a template.

    Expected layout: ``METHOD target[ version]``, then ``Name: Value`` header
    lines, a blank line and an optional body. CRLF and LF line endings are
    both accepted. The returned template has an empty ``name``; the loader
    assigns it.

    Parsing is lenient where the wire format allows it:
    - the HTTP version token is optional and ignored;
    - header lines without a colon are skipped;
    - the body is kept verbatim, with no Content-Length check.

    Args:
        data: Raw request bytes.

    Returns:
        The parsed template.

    Raises:
        ParseError: If the request line is missing or malformed, if a
            relative target comes without a Host header, or if a header
            line is not valid UTF-8.
    """
    newline = data.find(b"\n")
    if newline < 0:
        raise ParseError(ParseErrorKind.MISSING_REQUEST_LINE, "no terminated request line")
    try:
        request_line = data[:newline].decode("utf-8").strip()
    except UnicodeDecodeError as e:
        raise ParseError(
            ParseErrorKind.MISSING_REQUEST_LINE, "request line is not valid UTF-8"
        ) from e

    parts = request_line.split(" ", 2)
    if len(parts) < 2:
        raise ParseError(
            ParseErrorKind.MALFORMED_REQUEST_LINE,
            f"expected 'METHOD target [version]', got {request_line!r}",
        )
    method, target = parts[0], parts[1]

    headers, body = _read_headers(data, newline + 1)
    url = _resolve_url(target, headers)

    try:
        return RequestTemplate(method=method, url=url, headers=headers, body=body)
    except ValueError as e:
        raise ParseError(ParseErrorKind.MALFORMED_REQUEST_LINE, str(e)) from e


def _read_headers(data: bytes, pos: int) -> tuple[dict[str, str], bytes]:
    """Read header lines starting at ``pos`` up to the first blank line.

    Returns:
        Tuple of (headers, body). Later duplicate keys overwrite earlier ones.
    """
    headers: dict[str, str] = {}
    while pos < len(data):
        end = data.find(b"\n", pos)
        if end < 0:
            # Last line without terminator, no body follows
            raw_line, pos = data[pos:], len(data)
        else:
            raw_line, pos = data[pos:end], end + 1

        try:
            line = raw_line.decode("utf-8").strip()
        except UnicodeDecodeError as e:
            raise ParseError(
                ParseErrorKind.HEADER_READ_FAILURE, f"header line is not valid UTF-8: {raw_line!r}"
            ) from e

        if not line:
            break
        key, sep, value = line.partition(":")
        if not sep:
            continue
        headers[key.strip()] = value.strip()

    return headers, data[pos:]


def _resolve_url(target: str, headers: dict[str, str]) -> str:
    """Build an absolute URL from the request target and Host header."""
    if target.startswith("http"):
        return target

    host = headers.get("Host")
    if not host:
        raise ParseError(
            ParseErrorKind.MISSING_HOST_HEADER,
            f"relative target {target!r} requires a Host header",
        )

    # Legacy check: unreachable behind the prefix test above.
    scheme = "http" if target.startswith("http://") else DEFAULT_SCHEME
    return f"{scheme}://{host}{target}"
