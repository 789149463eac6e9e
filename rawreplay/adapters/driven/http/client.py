"""HTTP sender adapter replaying templates over aiohttp."""

import asyncio
import logging
from types import TracebackType

import aiohttp
from aiohttp import hdrs
from multidict import CIMultiDict
from yarl import URL

from rawreplay.core.errors import SendError, SendErrorKind
from rawreplay.ports.outcome import SendOutcome
from rawreplay.ports.template import RequestTemplate

__all__ = ["HttpClient", "BODY_PREVIEW_CHARS", "prepare_headers", "preview_body"]

logger = logging.getLogger(__name__)

BODY_PREVIEW_CHARS = 512

# The transport frames the body itself
FRAMING_HEADERS = frozenset({hdrs.CONTENT_LENGTH.lower(), hdrs.TRANSFER_ENCODING.lower()})

# Headers aiohttp would add on its own
AUTO_HEADERS = (hdrs.ACCEPT, hdrs.ACCEPT_ENCODING, hdrs.USER_AGENT, hdrs.CONTENT_TYPE)

TRANSPORT_ERRORS = (aiohttp.ClientError, OSError, asyncio.TimeoutError)


class HttpClient:
    """HTTP client sending one request per template, without retry.

    Features:
    - Method, URL, headers and body sent exactly as parsed.
    - No headers added beyond those the template carries.
    - Failures captured as SendError values and logged, never raised.
    - Context manager for proper resource cleanup.

    Timeouts are the aiohttp session defaults.
    """

    def __init__(self) -> None:
        """Initialize HTTP client; the session opens on context entry."""
        self.session: aiohttp.ClientSession | None = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context manager (start session).

        Returns:
            Self for use in async with statement.
        """
        self.session = aiohttp.ClientSession()
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        """Exit async context manager (close session).

        Args:
            exc_type: Exception type if raised in context.
            exc: Exception instance if raised in context.
            tb: Traceback if raised in context.
        """
        if self.session:
            await self.session.close()

    async def send(self, template: RequestTemplate) -> SendOutcome | SendError:
        """Perform one HTTP exchange for a template and log the result.

        Args:
            template: Template to send.

        Returns:
            SendOutcome with status and body preview, or the SendError
            describing which stage failed.
        """
        if self.session is None:
            return self._failed(
                template,
                SendErrorKind.BUILD_FAILED,
                "Session not initialized; use 'async with' context manager",
            )

        try:
            url = URL(template.url, encoded=True)
            headers, skip_auto_headers = prepare_headers(template)
        except (ValueError, TypeError) as e:
            return self._failed(template, SendErrorKind.BUILD_FAILED, e)

        try:
            async with self.session.request(
                template.method,
                url,
                headers=headers,
                skip_auto_headers=skip_auto_headers,
                data=template.body or None,
            ) as resp:
                try:
                    body = await resp.read()
                except TRANSPORT_ERRORS as e:
                    return self._failed(template, SendErrorKind.RESPONSE_READ_FAILED, e)
                status = resp.status
        except (aiohttp.InvalidURL, ValueError) as e:
            return self._failed(template, SendErrorKind.BUILD_FAILED, e)
        except TRANSPORT_ERRORS as e:
            return self._failed(template, SendErrorKind.TRANSPORT_FAILED, e)

        outcome = SendOutcome(
            template_name=template.name,
            status_code=status,
            body=preview_body(body),
        )
        logger.info(f"[{outcome.template_name}] status={outcome.status_code} | response={outcome.body}")
        return outcome

    @staticmethod
    def _failed(
        template: RequestTemplate, kind: SendErrorKind, cause: BaseException | str
    ) -> SendError:
        """Build, log and return a SendError for a failed stage."""
        error = SendError(kind, str(cause) or type(cause).__name__)
        logger.warning(f"[{template.name}] Request failed: {error}")
        return error


def prepare_headers(template: RequestTemplate) -> tuple[CIMultiDict[str], list[str]]:
    """Copy template headers into a fresh per-request mapping.

    Args:
        template: Template whose headers are copied.

    Returns:
        Tuple of (headers, auto headers aiohttp must not add).
    """
    headers: CIMultiDict[str] = CIMultiDict()
    for key, value in template.headers.items():
        if key.lower() not in FRAMING_HEADERS:
            headers[key] = value
    skip_auto_headers = [name for name in AUTO_HEADERS if name not in headers]
    return headers, skip_auto_headers


def preview_body(body: bytes, limit: int = BODY_PREVIEW_CHARS) -> str:
    """Decode, trim and truncate a response body for logging."""
    text = body.decode("utf-8", errors="replace").strip()
    if len(text) > limit:
        return text[:limit] + "…"
    return text
