"""Link preview extraction.

Fetches a page once with browser-like headers and reads Open Graph and
standard HTML tags into a :class:`LinkMetadata` record. Each field has an
ordered list of selectors; the first non-empty value wins and a field
without any match is left as ``None``.
"""

from __future__ import annotations

import asyncio

import httpx
import structlog
from bs4 import BeautifulSoup

from link_preview.config import Settings, get_settings
from link_preview.schemas.link import LinkMetadata

logger = structlog.get_logger(__name__)

# (CSS selector, attribute to read); ``None`` reads the element's text.
FIELD_SELECTORS: dict[str, tuple[tuple[str, str | None], ...]] = {
    "title": (
        ("meta[property='og:title']", "content"),
        ("title", None),
    ),
    "description": (
        ("meta[property='og:description']", "content"),
        ("meta[name='description']", "content"),
    ),
    "image": (("meta[property='og:image']", "content"),),
    "site_name": (("meta[property='og:site_name']", "content"),),
}


class FetchError(Exception):
    """Raised when a page cannot be retrieved."""

    def __init__(self, url: str, message: str) -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """The request could not be sent or no response headers arrived."""


class BodyReadError(FetchError):
    """Response headers arrived but the body could not be read or decoded."""


def _describe(exc: BaseException) -> str:
    return str(exc) or type(exc).__name__


def _select_value(
    soup: BeautifulSoup, selector: str, attribute: str | None
) -> str | None:
    element = soup.select_one(selector)
    if element is None:
        return None
    if attribute is None:
        value = element.get_text()
    else:
        value = element.get(attribute)
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def extract_metadata(url: str, html: str) -> LinkMetadata:
    """Build a :class:`LinkMetadata` record from a document.

    Never raises on malformed markup; unmatched fields stay ``None``.

    Args:
        url: The URL the document was fetched from. Echoed back as-is.
        html: Raw document text.

    Returns:
        The extracted record.
    """
    soup = BeautifulSoup(html, "html.parser")
    fields: dict[str, str | None] = {}
    for name, chain in FIELD_SELECTORS.items():
        fields[name] = None
        for selector, attribute in chain:
            value = _select_value(soup, selector, attribute)
            if value is not None:
                fields[name] = value
                break
    return LinkMetadata(url=url, **fields)


class MetadataService:
    """Fetch a URL and extract its link preview.

    Pass ``client`` to reuse an existing :class:`httpx.AsyncClient`;
    otherwise each call opens and closes its own. Request headers, timeout
    and redirect policy always come from ``settings``. No retries.
    """

    def __init__(
        self,
        settings: Settings | None = None,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self._settings = settings or get_settings()
        self._client = client

    async def extract(self, url: str) -> LinkMetadata:
        log = logger.bind(url=url)
        log.debug("link_metadata_fetch_started")

        if self._client is not None:
            html = await self._fetch_html(self._client, url)
        else:
            async with httpx.AsyncClient() as client:
                html = await self._fetch_html(client, url)

        metadata = extract_metadata(url, html)
        log.info(
            "link_metadata_extracted",
            fields=[name for name in FIELD_SELECTORS if getattr(metadata, name)],
        )
        return metadata

    async def _fetch_html(self, client: httpx.AsyncClient, url: str) -> str:
        """Send the request and read the body within one ``fetch_timeout``.

        httpx applies the timeout to each connect and read step; the deadline
        bounds the whole call. Expiry before headers is a ``NetworkError``,
        after headers a ``BodyReadError``.
        """
        loop = asyncio.get_running_loop()
        timeout = self._settings.fetch_timeout
        deadline = None if timeout is None else loop.time() + timeout

        def remaining() -> float | None:
            if deadline is None:
                return None
            return max(deadline - loop.time(), 0.0)

        try:
            request = client.build_request(
                "GET",
                url,
                headers=self._settings.request_headers(),
                timeout=httpx.Timeout(timeout),
            )
            response = await asyncio.wait_for(
                client.send(
                    request,
                    stream=True,
                    follow_redirects=self._settings.follow_redirects,
                ),
                remaining(),
            )
        except (httpx.HTTPError, httpx.InvalidURL, asyncio.TimeoutError) as exc:
            logger.warning(
                "link_metadata_request_failed", url=url, error=_describe(exc)
            )
            raise NetworkError(
                url, f"Failed to fetch {url}: {_describe(exc)}"
            ) from exc

        try:
            await asyncio.wait_for(response.aread(), remaining())
            return response.text
        except (
            httpx.HTTPError,
            httpx.StreamError,
            UnicodeDecodeError,
            LookupError,
            asyncio.TimeoutError,
        ) as exc:
            logger.warning(
                "link_metadata_body_read_failed",
                url=url,
                status_code=response.status_code,
                error=_describe(exc),
            )
            raise BodyReadError(
                url, f"Failed to read response from {url}: {_describe(exc)}"
            ) from exc
        finally:
            await response.aclose()


async def fetch_link_metadata(
    url: str,
    *,
    settings: Settings | None = None,
    client: httpx.AsyncClient | None = None,
) -> LinkMetadata:
    """Fetch ``url`` and return its preview record.

    Raises:
        NetworkError: DNS, connection, TLS or timeout failure, or a URL the
            HTTP client rejects.
        BodyReadError: The response body could not be read or decoded.
    """
    return await MetadataService(settings=settings, client=client).extract(url)
