import asyncio
import logging
import os
from typing import Optional

import requests

from .classifier import classify_content_type

logger = logging.getLogger(__name__)

# realistic browser UA — avoids most trivial bot blocks
USER_AGENT = os.getenv(
    "METASCRAPER_USER_AGENT",
    "Mozilla/5.0 (Macintosh; Intel Mac OS X 10_15_7) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/124.0.0.0 Safari/537.36",
)

DEFAULT_TIMEOUT = float(os.getenv("METASCRAPER_TIMEOUT_SECONDS", "15"))  # seconds
MAX_CONTENT_BYTES = int(os.getenv("METASCRAPER_MAX_CONTENT_BYTES", str(5 * 1024 * 1024)))  # 5 MB ceiling
CHUNK_SIZE = 64 * 1024


def declared_charset(content_type: str) -> Optional[str]:
    """
    Charset parameter of a Content-Type header, or None when the header
    doesn't name one. The document's own <meta charset> is left to the parser.
    """
    for param in (content_type or "").split(";")[1:]:
        name, _, value = param.partition("=")
        if name.strip().lower() == "charset":
            return value.strip(" '\"").lower() or None
    return None


def _read_capped(response: requests.Response) -> bytes:
    """Raw body bytes, downloading at most MAX_CONTENT_BYTES."""
    body = bytearray()
    for chunk in response.iter_content(chunk_size=CHUNK_SIZE):
        body.extend(chunk)
        if len(body) >= MAX_CONTENT_BYTES:
            break
    return bytes(body[:MAX_CONTENT_BYTES])


def _sync_fetch(url: str) -> tuple[str, Optional[bytes], str]:
    """Synchronous fetch using requests — runs inside a thread executor."""
    # no Referer is ever set, so the target never learns where the call came from
    headers = {
        "User-Agent": USER_AGENT,
        "Accept": "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8",
        "Accept-Language": "en-US,en;q=0.5",
    }
    with requests.Session() as session:
        # ignore .netrc and other ambient credentials
        session.trust_env = False
        with session.get(url, headers=headers, timeout=DEFAULT_TIMEOUT,
                         allow_redirects=True, stream=True) as response:
            if not 200 <= response.status_code < 300:
                raise requests.HTTPError(
                    f"{response.status_code} response for url: {response.url}",
                    response=response,
                )

            content_type = response.headers.get("Content-Type", "")
            if classify_content_type(content_type) != "html":
                # the body is never read for non-HTML resources
                return content_type, None, response.url

            # left undecoded; the parser honours <meta charset> when the header names none
            return content_type, _read_capped(response), response.url


async def fetch_resource(url: str) -> tuple[str, Optional[bytes], str]:
    """
    Fetch a URL asynchronously.

    Uses requests in a thread executor to stay non-blocking inside the async
    event loop. Redirects are followed; any non-2xx final status raises
    requests.HTTPError.
    Returns (content_type, html_bytes_or_None, final_url).
    """
    loop = asyncio.get_running_loop()
    return await loop.run_in_executor(None, _sync_fetch, url)
