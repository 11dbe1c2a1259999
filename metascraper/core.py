import logging
from typing import Optional

import requests

from .classifier import classify_content_type
from .extractor import extract_metadata
from .fetcher import declared_charset, fetch_resource
from .models import MetadataRecord
from .parser import parse_html

logger = logging.getLogger(__name__)


async def resolve(url: str) -> Optional[MetadataRecord]:
    """
    Top-level entry point. Fetches one URL and returns its metadata record.
    Returns None for an empty URL, a transport error or a non-2xx response;
    never raises; errors are logged.
    """
    url = (url or "").strip()
    if not url:
        logger.info("URL is empty")
        return None

    try:
        content_type, html, final_url = await fetch_resource(url)
    except requests.RequestException as exc:
        logger.error("Fetch failed for %s: %s", url, exc)
        return None

    resource_type = classify_content_type(content_type)
    record: MetadataRecord = {"type": resource_type}
    if resource_type != "html":
        logger.info("Resolved %s as %s (%s)", url, resource_type, content_type or "no content-type")
        return record

    try:
        soup = parse_html(html, encoding=declared_charset(content_type))
        record.update(extract_metadata(soup))
    except Exception as exc:
        logger.error("Parse/extract failed for %s: %s", final_url, exc)
        return None

    return record
