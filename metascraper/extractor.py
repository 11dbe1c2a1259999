import logging
from typing import Iterable, Optional

from bs4 import BeautifulSoup

from .models import FieldSpec, MetadataRecord
from .parser import ICON_LINK, TITLE_ELEMENT, lookup

logger = logging.getLogger(__name__)


def _strip_twitter_handle(key: str, value: str) -> str:
    """twitter:site holds an @handle; the site name is the handle without the @."""
    if key == "twitter:site" and value.startswith("@"):
        return value[1:]
    return value


# --- field chains: each key is probed in order, first non-empty value wins ---

FIELD_SPECS: tuple[FieldSpec, ...] = (
    FieldSpec("title", (
        "twitter:title", "og:title",
        TITLE_ELEMENT,   # the only chain that reads the document <title>
        "title", "dc.title", "dcterms.title",
        "application-name", "citation.title",
    )),
    FieldSpec("siteName", (
        "og:site_name", "application-name", "citation.title",
        "twitter:site",
    ), transform=_strip_twitter_handle),
    FieldSpec("description", (
        "twitter:description", "og:description", "description",
        "dc:description", "dcterms.description",
        "fdse-description", "FSPageDescription",
        "citation_issue", "dcterms.subject",
    )),
    FieldSpec("author", (
        "twitter:creator", "author",
        "dc.creator", "dcterms.creator", "citation_author", "creator",
        "dc.publisher", "dcterms.publisher", "citation_publisher",
    )),

    # images
    FieldSpec("image", (
        "twitter:image", "twitter:image:src",
        "og:image:secure_url", "og:image", "og:image:url",
    )),
    FieldSpec("imageWidth", ("twitter:image:width", "og:image:width")),
    FieldSpec("imageHeight", ("twitter:image:height", "og:image:height")),
    FieldSpec("imageAlt", ("twitter:image:alt", "og:image:alt")),

    # video / audio
    FieldSpec("video", (
        "twitter:player", "og:video:secure_url", "og:video", "og:video:url",
    )),
    FieldSpec("videoWidth", ("twitter:player:width", "og:video:width")),
    FieldSpec("videoHeight", ("twitter:player:height", "og:video:height")),
    FieldSpec("audio", ("og:audio:secure_url", "og:audio", "og:audio:url")),

    # browser chrome
    FieldSpec("themeColor", ("theme-color", "msapplication-TileColor")),
    FieldSpec("favicon", (
        ICON_LINK,
        "msapplication-TileImage",
        "msapplication-square70x70logo",
        "msapplication-square150x150logo",
        "msapplication-wide310x150logo",
        "msapplication-square310x310logo",
    )),

    # identity and dates
    FieldSpec("url", (
        "twitter:url", "og:url", "url",
        "dc.identifier", "dcterms.identifier", "citation_identifier", "identifier",
        "dc.source", "dcterms.source", "citation_source",
    )),
    FieldSpec("creationDate", (
        "date", "dc.date.issued", "dcterms.date",
        "FSDateCreation", "FSDatePublish", "citation_date",
    )),
    FieldSpec("updateDate", ("dc.modified",)),
)


def resolve_first(soup: BeautifulSoup, keys: Iterable[str]) -> Optional[tuple[str, str]]:
    """
    Return (key, value) for the first key whose lookup yields a non-empty
    string. Keys after the winner are never probed.
    """
    for key in keys:
        value = lookup(soup, key)
        if value:
            return key, value
    return None


def resolve_field(soup: BeautifulSoup, spec: FieldSpec) -> Optional[str]:
    """Value of one output field, or None when no key in its chain matched."""
    match = resolve_first(soup, spec.keys)
    if match is None:
        return None

    key, value = match
    if spec.transform is not None:
        value = spec.transform(key, value)
    return value or None


def extract_metadata(soup: BeautifulSoup) -> MetadataRecord:
    """
    Run every field chain against a parsed HTML document.

    Only fields that resolved to a non-empty value are included; widths and
    heights are passed through as the attribute text, not converted to ints.
    """
    record: MetadataRecord = {}
    for spec in FIELD_SPECS:
        value = resolve_field(soup, spec)
        if value:
            record[spec.name] = value

    logger.debug("Extracted %d metadata fields: %s", len(record), ", ".join(record))
    return record
