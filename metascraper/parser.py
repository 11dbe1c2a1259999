from typing import Optional, Union

from bs4 import BeautifulSoup

# pseudo lookup keys for the two probes that don't read a <meta> tag
TITLE_ELEMENT = "<title>"
ICON_LINK = "link[rel='icon']"


def parse_html(html: Union[str, bytes], encoding: Optional[str] = None) -> BeautifulSoup:
    """
    Parse raw HTML into a document the extractor can query.

    Bytes are decoded by BeautifulSoup: a known `encoding` (the header charset)
    wins, otherwise the document's <meta charset>, otherwise UTF-8 detection.
    """
    if isinstance(html, bytes):
        return BeautifulSoup(html, "lxml", from_encoding=encoding)
    return BeautifulSoup(html or "", "lxml")


def get_meta(soup: BeautifulSoup, key: str) -> Optional[str]:
    """
    Pull content from a <meta> tag, trying name="key" first and then
    property="key". The first tag found decides: a name tag without a content
    attribute returns None rather than falling through to property.
    """
    tag = soup.find("meta", attrs={"name": key})
    if tag is None:
        tag = soup.find("meta", attrs={"property": key})
    if tag is None:
        return None
    return tag.get("content")


def get_title(soup: BeautifulSoup) -> Optional[str]:
    """Text of the first <title> element, unmodified."""
    title_tag = soup.find("title")
    return title_tag.get_text() if title_tag else None


def get_icon_href(soup: BeautifulSoup) -> Optional[str]:
    # exact rel="icon" only; "shortcut icon" doesn't match the selector
    link = soup.select_one(ICON_LINK)
    return link.get("href") if link else None


def lookup(soup: BeautifulSoup, key: str) -> Optional[str]:
    """Probe the document for a single lookup key."""
    if key == TITLE_ELEMENT:
        return get_title(soup)
    if key == ICON_LINK:
        return get_icon_href(soup)
    return get_meta(soup, key)
