from .models import RESOURCE_TYPES

# content-type fragments, checked in order, first substring match wins
_CONTENT_TYPE_SIGNALS = [
    ("text/html", "html"),
    ("image",     "image"),
    ("video",     "video"),
    ("audio",     "audio"),
]


def classify_content_type(content_type: str) -> str:
    """
    Map a Content-Type header value onto one of:
      html | image | video | audio | unknown

    Matching is a case-insensitive substring test, so parameters such as
    "; charset=utf-8" don't matter. A missing header is "unknown".
    """
    content_type = (content_type or "").lower()

    for signal, resource_type in _CONTENT_TYPE_SIGNALS:
        if signal in content_type:
            return resource_type

    return RESOURCE_TYPES[-1]
