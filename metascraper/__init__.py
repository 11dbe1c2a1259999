from .core import resolve
from .fetcher import fetch_resource
from .parser import parse_html
from .extractor import extract_metadata
from .classifier import classify_content_type
from .models import MetadataRecord, FieldSpec

__all__ = [
    "resolve",
    "fetch_resource",
    "parse_html",
    "extract_metadata",
    "classify_content_type",
    "MetadataRecord",
    "FieldSpec",
]
