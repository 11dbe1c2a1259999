from dataclasses import dataclass
from typing import Callable, Optional, Union


# Resource type labels, in the order content-types are checked
RESOURCE_TYPES = ("html", "image", "video", "audio", "unknown")

# field name -> value; a key is only present when a non-empty value was found
MetadataRecord = dict[str, Union[str, int]]


@dataclass(frozen=True)
class FieldSpec:
    name: str                           # output key, e.g. "siteName"
    keys: tuple[str, ...]               # lookup keys, highest priority first

    # applied to the winning value; only used where one key needs cleanup
    transform: Optional[Callable[[str, str], Optional[str]]] = None
