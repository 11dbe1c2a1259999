from typing import Optional, Union

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel


class ResolveRequest(BaseModel):
    url: str

    @field_validator("url")
    @classmethod
    def url_must_be_http(cls, v: str) -> str:
        v = v.strip()
        if not v.startswith(("http://", "https://")):
            raise ValueError("URL must start with http:// or https://")
        return v


class MetadataResponse(BaseModel):
    # keys go out camelCased (siteName, imageWidth, ...) to match the record
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    type: str   # html | image | video | audio | unknown

    # page text
    title: Optional[str] = None
    site_name: Optional[str] = None
    description: Optional[str] = None
    author: Optional[str] = None

    # media; widths / heights are passed through as found in the page
    image: Optional[str] = None
    image_width: Optional[Union[str, int]] = None
    image_height: Optional[Union[str, int]] = None
    image_alt: Optional[str] = None
    video: Optional[str] = None
    video_width: Optional[Union[str, int]] = None
    video_height: Optional[Union[str, int]] = None
    audio: Optional[str] = None

    # page signals
    theme_color: Optional[str] = None
    favicon: Optional[str] = None
    url: Optional[str] = None
    creation_date: Optional[str] = None
    update_date: Optional[str] = None


class HealthResponse(BaseModel):
    status: str


class ErrorResponse(BaseModel):
    detail: str
    code: str
