import logging
import time

from fastapi import APIRouter, HTTPException

from metascraper.core import resolve
from .schemas import ErrorResponse, HealthResponse, MetadataResponse, ResolveRequest

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post(
    "/resolve",
    response_model=MetadataResponse,
    response_model_exclude_none=True,
    responses={502: {"model": ErrorResponse}},
    summary="Resolve a URL and extract its metadata",
)
async def resolve_url(request: ResolveRequest) -> MetadataResponse:
    """
    Fetches the URL once and returns its metadata record.

    - HTML pages get title, description, images, dates etc. from their meta tags.
    - Images, video and audio only report their `type`.
    - Fields that aren't present in the page are left out of the response.
    """
    url = request.url
    start = time.perf_counter()

    record = await resolve(url)
    duration_ms = int((time.perf_counter() - start) * 1000)

    if record is None:
        # network failure or non-2xx, nothing partial to return
        logger.warning("POST /resolve %s -> failed (%dms)", url, duration_ms)
        raise HTTPException(status_code=502, detail=f"Failed to resolve URL: {url}")

    logger.info(
        "POST /resolve %s -> %s, %d fields (%dms)",
        url,
        record["type"],
        len(record) - 1,
        duration_ms,
    )
    return MetadataResponse.model_validate(record)


@router.get("/health", response_model=HealthResponse, summary="Service health check")
async def health_check() -> HealthResponse:
    return HealthResponse(status="ok")
