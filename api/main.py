import logging

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .routes import router

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)

logger = logging.getLogger(__name__)

# machine-readable codes for the error responses this service produces
ERROR_CODES = {
    404: "not_found",
    405: "method_not_allowed",
    502: "resolve_failed",
}

app = FastAPI(
    title="Metascraper",
    description=(
        "Resolve a URL to its metadata: title, site name, description, author, "
        "images, video, audio, favicon and dates, normalized from Open Graph, "
        "Twitter Card, Dublin Core, citation and Microsoft tile meta tags. "
        "Non-HTML resources only report their type."
    ),
    version="1.0.0",
)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    """Every HTTP error carries the ErrorResponse shape: detail plus code."""
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.detail, "code": ERROR_CODES.get(exc.status_code, "http_error")},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error("Unhandled error on %s %s: %s", request.method, request.url.path, exc, exc_info=True)
    return JSONResponse(
        status_code=500,
        content={"detail": "An unexpected error occurred.", "code": "internal_error"},
    )


app.include_router(router)
