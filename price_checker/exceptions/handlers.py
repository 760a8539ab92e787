import logging

from fastapi import Request
from fastapi.responses import JSONResponse

from .custom import (
    InvalidRequestError,
    NotConfiguredError,
    RateLimitError,
    SiteNotFoundError,
    UpstreamError,
)

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "message": message},
    )


async def not_configured_error_handler(_request: Request, exc: NotConfiguredError) -> JSONResponse:
    logger.error("Site %s is missing NewBook credentials", exc.site_code)
    return _error(503, exc.message)


async def site_not_found_error_handler(_request: Request, exc: SiteNotFoundError) -> JSONResponse:
    logger.warning("Unknown site requested: %s", exc.site_code)
    return _error(404, exc.message)


async def upstream_error_handler(_request: Request, exc: UpstreamError) -> JSONResponse:
    logger.error("NewBook error: %s (status=%s)", exc.message, exc.status_code)
    return _error(502, "API request failed")


async def invalid_request_error_handler(_request: Request, exc: InvalidRequestError) -> JSONResponse:
    return _error(400, exc.message)


async def rate_limit_error_handler(_request: Request, exc: RateLimitError) -> JSONResponse:
    logger.warning("Rate limit hit for %s", exc.client_ip)
    return _error(429, "Too many requests. Please wait a moment.")
