import logging
import sys
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from price_checker.config import Settings
from price_checker.exceptions.custom import (
    InvalidRequestError,
    NotConfiguredError,
    RateLimitError,
    SiteNotFoundError,
    UpstreamError,
)
from price_checker.exceptions.handlers import (
    invalid_request_error_handler,
    not_configured_error_handler,
    rate_limit_error_handler,
    site_not_found_error_handler,
    upstream_error_handler,
)
from price_checker.rate_limit import RateLimiter
from price_checker.routers.price_check import router as price_check_router
from price_checker.schemas.site import PriceCheckerConfig
from price_checker.services.newbook import NewBookService
from price_checker.services.pricing import PricingService

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    settings = Settings()

    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stdout,
    )
    logging.getLogger("httpx").setLevel(logging.WARNING)

    config = PriceCheckerConfig.from_file(settings.sites_file)
    if not config.sites:
        logger.warning("No sites configured in %s", settings.sites_file)

    async with httpx.AsyncClient(timeout=settings.request_timeout) as client:
        newbook = NewBookService(
            client,
            api_url=settings.newbook_api_url,
            region=settings.newbook_region,
            timeout=settings.request_timeout,
        )
        app.state.pricing_service = PricingService(newbook, config)
        app.state.rate_limiter = RateLimiter(settings.rate_limit, settings.rate_window)

        yield


app = FastAPI(title="NewBook Price Checker", lifespan=lifespan)

app.add_exception_handler(NotConfiguredError, not_configured_error_handler)
app.add_exception_handler(SiteNotFoundError, site_not_found_error_handler)
app.add_exception_handler(UpstreamError, upstream_error_handler)
app.add_exception_handler(InvalidRequestError, invalid_request_error_handler)
app.add_exception_handler(RateLimitError, rate_limit_error_handler)

app.include_router(price_check_router)
