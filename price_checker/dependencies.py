from typing import Annotated

from fastapi import Depends, Request

from price_checker.exceptions.custom import RateLimitError
from price_checker.rate_limit import RateLimiter
from price_checker.schemas.site import PriceCheckerConfig
from price_checker.services.pricing import PricingService


def get_pricing_service(request: Request) -> PricingService:
    return request.app.state.pricing_service


def get_price_checker_config(request: Request) -> PriceCheckerConfig:
    return request.app.state.pricing_service.config


def get_client_ip(request: Request) -> str:
    client_ip = request.headers.get("client-ip", "").strip()
    if client_ip:
        return client_ip
    forwarded = request.headers.get("x-forwarded-for", "")
    if forwarded:
        # Can contain multiple hops, the first one is the client
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else ""


def enforce_rate_limit(request: Request) -> None:
    limiter: RateLimiter = request.app.state.rate_limiter
    client_ip = get_client_ip(request)
    if not limiter.hit(client_ip):
        raise RateLimitError(client_ip)


PricingDep = Annotated[PricingService, Depends(get_pricing_service)]
ConfigDep = Annotated[PriceCheckerConfig, Depends(get_price_checker_config)]
RateLimited = Depends(enforce_rate_limit)
