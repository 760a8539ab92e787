import logging

from fastapi import APIRouter
from pydantic import BaseModel, ValidationError

from price_checker.dependencies import ConfigDep, PricingDep, RateLimited
from price_checker.exceptions.custom import InvalidRequestError, SiteNotFoundError
from price_checker.schemas.query import AvailabilityQuery, parse_request_date
from price_checker.schemas.responses import (
    FallbackData,
    FallbackResponse,
    PriceCheckData,
    PriceCheckResponse,
    WidgetConfig,
    WidgetDefaults,
)
from price_checker.schemas.site import PriceCheckerConfig, Site
from price_checker.services.pricing import build_booking_url

logger = logging.getLogger(__name__)

router = APIRouter()


class PriceCheckRequest(BaseModel):
    site: str = ""
    available_from: str = ""
    available_to: str = ""
    adults: int = 2
    children: int = 0


class FallbackCheckRequest(BaseModel):
    exclude_site: str = ""
    available_from: str = ""
    available_to: str = ""
    adults: int = 2
    children: int = 0


def _build_query(
    available_from: str,
    available_to: str,
    adults: int,
    children: int,
    missing_message: str,
) -> AvailabilityQuery:
    if not available_from.strip() or not available_to.strip():
        raise InvalidRequestError(missing_message)
    try:
        date_from = parse_request_date(available_from)
        date_to = parse_request_date(available_to)
    except ValueError:
        raise InvalidRequestError("Invalid date format") from None
    try:
        return AvailabilityQuery(
            date_from=date_from,
            date_to=date_to,
            adults=abs(adults),
            children=abs(children),
        )
    except ValidationError:
        raise InvalidRequestError("Departure date must be after arrival date") from None


def _resolve_site(config: PriceCheckerConfig, site_code: str) -> Site:
    site_code = site_code.strip()
    site = config.get_site(site_code) if site_code else config.get_primary_site()
    if site is None:
        raise SiteNotFoundError(site_code or None)
    return site


@router.post("/price-check", response_model=PriceCheckResponse, dependencies=[RateLimited])
async def price_check(
    request: PriceCheckRequest,
    service: PricingDep,
) -> PriceCheckResponse:
    query = _build_query(
        request.available_from, request.available_to,
        request.adults, request.children,
        "Please select arrival and departure dates",
    )
    site = _resolve_site(service.config, request.site)

    comparison = await service.get_availability(site, query)
    return PriceCheckResponse(
        data=PriceCheckData(
            **comparison.model_dump(),
            booking_url=build_booking_url(site.booking_url, query),
        )
    )


@router.post("/fallback-check", response_model=FallbackResponse, dependencies=[RateLimited])
async def fallback_check(
    request: FallbackCheckRequest,
    service: PricingDep,
) -> FallbackResponse:
    query = _build_query(
        request.available_from, request.available_to,
        request.adults, request.children,
        "Dates required",
    )
    sites = await service.get_fallback_rates(request.exclude_site.strip(), query)
    return FallbackResponse(data=FallbackData(sites=sites))


def _widget_config(
    config: PriceCheckerConfig,
    site: Site,
    title: str,
    show_fallback: bool,
) -> WidgetConfig:
    return WidgetConfig(
        site_code=site.code,
        site_name=site.name,
        booking_url=site.booking_url,
        show_fallback=show_fallback and config.enable_fallback,
        title=title,
        currency=config.currency_symbol,
        defaults=WidgetDefaults(
            adults=config.default_adults,
            children=config.default_children,
            max_adults=config.max_adults,
            max_children=config.max_children,
        ),
    )


@router.get("/widget", response_model=WidgetConfig)
async def widget_config(
    config: ConfigDep,
    title: str = "",
    show_fallback: bool = True,
) -> WidgetConfig:
    site = _resolve_site(config, "")
    return _widget_config(config, site, title, show_fallback)


@router.get("/widget/{site_code}", response_model=WidgetConfig)
async def widget_config_for_site(
    site_code: str,
    config: ConfigDep,
    title: str = "",
    show_fallback: bool = True,
) -> WidgetConfig:
    site = _resolve_site(config, site_code)
    return _widget_config(config, site, title, show_fallback)
