import asyncio
import logging
from urllib.parse import urlencode

from price_checker.exceptions.custom import NotConfiguredError, UpstreamError
from price_checker.mappers.rate_extractor import (
    extract_all_rates_grouped,
    extract_cheapest_rate,
)
from price_checker.schemas.query import AvailabilityQuery
from price_checker.schemas.responses import ComparisonResult, FallbackSite, SiteSummary
from price_checker.schemas.site import PriceCheckerConfig, Site
from price_checker.services.newbook import NewBookService

logger = logging.getLogger(__name__)


def build_booking_url(base_url: str, query: AvailabilityQuery) -> str:
    """Booking engine link pre-filled with the searched dates and guests."""
    if not base_url:
        return ""
    base = base_url.split("?", 1)[0]
    params = {
        "available_from": query.period_from,
        "available_to": query.period_to,
        "adults": query.adults,
        "children": query.children,
    }
    return f"{base}?{urlencode(params)}"


class PricingService:
    def __init__(self, newbook: NewBookService, config: PriceCheckerConfig):
        self._newbook = newbook
        self._config = config

    @property
    def config(self) -> PriceCheckerConfig:
        return self._config

    async def get_availability(self, site: Site, query: AvailabilityQuery) -> ComparisonResult:
        """Compare the direct rate with the promo-code (channel) rate for one site."""
        if not site.is_configured:
            raise NotConfiguredError(site.code)

        online_result, channel_result = await asyncio.gather(
            self._newbook.fetch_availability(site, query),
            self._newbook.fetch_availability(site, query, promo_code=site.promo_code),
        )

        if online_result.failed and channel_result.failed:
            raise UpstreamError(online_result.error or "API request failed")

        online = extract_cheapest_rate(online_result.payload)
        channels = extract_cheapest_rate(channel_result.payload)
        logger.info(
            "Site %s %s->%s: online=%s channels=%s",
            site.code, query.period_from, query.period_to,
            online.cheapest_price if online.available else "n/a",
            channels.cheapest_price if channels.available else "n/a",
        )

        return ComparisonResult(
            site=SiteSummary(code=site.code, name=site.name, booking_url=site.booking_url),
            online=online,
            channels=channels,
            all_rates=extract_all_rates_grouped(online_result.payload),
        )

    async def get_fallback_rates(
        self, exclude_code: str, query: AvailabilityQuery
    ) -> list[FallbackSite]:
        """Other properties with direct availability for the same stay, in configured order."""
        if not self._config.enable_fallback:
            return []

        results: list[FallbackSite] = []
        for site in self._config.get_fallback_sites(exclude_code):
            try:
                comparison = await self.get_availability(site, query)
            except (NotConfiguredError, UpstreamError) as exc:
                logger.info("Skipping fallback site %s: %s", site.code, exc)
                continue

            if not comparison.online.available:
                continue

            results.append(FallbackSite(
                code=site.code,
                name=site.name,
                cheapest_price=comparison.online.cheapest_price,
                booking_url=build_booking_url(site.booking_url, query),
            ))
        return results
