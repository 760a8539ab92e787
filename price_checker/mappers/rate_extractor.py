import re
from typing import Any

from price_checker.mappers.text_extractor import extract_text, find_inclusions
from price_checker.schemas.newbook import (
    AvailabilityResponse,
    RawCategory,
    RawTariffOffer,
    parse_availability,
)
from price_checker.schemas.responses import (
    CheapestRate,
    RoomRate,
    RoomRateGroup,
    TariffMessage,
)

# Upstream only sometimes sets tariff_min_nights, the rest is in prose
_MIN_NIGHTS_RE = re.compile(r"(\d+)\s*nights?\s*minimum", re.IGNORECASE)


def _as_response(response: Any) -> AvailabilityResponse | None:
    if response is None or isinstance(response, AvailabilityResponse):
        return response
    return parse_availability(response)


def _is_bookable(category: RawCategory) -> bool:
    return category.sites_available > 0 and bool(category.tariffs_available)


def _qualifying_offers(category: RawCategory) -> list[RawTariffOffer]:
    return [t for t in category.tariffs_available if t.succeeded and t.tariff_total > 0]


def _min_nights_candidates(offer: RawTariffOffer, message: str) -> list[int]:
    candidates = []
    if offer.tariff_min_nights > 0:
        candidates.append(offer.tariff_min_nights)
    match = _MIN_NIGHTS_RE.search(message)
    if match and int(match.group(1)) > 0:
        candidates.append(int(match.group(1)))
    return candidates


def extract_cheapest_rate(response: Any) -> CheapestRate:
    """Reduce one availability response to its cheapest bookable tariff.

    Minimum stay is inferred from failed tariffs only, taking the smallest of
    the structured tariff_min_nights values and any "<N> night minimum" text.
    Malformed input degrades to an unavailable rate, it never raises.
    """
    parsed = _as_response(response)
    if parsed is None:
        return CheapestRate()

    cheapest = CheapestRate()
    min_nights = 0
    debug_messages: list[TariffMessage] = []

    for category in parsed.data:
        if not category.tariffs_available:
            continue

        bookable = category.sites_available > 0
        for offer in category.tariffs_available:
            message = extract_text(offer.tariff_message)
            if message:
                debug_messages.append(TariffMessage(
                    category=category.category_name,
                    tariff=offer.tariff_label,
                    success=offer.succeeded,
                    message=message,
                    min_nights=offer.tariff_min_nights,
                ))

            if not offer.succeeded:
                for candidate in _min_nights_candidates(offer, message):
                    if min_nights == 0 or candidate < min_nights:
                        min_nights = candidate
                continue

            if not bookable or offer.tariff_total <= 0:
                continue

            # Strict comparison keeps the first of equal prices
            if not cheapest.available or offer.tariff_total < cheapest.cheapest_price:
                cheapest = CheapestRate(
                    available=True,
                    cheapest_price=offer.tariff_total,
                    room_type=category.category_name,
                    tariff_name=offer.tariff_label,
                    message=message,
                )

    cheapest.min_nights = min_nights
    cheapest.debug_messages = debug_messages
    return cheapest


def _room_rate(offer: RawTariffOffer) -> RoomRate:
    inclusions = extract_text(offer.tariff_inclusions) or find_inclusions(offer.extras)
    description = (
        extract_text(offer.tariff_short_description)
        or extract_text(offer.tariff_message)
    )
    return RoomRate(
        tariff_name=offer.tariff_label,
        price=offer.tariff_total,
        description=description,
        inclusions=inclusions,
    )


def extract_all_rates_grouped(response: Any) -> list[RoomRateGroup]:
    """All bookable tariffs grouped by room category, in upstream order."""
    parsed = _as_response(response)
    if parsed is None:
        return []

    groups: list[RoomRateGroup] = []
    for category in parsed.data:
        if not _is_bookable(category):
            continue
        rates = [_room_rate(offer) for offer in _qualifying_offers(category)]
        if rates:
            groups.append(RoomRateGroup(
                room_type=category.category_name,
                available=category.sites_available,
                rates=rates,
            ))
    return groups
