import logging

import httpx

from price_checker.schemas.newbook import NewBookResult
from price_checker.schemas.query import AvailabilityQuery
from price_checker.schemas.site import Site

logger = logging.getLogger(__name__)

API_URL = "https://api.newbook.cloud/rest/"
ACTION_AVAILABILITY = "bookings_availability_pricing"
REGION = "eu"


def build_availability_payload(
    site: Site,
    query: AvailabilityQuery,
    promo_code: str | None = None,
    region: str = REGION,
) -> dict:
    payload = {
        "api_key": site.api_key,
        **query.api_params(),
        "request_action": ACTION_AVAILABILITY,
        "region": region,
    }
    if promo_code:
        payload["promo_code"] = promo_code
    return payload


class NewBookService:
    def __init__(
        self,
        client: httpx.AsyncClient,
        api_url: str = API_URL,
        region: str = REGION,
        timeout: float = 30.0,
    ):
        self._client = client
        self._api_url = api_url
        self._region = region
        self._timeout = timeout

    async def fetch_availability(
        self,
        site: Site,
        query: AvailabilityQuery,
        promo_code: str | None = None,
    ) -> NewBookResult:
        """POST one bookings_availability_pricing request. Never raises."""
        payload = build_availability_payload(site, query, promo_code, self._region)

        try:
            resp = await self._client.post(
                self._api_url,
                json=payload,
                auth=httpx.BasicAuth(site.api_username, site.api_password),
                timeout=self._timeout,
            )
        except httpx.HTTPError as exc:
            logger.warning("NewBook request failed for %s: %s", site.code, exc)
            return NewBookResult(error=str(exc) or exc.__class__.__name__)

        if resp.status_code >= 400:
            logger.warning(
                "NewBook returned %d for %s (promo=%s)",
                resp.status_code, site.code, bool(promo_code),
            )

        try:
            body = resp.json()
        except ValueError:
            logger.warning("NewBook returned non-JSON body for %s", site.code)
            return NewBookResult(error="Invalid JSON response")

        if isinstance(body, dict) and body.get("error"):
            logger.warning("NewBook error for %s: %s", site.code, body["error"])
            return NewBookResult(payload=body, error=str(body["error"]))

        return NewBookResult(payload=body)
