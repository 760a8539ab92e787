import json

import httpx
import pytest
from httpx import ASGITransport

SITES = {
    "currency_symbol": "£",
    "default_adults": 2,
    "default_children": 0,
    "max_adults": 6,
    "max_children": 4,
    "enable_fallback": True,
    "sites": [
        {
            "code": "main",
            "name": "Main Park",
            "api_username": "user",
            "api_password": "pass",
            "api_key": "key-main",
            "booking_url": "https://book.example/main?ref=widget",
            "promo_code": "OTA",
            "is_primary": True,
        },
        {
            "code": "lake",
            "name": "Lake Lodge",
            "api_username": "user",
            "api_password": "pass",
            "api_key": "key-lake",
            "booking_url": "https://book.example/lake",
            "show_as_fallback": True,
        },
        {
            "code": "bare",
            "name": "Unconfigured",
            "booking_url": "https://book.example/bare",
            "show_as_fallback": True,
        },
    ],
}


@pytest.fixture
def mock_env(monkeypatch, tmp_path):
    sites_file = tmp_path / "sites.json"
    sites_file.write_text(json.dumps(SITES), encoding="utf-8")
    monkeypatch.setenv("SITES_FILE", str(sites_file))
    monkeypatch.setenv("RATE_LIMIT", "15")
    monkeypatch.setenv("RATE_WINDOW", "60")


@pytest.fixture
async def client(mock_env):
    from price_checker.main import app, lifespan

    async with lifespan(app):
        async with httpx.AsyncClient(
            transport=ASGITransport(app=app),
            base_url="http://test",
        ) as c:
            yield c
