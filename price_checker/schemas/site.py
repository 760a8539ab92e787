import json
from pathlib import Path

from pydantic import BaseModel, field_validator

DEFAULT_PROMO_CODE = "PriceCheckCode"


class Site(BaseModel):
    code: str
    name: str = ""
    api_username: str = ""
    api_password: str = ""
    api_key: str = ""
    booking_url: str = ""
    promo_code: str = DEFAULT_PROMO_CODE
    is_primary: bool = False
    show_as_fallback: bool = False

    @field_validator("code", "name", "api_username", "api_key", "booking_url", mode="before")
    @classmethod
    def _strip(cls, v):
        return v.strip() if isinstance(v, str) else v

    @field_validator("promo_code", mode="before")
    @classmethod
    def _default_promo(cls, v):
        if v is None or (isinstance(v, str) and not v.strip()):
            return DEFAULT_PROMO_CODE
        return v.strip() if isinstance(v, str) else v

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key and self.api_username and self.api_password)


class PriceCheckerConfig(BaseModel):
    """Display options and the property list, read-only once loaded."""

    currency_symbol: str = "£"
    default_adults: int = 2
    default_children: int = 0
    max_adults: int = 6
    max_children: int = 4
    enable_fallback: bool = False
    sites: list[Site] = []

    @field_validator("sites", mode="before")
    @classmethod
    def _drop_sites_without_code(cls, v):
        if not isinstance(v, list):
            return []
        return [
            s for s in v
            if not isinstance(s, dict) or str(s.get("code") or "").strip()
        ]

    @field_validator("sites")
    @classmethod
    def _single_primary(cls, sites: list[Site]) -> list[Site]:
        """Only the first site flagged primary keeps the flag."""
        has_primary = False
        for site in sites:
            if site.is_primary:
                if has_primary:
                    site.is_primary = False
                has_primary = True
        return sites

    @classmethod
    def from_file(cls, path: str | Path) -> "PriceCheckerConfig":
        path = Path(path)
        if not path.exists():
            return cls()
        return cls(**json.loads(path.read_text(encoding="utf-8")))

    def get_site(self, code: str) -> Site | None:
        for site in self.sites:
            if site.code == code:
                return site
        return None

    def get_primary_site(self) -> Site | None:
        for site in self.sites:
            if site.is_primary:
                return site
        return self.sites[0] if self.sites else None

    def get_fallback_sites(self, exclude_code: str = "") -> list[Site]:
        return [
            s for s in self.sites
            if s.show_as_fallback and s.code != exclude_code
        ]
