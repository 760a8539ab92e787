import math
from enum import StrEnum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator

# Free text arrives as a string, an object, an array, or not at all
FreeText = str | dict[str, Any] | list[Any] | None


class TariffStatus(StrEnum):
    success = "success"
    failed = "failed"


def _to_float(value: Any) -> float:
    if isinstance(value, bool):
        return 0.0
    try:
        number = float(value)
    except (TypeError, ValueError):
        return 0.0
    return number if math.isfinite(number) else 0.0


def _to_int(value: Any) -> int:
    if isinstance(value, bool):
        return 0
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError):
        return 0


class RawTariffOffer(BaseModel):
    model_config = ConfigDict(extra="allow")

    tariff_label: str = ""
    tariff_total: float = 0.0
    tariff_success: TariffStatus = TariffStatus.failed
    tariff_min_nights: int = 0
    tariff_message: FreeText = None
    tariff_inclusions: FreeText = None
    tariff_short_description: FreeText = None

    @field_validator("tariff_label", mode="before")
    @classmethod
    def _coerce_label(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list)):
            return ""
        return str(v)

    @field_validator("tariff_total", mode="before")
    @classmethod
    def _coerce_total(cls, v: Any) -> float:
        return _to_float(v)

    @field_validator("tariff_min_nights", mode="before")
    @classmethod
    def _coerce_min_nights(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("tariff_success", mode="before")
    @classmethod
    def _coerce_success(cls, v: Any) -> TariffStatus:
        # Only the literal string "true" counts, a JSON boolean does not
        return TariffStatus.success if v == "true" and isinstance(v, str) else TariffStatus.failed

    @field_validator(
        "tariff_message", "tariff_inclusions", "tariff_short_description", mode="before"
    )
    @classmethod
    def _coerce_free_text(cls, v: Any) -> FreeText:
        if v is None or isinstance(v, (str, dict, list)):
            return v
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return None

    @property
    def succeeded(self) -> bool:
        return self.tariff_success is TariffStatus.success

    @property
    def extras(self) -> dict[str, Any]:
        return dict(self.model_extra or {})


class RawCategory(BaseModel):
    model_config = ConfigDict(extra="ignore")

    category_name: str = "Unknown"
    sites_available: int = 0
    tariffs_available: list[RawTariffOffer] = []

    @field_validator("category_name", mode="before")
    @classmethod
    def _coerce_name(cls, v: Any) -> str:
        if v is None or isinstance(v, (dict, list)):
            return "Unknown"
        return str(v)

    @field_validator("sites_available", mode="before")
    @classmethod
    def _coerce_sites(cls, v: Any) -> int:
        return _to_int(v)

    @field_validator("tariffs_available", mode="before")
    @classmethod
    def _coerce_tariffs(cls, v: Any) -> list:
        if isinstance(v, dict):
            v = list(v.values())
        if not isinstance(v, list):
            return []
        return [t for t in v if isinstance(t, dict)]


class AvailabilityResponse(BaseModel):
    model_config = ConfigDict(extra="ignore")

    data: list[RawCategory] = []


def parse_availability(payload: Any) -> AvailabilityResponse | None:
    """Normalize a decoded upstream body. Returns None when there is no category list."""
    if not isinstance(payload, dict) or payload.get("error"):
        return None
    categories = payload.get("data")
    if isinstance(categories, dict):
        categories = list(categories.values())
    if not isinstance(categories, list):
        return None
    return AvailabilityResponse(data=[c for c in categories if isinstance(c, dict)])


class NewBookResult(BaseModel):
    """Outcome of one upstream call: a decoded body or a transport-level error."""

    payload: Any = None
    error: str | None = None

    @property
    def failed(self) -> bool:
        return self.error is not None
