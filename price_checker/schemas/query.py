import re
from datetime import date, datetime

from pydantic import BaseModel, Field, model_validator

API_DATE_FORMAT = "%d-%m-%Y"

_DMY_RE = re.compile(r"^\d{2}-\d{2}-\d{4}$")
_YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")


def parse_request_date(value: str) -> date:
    """Parse DD-MM-YYYY or YYYY-MM-DD (HTML5 date input). Raises ValueError otherwise."""
    value = value.strip()
    if _DMY_RE.match(value):
        return datetime.strptime(value, API_DATE_FORMAT).date()
    if _YMD_RE.match(value):
        return datetime.strptime(value, "%Y-%m-%d").date()
    raise ValueError(f"Invalid date format: {value!r}")


def format_api_date(value: date) -> str:
    return value.strftime(API_DATE_FORMAT)


class AvailabilityQuery(BaseModel):
    date_from: date
    date_to: date
    adults: int = Field(default=2, ge=0)
    children: int = Field(default=0, ge=0)

    @model_validator(mode="after")
    def _check_range(self) -> "AvailabilityQuery":
        if self.date_to <= self.date_from:
            raise ValueError("Departure must be after arrival")
        return self

    @property
    def period_from(self) -> str:
        return format_api_date(self.date_from)

    @property
    def period_to(self) -> str:
        return format_api_date(self.date_to)

    def api_params(self) -> dict[str, str | int]:
        """Query fields exactly as the NewBook API expects them."""
        return {
            "period_from": self.period_from,
            "period_to": self.period_to,
            "adults": self.adults,
            "children": self.children,
        }
