from pydantic import BaseModel, Field


class TariffMessage(BaseModel):
    category: str
    tariff: str
    success: bool
    message: str
    min_nights: int = 0


class CheapestRate(BaseModel):
    available: bool = False
    cheapest_price: float = 0.0
    room_type: str = ""
    tariff_name: str = ""
    message: str = ""
    min_nights: int = 0
    # Internal only, never serialized to the widget
    debug_messages: list[TariffMessage] = Field(default=[], exclude=True)


class RoomRate(BaseModel):
    tariff_name: str
    price: float
    description: str = ""
    inclusions: str = ""


class RoomRateGroup(BaseModel):
    room_type: str
    available: int  # sites available in this category
    rates: list[RoomRate] = []


class SiteSummary(BaseModel):
    code: str
    name: str
    booking_url: str


class ComparisonResult(BaseModel):
    site: SiteSummary
    online: CheapestRate
    channels: CheapestRate
    all_rates: list[RoomRateGroup] = []


class PriceCheckData(ComparisonResult):
    booking_url: str = ""


class PriceCheckResponse(BaseModel):
    success: bool = True
    data: PriceCheckData


class FallbackSite(BaseModel):
    code: str
    name: str
    cheapest_price: float
    booking_url: str


class FallbackData(BaseModel):
    sites: list[FallbackSite] = []


class FallbackResponse(BaseModel):
    success: bool = True
    data: FallbackData


class WidgetDefaults(BaseModel):
    adults: int
    children: int
    max_adults: int
    max_children: int


class WidgetConfig(BaseModel):
    site_code: str
    site_name: str
    booking_url: str
    show_fallback: bool
    title: str = ""
    currency: str
    defaults: WidgetDefaults
