from pydantic import BaseModel, Field
from datetime import datetime, timezone
from typing import Generic, Literal, TypeVar

T = TypeVar("T")

Source = Literal["live", "fallback"]

class UsdQuote(BaseModel):
    price: float | None
    volume_24h: float | None
    percent_change_1h: float | None = None
    percent_change_24h: float | None = None
    percent_change_7d: float | None = None
    market_cap: float | None

class Quote(BaseModel):
    USD: UsdQuote

class CoinQuote(BaseModel):
    id: str
    name: str
    symbol: str
    slug: str
    quote: Quote

class HistoricalPoint(BaseModel):
    date: str  # ISO-8601, UTC
    price: float

class MarketData(BaseModel, Generic[T]):
    source: Source
    items: list[T] = Field(default_factory=list)

# --- CoinGecko payloads ---

class CoinGeckoMarket(BaseModel):
    id: str
    name: str
    symbol: str
    current_price: float | None
    total_volume: float | None
    market_cap: float | None
    price_change_percentage_1h_in_currency: float | None = None
    price_change_percentage_24h_in_currency: float | None = None
    price_change_percentage_7d_in_currency: float | None = None

    def to_coin_quote(self) -> CoinQuote:
        return CoinQuote(
            id=self.id,
            name=self.name,
            symbol=self.symbol.upper(),
            slug=self.id,
            quote=Quote(USD=UsdQuote(
                price=self.current_price,
                volume_24h=self.total_volume,
                percent_change_1h=self.price_change_percentage_1h_in_currency,
                percent_change_24h=self.price_change_percentage_24h_in_currency,
                percent_change_7d=self.price_change_percentage_7d_in_currency,
                market_cap=self.market_cap,
            )),
        )

class CoinGeckoMarketChart(BaseModel):
    # [epoch millis, price]
    prices: list[tuple[float, float]]

    def to_points(self) -> list[HistoricalPoint]:
        return [
            HistoricalPoint(date=iso_utc(datetime.fromtimestamp(ts_ms / 1000, tz=timezone.utc)), price=price)
            for ts_ms, price in self.prices
        ]

def as_utc(dt: datetime) -> datetime:
    # naive values are taken to be UTC already, not host-local time
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)

def iso_utc(dt: datetime) -> str:
    """Millisecond-precision UTC timestamp with a trailing Z, e.g. 2024-05-01T12:00:00.000Z."""
    return as_utc(dt).isoformat(timespec="milliseconds").replace("+00:00", "Z")
