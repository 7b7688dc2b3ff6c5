import random
from loguru import logger
from typing import Mapping, Sequence

from .clients.coingecko import CoinGeckoClient
from .errors import MarketDataError, ResolutionError
from .fallback import SAMPLE_QUOTES, Clock, sample_quotes, synthetic_series, utc_now
from .schemas import CoinQuote, HistoricalPoint, MarketData
from .symbols import (
    DEFAULT_REFERENCE_PRICE, REFERENCE_PRICES, SLUG_ALIASES, SYMBOL_MAP,
    resolve_coin_id, resolve_provider_id,
)


class MarketDataGateway:
    """
    Market data for the dashboard. Every operation makes at most one
    CoinGecko request and never raises a MarketDataError: on failure it
    logs and answers with placeholder data tagged source="fallback".
    """

    def __init__(
        self,
        client: CoinGeckoClient | None = None,
        symbol_map: Mapping[str, str] = SYMBOL_MAP,
        slug_aliases: Mapping[str, str] = SLUG_ALIASES,
        reference_prices: Mapping[str, float] = REFERENCE_PRICES,
        default_reference_price: float = DEFAULT_REFERENCE_PRICE,
        samples: Sequence[CoinQuote] = SAMPLE_QUOTES,
        rng: random.Random | None = None,
        clock: Clock = utc_now,
    ):
        self.client = client or CoinGeckoClient()
        self.symbol_map = symbol_map
        self.slug_aliases = slug_aliases
        self.reference_prices = reference_prices
        self.default_reference_price = default_reference_price
        self.samples = samples
        self.rng = rng or random.Random()
        self.clock = clock

    def resolve_provider_id(self, ticker: str) -> str | None:
        return resolve_provider_id(self.symbol_map, ticker)

    async def fetch_top_coins(self, limit: int = 10) -> MarketData[CoinQuote]:
        if limit <= 0:
            return MarketData[CoinQuote](source="live", items=[])
        try:
            markets = await self.client.fetch_markets(per_page=limit)
        except MarketDataError as e:
            logger.warning(f"Top coins unavailable, serving sample data: {e}")
            return MarketData[CoinQuote](source="fallback", items=sample_quotes(limit, self.samples))
        items = [m.to_coin_quote() for m in markets]
        logger.info(f"Fetched {len(items)} coins from CoinGecko")
        return MarketData[CoinQuote](source="live", items=items)

    async def list_top_coins(self, limit: int = 10) -> list[CoinQuote]:
        return (await self.fetch_top_coins(limit)).items

    async def fetch_historical_series(self, symbol: str, days: int = 7) -> MarketData[HistoricalPoint]:
        try:
            cg_id = self.resolve_provider_id(symbol)
            if cg_id is None:
                raise ResolutionError(symbol)
            points = await self.client.fetch_market_chart(cg_id, days)
        except MarketDataError as e:
            logger.warning(f"History for {symbol} unavailable, generating placeholder series: {e}")
            base = self.reference_prices.get(symbol, self.default_reference_price)
            points = synthetic_series(base, days, rng=self.rng, clock=self.clock)
            return MarketData[HistoricalPoint](source="fallback", items=points)
        logger.info(f"Fetched {len(points)} price points for {symbol} ({days}d)")
        return MarketData[HistoricalPoint](source="live", items=points)

    async def get_historical_series(self, symbol: str, days: int = 7) -> list[HistoricalPoint]:
        return (await self.fetch_historical_series(symbol, days)).items

    async def get_coin_details(self, coin_id: str) -> CoinQuote | None:
        cg_id = resolve_coin_id(coin_id, self.symbol_map, self.slug_aliases)
        if cg_id is None:
            logger.info(f"No CoinGecko id for {coin_id}")
            return None
        try:
            markets = await self.client.fetch_markets(per_page=1, ids=[cg_id])
        except MarketDataError as e:
            logger.warning(f"Details for {coin_id} unavailable: {e}")
            return next((q for q in self.samples if q.slug == cg_id), None)
        return markets[0].to_coin_quote() if markets else None
