import httpx
from typing import Any, Dict, List
from loguru import logger
from pydantic import TypeAdapter, ValidationError

from ..config import settings
from ..errors import MalformedResponseError, TransportError
from ..schemas import CoinGeckoMarket, CoinGeckoMarketChart, HistoricalPoint

PRICE_CHANGE_WINDOWS = "1h,24h,7d"

# CoinGecko "max" history is a little over a decade of daily points
MAX_HISTORY_DAYS = 10_000

_markets = TypeAdapter(List[CoinGeckoMarket])

def _headers() -> Dict[str, str]:
    headers = {"User-Agent": settings.user_agent}
    if settings.coingecko_api_key:
        # CoinGecko v3 Pro header (if you have a key)
        headers["x-cg-pro-api-key"] = settings.coingecko_api_key
    return headers

def chart_interval(days: int) -> str:
    return "hourly" if days <= 1 else "daily"


class CoinGeckoClient:
    """
    One request per call, no retries. Failures surface as TransportError
    (network, timeout, non-2xx) or MalformedResponseError (unexpected body).
    """

    def __init__(self, base_url: str | None = None, timeout: float | None = None,
                 client: httpx.AsyncClient | None = None):
        self.base_url = (base_url or settings.coingecko_base_url).rstrip("/")
        self.timeout = settings.http_timeout if timeout is None else timeout
        self._client = client

    def _session(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(headers=_headers(), timeout=self.timeout)
        return self._client

    async def aclose(self) -> None:
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def _get(self, path: str, params: Dict[str, Any]) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug(f"GET {url} params={params}")
        try:
            r = await self._session().get(url, params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {url} failed: {e!r}") from e
        if r.is_error:
            raise TransportError(f"{url} returned HTTP {r.status_code}", status_code=r.status_code)
        try:
            return r.json()
        except ValueError as e:
            raise MalformedResponseError(f"{url} returned non-JSON body") from e

    async def fetch_markets(self, per_page: int, ids: List[str] | None = None) -> List[CoinGeckoMarket]:
        params: Dict[str, Any] = {
            "vs_currency": "usd",
            "order": "market_cap_desc",
            "per_page": per_page,
            "page": 1,
            "sparkline": "false",
            "price_change_percentage": PRICE_CHANGE_WINDOWS,
        }
        if ids:
            params["ids"] = ",".join(ids)
        data = await self._get("/coins/markets", params)
        try:
            return _markets.validate_python(data)
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected /coins/markets payload: {e}") from e

    async def fetch_market_chart(self, cg_id: str, days: int) -> List[HistoricalPoint]:
        params = {"vs_currency": "usd", "days": days, "interval": chart_interval(days)}
        data = await self._get(f"/coins/{cg_id}/market_chart", params)
        try:
            return CoinGeckoMarketChart.model_validate(data).to_points()
        except ValidationError as e:
            raise MalformedResponseError(f"Unexpected market_chart payload for {cg_id}: {e}") from e
        except (OverflowError, OSError, ValueError) as e:
            # timestamps datetime cannot represent (huge, inf, nan)
            raise MalformedResponseError(f"Unusable timestamp in market_chart for {cg_id}: {e}") from e
