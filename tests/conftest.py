from __future__ import annotations

import random
from datetime import datetime, timezone
from typing import Mapping

import httpx
import pytest
import pytest_asyncio

from cryptodash.clients.coingecko import CoinGeckoClient
from cryptodash.gateway import MarketDataGateway


BASE_URL = "https://api.coingecko.test/api/v3"
NOW = datetime(2024, 5, 1, 12, 0, tzinfo=timezone.utc)

respx = pytest.importorskip("respx")


def query(request: httpx.Request) -> Mapping[str, str]:
    return dict(request.url.params)


def market_row(cg_id: str = "bitcoin", symbol: str = "btc", name: str = "Bitcoin", price: float = 64000.0) -> dict:
    return {
        "id": cg_id,
        "symbol": symbol,
        "name": name,
        "current_price": price,
        "total_volume": 25_000_000_000,
        "market_cap": 1_250_000_000_000,
        "price_change_percentage_1h_in_currency": 0.12,
        "price_change_percentage_24h_in_currency": -1.5,
        "price_change_percentage_7d_in_currency": 3.25,
    }


@pytest.fixture
def api_mock() -> "respx.Router":
    with respx.mock(base_url=BASE_URL, assert_all_called=False) as router:
        yield router


@pytest_asyncio.fixture
async def client() -> CoinGeckoClient:
    instance = CoinGeckoClient(BASE_URL, timeout=5)
    try:
        yield instance
    finally:
        await instance.aclose()


@pytest.fixture
def gateway(client: CoinGeckoClient) -> MarketDataGateway:
    return MarketDataGateway(client=client, rng=random.Random(7), clock=lambda: NOW)
