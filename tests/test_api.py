from __future__ import annotations

import random
from typing import List

import pytest
from fastapi.testclient import TestClient

from cryptodash.clients.coingecko import CoinGeckoClient
from cryptodash.deps import get_gateway
from cryptodash.errors import TransportError
from cryptodash.gateway import MarketDataGateway
from cryptodash.main import app
from cryptodash.schemas import CoinGeckoMarket, CoinGeckoMarketChart, HistoricalPoint

from conftest import NOW, market_row


class StubClient(CoinGeckoClient):
    """Serves canned payloads; `down=True` makes every call fail like a dead upstream."""

    def __init__(self, down: bool = False):
        super().__init__("https://unused.test")
        self.down = down
        self.calls: list[tuple] = []

    async def fetch_markets(self, per_page: int, ids: List[str] | None = None) -> List[CoinGeckoMarket]:
        self.calls.append(("markets", per_page, ids))
        if self.down:
            raise TransportError("upstream down", status_code=503)
        rows = [market_row("bitcoin", "btc", "Bitcoin"), market_row("ethereum", "eth", "Ethereum", 3000)]
        if ids:
            rows = [r for r in rows if r["id"] in ids]
        return [CoinGeckoMarket.model_validate(r) for r in rows[:per_page]]

    async def fetch_market_chart(self, cg_id: str, days: int) -> List[HistoricalPoint]:
        self.calls.append(("chart", cg_id, days))
        if self.down:
            raise TransportError("upstream down", status_code=503)
        return CoinGeckoMarketChart(prices=[(1714435200000, 62000.0), (1714521600000, 63000.0)]).to_points()


def _client_for(stub: StubClient) -> TestClient:
    gateway = MarketDataGateway(client=stub, rng=random.Random(5), clock=lambda: NOW)
    app.dependency_overrides[get_gateway] = lambda: gateway
    return TestClient(app)


@pytest.fixture
def live() -> StubClient:
    yield StubClient()
    app.dependency_overrides.clear()


@pytest.fixture
def down() -> StubClient:
    yield StubClient(down=True)
    app.dependency_overrides.clear()


def test_health() -> None:
    r = TestClient(app).get("/health")
    assert r.status_code == 200
    assert r.json() == {"status": "ok"}


def test_top_coins_live(live: StubClient) -> None:
    r = _client_for(live).get("/coins", params={"limit": 2})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "live"
    assert [c["symbol"] for c in body["items"]] == ["BTC", "ETH"]
    assert body["items"][0]["quote"]["USD"]["market_cap"] == 1_250_000_000_000
    assert live.calls == [("markets", 2, None)]


def test_top_coins_fallback(down: StubClient) -> None:
    r = _client_for(down).get("/coins", params={"limit": 3})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "fallback"
    assert [c["symbol"] for c in body["items"]] == ["BTC", "ETH", "USDT"]


def test_top_coins_rejects_negative_limit(live: StubClient) -> None:
    r = _client_for(live).get("/coins", params={"limit": -1})

    assert r.status_code == 422
    assert live.calls == []


def test_coin_details(live: StubClient) -> None:
    r = _client_for(live).get("/coins/ethereum")

    assert r.status_code == 200
    assert r.json()["slug"] == "ethereum"


def test_coin_details_not_found(live: StubClient) -> None:
    r = _client_for(live).get("/coins/unknown-coin")

    assert r.status_code == 404


def test_history_live(live: StubClient) -> None:
    r = _client_for(live).get("/history/BTC", params={"days": 1})

    assert r.status_code == 200
    body = r.json()
    assert body["source"] == "live"
    assert body["items"] == [
        {"date": "2024-04-30T00:00:00.000Z", "price": 62000.0},
        {"date": "2024-05-01T00:00:00.000Z", "price": 63000.0},
    ]
    assert live.calls == [("chart", "bitcoin", 1)]


def test_history_fallback_for_unknown_symbol(live: StubClient) -> None:
    r = _client_for(live).get("/history/ZZZ")

    body = r.json()
    assert body["source"] == "fallback"
    assert len(body["items"]) == 8
    assert all(90 <= p["price"] <= 110 for p in body["items"])
    assert live.calls == []


def test_history_rejects_zero_days(live: StubClient) -> None:
    r = _client_for(live).get("/history/BTC", params={"days": 0})

    assert r.status_code == 422


def test_history_rejects_oversized_window(live: StubClient) -> None:
    r = _client_for(live).get("/history/ZZZ", params={"days": 800_000})

    assert r.status_code == 422
    assert live.calls == []
