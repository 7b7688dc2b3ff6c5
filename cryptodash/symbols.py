from types import MappingProxyType
from typing import Mapping

# Ticker -> CoinGecko id
SYMBOL_MAP: Mapping[str, str] = MappingProxyType({
    "BTC": "bitcoin",
    "ETH": "ethereum",
    "XRP": "ripple",
    "BNB": "binancecoin",
    "USDT": "tether",
    "USDC": "usd-coin",
    "DOGE": "dogecoin",
    "MATIC": "matic-network",
    "SOL": "solana",
    "ADA": "cardano",
})

# Display slug -> CoinGecko id, for slugs that differ from the provider's
SLUG_ALIASES: Mapping[str, str] = MappingProxyType({
    **{cg_id: cg_id for cg_id in SYMBOL_MAP.values()},
    "polygon": "matic-network",
})

# Base prices (USD) for synthetic history
REFERENCE_PRICES: Mapping[str, float] = MappingProxyType({
    "BTC": 65000,
    "ETH": 3500,
    "SOL": 150,
    "ADA": 0.45,
})
DEFAULT_REFERENCE_PRICE = 100.0


def resolve_provider_id(symbol_map: Mapping[str, str], ticker: str) -> str | None:
    # exact match only: tickers are stored uppercase
    return symbol_map.get(ticker)


def resolve_coin_id(
    coin_id: str,
    symbol_map: Mapping[str, str] = SYMBOL_MAP,
    slug_aliases: Mapping[str, str] = SLUG_ALIASES,
) -> str | None:
    """
    Map whatever the dashboard holds for a coin to a CoinGecko id:
    a display slug ('polygon'), a provider id ('matic-network') or a ticker ('MATIC').
    """
    if coin_id in slug_aliases:
        return slug_aliases[coin_id]
    return resolve_provider_id(symbol_map, coin_id)
