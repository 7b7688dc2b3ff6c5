import random
from datetime import datetime, timezone
from dateutil.relativedelta import relativedelta
from typing import Callable, Sequence

from .schemas import CoinQuote, HistoricalPoint, Quote, UsdQuote, as_utc, iso_utc

# naive datetimes are read as UTC
Clock = Callable[[], datetime]

EARLIEST = datetime(1, 1, 1, tzinfo=timezone.utc)

def utc_now() -> datetime:
    return datetime.now(timezone.utc)

def _sample(cg_id: str, name: str, symbol: str, price: float, volume: float,
            ch_1h: float, ch_24h: float, ch_7d: float, mcap: float) -> CoinQuote:
    return CoinQuote(
        id=cg_id, name=name, symbol=symbol, slug=cg_id,
        quote=Quote(USD=UsdQuote(
            price=price, volume_24h=volume,
            percent_change_1h=ch_1h, percent_change_24h=ch_24h, percent_change_7d=ch_7d,
            market_cap=mcap,
        )),
    )

# Shown in place of /coins/markets when CoinGecko is unreachable (rank order)
SAMPLE_QUOTES: Sequence[CoinQuote] = (
    _sample("bitcoin", "Bitcoin", "BTC", 65000, 30_000_000_000, 0.5, 2.1, 5.4, 1_200_000_000_000),
    _sample("ethereum", "Ethereum", "ETH", 3500, 15_000_000_000, 0.3, 1.8, 4.2, 420_000_000_000),
    _sample("tether", "Tether", "USDT", 1.0, 45_000_000_000, 0.0, 0.01, -0.02, 110_000_000_000),
    _sample("binancecoin", "BNB", "BNB", 580, 1_800_000_000, 0.2, 0.9, 2.7, 85_000_000_000),
    _sample("solana", "Solana", "SOL", 150, 2_500_000_000, 0.7, 3.2, 8.1, 68_000_000_000),
    _sample("cardano", "Cardano", "ADA", 0.45, 400_000_000, -0.1, -1.2, 1.5, 16_000_000_000),
)

def sample_quotes(limit: int, samples: Sequence[CoinQuote] = SAMPLE_QUOTES) -> list[CoinQuote]:
    return list(samples[:max(limit, 0)])

def synthetic_series(base_price: float, days: int, rng: random.Random | None = None,
                     clock: Clock = utc_now) -> list[HistoricalPoint]:
    """
    days + 1 placeholder points, one per day from `days` days ago up to now,
    each at base_price * uniform[0.9, 1.1).

    A window reaching back past 0001-01-01 is cut at that date.
    """
    rng = rng or random.Random()
    now = as_utc(clock())
    days = min(days, (now - EARLIEST).days)
    return [
        HistoricalPoint(
            date=iso_utc(now - relativedelta(days=i)),
            price=base_price * (0.9 + rng.random() * 0.2),
        )
        for i in range(days, -1, -1)
    ]
