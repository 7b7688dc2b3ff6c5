from fastapi import APIRouter, Depends, HTTPException, Query

from ..clients.coingecko import MAX_HISTORY_DAYS
from ..deps import get_gateway
from ..gateway import MarketDataGateway
from ..schemas import CoinQuote, HistoricalPoint, MarketData

router = APIRouter(tags=["markets"])

@router.get("/coins", response_model=MarketData[CoinQuote])
async def top_coins(
    limit: int = Query(10, ge=0, description="Number of coins, ranked by market cap"),
    gateway: MarketDataGateway = Depends(get_gateway),
):
    """
    Top coins by market cap. When CoinGecko is unreachable the sample set is
    returned instead and `source` is "fallback".
    """
    return await gateway.fetch_top_coins(limit)

@router.get("/coins/{coin_id}", response_model=CoinQuote)
async def coin_details(coin_id: str, gateway: MarketDataGateway = Depends(get_gateway)):
    quote = await gateway.get_coin_details(coin_id)
    if quote is None:
        raise HTTPException(status_code=404, detail=f"Unknown coin: {coin_id}")
    return quote

@router.get("/history/{symbol}", response_model=MarketData[HistoricalPoint])
async def history(
    symbol: str,
    days: int = Query(7, ge=1, le=MAX_HISTORY_DAYS, description="Window length; 1 gives hourly points, more gives daily"),
    gateway: MarketDataGateway = Depends(get_gateway),
):
    return await gateway.fetch_historical_series(symbol, days)
