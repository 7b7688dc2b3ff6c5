from .clients.coingecko import CoinGeckoClient
from .gateway import MarketDataGateway

_gateway: MarketDataGateway | None = None

def get_gateway() -> MarketDataGateway:
    global _gateway
    if _gateway is None:
        _gateway = MarketDataGateway(client=CoinGeckoClient())
    return _gateway

async def close_gateway() -> None:
    global _gateway
    if _gateway is not None:
        await _gateway.client.aclose()
        _gateway = None
