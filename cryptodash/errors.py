class MarketDataError(Exception):
    """Base class for everything the gateway turns into fallback data."""


class ResolutionError(MarketDataError):
    def __init__(self, ticker: str):
        super().__init__(f"Unknown ticker: {ticker}")
        self.ticker = ticker


class TransportError(MarketDataError):
    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class MalformedResponseError(MarketDataError):
    pass
