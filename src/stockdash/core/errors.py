"""Exception hierarchy for stockdash."""


class StockdashError(Exception):
    """Base exception for stockdash errors."""

    pass


class MarketDataError(StockdashError):
    """Market-data request failed or returned no usable payload."""

    pass


class LLMError(StockdashError):
    """Chat-completion request failed or returned a malformed payload."""

    pass
