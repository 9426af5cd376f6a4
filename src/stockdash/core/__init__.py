"""Core utilities, configuration and errors."""

from stockdash.core.config import load_app_config, load_toml
from stockdash.core.errors import LLMError, MarketDataError, StockdashError

__all__ = [
    "LLMError",
    "MarketDataError",
    "StockdashError",
    "load_app_config",
    "load_toml",
]
