"""Technical indicators computed from bar series."""

from stockdash.indicators.technical import (
    SignalMode,
    bollinger_bands,
    calculate_technical_indicators,
    exponential_moving_average,
    macd,
    moving_average,
    relative_strength_index,
)

__all__ = [
    "SignalMode",
    "bollinger_bands",
    "calculate_technical_indicators",
    "exponential_moving_average",
    "macd",
    "moving_average",
    "relative_strength_index",
]
