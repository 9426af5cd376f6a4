"""Technical indicator calculations over a bar series.

Every function is a pure function of its ``BarSeries`` input. When the
series is too short for the requested period the function returns ``None``
instead of a value; callers must check for it.
"""

from __future__ import annotations

import math
from typing import Literal, Optional

import pandas as pd

from stockdash.analysis.summary import generate_technical_summary
from stockdash.models.bar import BarSeries
from stockdash.models.indicators import BollingerBands, MACDResult, TechnicalIndicators

SignalMode = Literal["broadcast", "history"]
"""How the MACD signal line is derived.

``broadcast`` applies EMA(9) to a series whose every value is the latest
MACD scalar, which collapses the signal onto the MACD value itself.
``history`` applies EMA(9) to the per-bar MACD line.
"""

RSI_PERIOD = 14
MACD_FAST = 12
MACD_SLOW = 26
MACD_SIGNAL = 9
BOLLINGER_PERIOD = 20
BOLLINGER_STD = 2.0


def _check_period(period: int) -> None:
    if period < 1:
        raise ValueError(f"period must be >= 1, got {period}")


def _closes(series: BarSeries) -> pd.Series:
    return pd.Series(series.closes, dtype=float)


def _ema(values: pd.Series, period: int) -> pd.Series:
    # adjust=False seeds with the first value: ema = x * k + ema_prev * (1 - k)
    return values.ewm(span=period, adjust=False).mean()


def moving_average(series: BarSeries, period: int) -> Optional[float]:
    """
    Simple moving average of the last ``period`` closes.

    Args:
        series: Bars, oldest first
        period: Number of bars to average

    Returns:
        Mean close, or None if the series has fewer than ``period`` bars
    """
    _check_period(period)
    if len(series) < period:
        return None
    return float(_closes(series).tail(period).mean())


def exponential_moving_average(series: BarSeries, period: int) -> Optional[float]:
    """
    Exponential moving average over the whole series.

    Uses smoothing factor ``2 / (period + 1)`` and seeds with the first
    close rather than an SMA, so every bar contributes.

    Returns:
        Final EMA value, or None for an empty series
    """
    _check_period(period)
    if len(series) == 0:
        return None
    return float(_ema(_closes(series), period).iloc[-1])


def relative_strength_index(series: BarSeries, period: int = RSI_PERIOD) -> Optional[float]:
    """
    Relative Strength Index from the most recent bar-to-bar changes.

    Gains and losses are summed over at most ``period`` deltas ending at the
    last bar and averaged by ``period``. With no losses the RSI is 100.

    Returns:
        RSI rounded to 2 decimals, or None if the series has fewer than
        ``period`` bars
    """
    _check_period(period)
    if len(series) < period:
        return None

    # With exactly `period` bars the first diff is NaN and sum() skips it
    delta = _closes(series).diff().tail(period)
    gains = float(delta.clip(lower=0).sum())
    losses = float(-delta.clip(upper=0).sum())

    avg_gain = gains / period
    avg_loss = losses / period
    if avg_loss == 0:
        return 100.0

    rs = avg_gain / avg_loss
    rsi = 100 - (100 / (1 + rs))
    return round(rsi, 2)


def macd(
    series: BarSeries,
    fast_period: int = MACD_FAST,
    slow_period: int = MACD_SLOW,
    signal_period: int = MACD_SIGNAL,
    signal_mode: SignalMode = "broadcast",
) -> Optional[MACDResult]:
    """
    MACD (Moving Average Convergence Divergence).

    Args:
        series: Bars, oldest first
        fast_period: Fast EMA period
        slow_period: Slow EMA period
        signal_period: Signal EMA period
        signal_mode: ``"broadcast"`` (default) or ``"history"``, see ``SignalMode``

    Returns:
        MACDResult rounded to 2 decimals, or None for an empty series
    """
    for period in (fast_period, slow_period, signal_period):
        _check_period(period)
    if signal_mode not in ("broadcast", "history"):
        raise ValueError(f"Unknown MACD signal mode: {signal_mode!r}")
    if len(series) == 0:
        return None

    closes = _closes(series)
    macd_line = _ema(closes, fast_period) - _ema(closes, slow_period)
    macd_value = float(macd_line.iloc[-1])

    if signal_mode == "broadcast":
        signal_input = pd.Series([macd_value] * len(closes), dtype=float)
    else:
        signal_input = macd_line
    signal = float(_ema(signal_input, signal_period).iloc[-1])
    histogram = macd_value - signal

    return MACDResult(
        macd=round(macd_value, 2),
        signal=round(signal, 2),
        histogram=round(histogram, 2),
    )


def bollinger_bands(
    series: BarSeries,
    period: int = BOLLINGER_PERIOD,
    num_std: float = BOLLINGER_STD,
) -> Optional[BollingerBands]:
    """
    Bollinger Bands around the ``period`` moving average.

    The standard deviation is the population deviation of the last
    ``period`` closes around the moving average.

    Returns:
        BollingerBands rounded to 2 decimals, or None if the series has
        fewer than ``period`` bars
    """
    middle = moving_average(series, period)
    if middle is None:
        return None

    window = _closes(series).tail(period)
    std = math.sqrt(float(((window - middle) ** 2).sum()) / period)

    return BollingerBands(
        middle=round(middle, 2),
        upper=round(middle + num_std * std, 2),
        lower=round(middle - num_std * std, 2),
    )


def calculate_technical_indicators(
    series: BarSeries,
    signal_mode: SignalMode = "broadcast",
) -> TechnicalIndicators:
    """
    Compute RSI, MACD and Bollinger Bands plus a summary for one series.

    Args:
        series: Bars, oldest first (must not be empty)
        signal_mode: MACD signal line mode

    Returns:
        TechnicalIndicators snapshot

    Raises:
        ValueError: If the series is empty
    """
    last = series.last
    if last is None:
        raise ValueError("Cannot compute indicators for an empty bar series")

    rsi = relative_strength_index(series)
    macd_result = macd(series, signal_mode=signal_mode)
    bollinger = bollinger_bands(series)

    return TechnicalIndicators(
        rsi=rsi,
        macd=macd_result,
        bollinger=bollinger,
        last_price=last.close,
        last_volume=last.volume,
        summary=generate_technical_summary(
            rsi=rsi,
            macd=macd_result,
            bollinger=bollinger,
            last_price=last.close,
        ),
    )
