"""Map indicator values to short categorical hints."""

from __future__ import annotations

from typing import Optional

from stockdash.models.indicators import BollingerBands, MACDResult

RSI_OVERBOUGHT = 70
RSI_OVERSOLD = 30

RSI_OVERBOUGHT_HINT = "RSI is overbought; pullback risk"
RSI_OVERSOLD_HINT = "RSI is oversold; possible rebound opportunity"
RSI_NEUTRAL_HINT = "RSI is in the neutral range"
MACD_UPTREND_HINT = "MACD shows an uptrend; possible buy signal"
MACD_DOWNTREND_HINT = "MACD shows a downtrend; possible sell signal"
BOLLINGER_UPPER_HINT = "Price broke out above the upper Bollinger band; watch for a pullback"
BOLLINGER_LOWER_HINT = "Price broke out below the lower Bollinger band; possibly oversold"
BOLLINGER_MID_HINT = "Price is trading inside the bands; trend is relatively stable"


def generate_technical_summary(
    rsi: Optional[float],
    macd: Optional[MACDResult],
    bollinger: Optional[BollingerBands],
    last_price: float,
) -> list[str]:
    """
    Build ordered summary hints (RSI, then MACD, then Bollinger).

    An unavailable indicator contributes no hint. MACD contributes a hint
    only when the histogram agrees in direction with its comparison to the
    signal line.
    """
    summary: list[str] = []

    if rsi is not None:
        if rsi > RSI_OVERBOUGHT:
            summary.append(RSI_OVERBOUGHT_HINT)
        elif rsi < RSI_OVERSOLD:
            summary.append(RSI_OVERSOLD_HINT)
        else:
            summary.append(RSI_NEUTRAL_HINT)

    if macd is not None:
        if macd.histogram > 0 and macd.histogram > macd.signal:
            summary.append(MACD_UPTREND_HINT)
        elif macd.histogram < 0 and macd.histogram < macd.signal:
            summary.append(MACD_DOWNTREND_HINT)

    if bollinger is not None:
        if last_price > bollinger.upper:
            summary.append(BOLLINGER_UPPER_HINT)
        elif last_price < bollinger.lower:
            summary.append(BOLLINGER_LOWER_HINT)
        else:
            summary.append(BOLLINGER_MID_HINT)

    return summary
