"""Prompt templates for market commentary.

Replies are requested in Simplified Chinese so that the keyword
sentiment heuristics in ``stockdash.analysis.sentiment`` apply.
"""

from __future__ import annotations

import json
from typing import Optional

from stockdash.models.bar import BarSeries
from stockdash.models.quote import Quote

CORRELATION_SYSTEM_PROMPT = (
    "You are a professional equity analyst focused on relating stock price "
    "moves to news and market events. Be precise and concise. "
    "Respond in Simplified Chinese."
)

NEWS_SYSTEM_PROMPT = (
    "You are a professional equity analyst who writes news digests and short "
    "research notes about individual stocks. Be precise and concise. "
    "Respond in Simplified Chinese."
)

ANALYSIS_SYSTEM_PROMPT = (
    "You are a professional equity analyst. Base your view strictly on the "
    "data provided. Respond in Simplified Chinese."
)


def build_correlation_prompt(symbol: str, quote: Quote, price_change: float) -> str:
    """Ask which news or events explain a price move."""
    direction = "up" if price_change > 0 else "down"
    return f"""Analyze {symbol}:
1. The price is {direction} {abs(price_change):.2f}%
2. Last price: ${quote.price:.2f}
3. Volume: {quote.volume:,.0f}

Please answer:
1. Which recent news or market events may be related to this move?
2. Was the move in line with market expectations?
3. Is the move justified from a technical and fundamental point of view?
4. What is the short-term outlook?"""


def build_news_prompt(symbol: str) -> str:
    """Ask for five numbered news items about ``symbol``."""
    return f"""Write 5 recent news items about {symbol} stock covering:
1. Major company events
2. Market analysis
3. Industry developments
4. Competitor news
5. Outlook

Format each item as:
1. [Headline]
[Details]"""


def build_analysis_prompt(quote: Quote, history: Optional[BarSeries] = None) -> str:
    """Ask for a structured analysis of a quote and optional price history."""
    lines = [
        "Analyze the following stock data:",
        "",
        f"Symbol: {quote.symbol}",
        f"Price: {quote.price}",
        f"Change: {quote.change} ({quote.change_percent}%)",
        f"Volume: {quote.volume}",
        f"Time: {quote.timestamp.isoformat()}",
    ]
    if history is not None and len(history) > 0:
        bars = [bar.model_dump(mode="json") for bar in history]
        lines += ["", "Price history:", json.dumps(bars, indent=2)]
    lines += [
        "",
        "Cover:",
        "1. Price trend",
        "2. Volume",
        "3. Technical indicators",
        "4. Investment view",
        "5. Risks",
    ]
    return "\n".join(lines)
