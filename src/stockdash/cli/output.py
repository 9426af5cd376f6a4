"""Rich output formatting for CLI commands."""

from __future__ import annotations

from typing import Optional

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from stockdash.models.indicators import TechnicalIndicators
from stockdash.models.quote import Quote, TickerMatch
from stockdash.models.report import AnalysisReport, Sentiment

SENTIMENT_STYLES = {
    Sentiment.POSITIVE: "green",
    Sentiment.NEUTRAL: "yellow",
    Sentiment.NEGATIVE: "red",
}


def _format_optional(value: Optional[float]) -> str:
    return "n/a" if value is None else f"{value:,.2f}"


def _change_style(change: float) -> str:
    return "green" if change >= 0 else "red"


def print_tickers(matches: list[TickerMatch], console: Console) -> None:
    """Print ticker search hits."""
    if not matches:
        console.print("[yellow]No matching tickers.[/yellow]")
        return

    table = Table(title="Tickers")
    table.add_column("Symbol", style="bold cyan")
    table.add_column("Name")
    table.add_column("Exchange", style="dim")
    for match in matches:
        table.add_row(match.symbol, match.name, match.exchange)
    console.print(table)


def print_quote(quote: Quote, console: Console) -> None:
    """Print a single quote line."""
    style = _change_style(quote.change)
    console.print(
        f"[bold]{quote.symbol}[/bold] {quote.price:,.2f} "
        f"[{style}]{quote.change:+,.2f} ({quote.change_percent:+.2f}%)[/{style}] "
        f"[dim]vol {quote.volume:,.0f} @ {quote.timestamp.isoformat()}[/dim]"
    )


def print_indicators(symbol: str, indicators: TechnicalIndicators, console: Console) -> None:
    """Print an indicator table followed by the summary hints."""
    console.print()
    console.print(Panel(f"[bold cyan]Technical indicators: {symbol}[/bold cyan]", expand=False))

    table = Table(show_header=False, box=None, padding=(0, 2))
    table.add_column("Label", style="dim")
    table.add_column("Value", justify="right")

    table.add_row("Last price", _format_optional(indicators.last_price))
    table.add_row("Last volume", f"{indicators.last_volume:,.0f}")
    table.add_row("RSI(14)", _format_optional(indicators.rsi))
    if indicators.macd is not None:
        table.add_row("MACD", _format_optional(indicators.macd.macd))
        table.add_row("Signal", _format_optional(indicators.macd.signal))
        table.add_row("Histogram", _format_optional(indicators.macd.histogram))
    else:
        table.add_row("MACD", "n/a")
    if indicators.bollinger is not None:
        bands = indicators.bollinger
        table.add_row(
            "Bollinger(20)",
            f"{bands.lower:,.2f} / {bands.middle:,.2f} / {bands.upper:,.2f}",
        )
    else:
        table.add_row("Bollinger(20)", "n/a")
    console.print(table)

    console.print()
    console.print("[bold]Summary[/bold]")
    for hint in indicators.summary:
        console.print(f"  • {hint}")


def print_report(symbol: str, report: AnalysisReport, console: Console) -> None:
    """Print generated commentary with its sentiment label."""
    style = SENTIMENT_STYLES[report.sentiment]
    console.print(
        Panel(
            report.content.strip(),
            title=f"[bold]{symbol}[/bold]",
            subtitle=f"[{style}]{report.sentiment.value}[/{style}]",
        )
    )
