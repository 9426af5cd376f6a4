"""stockdash CLI - Entry point for the stockdash command."""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console

from stockdash import __version__
from stockdash.cli.output import print_indicators, print_quote, print_report, print_tickers
from stockdash.core.config import load_app_config
from stockdash.core.errors import StockdashError
from stockdash.models.quote import Quote
from stockdash.services.dashboard import StockDashboard

app = typer.Typer(
    name="stockdash",
    help="stockdash - quotes, technical indicators and AI commentary",
    add_completion=False,
)
console = Console()
logger = logging.getLogger(__name__)

_config_path: Optional[Path] = None


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s | %(levelname)-8s | %(message)s",
        datefmt="%H:%M:%S",
    )
    # Reduce noise from libraries
    logging.getLogger("urllib3").setLevel(logging.WARNING)


def _get_dashboard(with_llm: bool = False) -> StockDashboard:
    """Build the dashboard from environment / config file."""
    return StockDashboard.from_config(load_app_config(_config_path), with_llm=with_llm)


def _fail(message: str) -> NoReturn:
    console.print(f"[bold red]Error:[/bold red] {message}")
    raise typer.Exit(code=1)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"[bold green]stockdash[/bold green] version {__version__}")
        raise typer.Exit()


@app.callback(invoke_without_command=True)
def main(
    ctx: typer.Context,
    version: bool = typer.Option(  # noqa: ARG001
        None,
        "--version",
        "-v",
        help="Show version and exit",
        callback=version_callback,
        is_eager=True,
    ),
    config: Optional[Path] = typer.Option(
        None, "--config", "-c", help="TOML file with configuration overrides"
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Enable debug logging"),
) -> None:
    """stockdash - quotes, technical indicators and AI commentary."""
    global _config_path
    _config_path = config
    _setup_logging(verbose)
    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())


@app.command()
def search(
    query: str = typer.Argument(..., help="Symbol or company name"),
    limit: int = typer.Option(10, "--limit", "-n", help="Maximum results"),
) -> None:
    """Search tickers."""
    try:
        matches = _get_dashboard().market.search_tickers(query, limit=limit)
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    print_tickers(matches, console)


@app.command()
def quote(symbol: str = typer.Argument(..., help="Ticker symbol")) -> None:
    """Show the latest quote."""
    try:
        result = _get_dashboard().market.get_realtime_quote(symbol.upper())
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    print_quote(result, console)


@app.command()
def indicators(
    symbol: str = typer.Argument(..., help="Ticker symbol"),
    period: str = typer.Option("1d", "--period", "-p", help="Chart period: 1d, 1w or 1M"),
    count: int = typer.Option(100, "--count", "-n", help="Number of intraday bars"),
    signal_history: bool = typer.Option(
        False,
        "--signal-history",
        help="Derive the MACD signal from the per-bar MACD line",
    ),
) -> None:
    """Compute RSI, MACD and Bollinger Bands from intraday bars."""
    symbol = symbol.upper()
    try:
        dashboard = _get_dashboard()
        if signal_history:
            dashboard.signal_mode = "history"
        result = dashboard.technical_analysis(symbol, period=period, count=count)
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    print_indicators(symbol, result, console)


@app.command()
def analyze(
    symbol: str = typer.Argument(..., help="Ticker symbol"),
    mock: bool = typer.Option(False, "--mock", help="Use canned commentary (no LLM call)"),
    history: bool = typer.Option(False, "--history", help="Include end-of-day history"),
) -> None:
    """Generate AI commentary for the latest quote."""
    symbol = symbol.upper()
    try:
        report = _get_dashboard(with_llm=not mock).ai_analysis(
            symbol, use_mock=mock, include_history=history
        )
    except (StockdashError, ValueError, RuntimeError) as e:
        _fail(str(e))
    print_report(symbol, report, console)


@app.command()
def news(symbol: str = typer.Argument(..., help="Ticker symbol")) -> None:
    """Generate a news digest."""
    symbol = symbol.upper()
    try:
        dashboard = _get_dashboard(with_llm=True)
        digest = dashboard.llm.get_company_news(symbol)
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    console.print(digest.news)


@app.command()
def correlation(symbol: str = typer.Argument(..., help="Ticker symbol")) -> None:
    """Relate the latest price move to news and score the agreement."""
    symbol = symbol.upper()
    try:
        dashboard = _get_dashboard(with_llm=True)
        latest = dashboard.market.get_realtime_quote(symbol)
        result = dashboard.llm.analyze_stock_correlation(symbol, latest, latest.change_percent)
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    print_quote(latest, console)
    console.print(result.analysis)
    console.print(f"[bold]Correlation score:[/bold] {result.correlation_score:.2f}")


@app.command()
def watch(
    symbol: str = typer.Argument(..., help="Ticker symbol"),
    count: int = typer.Option(5, "--count", "-n", help="Stop after this many quotes", min=1),
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", help="Seconds between quotes (default: feed.interval)"
    ),
) -> None:
    """Stream simulated quotes."""
    try:
        dashboard = _get_dashboard()
    except (StockdashError, ValueError) as e:
        _fail(str(e))
    done = threading.Event()
    received: list[Quote] = []

    def on_quote(q: Quote) -> None:
        received.append(q)
        print_quote(q, console)
        if len(received) >= count:
            done.set()

    try:
        subscription = dashboard.watch(symbol.upper(), on_quote, interval=interval)
    except ValueError as e:
        _fail(str(e))
    try:
        while not done.wait(0.1):
            if subscription.error is not None:
                break
    except KeyboardInterrupt:
        console.print("[yellow]Interrupted[/yellow]")
    finally:
        subscription.cancel()

    if subscription.error is not None:
        _fail(f"Feed stopped: {subscription.error}")


if __name__ == "__main__":
    app()
