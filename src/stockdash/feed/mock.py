"""Simulated real-time quote feed.

Stands in for a streaming connection: a background thread asks a
``QuoteSource`` for a new sample every ``interval`` seconds and hands it
to the subscriber's callback until the subscription is cancelled.
"""

from __future__ import annotations

import logging
import random
import threading
from datetime import datetime, timezone
from typing import Callable, Optional, Protocol, runtime_checkable

from stockdash.models.quote import Quote

logger = logging.getLogger(__name__)

DEFAULT_INTERVAL = 1.0

QuoteCallback = Callable[[Quote], None]


@runtime_checkable
class QuoteSource(Protocol):
    """Anything that can produce the next quote for a symbol."""

    def next_quote(self, symbol: str) -> Quote:
        """Return the next sample for ``symbol``."""
        ...


class RandomQuoteSource:
    """Uniformly random quotes for demos.

    Price is drawn from [0, 1000), change from [-10, 10), change percent
    from [-2.5, 2.5) (all rounded to 2 decimals) and volume from
    [0, 1_000_000).
    """

    def __init__(
        self,
        rng: Optional[random.Random] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._rng = rng or random.Random()
        self._clock = clock or (lambda: datetime.now(tz=timezone.utc))

    def next_quote(self, symbol: str) -> Quote:
        rng = self._rng
        return Quote(
            symbol=symbol,
            price=round(rng.random() * 1000, 2),
            change=round(rng.random() * 20 - 10, 2),
            change_percent=round(rng.random() * 5 - 2.5, 2),
            volume=int(rng.random() * 1_000_000),
            timestamp=self._clock(),
        )


class Subscription:
    """
    Handle for a running feed.

    ``cancel()`` is idempotent and may be called from inside the callback.
    Once it returns, no further callback invocation will start.

    Attributes:
        symbol: Subscribed symbol
        interval: Seconds between deliveries
        delivered: Number of quotes delivered so far
        failures: Number of deliveries whose callback raised
        error: Most recent exception raised by the callback
    """

    def __init__(
        self,
        symbol: str,
        callback: QuoteCallback,
        source: QuoteSource,
        interval: float = DEFAULT_INTERVAL,
    ) -> None:
        if interval <= 0:
            raise ValueError(f"interval must be positive, got {interval}")
        self.symbol = symbol
        self.interval = interval
        self.delivered = 0
        self.failures = 0
        self.error: Optional[BaseException] = None
        self._callback = callback
        self._source = source
        self._stopped = threading.Event()
        # Held for the duration of each delivery so cancel() waits it out
        self._delivery_lock = threading.RLock()
        self._thread = threading.Thread(
            target=self._run,
            name=f"quote-feed-{symbol}",
            daemon=True,
        )

    def start(self) -> Subscription:
        """Start delivering quotes."""
        logger.info(f"Subscribing to {self.symbol} (every {self.interval}s)")
        self._thread.start()
        return self

    @property
    def active(self) -> bool:
        """True until cancelled."""
        return not self._stopped.is_set()

    def cancel(self) -> None:
        """Stop future deliveries."""
        with self._delivery_lock:
            if self._stopped.is_set():
                return
            self._stopped.set()
        logger.info(f"Unsubscribed from {self.symbol} after {self.delivered} quotes")

    def __call__(self) -> None:
        self.cancel()

    def join(self, timeout: Optional[float] = None) -> None:
        """Wait for the worker thread to exit (after cancellation)."""
        if self._thread.is_alive() and threading.current_thread() is not self._thread:
            self._thread.join(timeout)

    def _run(self) -> None:
        while not self._stopped.wait(self.interval):
            with self._delivery_lock:
                if self._stopped.is_set():
                    break
                try:
                    quote = self._source.next_quote(self.symbol)
                    self._callback(quote)
                except Exception as e:
                    logger.exception(f"Quote feed callback for {self.symbol} failed: {e}")
                    self.error = e
                    self.failures += 1
                    continue
                self.delivered += 1


def subscribe_to_realtime_data(
    symbol: str,
    callback: QuoteCallback,
    source: Optional[QuoteSource] = None,
    interval: float = DEFAULT_INTERVAL,
) -> Subscription:
    """
    Deliver a synthetic quote for ``symbol`` to ``callback`` every ``interval`` seconds.

    Args:
        symbol: Ticker symbol
        callback: Receives each quote on the feed thread
        source: Quote generator (defaults to ``RandomQuoteSource``)
        interval: Seconds between quotes

    Returns:
        Running Subscription; call ``cancel()`` (or the handle itself) to stop
    """
    return Subscription(symbol, callback, source or RandomQuoteSource(), interval).start()
