"""Application services."""

from stockdash.services.dashboard import StockDashboard

__all__ = ["StockDashboard"]
