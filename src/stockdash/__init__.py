"""stockdash - market data, technical indicators and LLM commentary for a stock dashboard."""

__version__ = "0.1.0"
