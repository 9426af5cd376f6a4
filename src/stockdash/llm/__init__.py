"""LLM integration layer for market commentary."""

from stockdash.llm.perplexity import PerplexityClient, extract_content

__all__ = [
    "PerplexityClient",
    "extract_content",
]
