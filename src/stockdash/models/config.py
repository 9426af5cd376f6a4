"""Configuration models for stockdash."""

from __future__ import annotations

import os
from typing import Optional

from pydantic import BaseModel, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class MarketstackConfig(BaseModel):
    """Market-data provider configuration.

    Attributes:
        api_key_env: Environment variable name for the access key
        base_url: REST API root
        timeout: Request timeout in seconds
    """

    api_key_env: str = Field(default="MARKETSTACK_API_KEY", description="Env var for access key")
    base_url: str = Field(default="http://api.marketstack.com/v1", description="API root URL")
    timeout: float = Field(default=30.0, description="Request timeout (seconds)", gt=0)

    def get_api_key(self) -> Optional[str]:
        """Get access key from environment."""
        return os.environ.get(self.api_key_env)


class PerplexityConfig(BaseModel):
    """LLM chat-completion provider configuration.

    Attributes:
        api_key_env: Environment variable name for the bearer token
        base_url: REST API root
        model: Model for correlation analysis and news
        analysis_model: Model for free-form stock data analysis
        temperature: Sampling temperature
        top_p: Nucleus sampling mass
        frequency_penalty: Repetition penalty
        presence_penalty: Topic novelty penalty
        max_tokens: Completion budget for stock data analysis
        timeout: Request timeout in seconds
    """

    api_key_env: str = Field(default="PERPLEXITY_API_KEY", description="Env var for API key")
    base_url: str = Field(default="https://api.perplexity.ai", description="API root URL")
    model: str = Field(default="sonar", description="Default chat model")
    analysis_model: str = Field(default="mixtral-8x7b-instruct", description="Stock analysis model")
    temperature: float = Field(default=0.2, ge=0, le=2)
    top_p: float = Field(default=0.9, gt=0, le=1)
    frequency_penalty: float = Field(default=1.0)
    presence_penalty: float = Field(default=0.0)
    max_tokens: int = Field(default=1000, ge=1)
    timeout: float = Field(default=60.0, description="Request timeout (seconds)", gt=0)

    def get_api_key(self) -> Optional[str]:
        """Get API key from environment."""
        return os.environ.get(self.api_key_env)


class FeedConfig(BaseModel):
    """Mock real-time feed configuration."""

    interval: float = Field(default=1.0, description="Seconds between quotes", gt=0)


class AppConfig(BaseSettings):
    """Main application configuration.

    Loads configuration from environment variables with STOCKDASH_ prefix,
    e.g. ``STOCKDASH_PERPLEXITY__MODEL=sonar-pro``.

    Attributes:
        marketstack: Market-data provider configuration
        perplexity: LLM provider configuration
        feed: Mock feed configuration
    """

    marketstack: MarketstackConfig = Field(default_factory=MarketstackConfig)
    perplexity: PerplexityConfig = Field(default_factory=PerplexityConfig)
    feed: FeedConfig = Field(default_factory=FeedConfig)

    model_config = SettingsConfigDict(
        env_prefix="STOCKDASH_",
        env_nested_delimiter="__",
        extra="ignore",
    )

    @property
    def marketstack_api_key(self) -> str:
        """Get the market-data access key from environment."""
        key = self.marketstack.get_api_key()
        if not key:
            raise ValueError(f"{self.marketstack.api_key_env} not set in environment")
        return key

    @property
    def perplexity_api_key(self) -> str:
        """Get the LLM API key from environment."""
        key = self.perplexity.get_api_key()
        if not key:
            raise ValueError(f"{self.perplexity.api_key_env} not set in environment")
        return key
