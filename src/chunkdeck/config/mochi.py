"""Mochi API configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import require_env_var
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy

MOCHI_BASE_URL = "https://app.mochi.cards/api"
MOCHI_TIMEOUT_SECONDS = 30.0


@dataclass(frozen=True, slots=True)
class MochiConfig:
    """Holds Mochi API credentials and transport settings."""

    api_key: str
    resilience: ResilienceConfig


def default_mochi_resilience() -> ResilienceConfig:
    return ResilienceConfig(
        name="mochi",
        base_url=MOCHI_BASE_URL,
        timeout_seconds=MOCHI_TIMEOUT_SECONDS,
        retry=RetryPolicy(total=4),
        ratelimit=RateLimit(max_calls=1, per_seconds=0.5),
        default_headers={"Accept": "application/json"},
    )


def get_mochi_config(*, resilience: ResilienceConfig | None = None) -> MochiConfig:
    return MochiConfig(
        api_key=require_env_var("MOCHI_API_KEY"),
        resilience=resilience or default_mochi_resilience(),
    )
