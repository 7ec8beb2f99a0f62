"""Application configuration helpers."""

from __future__ import annotations

from .decks import (
    SentenceDeckConfig,
    VocabDeckConfig,
    get_sentence_deck_config,
    get_vocab_deck_config,
)
from .env import env_flag, optional_env_var, require_env_var, require_env_vars
from .errors import ConfigurationError, InvalidConfigurationError, MissingConfigurationError
from .http_resilience import RateLimit, ResilienceConfig, RetryPolicy
from .logging import configure_logging
from .mochi import MochiConfig, get_mochi_config
from .storage import StorageConfig, get_storage_config

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "MissingConfigurationError",
    "MochiConfig",
    "RateLimit",
    "ResilienceConfig",
    "RetryPolicy",
    "SentenceDeckConfig",
    "StorageConfig",
    "VocabDeckConfig",
    "configure_logging",
    "env_flag",
    "get_mochi_config",
    "get_sentence_deck_config",
    "get_storage_config",
    "get_vocab_deck_config",
    "optional_env_var",
    "require_env_var",
    "require_env_vars",
]
