"""Configuration discovery and parsing helpers."""

from replference.lib.config.settings import (
    DisplayConfig,
    ReplferenceConfig,
    TopicsConfig,
    load_config,
)
from replference.lib.config.topics import (
    Topic,
    load_topic_catalog,
    resolve_topic,
    resolve_topic_for,
)

__all__ = [
    "DisplayConfig",
    "ReplferenceConfig",
    "Topic",
    "TopicsConfig",
    "load_config",
    "load_topic_catalog",
    "resolve_topic",
    "resolve_topic_for",
]
