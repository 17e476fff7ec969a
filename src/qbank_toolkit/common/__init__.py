"""Common utilities shared across the toolkit."""

from __future__ import annotations

from .sources import (
    SourcesConfig,
    discover_tex_files,
    load_sources_config,
)
from .topics import (
    TOPIC_CATALOG,
    TopicCategory,
    TopicDefinition,
    get_category_by_id,
    get_topic_category,
    get_topic_title,
    is_topic_category,
    subtopic_ids_for_category,
)

__all__ = [
    # sources
    "SourcesConfig",
    "discover_tex_files",
    "load_sources_config",
    # topics
    "TOPIC_CATALOG",
    "TopicCategory",
    "TopicDefinition",
    "get_category_by_id",
    "get_topic_category",
    "get_topic_title",
    "is_topic_category",
    "subtopic_ids_for_category",
]
