"""
Module: common.topics

Purpose:
    Topic catalog for the discrete-math banks. Maps the topic slugs found
    in question ids (``graph``, ``nb``, ``set``...) to display titles and
    their parent categories.

Key Functions:
    - get_topic_title(): Display title for a topic slug
    - get_topic_category(): Parent category of a topic slug
    - get_category_by_id(): Category lookup
    - subtopic_ids_for_category(): Topic slugs of a category
    - is_topic_category(): Is a value a category id?

Dependencies:
    - functools (std)

Used By:
    - qbank_toolkit.cli: Per-topic build summary
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Dict, List, Optional, Tuple

__all__ = [
    "TopicDefinition",
    "TopicCategory",
    "TOPIC_CATALOG",
    "normalise_topic",
    "get_topic_title",
    "get_topic_category",
    "get_category_by_id",
    "subtopic_ids_for_category",
    "is_topic_category",
]


@dataclass(frozen=True)
class TopicDefinition:
    id: str
    title: str


@dataclass(frozen=True)
class TopicCategory:
    id: str
    title: str
    subtopics: Tuple[TopicDefinition, ...]


TOPIC_CATALOG: Tuple[TopicCategory, ...] = (
    TopicCategory("logic-and-proofs", "Logic & Proofs", (
        TopicDefinition("propositional", "Propositional Logic"),
        TopicDefinition("predicate", "Predicate Logic"),
        TopicDefinition("proof", "Proofs"),
    )),
    TopicCategory("basic-structures", "Basic Structures", (
        TopicDefinition("set", "Sets"),
        TopicDefinition("function", "Functions"),
        TopicDefinition("sequence", "Sequences"),
        TopicDefinition("sum", "Summations"),
    )),
    TopicCategory("algorithms", "Algorithms", (
        TopicDefinition("algo", "Algorithms"),
        TopicDefinition("fgrowth", "Function Growth"),
    )),
    TopicCategory("induction-recursion", "Induction & Recursion", (
        TopicDefinition("induction", "Mathematical Induction"),
        TopicDefinition("recursion", "Recursion"),
    )),
    TopicCategory("graph-theory", "Graph Theory", (
        TopicDefinition("gt", "Graph Theory"),
    )),
    TopicCategory("number-theory", "Number Theory", (
        TopicDefinition("nb", "Number Theory"),
    )),
    TopicCategory("counting", "Counting", (
        TopicDefinition("counting", "Counting"),
    )),
    TopicCategory("boolean-algebra", "Boolean Algebra", (
        TopicDefinition("boolean", "Boolean Algebra"),
    )),
)


def normalise_topic(value: Optional[str]) -> str:
    """Lowercase, stripped topic slug. Empty string if None."""
    if not value:
        return ""
    return value.strip().lower()


@lru_cache(maxsize=None)
def _topic_lookup() -> Dict[str, Tuple[str, str]]:
    """Topic slug -> (title, category id)."""
    lookup: Dict[str, Tuple[str, str]] = {}
    for category in TOPIC_CATALOG:
        for topic in category.subtopics:
            lookup[topic.id.lower()] = (topic.title, category.id)
    return lookup


@lru_cache(maxsize=None)
def _category_lookup() -> Dict[str, TopicCategory]:
    return {category.id.lower(): category for category in TOPIC_CATALOG}


def _title_case(slug: str) -> str:
    parts = [p for p in slug.replace("_", "-").split("-") if p]
    return " ".join(p[0].upper() + p[1:] for p in parts)


def get_topic_title(topic: str) -> str:
    """
    Display title for a topic slug.

    Unknown slugs are title-cased.

    Example:
        >>> get_topic_title("nb")
        'Number Theory'
        >>> get_topic_title("graph-coloring")
        'Graph Coloring'
    """
    normalized = normalise_topic(topic)
    entry = _topic_lookup().get(normalized)
    if entry:
        return entry[0]
    return _title_case(normalized)


def get_topic_category(topic: str) -> Optional[TopicCategory]:
    """Parent category of a topic slug, or None for unknown slugs."""
    entry = _topic_lookup().get(normalise_topic(topic))
    if entry is None:
        return None
    return _category_lookup()[entry[1]]


def get_category_by_id(category_id: str) -> Optional[TopicCategory]:
    return _category_lookup().get(normalise_topic(category_id))


def subtopic_ids_for_category(category_id: str) -> List[str]:
    category = get_category_by_id(category_id)
    if category is None:
        return []
    return [topic.id for topic in category.subtopics]


def is_topic_category(value: str) -> bool:
    return normalise_topic(value) in _category_lookup()
