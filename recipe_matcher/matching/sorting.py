"""Filtering and ordering of scored results.

Result-like objects carry their "match" value in different shapes: a 0-100
percentage, a 0-1 fraction, "85%" or "85" strings, or nothing at all.
normalize_match_value() maps all of them onto one percentage scale, and
filter_and_sort_recipes() drops non-positive matches and orders the rest,
highest first, keeping the input order for ties.

Where the match value lives is described by an ordered list of
MatchAccessor objects; the first accessor returning a non-None value wins.
Default priority:

1. RecipeScore: combined_score, or 0 when the recipe shares no ingredient
   with the user (zero-overlap recipes are filtered out here, not at scoring).
2. Fields (mapping keys or attributes): coverageScore, coverage_score, match,
   matchPercentage, match_percentage, score, similarity.
"""

import math
import numbers
import re
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Callable, Iterable, Optional, Sequence, TypeVar, Union

from recipe_matcher.models.models import RecipeScore

T = TypeVar("T")

_LEADING_FLOAT = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")

DEFAULT_MATCH_FIELDS = (
    "coverageScore",
    "coverage_score",
    "match",
    "matchPercentage",
    "match_percentage",
    "score",
    "similarity",
)


@dataclass(frozen=True)
class MatchAccessor:
    """Reads the raw match value from one result shape; None means "not here"."""

    name: str
    get: Callable[[Any], Any]


def field_accessor(field: str) -> MatchAccessor:
    """Accessor reading ``field`` from a mapping key or an attribute."""

    def _get(item: Any) -> Any:
        if isinstance(item, Mapping):
            return item.get(field)
        return getattr(item, field, None)

    return MatchAccessor(name=field, get=_get)


def _recipe_score_value(item: Any) -> Optional[float]:
    if not isinstance(item, RecipeScore):
        return None
    if not item.matched_ingredients:
        return 0.0
    # Fraction scale; float error must not push it past 1.0 (read as a percentage)
    return min(item.combined_score, 1.0)


RECIPE_SCORE_ACCESSOR = MatchAccessor(name="RecipeScore.combined_score", get=_recipe_score_value)

DEFAULT_MATCH_ACCESSORS: tuple[MatchAccessor, ...] = (RECIPE_SCORE_ACCESSOR,) + tuple(
    field_accessor(field) for field in DEFAULT_MATCH_FIELDS
)


def normalize_match_value(raw: Any) -> float:
    """Normalize a raw match value to a percentage.

    - None, non-numeric types and unparsable strings -> 0
    - NaN and +/-infinity -> 0
    - strings: surrounding whitespace and a trailing "%" removed, then the
      leading number is parsed ("85%" -> 85)
    - 0 < v <= 1 is a fraction -> v * 100; any other value is returned as is
      (no clamping to [0, 100])
    """
    if raw is None or isinstance(raw, bool):
        return 0.0

    if isinstance(raw, str):
        cleaned = raw.strip()
        if cleaned.endswith("%"):
            cleaned = cleaned[:-1].strip()
        parsed = _LEADING_FLOAT.match(cleaned)
        if not parsed:
            return 0.0
        value = float(parsed.group())
    elif isinstance(raw, numbers.Real):
        value = float(raw)
    else:
        return 0.0

    if not math.isfinite(value):
        return 0.0
    if 0 < value <= 1:
        return value * 100
    return value


def _resolve_accessors(
    match_field_priority: Optional[Sequence[Union[str, MatchAccessor]]],
) -> tuple[MatchAccessor, ...]:
    if match_field_priority is None:
        return DEFAULT_MATCH_ACCESSORS
    return tuple(
        entry if isinstance(entry, MatchAccessor) else field_accessor(entry) for entry in match_field_priority
    )


def get_match_value(item: Any, accessors: Iterable[MatchAccessor] = DEFAULT_MATCH_ACCESSORS) -> float:
    """Normalized match value of ``item`` from the first accessor that has one."""
    for accessor in accessors:
        raw = accessor.get(item)
        if raw is not None:
            return normalize_match_value(raw)
    return 0.0


def filter_and_sort_recipes(
    items: Optional[Sequence[T]],
    match_field_priority: Optional[Sequence[Union[str, MatchAccessor]]] = None,
) -> list[T]:
    """Drop items whose match is <= 0 and order the rest by match, descending.

    Args:
        items: Results of any shape (dicts, models, plain objects). None or a
            non-sequence yields [].
        match_field_priority: Field names and/or MatchAccessor objects tried
            in order. Defaults to DEFAULT_MATCH_ACCESSORS.

    Returns:
        New list; input list and items are never modified. The sort is
        stable, so applying the function to its own output changes nothing.
    """
    if items is None or not isinstance(items, (list, tuple)):
        return []

    accessors = _resolve_accessors(match_field_priority)
    valued = [(get_match_value(item, accessors), item) for item in items]
    kept = [pair for pair in valued if pair[0] > 0]
    kept.sort(key=lambda pair: pair[0], reverse=True)
    return [item for _, item in kept]


def filter_and_sort_recipe_scores(scores: Optional[Sequence[RecipeScore]]) -> list[RecipeScore]:
    """Ranking of RecipeScore records by combined_score, zero-overlap removed."""
    return filter_and_sort_recipes(scores, [RECIPE_SCORE_ACCESSOR])
