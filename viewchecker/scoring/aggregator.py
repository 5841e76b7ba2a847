# viewchecker/scoring/aggregator.py
"""
Single source of truth for section and overall scores.

Both functions are pure and cheap; callers must re-invoke them after any
item change instead of keeping a computed value around.
"""
import math
from typing import Any, Iterable, Sequence

from viewchecker.models.category_item import CategoryItem


def round_half_up(value: float) -> int:
    """Rounds .5 upwards (Python's round() would round half to even)."""
    return int(math.floor(value + 0.5))


def item_score(item: CategoryItem) -> float:
    """score, else a numeric compliance, else 0."""
    for candidate in (item.score, item.compliance):
        if _is_number(candidate):
            return candidate
    return 0


def calculate_category_score(items: Sequence[CategoryItem]) -> int:
    if not items:
        return 0

    total = sum(item_score(item) for item in items)
    return round_half_up(total / len(items))


def calculate_overall_score(sections: Iterable[Sequence[CategoryItem]]) -> int:
    """
    Equal-weight mean of the section aggregates.
    Empty sections count as 0 and still take part in the mean.
    """
    scores = [calculate_category_score(items) for items in sections]
    if not scores:
        return 0
    return round_half_up(sum(scores) / len(scores))


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)
