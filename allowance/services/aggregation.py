"""
Discount and failure aggregates over already-loaded lists.

A negative instance value is a penalty: it is summed into the discount and
counted as a failed activity. Zero and positive values never contribute.
Money totals are rounded to cents.
"""
from typing import Iterable, Sequence

from ..models.activity_list import ActivityList


def _values(lst: ActivityList) -> list[float]:
    return [float(item.get("value", 0)) for item in (lst.activities or [])]


def compute_discount(lst: ActivityList) -> float:
    return round(sum((v for v in _values(lst) if v < 0), 0.0), 2)


def compute_total_discount(lists: Iterable[ActivityList]) -> float:
    return round(sum((compute_discount(lst) for lst in lists), 0.0), 2)


def count_failed_activities(lst: ActivityList) -> int:
    return sum(1 for v in _values(lst) if v < 0)


def count_failed_activities_per_list(lists: Sequence[ActivityList]) -> list[int]:
    """One count per list, in the same order as ``lists``."""
    return [count_failed_activities(lst) for lst in lists]


def net_allowance(allowance_value: float, lists: Iterable[ActivityList]) -> float:
    # discount is <= 0; the member never ends up owing money
    return max(round(allowance_value + compute_total_discount(lists), 2), 0.0)
