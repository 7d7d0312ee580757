"""Allocation checks used before a custom split is committed.

The aggregator does not depend on these: it normalizes whatever it is given.
"""
from __future__ import annotations
from typing import Any, Iterable, List, Optional

from splitbill.domain.Item import Allocation
from splitbill.utilities.config import PERCENTAGE_TOLERANCE
from splitbill.utilities.constants import SPLIT_PERCENTAGE, PERCENTAGE_TOTAL

__all__ = ["validate_allocations", "normalize_allocations"]


def _values(allocations: Iterable[Any]) -> List[float]:
    return [Allocation.from_value(a).value for a in allocations]


def validate_allocations(allocations: Optional[List[Any]], split_type: str) -> bool:
    """Return True when the allocations form a committable split.

    percentage: no negative values and the sum is 100 within tolerance.
    Any other type: every value strictly positive.
    """
    if not allocations:
        return False
    values = _values(allocations)
    if split_type == SPLIT_PERCENTAGE:
        if any(v < 0 for v in values):
            return False
        return abs(sum(values) - PERCENTAGE_TOTAL) < PERCENTAGE_TOLERANCE
    return all(v > 0 for v in values)


def normalize_allocations(allocations: Optional[List[Any]], split_type: str) -> List[Allocation]:
    """Rescale percentage allocations so they total 100; other split types are kept as given."""
    if not allocations:
        return []
    normalized = [Allocation.from_value(a) for a in allocations]
    if split_type == SPLIT_PERCENTAGE:
        total = sum(a.value for a in normalized)
        if total and total != PERCENTAGE_TOTAL:
            return [Allocation(a.person_id, a.value / total * PERCENTAGE_TOTAL) for a in normalized]
    return normalized
