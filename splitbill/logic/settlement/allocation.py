"""Allocation resolution: how much of an item each assigned person pays."""
from __future__ import annotations
import logging
from typing import Dict

from splitbill.domain.Item import Item
from splitbill.logic.settlement.discount import get_item_total
from splitbill.utilities.coerce import to_number
from splitbill.utilities.constants import SPLIT_PERCENTAGE, SPLIT_FRACTION

logger = logging.getLogger(__name__)

__all__ = ["resolve_shares"]


def _equal_shares(item: Item, total: float) -> Dict[str, float]:
    per_person = total / len(item.consumed_by)
    return {a.person_id: per_person for a in item.consumed_by}


def _weighted_shares(item: Item, total: float) -> Dict[str, float]:
    weights = [(a.person_id, to_number(a.value)) for a in item.consumed_by]
    weight_sum = sum(w for _, w in weights)
    if weight_sum == 0:
        logger.warning(f"Allocation values of item '{item.name}' sum to zero; every share is 0")
        return {pid: 0.0 for pid, _ in weights}
    return {pid: total * (w / weight_sum) for pid, w in weights}


def resolve_shares(item: Item) -> Dict[str, float]:
    """Map each person in item.consumed_by to their monetary share of the item.

    equal: total / number of allocations.
    percentage, fraction: total * value / sum(values), normalized against the
    actual sum so percentages need not add up to 100.
    Unknown split types fall back to equal. Duplicate person ids keep the last share.
    """
    if not item.consumed_by:
        return {}
    total = get_item_total(item)
    if item.split_type in (SPLIT_PERCENTAGE, SPLIT_FRACTION):
        return _weighted_shares(item, total)
    return _equal_shares(item, total)
