"""Read-only bill views for display.

Nothing here feeds back into the settlement computation.
"""
from __future__ import annotations
from collections import defaultdict
from typing import Any, Dict, List, Optional

from splitbill.domain.Item import Item
from splitbill.domain.Person import Person
from splitbill.domain.PersonTotal import PersonTotal
from splitbill.domain.Section import Section, TaxLine
from splitbill.logic.settlement.aggregator import accumulate_subtotals
from splitbill.logic.settlement.discount import get_item_total
from splitbill.logic.settlement.tax import build_section_tax_map
from splitbill.utilities.constants import DEFAULT_SECTION_ID, DEFAULT_SECTION_NAME

__all__ = ["get_subtotal", "get_grand_total", "get_sections_summary", "get_unassigned_items"]


def get_subtotal(items: List[Item]) -> float:
    """Sum of discounted line totals over all items, assigned or not."""
    return sum(get_item_total(item) for item in items)


def get_grand_total(person_totals: List[PersonTotal]) -> float:
    return sum(p.total for p in person_totals)


def get_unassigned_items(items: List[Item]) -> List[Item]:
    return [item for item in items if not item.consumed_by]


def get_sections_summary(people: List[Person], items: List[Item], sections: Optional[List[Section]] = None,
                         default_tax_amount: float = 0.0,
                         default_taxes: Optional[List[TaxLine]] = None) -> List[Dict[str, Any]]:
    """Per-section subtotal, tax and total over consumed items.

    Returns a list of dicts { section_id, name, subtotal, tax, total }, default
    section first, then sections in bill order. Sections without a positive
    subtotal are omitted.
    """
    sections = sections or []
    _, per_section = accumulate_subtotals(people, items, sections)
    subtotals: Dict[Optional[str], float] = defaultdict(float)
    for by_section in per_section.values():
        for key, amount in by_section.items():
            subtotals[key] += amount

    tax_map = build_section_tax_map(sections, subtotals, default_tax_amount, default_taxes)
    names = {DEFAULT_SECTION_ID: DEFAULT_SECTION_NAME}
    names.update({s.id: s.name for s in sections if not s.is_default})

    summary: List[Dict[str, Any]] = []
    for key, name in names.items():
        subtotal = subtotals.get(key, 0.0)
        if subtotal <= 0:
            continue
        tax = max(tax_map.get(key, 0.0), 0.0)
        summary.append({
            'section_id': key,
            'name': name,
            'subtotal': subtotal,
            'tax': tax,
            'total': subtotal + tax,
        })
    return summary
