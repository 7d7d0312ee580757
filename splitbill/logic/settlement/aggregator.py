"""Aggregation: turns a bill snapshot into per-person totals.

Runs discount -> allocation for every consumed item, accumulates subtotals per
person and per (person, section), then apportions taxes on top. The result
never mutates the inputs and never raises for malformed numbers.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, List, Optional, Tuple

from splitbill.domain.Item import Item
from splitbill.domain.Person import Person
from splitbill.domain.PersonTotal import LineItem, PersonTotal
from splitbill.domain.Section import Section, TaxLine
from splitbill.logic.settlement.allocation import resolve_shares
from splitbill.logic.settlement.discount import get_discounted_unit_price
from splitbill.logic.settlement.tax import apportion_tax, build_section_tax_map
from splitbill.utilities.constants import DEFAULT_SECTION_ID

logger = logging.getLogger(__name__)

__all__ = ["section_key", "accumulate_subtotals", "compute_settlement"]


def section_key(item: Item, sections: List[Section]) -> Optional[str]:
    """Section an item is taxed under; ids of sections that no longer exist map to the default."""
    known = {s.id for s in sections}
    return item.section_id if item.section_id in known else DEFAULT_SECTION_ID


def accumulate_subtotals(people: List[Person], items: List[Item], sections: List[Section]
                         ) -> Tuple[Dict[str, PersonTotal], Dict[str, Dict[Optional[str], float]]]:
    """Build zeroed totals for every person and fill in item shares.

    Returns (totals by person id, per-person section subtotals). Shares of
    person ids that are not part of the bill are left out.
    """
    totals: Dict[str, PersonTotal] = {p.id: PersonTotal(p.id, p.name) for p in people}
    per_section: Dict[str, Dict[Optional[str], float]] = {p.id: defaultdict(float) for p in people}

    for item in items:
        if not item.consumed_by:
            continue
        shares = resolve_shares(item)
        unit_price = get_discounted_unit_price(item)
        key = section_key(item, sections)
        values = {a.person_id: a.value for a in item.consumed_by}
        for person_id, share in shares.items():
            person = totals.get(person_id)
            if person is None:
                logger.debug(f"Item '{item.name}' allocated to unknown person {person_id}; share skipped")
                continue
            person.line_items.append(LineItem(
                item_id=item.id,
                name=item.name,
                unit_price_after_discount=unit_price,
                quantity=item.quantity,
                split_type=item.split_type,
                allocation_value=values[person_id],
                share=share,
                co_assignee_count=len(item.consumed_by),
                discount=item.discount,
                discount_type=item.discount_type,
                section_id=key,
            ))
            person.subtotal += share
            per_section[person_id][key] += share
    return totals, per_section


def compute_settlement(people: List[Person], items: List[Item], sections: Optional[List[Section]] = None,
                       default_tax_amount: float = 0.0,
                       default_taxes: Optional[List[TaxLine]] = None) -> List[PersonTotal]:
    """Compute every person's subtotal, tax and total, in the order people were given."""
    sections = sections or []
    totals, per_section = accumulate_subtotals(people, items, sections)

    section_subtotals: Dict[Optional[str], float] = defaultdict(float)
    for subtotals in per_section.values():
        for key, amount in subtotals.items():
            section_subtotals[key] += amount

    tax_map = build_section_tax_map(sections, section_subtotals, default_tax_amount, default_taxes)
    taxes = apportion_tax(per_section, tax_map)

    for person_id, person in totals.items():
        person.tax = taxes.get(person_id, 0.0)
        person.total = person.subtotal + person.tax

    logger.debug(f"Settled {len(items)} items across {len(totals)} people")
    return list(totals.values())
