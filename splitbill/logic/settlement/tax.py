"""Tax apportionment across sections.

Every section (plus the default section, keyed by None) carries a flat tax
amount. That amount is shared among the people who consumed items in the
section, in proportion to each person's subtotal within it.
"""
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from splitbill.domain.Section import Section, TaxLine
from splitbill.utilities.coerce import to_number
from splitbill.utilities.constants import TAX_PERCENTAGE, DEFAULT_SECTION_ID

logger = logging.getLogger(__name__)

__all__ = ["resolve_tax_amount", "build_section_tax_map", "apportion_tax"]

SectionKey = Optional[str]


def resolve_tax_amount(tax_amount: float, tax_lines: Iterable[TaxLine], base: float) -> float:
    """Collapse a flat amount plus tax lines into one flat amount for the given base."""
    total = to_number(tax_amount)
    for line in tax_lines or []:
        value = to_number(line.value)
        if line.type == TAX_PERCENTAGE:
            total += base * value / 100
        else:
            total += value
    return total


def build_section_tax_map(sections: List[Section], section_subtotals: Dict[SectionKey, float],
                          default_tax_amount: float = 0.0,
                          default_taxes: Optional[List[TaxLine]] = None) -> Dict[SectionKey, float]:
    """One flat tax per existing section id, plus the default tax under None."""
    tax_map: Dict[SectionKey, float] = {
        DEFAULT_SECTION_ID: resolve_tax_amount(
            default_tax_amount, default_taxes or [], section_subtotals.get(DEFAULT_SECTION_ID, 0.0))
    }
    for section in sections:
        if section.is_default:
            # A default section passed explicitly adds to the global tax
            tax_map[DEFAULT_SECTION_ID] += resolve_tax_amount(
                section.tax_amount, section.taxes, section_subtotals.get(DEFAULT_SECTION_ID, 0.0))
            continue
        tax_map[section.id] = resolve_tax_amount(
            section.tax_amount, section.taxes, section_subtotals.get(section.id, 0.0))
    return tax_map


def apportion_tax(per_person_section_subtotals: Dict[str, Dict[SectionKey, float]],
                  section_tax_map: Dict[SectionKey, float]) -> Dict[str, float]:
    """Distribute each section's tax proportionally to the people who consumed it.

    per_person_section_subtotals maps person id -> {section key -> subtotal}.
    Sections whose combined subtotal is not positive contribute no tax at all.
    """
    section_subtotals: Dict[SectionKey, float] = defaultdict(float)
    for sections in per_person_section_subtotals.values():
        for key, amount in sections.items():
            section_subtotals[key] += amount

    person_tax: Dict[str, float] = {pid: 0.0 for pid in per_person_section_subtotals}
    for key, tax in section_tax_map.items():
        tax = to_number(tax)
        if tax <= 0:
            continue
        base = section_subtotals.get(key, 0.0)
        if base <= 0:
            logger.warning(f"Tax {tax} of section {key!r} dropped: section has no consumed subtotal")
            continue
        for pid, sections in per_person_section_subtotals.items():
            amount = sections.get(key, 0.0)
            if amount:
                person_tax[pid] += tax * (amount / base)
    return person_tax
