"""Settlement engine.

Stages, leaves first: discount -> allocation -> tax -> aggregator.
Every stage is pure: inputs are never mutated and no I/O happens here.
"""
from splitbill.logic.settlement.discount import get_discounted_unit_price, get_item_total
from splitbill.logic.settlement.allocation import resolve_shares
from splitbill.logic.settlement.tax import apportion_tax, build_section_tax_map, resolve_tax_amount
from splitbill.logic.settlement.aggregator import compute_settlement
from splitbill.logic.settlement.validation import validate_allocations, normalize_allocations

__all__ = [
    "get_discounted_unit_price", "get_item_total", "resolve_shares",
    "apportion_tax", "build_section_tax_map", "resolve_tax_amount",
    "compute_settlement", "validate_allocations", "normalize_allocations",
]
