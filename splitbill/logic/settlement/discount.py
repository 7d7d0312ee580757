"""Discount normalization: effective unit price of an item."""
from __future__ import annotations
import logging

from splitbill.domain.Item import Item
from splitbill.utilities.coerce import to_number
from splitbill.utilities.constants import DISCOUNT_PERCENTAGE

logger = logging.getLogger(__name__)

__all__ = ["get_discounted_unit_price", "get_item_total"]


def get_discounted_unit_price(item: Item) -> float:
    """Return the unit price after the item's flat or percentage discount.

    Missing or non-numeric price/discount count as 0. A flat discount larger
    than the price is not clamped and yields a negative unit price.
    """
    price = to_number(getattr(item, "price", 0))
    discount = to_number(getattr(item, "discount", 0))
    if getattr(item, "discount_type", None) == DISCOUNT_PERCENTAGE:
        return price - (price * discount) / 100
    if discount > price:
        logger.warning(f"Flat discount {discount} exceeds price {price} of item '{getattr(item, 'name', '')}'")
    return price - discount


def get_item_total(item: Item) -> float:
    """Discounted unit price times quantity."""
    return get_discounted_unit_price(item) * to_number(getattr(item, "quantity", 0))
