"""Item domain entity: a priced bill line plus the allocations of who consumed it."""
from typing import List, Optional
from uuid import uuid4

from splitbill.utilities.coerce import to_number, to_quantity
from splitbill.utilities.constants import (
    SPLIT_EQUAL, SPLIT_TYPES, DISCOUNT_FLAT, DISCOUNT_TYPES, DEFAULT_SECTION_ID
)


class Allocation:
    """One person's participation weight in an item.

    The meaning of value depends on the owning item's split type: ignored for
    equal splits, percentage points for percentage splits, parts for fractions.
    """

    def __init__(self, person_id: str, value: float = 1.0):
        self.person_id = person_id
        self.value = to_number(value)

    def __eq__(self, other) -> bool:
        return isinstance(other, Allocation) and (self.person_id, self.value) == (other.person_id, other.value)

    def __hash__(self) -> int:
        return hash((self.person_id, self.value))

    def __str__(self) -> str:
        return f"{self.person_id}:{self.value}"

    __repr__ = __str__

    @staticmethod
    def from_value(data) -> "Allocation":
        '''Normalizes a bare person id or an {personId, value} mapping into an Allocation.'''
        if isinstance(data, Allocation):
            return Allocation(data.person_id, data.value)
        if isinstance(data, dict):
            person_id = data.get("person_id", data.get("personId", ""))
            return Allocation(str(person_id or ""), data.get("value", 1))
        return Allocation(str(data), 1)

    def to_dict(self):
        return {"person_id": self.person_id, "value": self.value}


class Item:
    def __init__(self, id: str = "", name: str = "", price: float = 0.0, quantity: int = 1,
                 discount: float = 0.0, discount_type: str = DISCOUNT_FLAT,
                 section_id: Optional[str] = DEFAULT_SECTION_ID, split_type: str = SPLIT_EQUAL,
                 consumed_by: Optional[List[Allocation]] = None):
        self.id = id or uuid4().hex
        self.name = name
        self.price = price
        self.quantity = quantity
        self.discount = discount
        self.discount_type = discount_type
        self.section_id = section_id
        self.split_type = split_type
        self.consumed_by = consumed_by[:] if consumed_by else []

    def __str__(self) -> str:
        return (f"{self.name} - {self.quantity} x {self.price} - {self.split_type} split "
                f"- {len(self.consumed_by)} consumer(s)")

    __repr__ = __str__

    @property
    def is_assigned(self) -> bool:
        return len(self.consumed_by) > 0

    def person_ids(self) -> List[str]:
        return [a.person_id for a in self.consumed_by]

    def replace(self, **changes) -> "Item":
        '''Returns a copy of this item with the given fields overwritten (shallow merge).'''
        fields = {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "discount": self.discount,
            "discount_type": self.discount_type,
            "section_id": self.section_id,
            "split_type": self.split_type,
            "consumed_by": self.consumed_by,
        }
        fields.update({k: v for k, v in changes.items() if k in fields})
        return Item(**fields)

    @staticmethod
    def from_dict(data):
        '''Creates an Item from a dictionary, coercing numbers and normalizing consumers.

        Accepts both snake_case and camelCase keys. consumedBy entries may be bare
        person ids or {personId, value} objects.
        '''
        d = dict(data) if isinstance(data, dict) else {}
        discount_type = d.get("discount_type", d.get("discountType")) or DISCOUNT_FLAT
        split_type = d.get("split_type", d.get("splitType")) or SPLIT_EQUAL
        section_id = d.get("section_id", d.get("sectionId"))
        consumers = d.get("consumed_by", d.get("consumedBy")) or []
        return Item(
            id=str(d.get("id") or ""),
            name=str(d.get("name") or ""),
            price=to_number(d.get("price")),
            quantity=to_quantity(d.get("quantity")),
            discount=to_number(d.get("discount")),
            discount_type=discount_type if discount_type in DISCOUNT_TYPES else DISCOUNT_FLAT,
            section_id=str(section_id) if section_id not in (None, "") else DEFAULT_SECTION_ID,
            split_type=split_type if split_type in SPLIT_TYPES else SPLIT_EQUAL,
            consumed_by=[Allocation.from_value(c) for c in consumers],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "price": self.price,
            "quantity": self.quantity,
            "discount": self.discount,
            "discount_type": self.discount_type,
            "section_id": self.section_id,
            "split_type": self.split_type,
            "consumed_by": [a.to_dict() for a in self.consumed_by],
        }
