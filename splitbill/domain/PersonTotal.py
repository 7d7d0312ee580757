"""Settlement output: one person's itemized share of the bill."""
from typing import List, Optional


class LineItem:
    def __init__(self, item_id: str, name: str, unit_price_after_discount: float, quantity: int,
                 split_type: str, allocation_value: float, share: float, co_assignee_count: int,
                 discount: float, discount_type: str, section_id: Optional[str]):
        self.item_id = item_id
        self.name = name
        self.unit_price_after_discount = unit_price_after_discount
        self.quantity = quantity
        self.split_type = split_type
        self.allocation_value = allocation_value
        self.share = share
        self.co_assignee_count = co_assignee_count
        self.discount = discount
        self.discount_type = discount_type
        self.section_id = section_id

    def __str__(self) -> str:
        return f"{self.name} - {self.share:.2f} ({self.split_type}, shared by {self.co_assignee_count})"

    __repr__ = __str__

    def to_dict(self):
        return dict(vars(self))


class PersonTotal:
    def __init__(self, person_id: str, name: str):
        self.person_id = person_id
        self.name = name
        self.line_items: List[LineItem] = []
        self.subtotal = 0.0
        self.tax = 0.0
        self.total = 0.0

    def __str__(self) -> str:
        return f"{self.name}: subtotal {self.subtotal:.2f} + tax {self.tax:.2f} = {self.total:.2f}"

    __repr__ = __str__

    def to_dict(self):
        return {
            "person_id": self.person_id,
            "name": self.name,
            "line_items": [li.to_dict() for li in self.line_items],
            "subtotal": self.subtotal,
            "tax": self.tax,
            "total": self.total,
        }
