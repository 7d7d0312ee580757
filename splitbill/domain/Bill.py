"""Bill aggregate: people, items, sections and taxes plus the commands that edit them.

Commands never mutate an item, person or section in place; they swap in new
objects and new lists, so a snapshot taken with get_snapshot() stays stable
while a settlement is computed over it.
"""
import logging
from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from splitbill.domain.Item import Allocation, Item
from splitbill.domain.Person import Person
from splitbill.domain.PersonTotal import PersonTotal
from splitbill.domain.Section import Section, TaxLine
from splitbill.events.Event_Bus import GLOBAL_EVENT_BUS
from splitbill.events.event_helpers import (
    publish_bill_changed, publish_person_removed,
    publish_split_type_changed, publish_section_removed
)
from splitbill.logic.settlement.aggregator import compute_settlement
from splitbill.logic.reporting.summary import (
    get_subtotal, get_grand_total, get_sections_summary, get_unassigned_items
)
from splitbill.utilities.coerce import to_number, to_quantity
from splitbill.utilities.config import DEFAULT_CURRENCY
from splitbill.utilities.constants import (
    BILL_STORE_VERSION, SPLIT_EQUAL, SPLIT_PERCENTAGE, SPLIT_FRACTION,
    DISCOUNT_FLAT, DEFAULT_SECTION_ID
)

logger = logging.getLogger(__name__)

# Fields update_item may overwrite, camelCase aliases included
_ITEM_FIELDS = {
    "name": "name", "price": "price", "quantity": "quantity", "discount": "discount",
    "discount_type": "discount_type", "discountType": "discount_type",
    "section_id": "section_id", "sectionId": "section_id",
    "split_type": "split_type", "splitType": "split_type",
    "consumed_by": "consumed_by", "consumedBy": "consumed_by",
}


def _as_dict(data) -> Dict[str, Any]:
    if isinstance(data, BaseModel):
        return data.model_dump()
    return dict(data) if isinstance(data, dict) else {}


class Bill:
    def __init__(self, title: str = "", currency: str = DEFAULT_CURRENCY):
        self.version = BILL_STORE_VERSION
        self.title = title
        self.currency = currency
        self.people: List[Person] = []
        self.items: List[Item] = []
        self.sections: List[Section] = []
        self.tax_amount = 0.0
        self.taxes: List[TaxLine] = []
        self._event_bus = GLOBAL_EVENT_BUS

    # --- Observer helpers -------------------------------------------------
    def set_event_bus(self, bus):
        self._event_bus = bus
        return self

    def _changed(self, command: str):
        logger.info(f"Bill '{self.title}': {command}")
        publish_bill_changed(command, self, bus=self._event_bus)

    def _map_item(self, item_id: str, change) -> bool:
        '''Replaces the item with the given id by change(item). Returns False if no such item.'''
        found = False
        updated = []
        for item in self.items:
            if item.id == item_id:
                item = change(item)
                found = True
            updated.append(item)
        if found:
            self.items = updated
        else:
            logger.debug(f"Item {item_id} not found; command ignored")
        return found

    # --- People -----------------------------------------------------------
    def add_person(self, name) -> Person:
        '''
        Adds a person and returns it (with its generated id).
        '''
        if isinstance(name, BaseModel):
            name = name.model_dump().get("name", "")
        person = Person(name=name)
        self.people = [*self.people, person]
        self._changed("add_person")
        return person

    def update_person(self, person_id: str, name: str):
        self.people = [Person(p.id, name) if p.id == person_id else p for p in self.people]
        self._changed("update_person")

    def remove_person(self, person_id: str):
        '''
        Removes a person and drops them from every item's allocations.
        '''
        affected = 0
        items = []
        for item in self.items:
            remaining = [a for a in item.consumed_by if a.person_id != person_id]
            if len(remaining) != len(item.consumed_by):
                affected += 1
                item = item.replace(consumed_by=remaining)
            items.append(item)
        self.people = [p for p in self.people if p.id != person_id]
        self.items = items
        publish_person_removed(person_id, affected, bus=self._event_bus)
        self._changed("remove_person")

    # --- Items ------------------------------------------------------------
    def add_item(self, data) -> Item:
        '''
        Adds an item from a dict (or ItemInput). Price and discount coerce to 0,
        quantity to 1; the item starts unassigned with an equal split.
        '''
        d = _as_dict(data)
        section_id = d.get("section_id", d.get("sectionId"))
        item = Item(
            name=str(d.get("name") or ""),
            price=to_number(d.get("price")),
            quantity=to_quantity(d.get("quantity")),
            discount=to_number(d.get("discount")),
            discount_type=d.get("discount_type", d.get("discountType")) or DISCOUNT_FLAT,
            section_id=section_id or DEFAULT_SECTION_ID,
            split_type=SPLIT_EQUAL,
        )
        self.items = [*self.items, item]
        self._changed("add_item")
        return item

    def update_item(self, item_id: str, data):
        '''
        Shallow-merges the given fields into the item. A new split type without
        new allocations clears the old ones.
        '''
        changes = {_ITEM_FIELDS[k]: v for k, v in _as_dict(data).items() if k in _ITEM_FIELDS}
        for key in ("price", "discount"):
            if key in changes:
                changes[key] = to_number(changes[key])
        if "quantity" in changes:
            changes["quantity"] = to_quantity(changes["quantity"])
        if "consumed_by" in changes:
            changes["consumed_by"] = [Allocation.from_value(a) for a in changes["consumed_by"] or []]

        def change(item: Item) -> Item:
            merged = dict(changes)
            if merged.get("split_type", item.split_type) != item.split_type and "consumed_by" not in merged:
                merged["consumed_by"] = []
            return item.replace(**merged)

        if self._map_item(item_id, change):
            self._changed("update_item")

    def remove_item(self, item_id: str):
        self.items = [item for item in self.items if item.id != item_id]
        self._changed("remove_item")

    # --- Assignment -------------------------------------------------------
    def _assign(self, item_id: str, allocations, split_type: str, command: str):
        normalized = [Allocation.from_value(_as_dict(a) if isinstance(a, BaseModel) else a)
                      for a in allocations or []]
        if self._map_item(item_id, lambda item: item.replace(consumed_by=normalized, split_type=split_type)):
            self._changed(command)

    def assign_item_equal(self, item_id: str, person_ids: List[str]):
        self._assign(item_id, [Allocation(pid, 1) for pid in person_ids], SPLIT_EQUAL, "assign_item_equal")

    def assign_item_percentage(self, item_id: str, allocations):
        '''allocations: list of {person_id, value} where value is a percentage.'''
        self._assign(item_id, allocations, SPLIT_PERCENTAGE, "assign_item_percentage")

    def assign_item_fraction(self, item_id: str, allocations):
        '''allocations: list of {person_id, value} where value is a number of parts.'''
        self._assign(item_id, allocations, SPLIT_FRACTION, "assign_item_fraction")

    def commit_split(self, assignment):
        '''
        Applies an already validated SplitAssignmentInput to its item.
        '''
        allocations = [a.model_dump() for a in assignment.allocations]
        if assignment.split_type == SPLIT_EQUAL:
            self.assign_item_equal(assignment.item_id, [a["person_id"] for a in allocations])
        else:
            self._assign(assignment.item_id, allocations, assignment.split_type, "commit_split")

    def assign_all_people_equal(self, item_id: str):
        self.assign_item_equal(item_id, [p.id for p in self.people])

    def remove_all_people(self, item_id: str):
        if self._map_item(item_id, lambda item: item.replace(consumed_by=[])):
            self._changed("remove_all_people")

    def set_split_type(self, item_id: str, split_type: str):
        '''
        Changes an item's split type. Existing allocations are always cleared.
        '''
        item = self._find_item(item_id)
        if item is None:
            return
        cleared = len(item.consumed_by)
        self._map_item(item_id, lambda it: it.replace(split_type=split_type, consumed_by=[]))
        publish_split_type_changed(item_id, split_type, cleared, bus=self._event_bus)
        self._changed("set_split_type")

    # --- Sections ---------------------------------------------------------
    def add_section(self, name, tax_amount: float = 0.0) -> Section:
        if isinstance(name, BaseModel):
            d = name.model_dump()
            name, tax_amount = d.get("name", ""), d.get("tax_amount", 0)
        section = Section.new(name, tax_amount)
        self.sections = [*self.sections, section]
        self._changed("add_section")
        return section

    def update_section(self, section_id: str, data):
        d = _as_dict(data)
        changes = {}
        if "name" in d:
            changes["name"] = d["name"]
        if "tax_amount" in d or "taxAmount" in d:
            changes["tax_amount"] = d.get("tax_amount", d.get("taxAmount"))
        self.sections = [s.replace(**changes) if s.id == section_id else s for s in self.sections]
        self._changed("update_section")

    def remove_section(self, section_id: str):
        '''
        Removes a section; its items move to the default section.
        '''
        moved = 0
        items = []
        for item in self.items:
            if item.section_id == section_id:
                item = item.replace(section_id=DEFAULT_SECTION_ID)
                moved += 1
            items.append(item)
        self.sections = [s for s in self.sections if s.id != section_id]
        self.items = items
        publish_section_removed(section_id, moved, bus=self._event_bus)
        self._changed("remove_section")

    # --- Taxes ------------------------------------------------------------
    def set_tax(self, amount):
        '''Sets the flat default (global) tax. Invalid input becomes 0.'''
        self.tax_amount = to_number(amount)
        self._changed("set_tax")

    def set_section_tax(self, section_id: Optional[str], amount):
        if section_id is DEFAULT_SECTION_ID:
            self.set_tax(amount)
            return
        self.update_section(section_id, {"tax_amount": to_number(amount)})

    def _tax_lines(self, section_id: Optional[str]) -> Optional[List[TaxLine]]:
        if section_id is DEFAULT_SECTION_ID:
            return self.taxes
        section = next((s for s in self.sections if s.id == section_id), None)
        return section.taxes if section else None

    def _set_tax_lines(self, section_id: Optional[str], lines: List[TaxLine]):
        if section_id is DEFAULT_SECTION_ID:
            self.taxes = lines
        else:
            self.sections = [s.replace(taxes=lines) if s.id == section_id else s for s in self.sections]

    def add_tax(self, section_id: Optional[str], data) -> Optional[TaxLine]:
        '''
        Adds a labelled flat or percentage tax line to a section (None = default).
        '''
        lines = self._tax_lines(section_id)
        if lines is None:
            logger.debug(f"Section {section_id} not found; tax not added")
            return None
        line = TaxLine.from_dict(_as_dict(data))
        self._set_tax_lines(section_id, [*lines, line])
        self._changed("add_tax")
        return line

    def update_tax(self, section_id: Optional[str], tax_id: str, data):
        lines = self._tax_lines(section_id)
        if lines is None:
            return
        changes = {k: v for k, v in _as_dict(data).items() if k in ("label", "type", "value")}
        self._set_tax_lines(section_id, [t.replace(**changes) if t.id == tax_id else t for t in lines])
        self._changed("update_tax")

    def remove_tax(self, section_id: Optional[str], tax_id: str):
        lines = self._tax_lines(section_id)
        if lines is None:
            return
        self._set_tax_lines(section_id, [t for t in lines if t.id != tax_id])
        self._changed("remove_tax")

    # --- Other settings ---------------------------------------------------
    def set_title(self, title: str):
        self.title = title
        self._changed("set_title")

    def set_currency(self, currency: str):
        self.currency = currency
        self._changed("set_currency")

    def reset(self):
        self.title = ""
        self.currency = DEFAULT_CURRENCY
        self.people, self.items, self.sections = [], [], []
        self.tax_amount = 0.0
        self.taxes = []
        self._changed("reset")

    # --- Read views -------------------------------------------------------
    def _find_item(self, item_id: str) -> Optional[Item]:
        return next((item for item in self.items if item.id == item_id), None)

    def get_snapshot(self):
        '''Returns (people, items, sections) as they are right now.'''
        return list(self.people), list(self.items), list(self.sections)

    def get_person_totals(self) -> List[PersonTotal]:
        people, items, sections = self.get_snapshot()
        return compute_settlement(people, items, sections, self.tax_amount, self.taxes)

    def get_subtotal(self) -> float:
        return get_subtotal(self.items)

    def get_grand_total(self) -> float:
        return get_grand_total(self.get_person_totals())

    def get_sections_summary(self):
        people, items, sections = self.get_snapshot()
        return get_sections_summary(people, items, sections, self.tax_amount, self.taxes)

    def is_item_assigned(self, item_id: str) -> bool:
        item = self._find_item(item_id)
        return item.is_assigned if item else False

    def are_all_items_assigned(self) -> bool:
        return all(item.is_assigned for item in self.items)

    def get_unassigned_items(self) -> List[Item]:
        return get_unassigned_items(self.items)

    def get_item_split_details(self, item_id: str):
        item = self._find_item(item_id)
        if item is None:
            return None
        return {"split_type": item.split_type, "allocations": list(item.consumed_by)}

    def __str__(self) -> str:
        return (f"Bill '{self.title}' - {len(self.people)} people, {len(self.items)} items, "
                f"{len(self.sections)} sections")

    __repr__ = __str__

    # --- Serialization ----------------------------------------------------
    @staticmethod
    def from_dict(data):
        '''
        Builds a bill from a snapshot dictionary, normalizing every entity.
        '''
        d = dict(data) if isinstance(data, dict) else {}
        bill = Bill(title=str(d.get("title") or ""), currency=d.get("currency") or DEFAULT_CURRENCY)
        bill.people = [Person.from_dict(p) for p in d.get("people") or []]
        bill.items = [Item.from_dict(i) for i in d.get("items") or []]
        bill.sections = [Section.from_dict(s) for s in d.get("sections") or []]
        bill.tax_amount = to_number(d.get("tax_amount", d.get("taxAmount")))
        bill.taxes = [TaxLine.from_dict(t) for t in d.get("taxes") or []]
        return bill

    def to_dict(self):
        return {
            "version": self.version,
            "title": self.title,
            "currency": self.currency,
            "people": [p.to_dict() for p in self.people],
            "items": [i.to_dict() for i in self.items],
            "sections": [s.to_dict() for s in self.sections],
            "tax_amount": self.tax_amount,
            "taxes": [t.to_dict() for t in self.taxes],
        }
