"""Section domain entity: a named group of items carrying its own taxes.

A section whose id is None is the implicit default (global) section.
"""
from typing import List, Optional
from uuid import uuid4

from splitbill.utilities.coerce import to_number
from splitbill.utilities.constants import TAX_FLAT, TAX_TYPES, DEFAULT_SECTION_ID, DEFAULT_SECTION_NAME


class TaxLine:
    """One labelled tax, either a flat amount or a percentage of its section subtotal."""

    def __init__(self, id: str = "", label: str = "", type: str = TAX_FLAT, value: float = 0.0):
        self.id = id or uuid4().hex
        self.label = label
        self.type = type if type in TAX_TYPES else TAX_FLAT
        self.value = to_number(value)

    def __str__(self) -> str:
        suffix = "%" if self.type != TAX_FLAT else ""
        return f"{self.label or 'Tax'}: {self.value}{suffix}"

    __repr__ = __str__

    def replace(self, **changes) -> "TaxLine":
        data = self.to_dict()
        data.update(changes)
        return TaxLine.from_dict(data)

    @staticmethod
    def from_dict(data):
        d = dict(data) if isinstance(data, dict) else {}
        return TaxLine(
            id=str(d.get("id") or ""),
            label=str(d.get("label") or ""),
            type=d.get("type") or TAX_FLAT,
            value=d.get("value", 0),
        )

    def to_dict(self):
        return {"id": self.id, "label": self.label, "type": self.type, "value": self.value}


class Section:
    def __init__(self, id: Optional[str] = DEFAULT_SECTION_ID, name: str = DEFAULT_SECTION_NAME,
                 tax_amount: float = 0.0, taxes: Optional[List[TaxLine]] = None):
        self.id = id
        self.name = name
        self.tax_amount = to_number(tax_amount)
        self.taxes = taxes[:] if taxes else []

    @property
    def is_default(self) -> bool:
        return self.id is DEFAULT_SECTION_ID

    def __str__(self) -> str:
        return f"{self.name} - tax {self.tax_amount} - {len(self.taxes)} tax line(s)"

    __repr__ = __str__

    def replace(self, **changes) -> "Section":
        '''Returns a copy of this section with the given fields overwritten.'''
        return Section(
            id=changes.get("id", self.id),
            name=changes.get("name", self.name),
            tax_amount=changes.get("tax_amount", self.tax_amount),
            taxes=changes.get("taxes", self.taxes),
        )

    @staticmethod
    def new(name: str, tax_amount: float = 0.0) -> "Section":
        return Section(id=uuid4().hex, name=name, tax_amount=tax_amount)

    @staticmethod
    def from_dict(data):
        '''Creates a Section from a dictionary (snake_case or camelCase keys).'''
        d = dict(data) if isinstance(data, dict) else {}
        section_id = d.get("id")
        return Section(
            id=str(section_id) if section_id not in (None, "") else DEFAULT_SECTION_ID,
            name=str(d.get("name") or ""),
            tax_amount=d.get("tax_amount", d.get("taxAmount", 0)),
            taxes=[TaxLine.from_dict(t) for t in d.get("taxes") or []],
        )

    def to_dict(self):
        return {
            "id": self.id,
            "name": self.name,
            "tax_amount": self.tax_amount,
            "taxes": [t.to_dict() for t in self.taxes],
        }
