"""
Input validation schemas using Pydantic for the bill data model boundary.
"""
from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator
from typing import List, Optional

from splitbill.logic.settlement.validation import validate_allocations
from splitbill.utilities.constants import SPLIT_EQUAL, SPLIT_PERCENTAGE, DISCOUNT_FLAT, TAX_FLAT


class PersonInput(BaseModel):
    """Schema for person input validation."""
    name: str = Field(..., min_length=1, max_length=100)

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        """Remove leading/trailing whitespace and reject blank names."""
        v = v.strip()
        if not v:
            raise ValueError('Name cannot be empty')
        return v


class AllocationInput(BaseModel):
    """Schema for one allocation; a bare person id is read as {person_id, value: 1}."""
    model_config = ConfigDict(populate_by_name=True)

    person_id: str = Field(..., min_length=1, alias='personId')
    value: float = 1.0

    @model_validator(mode='before')
    @classmethod
    def accept_bare_person_id(cls, data):
        if isinstance(data, str):
            return {'person_id': data, 'value': 1}
        return data


class ItemInput(BaseModel):
    """Schema for item input validation."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=200)
    price: float = Field(..., ge=0)
    quantity: int = Field(1, ge=1)
    discount: float = Field(0, ge=0)
    discount_type: str = Field(DISCOUNT_FLAT, pattern=r'^(flat|percentage)$', alias='discountType')
    section_id: Optional[str] = Field(None, alias='sectionId')

    @field_validator('name')
    @classmethod
    def strip_whitespace(cls, v):
        return v.strip()

    @model_validator(mode='after')
    def percentage_discount_in_range(self):
        if self.discount_type == 'percentage' and self.discount > 100:
            raise ValueError('Percentage discount cannot exceed 100')
        return self


class SectionInput(BaseModel):
    """Schema for section input validation."""
    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(..., min_length=1, max_length=100)
    tax_amount: float = Field(0, ge=0, alias='taxAmount')


class TaxLineInput(BaseModel):
    """Schema for a labelled tax line."""
    label: str = Field('', max_length=100)
    type: str = Field(TAX_FLAT, pattern=r'^(flat|percentage)$')
    value: float = Field(0, ge=0)


class SplitAssignmentInput(BaseModel):
    """Schema for committing a custom split on an item."""
    model_config = ConfigDict(populate_by_name=True)

    item_id: str = Field(..., min_length=1, alias='itemId')
    split_type: str = Field(SPLIT_EQUAL, pattern=r'^(equal|percentage|fraction)$', alias='splitType')
    allocations: List[AllocationInput]

    @model_validator(mode='after')
    def allocations_form_valid_split(self):
        raw = [a.model_dump() for a in self.allocations]
        if not validate_allocations(raw, self.split_type):
            if self.split_type == SPLIT_PERCENTAGE:
                raise ValueError('Percentages must total 100%')
            raise ValueError('Every allocation value must be greater than zero')
        return self
