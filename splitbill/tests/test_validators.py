import pytest
from pydantic import ValidationError
from splitbill.utilities.validators import (
    PersonInput, AllocationInput, ItemInput, SectionInput, TaxLineInput, SplitAssignmentInput
)


def test_person_name_is_stripped_and_required():
    assert PersonInput(name="  Ana ").name == "Ana"
    with pytest.raises(ValidationError):
        PersonInput(name="   ")


def test_allocation_accepts_bare_id_and_camel_case():
    assert AllocationInput.model_validate("p1").model_dump() == {"person_id": "p1", "value": 1.0}
    assert AllocationInput.model_validate({"personId": "p2", "value": 40}).person_id == "p2"


def test_item_defaults_and_bounds():
    item = ItemInput(name=" Fries ", price=4.5)
    assert (item.name, item.quantity, item.discount, item.discount_type) == ("Fries", 1, 0, "flat")
    with pytest.raises(ValidationError):
        ItemInput(name="Fries", price=-1)
    with pytest.raises(ValidationError):
        ItemInput(name="Fries", price=4, quantity=0)
    with pytest.raises(ValidationError):
        ItemInput(name="Fries", price=4, discount=150, discountType="percentage")


def test_section_and_tax_line():
    assert SectionInput(name="Bar", taxAmount=3).tax_amount == 3
    with pytest.raises(ValidationError):
        TaxLineInput(type="compound", value=1)


def test_split_assignment_requires_valid_split():
    ok = SplitAssignmentInput(itemId="i1", splitType="percentage",
                              allocations=[{"personId": "a", "value": 70}, {"personId": "b", "value": 30}])
    assert len(ok.allocations) == 2
    with pytest.raises(ValidationError, match="Percentages must total 100%"):
        SplitAssignmentInput(itemId="i1", splitType="percentage",
                             allocations=[{"personId": "a", "value": 70}, {"personId": "b", "value": 20}])
    with pytest.raises(ValidationError):
        SplitAssignmentInput(itemId="i1", splitType="fraction", allocations=[{"personId": "a", "value": 0}])
    with pytest.raises(ValidationError):
        SplitAssignmentInput(itemId="i1", splitType="equal", allocations=[])
