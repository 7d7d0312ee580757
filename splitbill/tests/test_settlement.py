import unittest
from splitbill.domain.Item import Item, Allocation
from splitbill.domain.Person import Person
from splitbill.domain.Section import Section, TaxLine
from splitbill.logic.settlement.aggregator import compute_settlement
from splitbill.logic.settlement.discount import get_item_total


class TestComputeSettlement(unittest.TestCase):

    def setUp(self):
        self.victor = Person("v", "Victor")
        self.wendy = Person("w", "Wendy")
        self.items = [
            Item(id="A", name="Starter", price=30, quantity=1,
                 consumed_by=[Allocation("v"), Allocation("w")]),
            Item(id="B", name="Main", price=50, quantity=2, consumed_by=[Allocation("w")]),
        ]

    def _by_name(self, totals):
        return {t.name: t for t in totals}

    def test_multi_item_with_global_tax(self):
        totals = self._by_name(compute_settlement([self.victor, self.wendy], self.items, [], 13))
        self.assertAlmostEqual(totals["Victor"].subtotal, 15)
        self.assertAlmostEqual(totals["Wendy"].subtotal, 115)
        self.assertAlmostEqual(totals["Victor"].tax, 1.5)
        self.assertAlmostEqual(totals["Wendy"].tax, 11.5)
        self.assertAlmostEqual(totals["Victor"].total, 16.5)
        self.assertAlmostEqual(totals["Wendy"].total, 126.5)
        self.assertAlmostEqual(sum(t.total for t in totals.values()), 143)

    def test_people_without_items_still_appear(self):
        idle = Person("i", "Ivy")
        totals = compute_settlement([self.victor, idle], [], [], 10)
        self.assertEqual([t.name for t in totals], ["Victor", "Ivy"])
        for t in totals:
            self.assertEqual((t.subtotal, t.tax, t.total), (0, 0, 0))

    def test_total_is_subtotal_plus_tax(self):
        totals = compute_settlement([self.victor, self.wendy], self.items, [], 7.77)
        for t in totals:
            self.assertEqual(t.total, t.subtotal + t.tax)

    def test_unassigned_item_contributes_nothing(self):
        items = self.items + [Item(id="C", name="Dessert", price=99)]
        with_extra = compute_settlement([self.victor, self.wendy], items, [], 13)
        without = compute_settlement([self.victor, self.wendy], self.items, [], 13)
        for a, b in zip(with_extra, without):
            self.assertEqual((a.subtotal, a.tax, a.total), (b.subtotal, b.tax, b.total))

    def test_discount_assigned_alone(self):
        item = Item(name="Steak", price=100, discount=10, discount_type="percentage",
                    consumed_by=[Allocation("v")])
        totals = compute_settlement([self.victor], [item])
        self.assertAlmostEqual(totals[0].subtotal, 90)

    def test_line_items_record_breakdown(self):
        totals = self._by_name(compute_settlement([self.victor, self.wendy], self.items))
        wendy_lines = {li.item_id: li for li in totals["Wendy"].line_items}
        self.assertEqual(set(wendy_lines), {"A", "B"})
        self.assertEqual(wendy_lines["A"].co_assignee_count, 2)
        self.assertEqual(wendy_lines["B"].quantity, 2)
        self.assertEqual(wendy_lines["B"].unit_price_after_discount, 50)
        self.assertEqual(wendy_lines["B"].share, 100)
        self.assertIsNone(wendy_lines["B"].section_id)

    def test_section_taxes_only_hit_section_consumers(self):
        bar = Section(id="bar", name="Bar", tax_amount=6)
        items = self.items + [Item(id="D", name="Cocktail", price=12, section_id="bar",
                                   consumed_by=[Allocation("v")])]
        totals = self._by_name(compute_settlement([self.victor, self.wendy], items, [bar], 13))
        self.assertAlmostEqual(totals["Victor"].tax, 1.5 + 6)
        self.assertAlmostEqual(totals["Wendy"].tax, 11.5)

    def test_section_tax_without_consumers_is_dropped(self):
        bar = Section(id="bar", name="Bar", tax_amount=6)
        items = self.items + [Item(id="D", name="Cocktail", price=12, section_id="bar")]
        totals = compute_settlement([self.victor, self.wendy], items, [bar], 13)
        self.assertAlmostEqual(sum(t.tax for t in totals), 13)

    def test_item_in_missing_section_is_taxed_as_default(self):
        item = Item(name="Orphan", price=10, section_id="gone", consumed_by=[Allocation("v")])
        totals = compute_settlement([self.victor], [item], [], 2)
        self.assertAlmostEqual(totals[0].tax, 2)

    def test_percentage_tax_line(self):
        bar = Section(id="bar", name="Bar", taxes=[TaxLine(label="Service", type="percentage", value=10)])
        item = Item(name="Wine", price=40, section_id="bar", split_type="fraction",
                    consumed_by=[Allocation("v", 3), Allocation("w", 1)])
        totals = self._by_name(compute_settlement([self.victor, self.wendy], [item], [bar]))
        self.assertAlmostEqual(totals["Victor"].tax, 3)
        self.assertAlmostEqual(totals["Wendy"].tax, 1)

    def test_unknown_person_is_skipped(self):
        item = Item(name="Ghost meal", price=20, consumed_by=[Allocation("v"), Allocation("ghost")])
        totals = compute_settlement([self.victor], [item])
        self.assertAlmostEqual(totals[0].subtotal, 10)

    def test_inputs_are_not_mutated(self):
        before = [i.to_dict() for i in self.items]
        compute_settlement([self.victor, self.wendy], self.items, [], 13)
        self.assertEqual([i.to_dict() for i in self.items], before)


def test_conservation_across_mixed_bill():
    people = [Person(str(n), f"P{n}") for n in range(4)]
    sections = [Section(id="s1", name="Drinks", tax_amount=3.3),
                Section(id="s2", name="Empty", tax_amount=9)]
    items = [
        Item(name="a", price=10, quantity=1, consumed_by=[Allocation("0"), Allocation("1"), Allocation("2")]),
        Item(name="b", price=7.35, quantity=3, split_type="percentage", section_id="s1",
             consumed_by=[Allocation("1", 33.3), Allocation("2", 66.7)]),
        Item(name="c", price=19.99, discount=15, discount_type="percentage", split_type="fraction",
             consumed_by=[Allocation("0", 1), Allocation("3", 4)]),
        Item(name="d", price=4.2, section_id="s2"),
    ]
    totals = compute_settlement(people, items, sections, 5.5)

    consumed = sum(get_item_total(i) for i in items if i.consumed_by)
    assert abs(sum(t.subtotal for t in totals) - consumed) < 1e-9
    # s2 has no consumed subtotal, so only the default and s1 taxes are due
    assert abs(sum(t.tax for t in totals) - (5.5 + 3.3)) < 1e-9
    assert all(t.total == t.subtotal + t.tax for t in totals)
