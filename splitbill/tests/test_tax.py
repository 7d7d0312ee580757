import unittest
from splitbill.domain.Section import Section, TaxLine
from splitbill.logic.settlement.tax import apportion_tax, build_section_tax_map, resolve_tax_amount


class TestApportionTax(unittest.TestCase):

    def test_proportional_to_section_subtotal(self):
        taxes = apportion_tax({"v": {None: 15}, "w": {None: 115}}, {None: 13})
        self.assertAlmostEqual(taxes["v"], 1.5)
        self.assertAlmostEqual(taxes["w"], 11.5)

    def test_sections_apportion_independently(self):
        subtotals = {
            "a": {None: 10, "bar": 30},
            "b": {None: 30},
        }
        taxes = apportion_tax(subtotals, {None: 8, "bar": 6})
        self.assertAlmostEqual(taxes["a"], 2 + 6)
        self.assertAlmostEqual(taxes["b"], 6)

    def test_section_without_subtotal_drops_its_tax(self):
        taxes = apportion_tax({"a": {None: 20}}, {None: 2, "kitchen": 50})
        self.assertAlmostEqual(taxes["a"], 2)
        self.assertAlmostEqual(sum(taxes.values()), 2)

    def test_person_without_section_subtotal_pays_nothing_there(self):
        taxes = apportion_tax({"a": {"bar": 10}, "b": {None: 10}}, {"bar": 4})
        self.assertEqual(taxes["b"], 0)
        self.assertAlmostEqual(taxes["a"], 4)

    def test_zero_or_negative_tax_is_skipped(self):
        taxes = apportion_tax({"a": {None: 10}}, {None: 0, "x": -3})
        self.assertEqual(taxes, {"a": 0})


class TestSectionTaxMap(unittest.TestCase):

    def test_resolve_tax_amount_mixes_flat_and_percentage(self):
        lines = [TaxLine(label="Service", type="percentage", value=10), TaxLine(label="Cover", value=2)]
        self.assertAlmostEqual(resolve_tax_amount(3, lines, 50), 3 + 5 + 2)

    def test_map_has_default_and_every_section(self):
        bar = Section(id="bar", name="Bar", tax_amount=4,
                      taxes=[TaxLine(type="percentage", value=50)])
        kitchen = Section(id="kitchen", name="Kitchen")
        tax_map = build_section_tax_map([bar, kitchen], {None: 100, "bar": 10}, default_tax_amount=7)
        self.assertEqual(set(tax_map), {None, "bar", "kitchen"})
        self.assertAlmostEqual(tax_map[None], 7)
        self.assertAlmostEqual(tax_map["bar"], 9)
        self.assertAlmostEqual(tax_map["kitchen"], 0)

    def test_default_tax_lines(self):
        tax_map = build_section_tax_map([], {None: 200}, 1, [TaxLine(type="percentage", value=5)])
        self.assertAlmostEqual(tax_map[None], 11)
