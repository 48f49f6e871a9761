import unittest

from simpbalancer.equation import parse_equation
from simpbalancer.tally import format_tally, tally_elements, tally_mismatches


class TestTally(unittest.TestCase):
    def test_weighted_by_coefficient(self):
        equation = parse_equation("2H2 + O2 -> 2H2O")
        self.assertEqual(tally_elements(equation.reactants), {"H": 4, "O": 2})
        self.assertEqual(tally_elements(equation.products), {"H": 4, "O": 2})

    def test_empty(self):
        self.assertEqual(tally_elements([]), {})

    def test_mismatches_cover_both_sides(self):
        mismatches = tally_mismatches({"H": 2}, {"H": 2, "O": 1})
        self.assertEqual(mismatches, {"O": (0, 1)})
        self.assertEqual(tally_mismatches({"H": 4}, {"H": 2}), {"H": (4, 2)})

    def test_format(self):
        self.assertEqual(format_tally({"H": 4, "O": 2}), "H: 4, O: 2")


if __name__ == '__main__':
    unittest.main()
