import unittest

from simpbalancer.equation import (
    EquationParser,
    normalize_equation,
    parse_equation,
    split_compounds,
)
from simpbalancer.errors import InvalidEquationFormatError, MalformedFormulaError
from simpbalancer.models import Phase


class TestEquationParser(unittest.TestCase):
    def test_sides(self):
        equation = parse_equation("H2 + O2 → H2O")
        self.assertEqual([c.counts() for c in equation.reactants], [{"H": 2}, {"O": 2}])
        self.assertEqual([c.counts() for c in equation.products], [{"H": 2, "O": 1}])
        self.assertEqual(len(equation.compounds), 3)

    def test_arrow_variants(self):
        for arrow in ("->", "-->", "=>", "=", "⟶", "⇌", "<=>", "<->"):
            equation = parse_equation(f"H2 + O2 {arrow} H2O")
            self.assertEqual(len(equation.reactants), 2)
            self.assertEqual(len(equation.products), 1)

    def test_normalize_collapses_whitespace(self):
        self.assertEqual(normalize_equation("H2  +\tO2   ->  H2O"), "H2 + O2 → H2O")

    def test_missing_arrow(self):
        with self.assertRaises(InvalidEquationFormatError) as ctx:
            parse_equation("H2 + O2")
        self.assertIn("No reaction arrow", str(ctx.exception))

    def test_multiple_arrows(self):
        with self.assertRaises(InvalidEquationFormatError):
            parse_equation("H2 -> H -> H2")

    def test_empty_side(self):
        with self.assertRaises(InvalidEquationFormatError):
            parse_equation("-> H2O")

    def test_leading_coefficients(self):
        equation = parse_equation("2H2 + O2 -> 2 H2O")
        self.assertEqual([c.coefficient for c in equation.compounds], [2, 1, 2])
        self.assertEqual(equation.products[0].counts(), {"H": 2, "O": 1})

    def test_coefficient_before_group(self):
        equation = parse_equation("3(NH4)2SO4 -> NH3")
        self.assertEqual(equation.reactants[0].coefficient, 3)
        self.assertEqual(equation.reactants[0].counts(), {"N": 2, "H": 8, "S": 1, "O": 4})

    def test_zero_coefficient(self):
        with self.assertRaises(MalformedFormulaError):
            parse_equation("0H2 + O2 -> H2O")

    def test_charged_species_split(self):
        self.assertEqual(split_compounds("Fe^3+ + 3Cl^-"), ["Fe^3+", "3Cl^-"])
        self.assertEqual(split_compounds("Na^+ + Cl^-"), ["Na^+", "Cl^-"])
        self.assertEqual(split_compounds("Zn(s) + Cu^2+(aq)"), ["Zn(s)", "Cu^2+(aq)"])

    def test_phase_and_charge_on_compound(self):
        equation = parse_equation("Zn(s) + Cu^2+(aq) -> Zn^2+(aq) + Cu(s)")
        self.assertEqual(equation.reactants[0].phase, Phase.SOLID)
        self.assertEqual(equation.reactants[1].charge, 2)
        self.assertEqual(equation.products[0].phase, Phase.AQUEOUS)

    def test_malformed_compound_propagates(self):
        with self.assertRaises(MalformedFormulaError):
            parse_equation("Ca(OH2 → CaO + H2O")

    def test_strict_parser(self):
        with self.assertRaises(MalformedFormulaError):
            EquationParser(strict=True).parse("H2$ + O2 -> H2O")


if __name__ == '__main__':
    unittest.main()
