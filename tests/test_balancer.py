import math
import unittest
from functools import reduce

from simpbalancer.balancer import (
    BalancerConfiguration,
    EquationBalancer,
    balance_chemical_equation,
    format_compound,
)
from simpbalancer.equation import parse_equation
from simpbalancer.errors import (
    InvalidEquationFormatError,
    MalformedFormulaError,
    UnbalanceableEquationWarning,
)
from simpbalancer.tally import tally_elements


class TestEquationBalancer(unittest.TestCase):
    def setUp(self):
        self.balancer = EquationBalancer()

    def test_water(self):
        result = self.balancer.balance("H2 + O2 → H2O")
        self.assertTrue(result.balanced)
        self.assertIsNone(result.error)
        self.assertEqual(result.balanced_equation, "2H2 + O2 → 2H2O")
        self.assertEqual(result.tallies["reactants"], {"H": 4, "O": 2})
        self.assertEqual(result.tallies["products"], {"H": 4, "O": 2})

    def test_rust(self):
        result = self.balancer.balance("Fe + O2 → Fe2O3")
        self.assertEqual(result.result, "4Fe + 3O2 → 2Fe2O3")
        self.assertEqual(result.tallies["reactants"], {"Fe": 4, "O": 6})
        self.assertEqual(result.tallies["products"], {"Fe": 4, "O": 6})

    def test_known_coefficients(self):
        cases = {
            "C3H8 + O2 -> CO2 + H2O": (1, 5, 3, 4),
            "C8H18 + O2 -> CO2 + H2O": (2, 25, 16, 18),
            "C6H12O6 + O2 -> CO2 + H2O": (1, 6, 6, 6),
            "Al2(SO4)3 + Ca(OH)2 -> Al(OH)3 + CaSO4": (1, 3, 2, 3),
            "KMnO4 + HCl -> KCl + MnCl2 + H2O + Cl2": (2, 16, 2, 2, 8, 5),
            "Cu + HNO3 -> Cu(NO3)2 + NO + H2O": (3, 8, 3, 2, 4),
        }
        for equation, expected in cases.items():
            with self.subTest(equation=equation):
                result = self.balancer.balance(equation)
                self.assertTrue(result.balanced)
                self.assertEqual(result.coefficients, expected)

    def test_already_balanced_input(self):
        result = self.balancer.balance("4H2 + 2O2 -> 4H2O")
        self.assertEqual(result.coefficients, (2, 1, 2))
        self.assertEqual(reduce(math.gcd, result.coefficients), 1)

    def test_balanced_string_reparses(self):
        result = self.balancer.balance("Fe + O2 -> Fe2O3")
        reparsed = parse_equation(result.result)
        self.assertEqual(
            tuple(c.coefficient for c in reparsed.compounds), result.coefficients
        )
        self.assertEqual(tally_elements(reparsed.reactants), tally_elements(reparsed.products))

    def test_phase_and_charge_preserved(self):
        result = self.balancer.balance("Fe^3+(aq) + OH^-(aq) -> Fe(OH)3(s)")
        self.assertTrue(result.balanced)
        self.assertEqual(result.coefficients, (1, 3, 1))
        self.assertEqual(result.result, "Fe(aq)^3+ + 3OH(aq)^- → FeO3H3(s)")
        self.assertEqual(format_compound(result.reactants[1]), "3OH(aq)^-")

    def test_steps(self):
        result = self.balancer.balance("H2 + O2 -> H2O")
        descriptions = [step.description for step in result.steps]
        self.assertEqual(descriptions[0], "Parse the chemical equation:")
        self.assertEqual(descriptions[-1], "Balanced equation:")
        self.assertIn("Convert to integer coefficients:", descriptions)
        self.assertIn("Balanced ✓", result.steps[-2].expression)

    def test_unbalanceable_is_flagged_not_raised(self):
        with self.assertWarns(UnbalanceableEquationWarning):
            result = self.balancer.balance("H2 -> O2")
        self.assertFalse(result.balanced)
        self.assertIn("Could not fully balance", result.error)
        self.assertIn("Not balanced ✗", result.steps[-2].expression)
        self.assertTrue(result.result.startswith("H2 →"))

    def test_zero_coefficient_left_out_of_text(self):
        with self.assertWarns(UnbalanceableEquationWarning):
            result = self.balancer.balance("H2 + O2 -> H2O + NaCl")
        self.assertFalse(result.balanced)
        self.assertEqual(result.coefficients, (2, 1, 2, 0))
        self.assertEqual(result.result, "2H2 + O2 → 2H2O + NaCl")
        self.assertEqual(len(parse_equation(result.result).products), 2)

    def test_ambiguous_equation_is_flagged(self):
        with self.assertWarns(UnbalanceableEquationWarning):
            result = self.balancer.balance("H2 + O2 -> H2O + H2O2")
        self.assertFalse(result.balanced)
        self.assertIn("2 independent reactions", result.error)

    def test_malformed_formula_raises(self):
        with self.assertRaises(MalformedFormulaError) as ctx:
            self.balancer.balance("Ca(OH2 → CaO + H2O")
        self.assertIn("Unmatched '('", str(ctx.exception))

    def test_missing_arrow_raises(self):
        with self.assertRaises(InvalidEquationFormatError):
            self.balancer.balance("H2 + O2")

    def test_strict_configuration(self):
        self.assertTrue(self.balancer.balance("H2$ + O2 -> H2O").balanced)
        strict = EquationBalancer(BalancerConfiguration(strict=True))
        with self.assertRaises(MalformedFormulaError):
            strict.balance("H2$ + O2 -> H2O")


class TestBalanceChemicalEquation(unittest.TestCase):
    def test_success(self):
        result = balance_chemical_equation("H2 + O2 -> H2O")
        self.assertEqual(result.result, "2H2 + O2 → 2H2O")
        self.assertEqual(result.to_dict()["coefficients"], [2, 1, 2])

    def test_error_has_uniform_shape(self):
        result = balance_chemical_equation("H2 + O2")
        self.assertEqual(result.result, "Error")
        self.assertFalse(result.balanced)
        self.assertEqual(len(result.steps), 1)
        self.assertEqual(result.steps[0].description, "Error")
        self.assertEqual(result.steps[0].expression, result.error)
        self.assertEqual(result.equation, "H2 + O2")


if __name__ == '__main__':
    unittest.main()
