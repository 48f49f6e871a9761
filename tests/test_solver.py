import unittest

import numpy as np

from simpbalancer.equation import parse_equation
from simpbalancer.solver import (
    anchor_first_reactant,
    build_matrix,
    describe_matrix,
    null_space_dimension,
    solve,
)


def _matrix(text):
    equation = parse_equation(text)
    return build_matrix(equation.reactants, equation.products)


class TestConservationMatrix(unittest.TestCase):
    def test_build(self):
        matrix = _matrix("H2 + O2 -> H2O")
        self.assertEqual(matrix.symbols, ("H", "O"))
        self.assertEqual(matrix.reactant_count, 2)
        self.assertEqual(matrix.compound_count, 3)
        np.testing.assert_array_equal(
            matrix.values, np.array([[2.0, 0.0, -2.0, 0.0], [0.0, 2.0, -1.0, 0.0]])
        )

    def test_anchor_moves_first_column(self):
        matrix = _matrix("H2 + O2 -> H2O")
        anchored = anchor_first_reactant(matrix)
        np.testing.assert_array_equal(anchored.constants, [-2.0, -0.0])
        np.testing.assert_array_equal(anchored.coefficients[:, 0], [0.0, 0.0])
        # original untouched
        self.assertEqual(matrix.values[0, 0], 2.0)

    def test_describe(self):
        lines = describe_matrix(_matrix("H2 + O2 -> H2O")).splitlines()
        self.assertEqual(lines, ["H: 2x1 - 2x3 = 0", "O: 2x2 - x3 = 0"])


class TestSolve(unittest.TestCase):
    def test_water(self):
        np.testing.assert_allclose(solve(_matrix("H2 + O2 -> H2O")), [0.5, 1.0])

    def test_rust(self):
        np.testing.assert_allclose(solve(_matrix("Fe + O2 -> Fe2O3")), [0.75, 0.5])

    def test_propane(self):
        np.testing.assert_allclose(
            solve(_matrix("C3H8 + O2 -> CO2 + H2O")), [5.0, 3.0, 4.0]
        )

    def test_degenerate_returns_zeros(self):
        solution = solve(_matrix("H2 -> O2"))
        np.testing.assert_allclose(solution, [0.0])

    def test_null_space_dimension(self):
        self.assertEqual(null_space_dimension(_matrix("H2 + O2 -> H2O")), 1)
        self.assertEqual(null_space_dimension(_matrix("H2 -> O2")), 0)
        self.assertEqual(null_space_dimension(_matrix("H2 + O2 -> H2O + H2O2")), 2)


if __name__ == '__main__':
    unittest.main()
