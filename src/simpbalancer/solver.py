"""Conservation matrix construction and Gauss-Jordan solver.

Balancing ``a A + b B -> c C`` means finding coefficients so that every
element is conserved. Each element contributes one linear equation:

    sum_j n_ij * x_j = 0

where ``n_ij`` is the number of atoms of element ``i`` in compound ``j``,
positive for reactants and negative for products. The system is homogeneous,
so the first reactant's coefficient is fixed to 1 and moved to the right-hand
side before elimination:

    sum_{j>0} n_ij * x_j = -n_i0

The remaining unknowns are found with partial-pivot Gauss-Jordan elimination
over floats; :mod:`simpbalancer.reconcile` turns them into integers.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Sequence

import numpy as np
from scipy.linalg import null_space

from simpbalancer.constants import PIVOT_EPSILON
from simpbalancer.models import Compound

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class ConservationMatrix:
    """Element conservation system for one equation.

    Attributes:
        symbols: Row labels, in first-seen order over reactants then products.
        values: Array of shape ``(len(symbols), compounds + 1)``. The last
            column holds the constant terms, zero until anchored.
        reactant_count: Number of leading columns that belong to reactants.
    """

    symbols: tuple[str, ...]
    values: np.ndarray
    reactant_count: int

    @property
    def compound_count(self) -> int:
        return self.values.shape[1] - 1

    @property
    def coefficients(self) -> np.ndarray:
        return self.values[:, :-1]

    @property
    def constants(self) -> np.ndarray:
        return self.values[:, -1]


def build_matrix(
    reactants: Sequence[Compound], products: Sequence[Compound]
) -> ConservationMatrix:
    compounds = list(reactants) + list(products)
    symbols: list[str] = []
    for compound in compounds:
        for element in compound.elements:
            if element.symbol not in symbols:
                symbols.append(element.symbol)

    values = np.zeros((len(symbols), len(compounds) + 1))
    for column, compound in enumerate(compounds):
        sign = 1.0 if column < len(reactants) else -1.0
        for element in compound.elements:
            values[symbols.index(element.symbol), column] += sign * element.count

    return ConservationMatrix(
        symbols=tuple(symbols), values=values, reactant_count=len(reactants)
    )


def anchor_first_reactant(matrix: ConservationMatrix) -> ConservationMatrix:
    """Fix the first compound's coefficient to 1.

    Its column moves (negated) into the constant column and is zeroed, which
    turns the homogeneous system into an inhomogeneous one.
    """
    values = matrix.values.copy()
    values[:, -1] = -values[:, 0]
    values[:, 0] = 0.0
    return ConservationMatrix(
        symbols=matrix.symbols, values=values, reactant_count=matrix.reactant_count
    )


def solve(matrix: ConservationMatrix, pivot_epsilon: float = PIVOT_EPSILON) -> np.ndarray:
    """Solve for every coefficient except the anchored first one.

    Args:
        matrix: Conservation matrix from :func:`build_matrix` (not anchored).
        pivot_epsilon: Pivots with a smaller magnitude are treated as zero and
            their column is left unpivoted.

    Returns:
        Array of length ``compound_count - 1`` with the raw coefficients of
        compounds ``1..n-1``. Unpivoted (free) unknowns are 0, so a degenerate
        system yields a zero or partially-zero vector instead of raising.
    """
    augmented = anchor_first_reactant(matrix).values
    rows = augmented.shape[0]
    unknowns = matrix.compound_count
    pivots: list[tuple[int, int]] = []

    row = 0
    for column in range(1, unknowns):
        if row >= rows:
            break
        pivot_row = row + int(np.argmax(np.abs(augmented[row:, column])))
        if abs(augmented[pivot_row, column]) < pivot_epsilon:
            continue
        if pivot_row != row:
            augmented[[row, pivot_row]] = augmented[[pivot_row, row]]

        augmented[row] /= augmented[row, column]
        for other in range(rows):
            if other != row:
                augmented[other] -= augmented[other, column] * augmented[row]
        pivots.append((row, column))
        row += 1

    solution = np.zeros(unknowns - 1)
    for pivot_row, column in pivots:
        if abs(augmented[pivot_row, column]) > pivot_epsilon:
            solution[column - 1] = augmented[pivot_row, -1]

    logger.debug("Eliminated matrix:\n%s", augmented)
    return solution


def null_space_dimension(matrix: ConservationMatrix) -> int:
    """Dimension of the solution space of the homogeneous system.

    1 for a uniquely balanceable equation, 0 when no non-trivial balance
    exists, and more than 1 when several independent reactions are mixed.
    """
    if matrix.coefficients.size == 0:
        return 0
    return int(null_space(matrix.coefficients).shape[1])


def describe_matrix(matrix: ConservationMatrix) -> str:
    """Render each row as an equation in the unknowns ``x1..xn``."""
    lines = []
    for symbol, row in zip(matrix.symbols, matrix.values, strict=True):
        terms = []
        for index, value in enumerate(row[:-1]):
            if abs(value) < PIVOT_EPSILON:
                continue
            magnitude = _format_number(abs(value))
            term = f"{'' if magnitude == '1' else magnitude}x{index + 1}"
            if not terms:
                terms.append(term if value > 0 else f"-{term}")
            else:
                terms.append(f"{'+' if value > 0 else '-'} {term}")
        lhs = " ".join(terms) if terms else "0"
        lines.append(f"{symbol}: {lhs} = {_format_number(row[-1])}")
    return "\n".join(lines)


def _format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.6g}"
