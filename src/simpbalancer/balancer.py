"""Equation balancing orchestration.

The pipeline is: parse the equation, build the element conservation matrix,
anchor the first reactant and solve by Gauss-Jordan elimination, reconcile
the real solution into minimal integers, write the coefficients back onto the
compounds, format the result and verify it by recounting atoms.

Verification is the authoritative check. When it fails the formatted
equation is still returned, flagged as unbalanced, and an
:class:`~simpbalancer.errors.UnbalanceableEquationWarning` is issued.
"""

from __future__ import annotations

import logging
import warnings
from dataclasses import dataclass, replace
from typing import Mapping, Sequence

from simpbalancer.constants import (
    CANONICAL_ARROW,
    DENOMINATOR_SEARCH_LIMIT,
    FRACTION_TOLERANCE,
    PIVOT_EPSILON,
)
from simpbalancer.equation import EquationParser
from simpbalancer.errors import ChemBalanceError, UnbalanceableEquationWarning
from simpbalancer.formula import format_charge, format_formula
from simpbalancer.models import BalanceResult, ChemistryStep, Compound
from simpbalancer.reconcile import to_integers
from simpbalancer.solver import (
    anchor_first_reactant,
    build_matrix,
    describe_matrix,
    null_space_dimension,
    solve,
)
from simpbalancer.tally import format_tally, tally_elements, tally_mismatches

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BalancerConfiguration:
    """Tunables for one balancing call.

    Attributes:
        strict: Reject unrecognized characters in formulas instead of skipping them.
        pivot_epsilon: Pivot magnitude below which a column is left unpivoted.
        denominator_limit: Largest denominator tried when recovering fractions.
        fraction_tolerance: Residue below which a scaled value counts as integral.
    """

    strict: bool = False
    pivot_epsilon: float = PIVOT_EPSILON
    denominator_limit: int = DENOMINATOR_SEARCH_LIMIT
    fraction_tolerance: float = FRACTION_TOLERANCE


class EquationBalancer:
    def __init__(self, configuration: BalancerConfiguration | None = None):
        self.configuration = configuration or BalancerConfiguration()
        self.parser = EquationParser(strict=self.configuration.strict)

    def balance(self, equation: str) -> BalanceResult:
        """Balance ``equation``.

        Raises:
            MalformedFormulaError: A compound could not be parsed.
            InvalidEquationFormatError: The equation does not have exactly two sides.
        """
        config = self.configuration
        steps = [ChemistryStep("Parse the chemical equation:", equation)]

        parsed = self.parser.parse(equation)
        steps.append(
            ChemistryStep(
                "Identify compounds in the reaction:",
                f"Reactants: {', '.join(format_formula(c.elements) for c in parsed.reactants)}\n"
                f"Products: {', '.join(format_formula(c.elements) for c in parsed.products)}",
            )
        )

        matrix = build_matrix(parsed.reactants, parsed.products)
        logger.debug("Conservation matrix for %s:\n%s", matrix.symbols, matrix.values)
        steps.append(
            ChemistryStep(
                "Set up system of linear equations:",
                "Each row represents conservation of an element, "
                "each column x1..xn represents a compound coefficient\n"
                + describe_matrix(matrix),
            )
        )

        dimension = null_space_dimension(matrix)
        steps.append(
            ChemistryStep(
                "Fix the first reactant's coefficient to 1 (x1 = 1):",
                describe_matrix(anchor_first_reactant(matrix))
                + f"\nIndependent solutions: {dimension}",
            )
        )

        raw = [1.0, *solve(matrix, pivot_epsilon=config.pivot_epsilon)]
        logger.debug("Raw solution: %s", raw)
        steps.append(
            ChemistryStep(
                "Solve the system of equations using Gaussian elimination:",
                ", ".join(f"x{index + 1} = {value:.6g}" for index, value in enumerate(raw)),
            )
        )

        coefficients = to_integers(
            raw,
            denominator_limit=config.denominator_limit,
            tolerance=config.fraction_tolerance,
        )
        steps.append(
            ChemistryStep(
                "Convert to integer coefficients:",
                f"Coefficients: {', '.join(str(value) for value in coefficients)}",
            )
        )

        split = len(parsed.reactants)
        reactants = assign_coefficients(parsed.reactants, coefficients[:split])
        products = assign_coefficients(parsed.products, coefficients[split:])
        balanced_equation = format_equation(reactants, products)

        left = tally_elements(reactants)
        right = tally_elements(products)
        mismatches = tally_mismatches(left, right)
        balanced = not mismatches and all(value > 0 for value in coefficients)
        steps.append(
            ChemistryStep(
                "Verify balance by counting atoms on each side:",
                f"Reactants: {format_tally(left)}\n"
                f"Products: {format_tally(right)}\n"
                f"Balance status: {'Balanced ✓' if balanced else 'Not balanced ✗'}",
            )
        )
        steps.append(ChemistryStep("Balanced equation:", balanced_equation))

        error = None
        if balanced:
            logger.info("Balanced %r as %r", equation, balanced_equation)
        else:
            error = unbalanced_message(mismatches, coefficients, dimension)
            logger.warning("Could not balance %r: %s", equation, error)
            warnings.warn(error, UnbalanceableEquationWarning, stacklevel=2)

        return BalanceResult(
            equation=equation,
            result=balanced_equation,
            steps=tuple(steps),
            error=error,
            balanced=balanced,
            coefficients=tuple(coefficients),
            reactants=reactants,
            products=products,
            tallies={"reactants": left, "products": right},
        )


def assign_coefficients(
    compounds: Sequence[Compound], coefficients: Sequence[int]
) -> tuple[Compound, ...]:
    return tuple(
        replace(compound, coefficient=coefficient)
        for compound, coefficient in zip(compounds, coefficients, strict=True)
    )


def format_compound(compound: Compound) -> str:
    """Render ``compound`` as equation text, e.g. ``3OH(aq)^-``.

    Only coefficients above 1 are written. A zero or negative coefficient from
    an unbalanceable system is left out so the text stays parseable; the
    actual value is kept on the result's ``coefficients``.
    """
    coefficient = str(compound.coefficient) if compound.coefficient > 1 else ""
    phase = f"({compound.phase.value})" if compound.phase else ""
    return f"{coefficient}{format_formula(compound.elements)}{phase}{format_charge(compound.charge)}"


def format_equation(reactants: Sequence[Compound], products: Sequence[Compound]) -> str:
    return (
        " + ".join(format_compound(c) for c in reactants)
        + f" {CANONICAL_ARROW} "
        + " + ".join(format_compound(c) for c in products)
    )


def unbalanced_message(
    mismatches: Mapping[str, tuple[int, int]],
    coefficients: Sequence[int],
    dimension: int,
) -> str:
    details = []
    if dimension == 0:
        details.append("no combination of coefficients conserves every element")
    elif dimension > 1:
        details.append(
            f"the equation combines {dimension} independent reactions, so the coefficients are not unique"
        )
    if any(value <= 0 for value in coefficients):
        details.append("solver produced non-positive coefficients")
    if mismatches:
        details.append(
            "atom counts differ for "
            + ", ".join(f"{symbol} ({left} vs {right})" for symbol, (left, right) in mismatches.items())
        )
    return "Could not fully balance the equation: " + "; ".join(details) + "."


def balance_chemical_equation(
    equation: str, configuration: BalancerConfiguration | None = None
) -> BalanceResult:
    """Balance ``equation`` without raising on bad input.

    Parse errors come back as a result whose ``result`` is ``"Error"`` and
    whose single step and ``error`` carry the error message.
    """
    try:
        return EquationBalancer(configuration).balance(equation)
    except ChemBalanceError as error:
        logger.error("Error balancing chemical equation %r: %s", equation, error.message)
        return BalanceResult(
            equation=equation,
            result="Error",
            steps=(ChemistryStep("Error", error.message),),
            error=error.message,
        )
