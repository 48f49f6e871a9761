"""Molar mass, stoichiometric conversion and solution concentration."""

from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Iterable

from simpbalancer.balancer import BalancerConfiguration, EquationBalancer
from simpbalancer.constants import AVOGADRO_NUMBER
from simpbalancer.elements import PERIODIC_TABLE, ElementTable
from simpbalancer.errors import CompoundNotFoundError
from simpbalancer.formula import FormulaParser, format_formula
from simpbalancer.models import ChemistryResult, ChemistryStep, Compound, ElementCount

logger = logging.getLogger(__name__)

AMOUNT_UNITS = ("g", "mol", "molecules")
CONCENTRATION_UNITS = ("M", "m", "%")


def molar_mass(elements: Iterable[ElementCount], table: ElementTable = PERIODIC_TABLE) -> float:
    """Molar mass (g/mol). Raises UnknownElementError for symbols not in ``table``."""
    return sum(table.atomic_mass(element.symbol) * element.count for element in elements)


def empirical_formula(elements: Iterable[ElementCount]) -> str:
    elements = list(elements)
    divisor = reduce(math.gcd, (element.count for element in elements))
    return "".join(
        element.symbol + ("" if element.count // divisor == 1 else str(element.count // divisor))
        for element in elements
    )


def analyze_molecule(
    formula: str, table: ElementTable = PERIODIC_TABLE, strict: bool = False
) -> ChemistryResult:
    """Molar mass, empirical formula and mass composition of ``formula``."""
    steps = [ChemistryStep("Analyzing molecular formula:", formula)]
    elements = FormulaParser(strict=strict).parse(formula).elements

    total = molar_mass(elements, table)
    steps.append(
        ChemistryStep(
            "Calculate molar mass:",
            "\n".join(
                f"{e.symbol}: {e.count} × {table.atomic_mass(e.symbol):.3f} g/mol"
                f" = {e.count * table.atomic_mass(e.symbol):.3f} g/mol"
                for e in elements
            ),
        )
    )
    steps.append(ChemistryStep("Total molar mass:", f"{total:.3f} g/mol"))
    steps.append(ChemistryStep("Empirical formula:", empirical_formula(elements)))
    steps.append(
        ChemistryStep(
            "Element composition (% by mass):",
            "\n".join(
                f"{e.symbol}: {e.count * table.atomic_mass(e.symbol) / total * 100:.2f}%"
                for e in elements
            ),
        )
    )
    return ChemistryResult(
        equation=formula,
        result=f"M({formula}) = {total:.3f} g/mol",
        steps=tuple(steps),
    )


def calculate_stoichiometry(
    equation: str,
    known_amount: float,
    known_compound: str,
    target_compound: str,
    unit: str = "g",
    table: ElementTable = PERIODIC_TABLE,
    configuration: BalancerConfiguration | None = None,
) -> ChemistryResult:
    """Convert an amount of one compound into the amount of another.

    Both compounds are looked up by their formula as written without
    coefficient, phase or charge (``Fe2O3``, ``H2O``). ``unit`` applies to both
    the known and the reported amount.
    """
    if unit not in AMOUNT_UNITS:
        raise ValueError(f"Unknown amount unit: {unit}")

    steps = [ChemistryStep("Starting with chemical equation:", equation)]
    balanced = EquationBalancer(configuration).balance(equation)
    steps.append(ChemistryStep("Using balanced equation:", balanced.result))
    if not balanced.balanced:
        steps.append(ChemistryStep("Warning:", balanced.error or "Equation is not balanced"))

    compounds = balanced.reactants + balanced.products
    known = _find_compound(compounds, known_compound, balanced.result)
    target = _find_compound(compounds, target_compound, balanced.result)

    known_mass = molar_mass(known.elements, table)
    target_mass = molar_mass(target.elements, table)
    steps.append(
        ChemistryStep(
            "Calculate molar masses:",
            f"{known_compound}: {known_mass:.2f} g/mol\n{target_compound}: {target_mass:.2f} g/mol",
        )
    )

    if unit == "g":
        known_moles = known_amount / known_mass
    elif unit == "mol":
        known_moles = known_amount
    else:
        known_moles = known_amount / AVOGADRO_NUMBER
    steps.append(
        ChemistryStep(
            f"Convert {known_amount} {unit} of {known_compound} to moles:",
            f"{known_amount} {unit} = {known_moles:.4e} mol",
        )
    )

    if known.coefficient <= 0 or target.coefficient <= 0:
        message = (
            f"No mole ratio between {target_compound} and {known_compound}: "
            f"the equation has coefficients {target.coefficient}:{known.coefficient}. "
            f"{balanced.error or ''}"
        ).strip()
        logger.warning("Stoichiometry aborted for %r: %s", equation, message)
        steps.append(ChemistryStep("Error", message))
        return ChemistryResult(
            equation=balanced.result, result="Error", steps=tuple(steps), error=message
        )

    ratio = target.coefficient / known.coefficient
    target_moles = known_moles * ratio
    steps.append(
        ChemistryStep(
            "Apply stoichiometric ratio from balanced equation:",
            f"Mole ratio {target_compound}:{known_compound} = "
            f"{target.coefficient}:{known.coefficient} = {ratio:g}\n"
            f"{known_moles:.4e} mol × {ratio:g} = {target_moles:.4e} mol of {target_compound}",
        )
    )

    target_grams = target_moles * target_mass
    target_molecules = target_moles * AVOGADRO_NUMBER
    steps.append(
        ChemistryStep(
            "Convert target moles to grams:",
            f"{target_moles:.4e} mol × {target_mass:.2f} g/mol = {target_grams:.4f} g",
        )
    )
    steps.append(
        ChemistryStep(
            "Calculate number of molecules:",
            f"{target_moles:.4e} mol × {AVOGADRO_NUMBER:.3e} molecules/mol"
            f" = {target_molecules:.4e} molecules",
        )
    )

    final = {"g": target_grams, "mol": target_moles, "molecules": target_molecules}[unit]
    logger.info("%s %s of %s -> %s %s of %s", known_amount, unit, known_compound, final, unit, target_compound)
    return ChemistryResult(
        equation=balanced.result,
        result=f"{final:.4f} {unit} of {target_compound}",
        steps=tuple(steps),
        error=balanced.error,
    )


def calculate_concentration(
    solute: str,
    mass: float,
    volume: float,
    unit: str = "M",
    table: ElementTable = PERIODIC_TABLE,
) -> ChemistryResult:
    """Concentration of ``mass`` grams of ``solute`` in ``volume`` litres of water.

    ``unit`` is ``"M"`` (mol/L), ``"m"`` (mol/kg solvent) or ``"%"`` (mass
    percent). Water is assumed as solvent at 1 kg/L.
    """
    if unit not in CONCENTRATION_UNITS:
        raise ValueError(f"Unknown concentration unit: {unit}")
    if volume <= 0:
        raise ValueError("Volume must be positive")

    description = f"{mass} g {solute} in {volume} L solution"
    steps = [
        ChemistryStep(
            "Analyzing solution concentration:",
            f"Solute: {solute}\nMass: {mass} g\nVolume: {volume} L",
        )
    ]
    solute_mass = molar_mass(FormulaParser().parse(solute).elements, table)
    steps.append(ChemistryStep("Calculate molar mass of solute:", f"{solute}: {solute_mass:.2f} g/mol"))

    moles = mass / solute_mass
    steps.append(
        ChemistryStep(
            "Calculate moles of solute:",
            f"{mass} g ÷ {solute_mass:.2f} g/mol = {moles:.4f} mol",
        )
    )

    if unit == "M":
        molarity = moles / volume
        steps.append(
            ChemistryStep(
                "Calculate molarity (M):",
                f"M = mol / L = {moles:.4f} mol / {volume} L = {molarity:.4f} M",
            )
        )
        result = f"{molarity:.4f} M"
    elif unit == "m":
        solvent_mass = volume  # kg, 1 L water = 1 kg
        molality = moles / solvent_mass
        steps.append(
            ChemistryStep(
                "Calculate molality (m):",
                f"m = mol / kg solvent = {moles:.4f} mol / {solvent_mass} kg = {molality:.4f} m",
            )
        )
        result = f"{molality:.4f} m"
    else:
        solution_mass = mass + volume * 1000.0
        percent = mass / solution_mass * 100.0
        steps.append(
            ChemistryStep(
                "Calculate percent by mass (%):",
                f"% = (mass solute / mass solution) × 100% = "
                f"({mass} g / {solution_mass} g) × 100% = {percent:.2f}%",
            )
        )
        result = f"{percent:.2f}%"

    return ChemistryResult(equation=description, result=result, steps=tuple(steps))


def _find_compound(compounds: Iterable[Compound], formula: str, equation: str) -> Compound:
    wanted = format_formula(FormulaParser().parse(formula).elements)
    for compound in compounds:
        if format_formula(compound.elements) == wanted:
            return compound
    raise CompoundNotFoundError(formula, equation)
