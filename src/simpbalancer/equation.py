"""Equation parsing: arrows, sides, compounds and leading coefficients."""

from __future__ import annotations

import logging
import re

from simpbalancer.constants import CANONICAL_ARROW
from simpbalancer.errors import InvalidEquationFormatError, MalformedFormulaError
from simpbalancer.formula import FormulaParser
from simpbalancer.models import Compound, Equation

logger = logging.getLogger(__name__)

ARROW_VARIANTS = ("<=>", "<->", "-->", "—>", "=>", "->", "⟶", "⇌", "⟹", "⟾", "⇒", "=")
ARROW_PATTERN = re.compile("|".join(re.escape(arrow) for arrow in ARROW_VARIANTS))
COEFFICIENT_PATTERN = re.compile(r"^(\d+)\s*(?=[A-Za-z(])")
CHARGE_TAIL_PATTERN = re.compile(r"\^\d*$")


class EquationParser:
    def __init__(self, strict: bool = False):
        self.formula_parser = FormulaParser(strict=strict)

    def parse(self, equation: str) -> Equation:
        normalized = normalize_equation(equation)
        sides = normalized.split(CANONICAL_ARROW)
        if len(sides) != 2:
            arrows = len(sides) - 1
            reason = "No reaction arrow found" if arrows == 0 else f"Found {arrows} reaction arrows"
            raise InvalidEquationFormatError(equation, reason)

        reactants = self.parse_side(sides[0])
        products = self.parse_side(sides[1])
        if not reactants or not products:
            raise InvalidEquationFormatError(
                equation, "Both sides need at least one compound"
            )

        logger.debug(
            "Parsed %d reactant(s) and %d product(s) from %r",
            len(reactants),
            len(products),
            equation,
        )
        return Equation(reactants=reactants, products=products)

    def parse_side(self, side: str) -> tuple[Compound, ...]:
        return tuple(self.parse_compound(part) for part in split_compounds(side))

    def parse_compound(self, text: str) -> Compound:
        text = text.strip()
        coefficient = 1
        match = COEFFICIENT_PATTERN.match(text)
        if match:
            coefficient = int(match.group(1))
            if coefficient == 0:
                raise MalformedFormulaError(text, "Coefficient must be positive", 0)
            text = text[match.end():]

        parsed = self.formula_parser.parse(text)
        return Compound(
            elements=parsed.elements,
            coefficient=coefficient,
            charge=parsed.charge,
            phase=parsed.phase,
        )


def normalize_equation(equation: str) -> str:
    """Collapse whitespace and rewrite every arrow variant as ``→``."""
    collapsed = " ".join(equation.split())
    return ARROW_PATTERN.sub(CANONICAL_ARROW, collapsed)


def split_compounds(side: str) -> list[str]:
    """Split one side on top-level ``+``.

    A ``+`` inside parentheses or closing a charge tag (``Fe^3+``) is kept
    with its compound.
    """
    parts: list[str] = []
    current: list[str] = []
    depth = 0
    for char in side:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        elif char == "+" and depth <= 0:
            if not CHARGE_TAIL_PATTERN.search("".join(current)):
                parts.append("".join(current))
                current = []
                continue
        current.append(char)
    parts.append("".join(current))
    return [part.strip() for part in parts if part.strip()]


def parse_equation(equation: str, strict: bool = False) -> Equation:
    return EquationParser(strict=strict).parse(equation)
