"""Data structures for formulas, equations and balancing results."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Mapping


class Phase(str, Enum):
    SOLID = "s"
    LIQUID = "l"
    GAS = "g"
    AQUEOUS = "aq"


@dataclass(frozen=True)
class ElementCount:
    symbol: str
    count: int
    charge: int | None = None
    phase: Phase | None = None


@dataclass(frozen=True)
class ParsedFormula:
    """Result of parsing a single formula.

    Attributes:
        elements: Element counts in first-seen order, duplicates merged.
        phase: Trailing phase annotation, if any.
        charge: Signed charge from a trailing ``^<n><sign>`` annotation.
    """

    elements: tuple[ElementCount, ...]
    phase: Phase | None = None
    charge: int | None = None

    def counts(self) -> dict[str, int]:
        return {element.symbol: element.count for element in self.elements}


@dataclass(frozen=True)
class Compound:
    elements: tuple[ElementCount, ...]
    coefficient: int = 1
    charge: int | None = None
    phase: Phase | None = None

    def counts(self) -> dict[str, int]:
        return {element.symbol: element.count for element in self.elements}


@dataclass(frozen=True)
class Equation:
    reactants: tuple[Compound, ...]
    products: tuple[Compound, ...]

    @property
    def compounds(self) -> tuple[Compound, ...]:
        return self.reactants + self.products


@dataclass(frozen=True)
class ChemistryStep:
    description: str
    expression: str


@dataclass(frozen=True)
class ChemistryResult:
    """Display-ready outcome of a chemistry calculation.

    Attributes:
        equation: The input as given by the caller (or a normalized echo of it).
        result: One-line answer, or ``"Error"`` when the call failed.
        steps: Ordered derivation log.
        error: Error or warning message, ``None`` on clean success.
    """

    equation: str
    result: str
    steps: tuple[ChemistryStep, ...]
    error: str | None = None

    def to_dict(self) -> dict[str, object]:
        return {
            "equation": self.equation,
            "result": self.result,
            "steps": [
                {"description": step.description, "expression": step.expression}
                for step in self.steps
            ],
            "error": self.error,
        }


@dataclass(frozen=True)
class BalanceResult(ChemistryResult):
    balanced: bool = False
    coefficients: tuple[int, ...] = ()
    reactants: tuple[Compound, ...] = ()
    products: tuple[Compound, ...] = ()
    tallies: Mapping[str, Mapping[str, int]] = field(default_factory=dict)

    @property
    def balanced_equation(self) -> str:
        return self.result

    def to_dict(self) -> dict[str, object]:
        payload = super().to_dict()
        payload["balanced"] = self.balanced
        payload["coefficients"] = list(self.coefficients)
        payload["tallies"] = {side: dict(counts) for side, counts in self.tallies.items()}
        return payload
