"""SimpBalancer core package."""

from simpbalancer.balancer import (
    BalancerConfiguration,
    EquationBalancer,
    balance_chemical_equation,
)
from simpbalancer.equation import parse_equation
from simpbalancer.errors import (
    ChemBalanceError,
    InvalidEquationFormatError,
    MalformedFormulaError,
    UnbalanceableEquationWarning,
    UnknownElementError,
)
from simpbalancer.formula import parse_formula
from simpbalancer.models import BalanceResult, Compound, ElementCount, Equation, Phase

__all__ = [
    "BalancerConfiguration",
    "EquationBalancer",
    "balance_chemical_equation",
    "parse_equation",
    "parse_formula",
    "ChemBalanceError",
    "InvalidEquationFormatError",
    "MalformedFormulaError",
    "UnbalanceableEquationWarning",
    "UnknownElementError",
    "BalanceResult",
    "Compound",
    "ElementCount",
    "Equation",
    "Phase",
]
