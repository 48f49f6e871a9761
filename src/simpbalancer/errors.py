"""Error hierarchy for formula parsing, balancing and stoichiometry."""

from __future__ import annotations

from typing import Any, Dict


class ChemBalanceError(Exception):
    """Base class for all SimpBalancer errors.

    Attributes:
        code: Machine-readable error code (e.g. "MALFORMED_FORMULA").
        message: Human-readable error description.
    """

    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(message)

    def to_dict(self) -> Dict[str, Any]:
        return {"code": self.code, "message": self.message}


class MalformedFormulaError(ChemBalanceError):
    """Raised when a compound formula cannot be parsed."""

    def __init__(self, formula: str, reason: str, position: int | None = None):
        self.formula = formula
        self.reason = reason
        self.position = position
        where = f" at position {position}" if position is not None else ""
        super().__init__(
            "MALFORMED_FORMULA", f"{reason}{where} in formula '{formula}'"
        )


class InvalidEquationFormatError(ChemBalanceError):
    """Raised when an equation does not have exactly two sides."""

    def __init__(self, equation: str, reason: str):
        self.equation = equation
        self.reason = reason
        super().__init__(
            "INVALID_EQUATION_FORMAT",
            f"{reason}. Use a format like \"H2 + O2 → H2O\" (got '{equation}')",
        )


class UnknownElementError(ChemBalanceError):
    """Raised by mass-dependent operations for symbols missing from the table."""

    def __init__(self, symbol: str):
        self.symbol = symbol
        super().__init__("UNKNOWN_ELEMENT", f"Unknown element: {symbol}")


class CompoundNotFoundError(ChemBalanceError):
    """Raised when a stoichiometry lookup names a compound absent from the equation."""

    def __init__(self, formula: str, equation: str):
        self.formula = formula
        self.equation = equation
        super().__init__(
            "COMPOUND_NOT_FOUND",
            f"Compound {formula} not found in the balanced equation '{equation}'",
        )


class UnbalanceableEquationWarning(UserWarning):
    """Issued when the solved coefficients fail the atom-count verification."""
