"""Base interface for element reference data."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class ElementData:
    name: str
    atomic_number: int
    atomic_mass: float  # g/mol


class ElementTable(ABC):
    """Abstract base class for element lookup tables."""

    @abstractmethod
    def element(self, symbol: str) -> ElementData:
        """Return the data for ``symbol`` or raise UnknownElementError."""
        pass

    @abstractmethod
    def __contains__(self, symbol: object) -> bool:
        pass

    def atomic_mass(self, symbol: str) -> float:
        """Standard atomic mass (g/mol)."""
        return self.element(symbol).atomic_mass
