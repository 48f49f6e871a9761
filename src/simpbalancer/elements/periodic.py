"""Standard atomic weights for the elements."""

from __future__ import annotations

from types import MappingProxyType
from typing import Iterable, Mapping

from simpbalancer.elements.base import ElementData, ElementTable
from simpbalancer.errors import UnknownElementError

# symbol, name, atomic number, standard atomic mass (g/mol)
_ELEMENT_ROWS = (
    ("H", "Hydrogen", 1, 1.008),
    ("He", "Helium", 2, 4.0026),
    ("Li", "Lithium", 3, 6.94),
    ("Be", "Beryllium", 4, 9.0122),
    ("B", "Boron", 5, 10.81),
    ("C", "Carbon", 6, 12.011),
    ("N", "Nitrogen", 7, 14.007),
    ("O", "Oxygen", 8, 15.999),
    ("F", "Fluorine", 9, 18.998),
    ("Ne", "Neon", 10, 20.180),
    ("Na", "Sodium", 11, 22.990),
    ("Mg", "Magnesium", 12, 24.305),
    ("Al", "Aluminum", 13, 26.982),
    ("Si", "Silicon", 14, 28.085),
    ("P", "Phosphorus", 15, 30.974),
    ("S", "Sulfur", 16, 32.06),
    ("Cl", "Chlorine", 17, 35.45),
    ("Ar", "Argon", 18, 39.948),
    ("K", "Potassium", 19, 39.098),
    ("Ca", "Calcium", 20, 40.078),
    ("Sc", "Scandium", 21, 44.956),
    ("Ti", "Titanium", 22, 47.867),
    ("V", "Vanadium", 23, 50.942),
    ("Cr", "Chromium", 24, 51.996),
    ("Mn", "Manganese", 25, 54.938),
    ("Fe", "Iron", 26, 55.845),
    ("Co", "Cobalt", 27, 58.933),
    ("Ni", "Nickel", 28, 58.693),
    ("Cu", "Copper", 29, 63.546),
    ("Zn", "Zinc", 30, 65.38),
    ("Ga", "Gallium", 31, 69.723),
    ("Ge", "Germanium", 32, 72.630),
    ("As", "Arsenic", 33, 74.922),
    ("Se", "Selenium", 34, 78.971),
    ("Br", "Bromine", 35, 79.904),
    ("Kr", "Krypton", 36, 83.798),
    ("Rb", "Rubidium", 37, 85.468),
    ("Sr", "Strontium", 38, 87.62),
    ("Y", "Yttrium", 39, 88.906),
    ("Zr", "Zirconium", 40, 91.224),
    ("Nb", "Niobium", 41, 92.906),
    ("Mo", "Molybdenum", 42, 95.95),
    ("Ru", "Ruthenium", 44, 101.07),
    ("Rh", "Rhodium", 45, 102.91),
    ("Pd", "Palladium", 46, 106.42),
    ("Ag", "Silver", 47, 107.87),
    ("Cd", "Cadmium", 48, 112.41),
    ("In", "Indium", 49, 114.82),
    ("Sn", "Tin", 50, 118.71),
    ("Sb", "Antimony", 51, 121.76),
    ("Te", "Tellurium", 52, 127.60),
    ("I", "Iodine", 53, 126.90),
    ("Xe", "Xenon", 54, 131.29),
    ("Cs", "Caesium", 55, 132.91),
    ("Ba", "Barium", 56, 137.33),
    ("La", "Lanthanum", 57, 138.91),
    ("Ce", "Cerium", 58, 140.12),
    ("Hf", "Hafnium", 72, 178.49),
    ("Ta", "Tantalum", 73, 180.95),
    ("W", "Tungsten", 74, 183.84),
    ("Re", "Rhenium", 75, 186.21),
    ("Os", "Osmium", 76, 190.23),
    ("Ir", "Iridium", 77, 192.22),
    ("Pt", "Platinum", 78, 195.08),
    ("Au", "Gold", 79, 196.97),
    ("Hg", "Mercury", 80, 200.59),
    ("Tl", "Thallium", 81, 204.38),
    ("Pb", "Lead", 82, 207.2),
    ("Bi", "Bismuth", 83, 208.98),
    ("Th", "Thorium", 90, 232.04),
    ("U", "Uranium", 92, 238.03),
)


class PeriodicTable(ElementTable):
    """Read-only element table backed by a fixed mapping."""

    def __init__(self, elements: Mapping[str, ElementData]):
        self._elements = MappingProxyType(dict(elements))

    @classmethod
    def from_rows(cls, rows: Iterable[tuple[str, str, int, float]]) -> "PeriodicTable":
        return cls(
            {
                symbol: ElementData(name=name, atomic_number=number, atomic_mass=mass)
                for symbol, name, number, mass in rows
            }
        )

    @property
    def elements(self) -> Mapping[str, ElementData]:
        return self._elements

    def element(self, symbol: str) -> ElementData:
        try:
            return self._elements[symbol]
        except KeyError:
            raise UnknownElementError(symbol) from None

    def __contains__(self, symbol: object) -> bool:
        return symbol in self._elements

    def __len__(self) -> int:
        return len(self._elements)


PERIODIC_TABLE = PeriodicTable.from_rows(_ELEMENT_ROWS)
