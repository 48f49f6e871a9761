from .base import ElementData, ElementTable
from .periodic import PERIODIC_TABLE, PeriodicTable

__all__ = ["ElementData", "ElementTable", "PERIODIC_TABLE", "PeriodicTable"]
