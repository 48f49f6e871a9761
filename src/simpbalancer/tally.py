"""Atom bookkeeping across compounds."""

from __future__ import annotations

from typing import Iterable, Mapping

from simpbalancer.models import Compound


def tally_elements(compounds: Iterable[Compound]) -> dict[str, int]:
    """Total atoms per element, weighted by each compound's coefficient."""
    totals: dict[str, int] = {}
    for compound in compounds:
        for element in compound.elements:
            totals[element.symbol] = (
                totals.get(element.symbol, 0) + element.count * compound.coefficient
            )
    return totals


def tally_mismatches(
    left: Mapping[str, int], right: Mapping[str, int]
) -> dict[str, tuple[int, int]]:
    """Elements whose totals differ, as ``{symbol: (left, right)}``.

    Symbols missing from one side count as zero there.
    """
    mismatches: dict[str, tuple[int, int]] = {}
    for symbol in list(left) + [s for s in right if s not in left]:
        left_count = left.get(symbol, 0)
        right_count = right.get(symbol, 0)
        if left_count != right_count:
            mismatches[symbol] = (left_count, right_count)
    return mismatches


def format_tally(totals: Mapping[str, int]) -> str:
    return ", ".join(f"{symbol}: {count}" for symbol, count in totals.items())
