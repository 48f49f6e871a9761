"""Conversion of real-valued coefficients into minimal integers."""

from __future__ import annotations

import logging
import math
from functools import reduce
from typing import Sequence

import numpy as np

from simpbalancer.constants import DENOMINATOR_SEARCH_LIMIT, FRACTION_TOLERANCE

logger = logging.getLogger(__name__)


def to_integers(
    values: Sequence[float],
    denominator_limit: int = DENOMINATOR_SEARCH_LIMIT,
    tolerance: float = FRACTION_TOLERANCE,
) -> list[int]:
    """Rescale ``values`` to the smallest integers with the same ratios.

    The vector is divided by its smallest non-zero magnitude, each fractional
    part is matched to a denominator, every entry is multiplied by the least
    common multiple of those denominators and rounded, and the result is
    divided by its GCD.

    A vector with no non-zero entry comes back as all ones. Zero or negative
    entries in a non-degenerate vector are kept as such; the caller's
    atom-count verification decides whether the result balances.
    """
    scaled = np.asarray(values, dtype=float)
    if scaled.size == 0:
        return []

    nonzero = np.abs(scaled[np.abs(scaled) > tolerance])
    if nonzero.size == 0:
        return [1] * scaled.size
    scaled = scaled / nonzero.min()

    multiplier = 1
    for value in scaled:
        denominator = find_denominator(value, denominator_limit, tolerance)
        if denominator is None:
            logger.debug("No denominator up to %d reproduces %r", denominator_limit, value)
            continue
        multiplier = math.lcm(multiplier, denominator)

    integers = [int(round(value * multiplier)) for value in scaled]
    divisor = reduce(math.gcd, (abs(value) for value in integers))
    if divisor > 1:
        integers = [value // divisor for value in integers]
    return integers


def find_denominator(
    value: float,
    denominator_limit: int = DENOMINATOR_SEARCH_LIMIT,
    tolerance: float = FRACTION_TOLERANCE,
) -> int | None:
    """Smallest ``d`` such that ``value * d`` is an integer within ``tolerance``.

    Returns 1 for values that are already integral and ``None`` when no
    denominator up to ``denominator_limit`` works.
    """
    if abs(value - round(value)) <= tolerance:
        return 1

    fraction = value - math.floor(value)
    denominators = np.arange(2, denominator_limit + 1, dtype=float)
    products = fraction * denominators
    hits = np.flatnonzero(np.abs(np.round(products) - products) < tolerance)
    if hits.size == 0:
        return None
    return int(denominators[hits[0]])
