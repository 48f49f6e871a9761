"""Numerical tolerances and physical constants."""

# Pivots smaller than this are treated as zero during elimination.
PIVOT_EPSILON = 1e-10

# Largest denominator tried when recovering a fraction from a float.
DENOMINATOR_SEARCH_LIMIT = 1_000_000

# Fractional parts (and their scaled residues) below this count as zero.
FRACTION_TOLERANCE = 1e-10

AVOGADRO_NUMBER = 6.022e23  # 1/mol

CANONICAL_ARROW = "→"
