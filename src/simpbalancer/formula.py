"""Chemical formula parsing and formatting.

Formulas are scanned left to right. Element symbols are an uppercase letter
followed by any lowercase letters, optionally followed by a subscript. Groups
in parentheses nest to any depth and are multiplied by the subscript after
the closing parenthesis. A trailing phase tag such as ``(aq)`` and a trailing
charge tag such as ``^2-`` are removed before the scan.
"""

from __future__ import annotations

import re
import string
from typing import Iterable

from simpbalancer.errors import MalformedFormulaError
from simpbalancer.models import ElementCount, ParsedFormula, Phase

PHASE_PATTERN = re.compile(r"\((" + "|".join(p.value for p in Phase) + r")\)$")
CHARGE_PATTERN = re.compile(r"\^(\d*)([+-])$")


class FormulaParser:
    """Recursive-descent parser for single chemical formulas.

    In lenient mode (the default) characters that are not part of a symbol,
    subscript or parenthesis are skipped, so ``H2$O`` reads as ``H2O``. In
    strict mode they raise :class:`MalformedFormulaError`. Unbalanced
    parentheses are an error in both modes.
    """

    def __init__(self, strict: bool = False):
        self.strict = strict

    def parse(self, formula: str) -> ParsedFormula:
        formula = formula.strip()
        body, phase, charge = split_annotations(formula)

        counts = self._parse_group(formula, body, 0)
        if not counts:
            raise MalformedFormulaError(formula, "No element symbols found")

        elements = tuple(
            ElementCount(symbol=symbol, count=count, charge=charge, phase=phase)
            for symbol, count in counts.items()
        )
        return ParsedFormula(elements=elements, phase=phase, charge=charge)

    def _parse_group(self, formula: str, text: str, offset: int) -> dict[str, int]:
        counts: dict[str, int] = {}
        i = 0
        n = len(text)
        while i < n:
            char = text[i]
            if char in string.ascii_uppercase:
                start = i
                i += 1
                while i < n and text[i] in string.ascii_lowercase:
                    i += 1
                symbol = text[start:i]
                multiplier, i = _read_subscript(formula, text, i, offset)
                _merge(counts, {symbol: 1}, multiplier)
            elif char == "(":
                close = _matching_parenthesis(formula, text, i, offset)
                inner = self._parse_group(formula, text[i + 1:close], offset + i + 1)
                if self.strict and not inner:
                    raise MalformedFormulaError(formula, "Empty group '()'", offset + i)
                multiplier, i = _read_subscript(formula, text, close + 1, offset)
                _merge(counts, inner, multiplier)
            elif char == ")":
                raise MalformedFormulaError(formula, "Unmatched ')'", offset + i)
            elif self.strict:
                raise MalformedFormulaError(
                    formula, f"Unexpected character {char!r}", offset + i
                )
            else:
                i += 1
        return counts


def split_annotations(formula: str) -> tuple[str, Phase | None, int | None]:
    """Split trailing phase and charge tags off a formula.

    Both orders are accepted: ``SO4^2-(aq)`` and ``SO4(aq)^2-``.
    """
    body = formula
    phase: Phase | None = None
    charge: int | None = None
    for _ in range(2):
        if phase is None:
            match = PHASE_PATTERN.search(body)
            if match:
                phase = Phase(match.group(1))
                body = body[: match.start()].rstrip()
        if charge is None:
            match = CHARGE_PATTERN.search(body)
            if match:
                magnitude = int(match.group(1)) if match.group(1) else 1
                charge = magnitude if match.group(2) == "+" else -magnitude
                body = body[: match.start()].rstrip()
    return body, phase, charge


def parse_formula(formula: str, strict: bool = False) -> ParsedFormula:
    return FormulaParser(strict=strict).parse(formula)


def format_formula(elements: Iterable[ElementCount]) -> str:
    """Flatten element counts back into formula text, e.g. ``CaO2H2``."""
    return "".join(
        element.symbol + (str(element.count) if element.count > 1 else "")
        for element in elements
    )


def format_charge(charge: int | None) -> str:
    if not charge:
        return ""
    magnitude = str(abs(charge)) if abs(charge) > 1 else ""
    return f"^{magnitude}{'+' if charge > 0 else '-'}"


def _read_subscript(formula: str, text: str, i: int, offset: int) -> tuple[int, int]:
    start = i
    while i < len(text) and text[i] in string.digits:
        i += 1
    if start == i:
        return 1, i
    value = int(text[start:i])
    if value == 0:
        raise MalformedFormulaError(formula, "Subscript must be positive", offset + start)
    return value, i


def _matching_parenthesis(formula: str, text: str, open_index: int, offset: int) -> int:
    depth = 0
    for i in range(open_index, len(text)):
        if text[i] == "(":
            depth += 1
        elif text[i] == ")":
            depth -= 1
            if depth == 0:
                return i
    raise MalformedFormulaError(formula, "Unmatched '('", offset + open_index)


def _merge(counts: dict[str, int], addition: dict[str, int], multiplier: int) -> None:
    for symbol, count in addition.items():
        counts[symbol] = counts.get(symbol, 0) + count * multiplier
