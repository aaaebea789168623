"""Expected-vs-actual output comparison policies."""

from __future__ import annotations

from enum import Enum


class ComparisonMode(str, Enum):
    """Supported output comparison policies."""

    TRIMMED = "trimmed"
    EXACT = "exact"
    TOKENS = "tokens"


def outputs_match(
    expected: str, actual: str, mode: ComparisonMode = ComparisonMode.TRIMMED
) -> bool:
    """Compare program output with the expected output.

    `TRIMMED` strips leading and trailing whitespace from each text as a whole and then
    compares exactly; whitespace inside the text, line endings included, must match.
    """
    if mode == ComparisonMode.TRIMMED:
        return expected.strip() == actual.strip()
    if mode == ComparisonMode.TOKENS:
        return expected.split() == actual.split()
    return expected == actual
