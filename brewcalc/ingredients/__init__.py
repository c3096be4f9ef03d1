"""
BrewCalc - Ingredient and Style Reference Data

Closed tables of static properties keyed by snake_case identifiers.
"""

from typing import NamedTuple, Sequence


class ValueRange(NamedTuple):
    """Closed interval [start, end]."""
    start: float
    end: float

    def contains(self, value: float) -> bool:
        return self.start <= value <= self.end

    @property
    def midpoint(self) -> float:
        return (self.start + self.end) / 2

    def __str__(self):
        return f"{self.start:g}-{self.end:g}"


def union_ranges(ranges: Sequence[ValueRange]) -> ValueRange:
    """Smallest range covering every range given (BJCP and BA disagree)."""
    return ValueRange(min(r.start for r in ranges), max(r.end for r in ranges))
