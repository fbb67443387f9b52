"""
Trend Analyzer - set algebra over incident categories.

Compares the categories reported "today" with a fixed comparison window
("yesterday"). Pure functions, no internal state.

NOTE: difference() is today MINUS yesterday. The direction is part of the
contract: it answers "what is new today".
"""

from pydantic import BaseModel, ConfigDict
from typing import AbstractSet, FrozenSet, List


class TrendReport(BaseModel):
    """Result of a trend analysis run."""

    model_config = ConfigDict(frozen=True)

    today: List[str]
    yesterday: List[str]
    union: FrozenSet[str]
    intersection: FrozenSet[str]
    difference: FrozenSet[str]


def union(today: AbstractSet[str], yesterday: AbstractSet[str]) -> FrozenSet[str]:
    """Categories reported in either window."""
    return frozenset(today) | frozenset(yesterday)


def intersection(today: AbstractSet[str], yesterday: AbstractSet[str]) -> FrozenSet[str]:
    """Categories reported in both windows."""
    smaller, larger = (today, yesterday) if len(today) <= len(yesterday) else (yesterday, today)
    return frozenset(category for category in smaller if category in larger)


def difference(today: AbstractSet[str], yesterday: AbstractSet[str]) -> FrozenSet[str]:
    """Categories reported today but not in the comparison window."""
    return frozenset(category for category in today if category not in yesterday)


def analyze(today: AbstractSet[str], yesterday: AbstractSet[str]) -> TrendReport:
    return TrendReport(
        today=sorted(today),
        yesterday=sorted(yesterday),
        union=union(today, yesterday),
        intersection=intersection(today, yesterday),
        difference=difference(today, yesterday),
    )
