"""Tableau simplex solver with full pivot history."""

from .lp import solve
from .schemas import (
    Constraint,
    ObjectiveFunction,
    SolveOptions,
    SolveReport,
    SolveResult,
    TableauSnapshot,
)

__all__ = [
    "solve",
    "Constraint",
    "ObjectiveFunction",
    "SolveOptions",
    "SolveReport",
    "SolveResult",
    "TableauSnapshot",
]
