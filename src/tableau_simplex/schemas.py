from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

Sense = Literal["min", "max"]
Relation = Literal["<=", ">=", "=="]
PivotRule = Literal["dantzig", "bland"]
Status = Literal[
    "optimal",
    "optimal_with_alternatives",
    "unbounded",
    "infeasible",
    "iteration_limit",
    "invalid",
]


class Constraint(BaseModel):
    model_config = ConfigDict(frozen=True)

    coefficients: Tuple[float, ...]
    rhs: float
    relation: Relation
    name: str = ""


class ObjectiveFunction(BaseModel):
    model_config = ConfigDict(frozen=True)

    coefficients: Tuple[float, ...] = Field(min_length=1)
    sense: Sense


class SolveOptions(BaseModel):
    max_iters: int = Field(default=10_000, ge=1)
    tol: float = 1e-9
    pivot_rule: PivotRule = "dantzig"
    two_phase: bool = True
    cycle_guard: bool = True


class TableauSnapshot(BaseModel):
    """Copy of the tableau and basis taken right after a pivot."""

    table: List[List[float]]
    basis: List[int]
    phase: Literal[1, 2] = 2
    entering: Optional[int] = None
    leaving: Optional[int] = None
    iteration: int = 0


class SolveReport(BaseModel):
    status: Status
    objective_value: Optional[float] = None
    solution: List[float] | None = None
    alternative_optima: bool = False
    iterations: int = 0
    message: str = ""


class SolveResult(BaseModel):
    history: List[TableauSnapshot] = Field(default_factory=list)
    report: SolveReport
