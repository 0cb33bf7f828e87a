from typing import List, Optional, Sequence, Set

import numpy as np

from ..schemas import Sense, SolveReport


def extract_solution(T: np.ndarray, basis: Sequence[int], n: int) -> List[float]:
    solution = [0.0] * n
    for row, col in enumerate(basis):
        if col < n:
            solution[col] = float(T[row, -1])
    return solution


def has_alternative_optima(
    T: np.ndarray,
    basis: Sequence[int],
    forbidden: Optional[Set[int]] = None,
    tol: float = 1e-9,
) -> bool:
    """A zero reduced cost on a non-basic column means the optimum spans a face."""

    forbidden = forbidden or set()
    nonbasic = set(range(T.shape[1] - 1)) - set(basis) - forbidden
    return any(abs(T[-1, j]) <= tol for j in nonbasic)


def extract_report(
    T: np.ndarray,
    basis: Sequence[int],
    n: int,
    sense: Sense,
    iterations: int,
    forbidden: Optional[Set[int]] = None,
    tol: float = 1e-9,
) -> SolveReport:
    """Read the solution, objective value and alternative-optima flag off a terminal tableau."""

    solution = extract_solution(T, basis, n)
    alternatives = has_alternative_optima(T, basis, forbidden, tol)
    value = float(T[-1, -1])
    # the objective row of a minimisation carries -z
    objective_value = value if sense == "max" else -value
    if abs(objective_value) < 1e-12:
        objective_value = 0.0

    status = "optimal_with_alternatives" if alternatives else "optimal"
    return SolveReport(
        status=status,
        objective_value=objective_value,
        solution=[0.0 if abs(v) < 1e-12 else v for v in solution],
        alternative_optima=alternatives,
        iterations=iterations,
        message="Alternative optimal solutions exist." if alternatives else "",
    )
