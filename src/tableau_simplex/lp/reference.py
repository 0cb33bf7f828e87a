from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

import numpy as np
from scipy.optimize import linprog

from .builder import validate_problem
from ..schemas import Constraint, ObjectiveFunction


def cross_check(
    objective: ObjectiveFunction, constraints: Sequence[Constraint]
) -> Tuple[str, Optional[float], Optional[List[float]]]:
    """
    Solve the same problem with SciPy's HiGHS backend. Every tableau column is
    a non-negative variable, so decision variables get a lower bound of zero.
    Returns (status, objective_value, x) using the tableau solver's status names.
    """

    n = validate_problem(objective, constraints)
    c = np.asarray(objective.coefficients, dtype=float)
    sense_factor = 1.0 if objective.sense == "min" else -1.0

    A_ub: List[List[float]] = []
    b_ub: List[float] = []
    A_eq: List[List[float]] = []
    b_eq: List[float] = []
    for cons in constraints:
        if cons.relation == "<=":
            A_ub.append(list(cons.coefficients))
            b_ub.append(cons.rhs)
        elif cons.relation == ">=":
            A_ub.append([-value for value in cons.coefficients])
            b_ub.append(-cons.rhs)
        else:
            A_eq.append(list(cons.coefficients))
            b_eq.append(cons.rhs)

    res = linprog(
        c * sense_factor,
        A_ub=np.array(A_ub, dtype=float) if A_ub else None,
        b_ub=np.array(b_ub, dtype=float) if b_ub else None,
        A_eq=np.array(A_eq, dtype=float) if A_eq else None,
        b_eq=np.array(b_eq, dtype=float) if b_eq else None,
        bounds=[(0, None)] * n,
        method="highs",
    )

    if not res.success:
        return _map_status(res.status), None, None
    return "optimal", float(res.fun * sense_factor), [float(v) for v in res.x]


def _map_status(code: int) -> str:
    mapping = {
        0: "optimal",
        1: "iteration_limit",
        2: "infeasible",
        3: "unbounded",
    }
    return mapping.get(code, "iteration_limit")
