import logging
import math
from typing import List, Sequence, Set, Tuple

import numpy as np

from .pivot import pivot
from ..schemas import Constraint, ObjectiveFunction

logger = logging.getLogger(__name__)


def validate_problem(objective: ObjectiveFunction, constraints: Sequence[Constraint]) -> int:
    """Check dimensions and values; return the number of decision variables."""

    n = len(objective.coefficients)
    if n == 0:
        raise ValueError("Objective must have at least one coefficient.")
    if not all(math.isfinite(value) for value in objective.coefficients):
        raise ValueError("Objective coefficients must be finite.")

    for idx, cons in enumerate(constraints):
        label = cons.name or f"#{idx + 1}"
        if len(cons.coefficients) != n:
            raise ValueError(
                f"Constraint {label} has {len(cons.coefficients)} coefficients, expected {n}."
            )
        if not all(math.isfinite(value) for value in cons.coefficients) or not math.isfinite(cons.rhs):
            raise ValueError(f"Constraint {label} contains a non-finite value.")
    return n


def build_tableau(
    objective: ObjectiveFunction, constraints: Sequence[Constraint]
) -> Tuple[np.ndarray, List[int]]:
    """
    Build the initial tableau: one slack/surplus column per constraint
    (+1 for <=, -1 for >=, 0 for ==), RHS copied as given, objective row last.
    Shape is (M + 1, N + M + 1); the basis starts on the slack columns.
    """

    n = validate_problem(objective, constraints)
    m = len(constraints)

    T = np.zeros((m + 1, n + m + 1), dtype=float)
    basis: List[int] = []
    for i, cons in enumerate(constraints):
        T[i, :n] = cons.coefficients
        if cons.relation == "<=":
            T[i, n + i] = 1.0
        elif cons.relation == ">=":
            T[i, n + i] = -1.0
        T[i, -1] = cons.rhs
        basis.append(n + i)

    coeffs = np.asarray(objective.coefficients, dtype=float)
    T[-1, :n] = -coeffs if objective.sense == "max" else coeffs
    return T, basis


def equality_columns(constraints: Sequence[Constraint], n: int) -> Set[int]:
    """Slack columns that stay identically zero because their row is an equality."""

    return {n + i for i, cons in enumerate(constraints) if cons.relation == "=="}


def prepare_feasible_tableau(
    T: np.ndarray, basis: List[int], tol: float
) -> Tuple[np.ndarray, List[int], List[int]]:
    """
    Put every constraint row in canonical form with a non-negative RHS.

    Rows whose slack already gives a feasible basic value are kept (negated
    when the slack is a -1 surplus on a non-positive RHS). Remaining rows get
    an artificial column. Returns the phase-1 tableau (artificial columns
    inserted before the RHS, objective row zeroed), the basis, and the
    artificial column indices. When no artificial is needed the list is empty
    and the tableau has its original width.
    """

    T = T.copy()
    basis = basis.copy()
    m = len(basis)
    needs_artificial: List[int] = []

    for i in range(m):
        slack = T[i, basis[i]]
        rhs = T[i, -1]
        if slack > 0 and rhs >= -tol:
            continue
        if slack < 0 and rhs <= tol:
            T[i, :] = -T[i, :]
            continue
        if rhs < 0:
            T[i, :] = -T[i, :]
        needs_artificial.append(i)

    if not needs_artificial:
        return T, basis, []

    width = T.shape[1] - 1
    k = len(needs_artificial)
    P = np.zeros((T.shape[0], width + k + 1), dtype=float)
    P[:, :width] = T[:, :width]
    P[:, -1] = T[:, -1]
    P[-1, :] = 0.0

    artificial: List[int] = []
    for offset, row in enumerate(needs_artificial):
        col = width + offset
        P[row, col] = 1.0
        basis[row] = col
        artificial.append(col)

    # minimise the sum of artificials, reduced against their basic rows
    P[-1, artificial] = 1.0
    for row in needs_artificial:
        P[-1, :] -= P[row, :]

    logger.debug("phase 1 needed for rows %s", needs_artificial)
    return P, basis, artificial


def remove_artificials(
    T: np.ndarray, basis: List[int], artificial: Sequence[int], tol: float
) -> Tuple[np.ndarray, List[int], List[int]]:
    """
    Drive zero-level artificials out of the basis, drop redundant rows and the
    artificial columns. Returns the reduced tableau, its basis and the indices
    of the constraint rows that were removed.
    """

    T = T.copy()
    basis = basis.copy()
    artificial_set = set(artificial)
    width = min(artificial)
    redundant: List[int] = []

    for row in range(len(basis)):
        if basis[row] not in artificial_set:
            continue
        candidates = [j for j in range(width) if abs(T[row, j]) > tol]
        if not candidates:
            redundant.append(row)
            continue
        pivot(T, row, candidates[0])
        basis[row] = candidates[0]

    keep_rows = [i for i in range(len(basis)) if i not in redundant] + [T.shape[0] - 1]
    keep_cols = list(range(width)) + [T.shape[1] - 1]
    reduced = T[np.ix_(keep_rows, keep_cols)]
    if redundant:
        logger.info("dropped redundant constraint rows %s", redundant)
    return reduced, [basis[i] for i in keep_rows[:-1]], redundant


def install_objective(T: np.ndarray, basis: Sequence[int], objective_row: np.ndarray) -> np.ndarray:
    """Replace the objective row and eliminate it against the current basis."""

    T = T.copy()
    T[-1, :] = objective_row
    for row, col in enumerate(basis):
        factor = T[-1, col]
        if factor != 0.0:
            T[-1, :] -= factor * T[row, :]
    return T
