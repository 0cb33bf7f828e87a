import logging
from typing import Any, Dict, List, Optional, Set, Tuple

import numpy as np

from ..schemas import SolveOptions, TableauSnapshot

logger = logging.getLogger(__name__)


def pivot(T: np.ndarray, row: int, col: int) -> None:
    """Gauss-Jordan step in place: make column `col` a unit vector with its 1 in `row`."""

    T[row, :] = T[row, :] / T[row, col]
    for i in range(T.shape[0]):
        if i == row:
            continue
        factor = T[i, col]
        if factor != 0.0:
            T[i, :] -= factor * T[row, :]


def select_entering(
    objective_row: np.ndarray,
    forbidden: Set[int],
    use_bland: bool,
    tol: float,
) -> Optional[int]:
    candidates = [
        (j, objective_row[j])
        for j in range(objective_row.shape[0] - 1)
        if j not in forbidden and objective_row[j] < -tol
    ]
    if not candidates:
        return None
    if use_bland:
        return min(j for j, _ in candidates)
    # min keeps the first-seen column on ties
    return min(candidates, key=lambda item: item[1])[0]


def select_leaving(
    T: np.ndarray,
    col: int,
    basis: List[int],
    use_bland: bool,
    tol: float,
) -> Optional[int]:
    ratios: List[Tuple[float, int]] = []
    for i in range(T.shape[0] - 1):
        entry = T[i, col]
        if entry > tol:
            ratios.append((T[i, -1] / entry, i))
    if not ratios:
        return None
    if use_bland:
        return min(ratios, key=lambda item: (item[0], basis[item[1]]))[1]
    return min(ratios, key=lambda item: item[0])[1]


def run_pivots(
    T: np.ndarray,
    basis: List[int],
    opts: SolveOptions,
    history: List[TableauSnapshot],
    phase: int = 2,
    forbidden: Optional[Set[int]] = None,
    max_iterations: Optional[int] = None,
) -> Dict[str, Any]:
    """
    Pivot until the objective row has no negative entry (optimal), the
    entering column has no positive entry (unbounded), or the iteration
    budget runs out. A snapshot is appended to `history` after every pivot.
    """

    T = T.copy()
    basis = basis.copy()
    forbidden = set() if forbidden is None else set(forbidden)
    tol = opts.tol
    max_iter = max_iterations if max_iterations is not None else opts.max_iters
    use_bland = opts.pivot_rule == "bland"
    seen = {tuple(basis)}
    iterations = 0

    while True:
        entering = select_entering(T[-1, :], forbidden, use_bland, tol)
        if entering is None:
            return {"status": "optimal", "tableau": T, "basis": basis, "iterations": iterations}

        if iterations >= max_iter:
            logger.warning("phase %d stopped after %d iterations", phase, iterations)
            return {"status": "iteration_limit", "tableau": T, "basis": basis, "iterations": iterations}

        leaving = select_leaving(T, entering, basis, use_bland, tol)
        if leaving is None:
            logger.debug("phase %d: column %d has no positive entry", phase, entering)
            return {
                "status": "unbounded",
                "tableau": T,
                "basis": basis,
                "iterations": iterations,
                "entering": entering,
            }

        logger.debug(
            "phase %d pivot %d: entering column %d, leaving row %d (basic %d), element %.6g",
            phase,
            iterations + 1,
            entering,
            leaving,
            basis[leaving],
            T[leaving, entering],
        )
        pivot(T, leaving, entering)
        basis[leaving] = entering
        iterations += 1
        history.append(
            TableauSnapshot(
                table=T.tolist(),
                basis=list(basis),
                phase=phase,
                entering=entering,
                leaving=leaving,
                iteration=len(history) + 1,
            )
        )

        key = tuple(basis)
        if key in seen and opts.cycle_guard and not use_bland:
            logger.warning("basis %s repeated in phase %d; switching to Bland's rule", list(basis), phase)
            use_bland = True
        seen.add(key)
