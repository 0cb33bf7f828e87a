import logging
from typing import Any, Dict, List, Optional, Sequence, Set

import numpy as np

from .builder import (
    build_tableau,
    equality_columns,
    install_objective,
    prepare_feasible_tableau,
    remove_artificials,
)
from .extract import extract_report
from .pivot import run_pivots
from ..schemas import (
    Constraint,
    ObjectiveFunction,
    SolveOptions,
    SolveReport,
    SolveResult,
    TableauSnapshot,
)

logger = logging.getLogger(__name__)


def solve(
    objective: ObjectiveFunction,
    constraints: Sequence[Constraint],
    options: Optional[SolveOptions] = None,
) -> Optional[SolveResult]:
    """
    Tableau simplex with an optional phase 1 for starting bases that are not
    feasible. Returns None when there are no constraints; every other outcome,
    including malformed input, is reported through `SolveResult.report`.
    """

    opts = options or SolveOptions()
    if not constraints:
        logger.info("no constraints given; nothing to solve")
        return None

    try:
        T, basis = build_tableau(objective, constraints)
    except ValueError as exc:
        logger.info("rejected problem: %s", exc)
        return SolveResult(history=[], report=SolveReport(status="invalid", message=str(exc)))

    n = len(objective.coefficients)
    forbidden = equality_columns(constraints, n)
    history: List[TableauSnapshot] = []
    iterations = 0
    notes: List[str] = []

    if opts.two_phase:
        phase1 = _phase_I(T, basis, forbidden, opts, history)
        iterations += phase1["iterations"]
        if phase1["status"] == "iteration_limit":
            return _finish(history, SolveReport(
                status="iteration_limit",
                iterations=iterations,
                message="Hit iteration limit in Phase I.",
            ))
        if phase1["status"] == "infeasible":
            return _finish(history, SolveReport(
                status="infeasible",
                iterations=iterations,
                message="No feasible solution: artificial variables remain positive.",
            ))
        if phase1["status"] == "unbounded":
            logger.warning("phase 1 auxiliary problem reported unbounded")
            return _finish(history, SolveReport(
                status="unbounded",
                iterations=iterations,
                message="Phase I detected unbounded auxiliary problem (numerical breakdown).",
            ))
        T, basis = phase1["tableau"], phase1["basis"]
        if phase1["dropped"]:
            notes.append(f"Removed redundant constraint rows {phase1['dropped']}.")

    phase2 = run_pivots(
        T,
        basis,
        opts,
        history,
        phase=2,
        forbidden=forbidden,
        max_iterations=max(opts.max_iters - iterations, 0),
    )
    iterations += phase2["iterations"]

    if phase2["status"] == "unbounded":
        return _finish(history, SolveReport(
            status="unbounded",
            iterations=iterations,
            message="Objective is unbounded; no optimal solution.",
        ))
    if phase2["status"] == "iteration_limit":
        return _finish(history, SolveReport(
            status="iteration_limit",
            iterations=iterations,
            message="Hit iteration limit in Phase II.",
        ))

    report = extract_report(
        phase2["tableau"],
        phase2["basis"],
        n,
        objective.sense,
        iterations,
        forbidden=forbidden,
        tol=opts.tol,
    )
    if notes:
        report.message = " ".join(filter(None, [report.message] + notes))
    return _finish(history, report)


def _phase_I(
    T: np.ndarray,
    basis: List[int],
    forbidden: Set[int],
    opts: SolveOptions,
    history: List[TableauSnapshot],
) -> Dict[str, Any]:
    P, start_basis, artificial = prepare_feasible_tableau(T, basis, opts.tol)
    if not artificial:
        return {"status": "feasible", "tableau": P, "basis": start_basis, "iterations": 0, "dropped": []}

    result = run_pivots(
        P,
        start_basis,
        opts,
        history,
        phase=1,
        forbidden=forbidden,
        max_iterations=opts.max_iters,
    )
    if result["status"] != "optimal":
        return result

    # minimisation row: RHS holds minus the artificial sum
    artificial_sum = -float(result["tableau"][-1, -1])
    scale = max(1.0, float(np.abs(P[:-1, -1]).max()))
    if artificial_sum > opts.tol * scale:
        logger.info("phase 1 ended with artificial sum %.6g", artificial_sum)
        return {"status": "infeasible", "iterations": result["iterations"]}

    reduced, phase2_basis, dropped = remove_artificials(
        result["tableau"], result["basis"], artificial, opts.tol
    )
    return {
        "status": "feasible",
        "tableau": install_objective(reduced, phase2_basis, T[-1, :]),
        "basis": phase2_basis,
        "iterations": result["iterations"],
        "dropped": dropped,
    }


def _finish(history: List[TableauSnapshot], report: SolveReport) -> SolveResult:
    logger.info(
        "simplex finished: status=%s objective=%s iterations=%d",
        report.status,
        report.objective_value,
        report.iterations,
    )
    return SolveResult(history=history, report=report)
