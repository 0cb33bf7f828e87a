#!/usr/bin/env python3
import json
import time
from pathlib import Path
from typing import List, Tuple

from tableau_simplex.lp.reference import cross_check
from tableau_simplex.lp.simplex import solve
from tableau_simplex.schemas import Constraint, ObjectiveFunction, SolveOptions
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> Tuple[ObjectiveFunction, List[Constraint]]:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    data = json.loads(path.read_text())
    objective = ObjectiveFunction.model_validate(data["objective"])
    constraints = [Constraint.model_validate(item) for item in data["constraints"]]
    return objective, constraints


def main() -> None:
    opts = SolveOptions()
    cases = [("examples/textbook_max.json", load_example("textbook_max.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(3, 3, seed)))

    print("name,status,objective,highs_objective,iterations,pivots,time_ms")
    for name, (objective, constraints) in cases:
        start = time.perf_counter()
        result = solve(objective, constraints, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        _, highs_value, _ = cross_check(objective, constraints)
        report = result.report
        print(
            f"{name},{report.status},{report.objective_value},{highs_value},"
            f"{report.iterations},{len(result.history)},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
