#!/usr/bin/env python3
import argparse
import json
import random
from pathlib import Path
from typing import List, Optional, Tuple

from tableau_simplex.schemas import Constraint, ObjectiveFunction


def generate_random_lp(
    num_vars: int, num_constraints: int, seed: Optional[int] = None
) -> Tuple[ObjectiveFunction, List[Constraint]]:
    """Random bounded max problem with <= rows and positive data (origin is feasible)."""
    rng = random.Random(seed)
    constraints: List[Constraint] = []
    for j in range(num_constraints):
        constraints.append(
            Constraint(
                name=f"c{j}",
                coefficients=[rng.uniform(0.5, 5.0) for _ in range(num_vars)],
                relation="<=",
                rhs=rng.uniform(num_vars * 2.0, num_vars * 6.0),
            )
        )
    objective = ObjectiveFunction(
        coefficients=[rng.uniform(1.0, 4.0) for _ in range(num_vars)],
        sense="max",
    )
    return objective, constraints


def main() -> None:
    parser = argparse.ArgumentParser(description="Generate random feasible LP instances.")
    parser.add_argument("--vars", type=int, default=3, help="Number of variables")
    parser.add_argument("--constraints", type=int, default=3, help="Number of constraints")
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--count", type=int, default=1, help="Number of instances")
    parser.add_argument("--out", type=Path, default=None, help="Optional output file")
    args = parser.parse_args()

    payload = []
    for idx in range(args.count):
        objective, constraints = generate_random_lp(args.vars, args.constraints, (args.seed or 0) + idx)
        payload.append(
            {
                "objective": objective.model_dump(),
                "constraints": [cons.model_dump() for cons in constraints],
            }
        )

    if args.out:
        Path(args.out).write_text(json.dumps(payload, indent=2))
    else:
        print(json.dumps(payload, indent=2))


if __name__ == "__main__":
    main()
