import json
from pathlib import Path

import pytest
from pydantic import ValidationError

from tableau_simplex import Constraint, ObjectiveFunction, SolveOptions, solve


def load_example(name: str):
    data = json.loads(Path(__file__).parent.parent.joinpath("examples", name).read_text())
    objective = ObjectiveFunction.model_validate(data["objective"])
    constraints = [Constraint.model_validate(item) for item in data["constraints"]]
    return objective, constraints


def make_diet_lp():
    objective = ObjectiveFunction(coefficients=[3.0, 2.0], sense="min")
    constraints = [
        Constraint(name="c1", coefficients=[1.0, 2.0], relation=">=", rhs=8.0),
        Constraint(name="c2", coefficients=[3.0, 1.0], relation=">=", rhs=6.0),
    ]
    return objective, constraints


def make_wyndor():
    objective = ObjectiveFunction(coefficients=[3.0, 5.0], sense="max")
    constraints = [
        Constraint(coefficients=[1.0, 0.0], relation="<=", rhs=4.0),
        Constraint(coefficients=[0.0, 2.0], relation="<=", rhs=12.0),
        Constraint(coefficients=[3.0, 2.0], relation="<=", rhs=18.0),
    ]
    return objective, constraints


def assert_canonical(snapshot, tol=1e-9):
    for row, col in enumerate(snapshot.basis):
        column = [line[col] for line in snapshot.table]
        assert column[row] == pytest.approx(1.0, abs=tol)
        for other, value in enumerate(column):
            if other != row:
                assert value == pytest.approx(0.0, abs=tol)


def test_textbook_maximum():
    objective, constraints = load_example("textbook_max.json")
    result = solve(objective, constraints)

    assert result.report.status == "optimal"
    assert result.report.objective_value == pytest.approx(20.0)
    assert result.report.solution == pytest.approx([0.0, 4.0], abs=1e-9)
    assert result.report.alternative_optima is False
    assert result.report.iterations == len(result.history)
    # a phase 1 was needed for the x1 + 3x2 >= 3 row
    assert result.history[0].phase == 1
    assert result.history[-1].phase == 2
    assert len(result.history[-1].table[0]) == 8


def test_optimality_certificate_and_canonical_history():
    objective, constraints = load_example("textbook_max.json")
    result = solve(objective, constraints)

    for snapshot in result.history:
        assert_canonical(snapshot)
    final_objective_row = result.history[-1].table[-1][:-1]
    assert min(final_objective_row) >= -1e-9


def test_minimisation_reports_true_objective_value():
    objective, constraints = make_diet_lp()
    result = solve(objective, constraints)

    assert result.report.status == "optimal"
    assert result.report.objective_value == pytest.approx(9.6, rel=1e-6)
    assert result.report.solution[0] == pytest.approx(0.8, rel=1e-6)
    assert result.report.solution[1] == pytest.approx(3.6, rel=1e-6)


def test_feasible_origin_skips_phase_one():
    objective, constraints = make_wyndor()
    result = solve(objective, constraints)
    single_phase = solve(objective, constraints, SolveOptions(two_phase=False))

    assert result.report.status == "optimal"
    assert result.report.objective_value == pytest.approx(36.0)
    assert result.report.solution == pytest.approx([2.0, 6.0])
    assert [snap.phase for snap in result.history] == [2, 2]
    assert result.model_dump() == single_phase.model_dump()


def test_solve_is_deterministic():
    objective, constraints = load_example("textbook_max.json")
    first = solve(objective, constraints)
    second = solve(objective, constraints)

    assert first.model_dump() == second.model_dump()


def test_alternative_optima_are_flagged():
    # the objective is parallel to the x1 + 3x2 >= 3 face
    objective = ObjectiveFunction(coefficients=[1.0, 3.0], sense="min")
    constraints = [
        Constraint(coefficients=[1.0, 1.0], relation="<=", rhs=8.0),
        Constraint(coefficients=[1.0, 3.0], relation="<=", rhs=6.0),
        Constraint(coefficients=[1.0, 3.0], relation=">=", rhs=3.0),
        Constraint(coefficients=[1.0, 0.0], relation=">=", rhs=0.0),
        Constraint(coefficients=[0.0, 1.0], relation=">=", rhs=0.0),
    ]
    result = solve(objective, constraints)

    assert result.report.status == "optimal_with_alternatives"
    assert result.report.alternative_optima is True
    assert result.report.objective_value == pytest.approx(3.0)
    x1, x2 = result.report.solution
    assert x1 + 3 * x2 == pytest.approx(3.0)


def test_unbounded_objective():
    objective = ObjectiveFunction(coefficients=[1.0, 1.0], sense="max")
    constraints = [Constraint(coefficients=[1.0, -1.0], relation="<=", rhs=1.0)]
    result = solve(objective, constraints)

    assert result.report.status == "unbounded"
    assert result.report.objective_value is None
    assert result.report.solution is None
    assert len(result.history) == 1
    assert "unbounded" in result.report.message


def test_unbounded_detected_in_first_iteration():
    objective = ObjectiveFunction(coefficients=[0.0, 1.0], sense="max")
    constraints = [Constraint(coefficients=[1.0, -1.0], relation="<=", rhs=1.0)]
    result = solve(objective, constraints)

    assert result.report.status == "unbounded"
    assert result.report.iterations == 0
    assert result.history == []


def test_infeasible_problem():
    objective = ObjectiveFunction(coefficients=[1.0], sense="max")
    constraints = [
        Constraint(coefficients=[1.0], relation="<=", rhs=1.0),
        Constraint(coefficients=[1.0], relation=">=", rhs=2.0),
    ]
    result = solve(objective, constraints)

    assert result.report.status == "infeasible"
    assert result.report.objective_value is None
    assert [snap.phase for snap in result.history] == [1]


def test_equality_constraint():
    objective = ObjectiveFunction(coefficients=[1.0, 2.0], sense="max")
    constraints = [
        Constraint(coefficients=[1.0, 1.0], relation="==", rhs=4.0),
        Constraint(coefficients=[1.0, 0.0], relation="<=", rhs=3.0),
    ]
    result = solve(objective, constraints)

    assert result.report.status == "optimal"
    assert result.report.objective_value == pytest.approx(8.0)
    assert result.report.solution == pytest.approx([0.0, 4.0], abs=1e-9)
    assert [snap.phase for snap in result.history] == [1, 1, 2]
    assert len(result.history[0].table[0]) == 6
    assert len(result.history[-1].table[0]) == 5


def test_redundant_equality_row_is_removed():
    objective = ObjectiveFunction(coefficients=[1.0, 1.0], sense="min")
    constraints = [
        Constraint(coefficients=[1.0, 1.0], relation="==", rhs=2.0),
        Constraint(coefficients=[2.0, 2.0], relation="==", rhs=4.0),
    ]
    result = solve(objective, constraints)

    assert result.report.status in ("optimal", "optimal_with_alternatives")
    assert result.report.objective_value == pytest.approx(2.0)
    assert "redundant" in result.report.message


def test_iteration_limit_reported():
    objective, constraints = make_wyndor()
    result = solve(objective, constraints, SolveOptions(max_iters=1))

    assert result.report.status == "iteration_limit"
    assert result.report.objective_value is None
    assert len(result.history) == 1


def test_empty_constraint_set_is_a_no_op():
    objective = ObjectiveFunction(coefficients=[1.0, 1.0], sense="max")
    assert solve(objective, []) is None


def test_malformed_input_is_reported_not_raised():
    objective = ObjectiveFunction(coefficients=[1.0, 1.0], sense="max")
    constraints = [Constraint(coefficients=[1.0, 1.0, 1.0], relation="<=", rhs=4.0)]
    result = solve(objective, constraints)

    assert result.report.status == "invalid"
    assert result.history == []
    assert "expected 2" in result.report.message


def test_models_are_validated_and_frozen():
    with pytest.raises(ValidationError):
        ObjectiveFunction(coefficients=[], sense="max")
    with pytest.raises(ValidationError):
        Constraint(coefficients=[1.0], relation="<>", rhs=1.0)

    cons = Constraint(coefficients=[1.0], relation="<=", rhs=1.0)
    with pytest.raises(ValidationError):
        cons.rhs = 2.0


def test_history_snapshots_are_independent_copies():
    objective, constraints = make_wyndor()
    result = solve(objective, constraints)

    assert result.history[0].table != result.history[1].table
    assert result.history[0].basis == [2, 1, 4]


def make_bounded_min_lp():
    objective = ObjectiveFunction(coefficients=[2.0, 1.0], sense="min")
    constraints = [
        Constraint(coefficients=[4.0, 6.0], relation=">=", rhs=20.0),
        Constraint(coefficients=[2.0, -5.0], relation=">=", rhs=-27.0),
        Constraint(coefficients=[7.0, 5.0], relation="<=", rhs=63.0),
        Constraint(coefficients=[3.0, -2.0], relation="<=", rhs=23.0),
        Constraint(coefficients=[0.0, 1.0], relation=">=", rhs=0.0),
    ]
    return objective, constraints


def test_bounded_minimisation_with_mixed_signs():
    objective, constraints = make_bounded_min_lp()
    result = solve(objective, constraints)

    assert result.report.status == "optimal"
    assert result.report.objective_value == pytest.approx(10.0 / 3.0)
    assert result.report.solution == pytest.approx([0.0, 10.0 / 3.0], abs=1e-9)


def test_single_phase_stops_when_min_row_has_no_negative_entry():
    objective, constraints = make_bounded_min_lp()
    result = solve(objective, constraints, SolveOptions(two_phase=False))

    assert result.report.status == "optimal"
    assert result.report.objective_value == 0.0
    assert result.report.solution == [0.0, 0.0]
    assert result.report.iterations == 0
    assert result.history == []


def test_coefficients_cannot_be_mutated_in_place():
    cons = Constraint(coefficients=[1.0], relation="<=", rhs=1.0)
    objective = ObjectiveFunction(coefficients=[1.0, 2.0], sense="max")

    assert isinstance(cons.coefficients, tuple)
    with pytest.raises(AttributeError):
        cons.coefficients.append(5.0)
    with pytest.raises(TypeError):
        objective.coefficients[0] = 3.0


def test_unbounded_auxiliary_problem_is_not_reported_infeasible(monkeypatch):
    from tableau_simplex.lp import simplex as simplex_module

    real_run_pivots = simplex_module.run_pivots

    def fake_run_pivots(T, basis, opts, history, phase=2, **kwargs):
        if phase == 1:
            return {"status": "unbounded", "tableau": T, "basis": basis, "iterations": 0, "entering": 0}
        return real_run_pivots(T, basis, opts, history, phase=phase, **kwargs)

    monkeypatch.setattr(simplex_module, "run_pivots", fake_run_pivots)
    objective, constraints = load_example("textbook_max.json")
    result = solve(objective, constraints)

    assert result.report.status == "unbounded"
    assert "Phase I" in result.report.message
