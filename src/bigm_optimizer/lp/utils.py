from typing import Any, Dict, List

from ..schemas import Problem, Solution, SolveOptions


def format_solution(solution: Solution) -> str:
    lines = [f"Status: {solution.status}"]
    if solution.status != "feasible":
        if solution.message:
            lines.append(solution.message)
        return "\n".join(lines)

    lines.append(f"Objective: {solution.objective_value:g}")
    for idx, value in sorted((solution.x or {}).items()):
        lines.append(f"x{idx} = {value:g}")
    lines.append(f"Iterations: {solution.iterations}")
    return "\n".join(lines)


def check_solution(problem: Problem, solution: Solution, tol: float = 1e-6) -> List[str]:
    """
    Plug a feasible solution's assignment back into the problem and return the
    names of every violated constraint (and negative variable). Empty means valid.
    """

    if solution.status != "feasible" or solution.x is None:
        raise ValueError(f"Cannot check a solution with status '{solution.status}'.")

    values = [solution.x.get(idx, 0.0) for idx in range(problem.num_variables)]
    violations: List[str] = [f"x{idx}" for idx, value in enumerate(values) if value < -tol]

    for idx, cons in enumerate(problem.constraints):
        lhs = sum(coef * value for coef, value in zip(cons.coefficients, values))
        scale = max(1.0, abs(cons.b))
        if cons.cmp == "<=":
            ok = lhs <= cons.b + tol * scale
        elif cons.cmp == ">=":
            ok = lhs >= cons.b - tol * scale
        else:
            ok = abs(lhs - cons.b) <= tol * scale
        if not ok:
            violations.append(problem.constraint_name(idx))
    return violations


def analyze_infeasibility_model(problem: Problem, opts: SolveOptions | None = None) -> Dict[str, Any]:
    """Very small IIS-style heuristic: drop each constraint and re-solve."""

    from .simplex import simplex_solve  # local import to avoid cycle

    opts = opts or SolveOptions()
    solution = simplex_solve(problem, opts)

    if solution.status != "unfeasible":
        return {
            "status": solution.status,
            "message": solution.message or "Problem is not unfeasible.",
            "conflicting_constraints": [],
            "undetermined_constraints": [],
            "suggestions": [],
        }

    conflicts: List[str] = []
    undetermined: List[str] = []
    for idx in range(len(problem.constraints)):
        sub_problem = problem.model_copy(deep=True)
        sub_problem.constraints.pop(idx)
        sub_solution = simplex_solve(sub_problem, opts)
        if sub_solution.status in ("feasible", "unbounded"):
            conflicts.append(problem.constraint_name(idx))
        elif sub_solution.status == "max_iteration_reached":
            undetermined.append(problem.constraint_name(idx))

    suggestions = []
    if conflicts:
        suggestions.append("Relax or inspect the conflicting constraints above.")
    else:
        suggestions.append("Consider relaxing right-hand sides or checking for contradictory requirements.")

    message = "Detected infeasibility; listed constraints critical to infeasibility."
    if undetermined:
        message += (
            f" {len(undetermined)} re-solve(s) hit the iteration limit ({opts.max_iterations});"
            " those constraints are listed as undetermined."
        )
        suggestions.append("Raise max_iterations to classify the undetermined constraints.")

    return {
        "status": "unfeasible",
        "message": message,
        "conflicting_constraints": conflicts,
        "undetermined_constraints": undetermined,
        "suggestions": suggestions,
    }
