#!/usr/bin/env python3
import json
import time
from pathlib import Path

from bigm_optimizer.lp.simplex import simplex_solve
from bigm_optimizer.schemas import Problem, SolveOptions
from scripts.generate_instances import generate_random_lp


def load_example(name: str) -> Problem:
    path = Path(__file__).resolve().parent.parent / "examples" / name
    return Problem.model_validate(json.loads(path.read_text()))


def main() -> None:
    # Random instances can need more pivots than the default cap.
    opts = SolveOptions(max_iterations=200)
    examples_dir = Path(__file__).resolve().parent.parent / "examples"
    cases = [(f"examples/{path.name}", load_example(path.name)) for path in sorted(examples_dir.glob("*.json"))]
    for seed in range(3):
        cases.append((f"random-{seed}", generate_random_lp(3, 3, seed)))

    print("name,status,objective,iterations,time_ms")
    for name, problem in cases:
        start = time.perf_counter()
        solution = simplex_solve(problem, opts)
        elapsed_ms = (time.perf_counter() - start) * 1000
        print(
            f"{name},{solution.status},{solution.objective_value},{solution.iterations},{elapsed_ms:.2f}"
        )


if __name__ == "__main__":
    main()
