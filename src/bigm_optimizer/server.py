from __future__ import annotations

import logging
import os

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .schemas import Problem, SolveOptions
from .lp.simplex import simplex_solve
from .lp.parser import parse_problem
from .lp.utils import analyze_infeasibility_model, format_solution

app = FastMCP("Big-M Optimizer")


@app.tool()
def solve_lp(problem: Problem, options: SolveOptions | None = None) -> dict:
    """Solve a linear program with the Big-M simplex and return the solution as JSON."""
    opts = options or SolveOptions()
    return simplex_solve(problem, opts).model_dump()


@app.tool()
def parse_problem_text(spec: str) -> dict:
    """Parse a text LP such as 'maximize 4x0 + 5x1 subject to 2x0 + x1 <= 8' into JSON."""
    return parse_problem(spec).model_dump()


@app.tool()
def solve_problem_text(spec: str, options: SolveOptions | None = None) -> dict:
    """Parse a text LP, solve it and return the problem, the solution and a readable summary."""
    problem = parse_problem(spec)
    solution = simplex_solve(problem, options or SolveOptions())
    return {
        "problem": problem.model_dump(),
        "solution": solution.model_dump(),
        "summary": format_solution(solution),
    }


@app.tool()
def analyze_infeasibility(problem: Problem, options: SolveOptions | None = None) -> dict:
    """Return basic infeasibility diagnostics (IIS heuristic, conflicting constraints)."""
    return analyze_infeasibility_model(problem, options)


def main() -> None:
    logging.basicConfig(level=os.environ.get("LOG_LEVEL", "INFO").upper())

    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio":
        app.run(transport="stdio")
    else:
        port = int(os.environ.get("PORT", "8081"))
        app.settings.host = "0.0.0.0"
        app.settings.port = port
        app.settings.streamable_http_path = "/mcp"
        app.settings.transport_security = TransportSecuritySettings(
            enable_dns_rebinding_protection=False,
            allowed_hosts=["*"],
            allowed_origins=["*"],
        )
        app.run(transport="streamable-http")


if __name__ == "__main__":
    main()
