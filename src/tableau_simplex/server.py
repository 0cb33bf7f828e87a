from __future__ import annotations

import os
from typing import List

from mcp.server.fastmcp import FastMCP
from mcp.server.transport_security import TransportSecuritySettings

from .lp.reference import cross_check
from .lp.simplex import solve
from .schemas import Constraint, ObjectiveFunction, SolveOptions

app = FastMCP("Tableau Simplex")


@app.tool()
def solve_tableau(
    objective: ObjectiveFunction,
    constraints: List[Constraint],
    options: SolveOptions | None = None,
) -> dict:
    """Solve a linear program and return every intermediate tableau plus the report."""
    result = solve(objective, constraints, options or SolveOptions())
    if result is None:
        return {"status": "empty", "message": "No constraints were given.", "history": []}
    return result.model_dump()


@app.tool()
def compare_with_highs(objective: ObjectiveFunction, constraints: List[Constraint]) -> dict:
    """Solve with both the tableau solver and SciPy HiGHS for comparison."""
    result = solve(objective, constraints)
    if result is None:
        return {"status": "empty", "message": "No constraints were given."}
    status, value, x = cross_check(objective, constraints)
    return {
        "tableau": result.report.model_dump(),
        "highs": {"status": status, "objective_value": value, "x": x},
    }


def main() -> None:
    transport = os.environ.get("MCP_TRANSPORT", "stdio")
    if transport == "stdio":
        app.run(transport="stdio")
        return

    app.settings.host = os.environ.get("HOST", "0.0.0.0")
    app.settings.port = int(os.environ.get("PORT", "8081"))
    app.settings.streamable_http_path = "/mcp"
    app.settings.transport_security = TransportSecuritySettings(
        enable_dns_rebinding_protection=False,
        allowed_hosts=["*"],
        allowed_origins=["*"],
    )
    app.run(transport="streamable-http")


if __name__ == "__main__":
    main()
