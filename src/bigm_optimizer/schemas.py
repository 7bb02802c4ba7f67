import math
from typing import Dict, List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

Optimization = Literal["max", "min"]
Cmp = Literal["<=", ">=", "=="]
VariableKind = Literal["decision", "slack", "excess", "artificial"]
Status = Literal["feasible", "unfeasible", "unbounded", "max_iteration_reached"]

_PREFIXES = {"decision": "x", "slack": "s", "excess": "e", "artificial": "a"}


class Constraint(BaseModel):
    cmp: Cmp
    coefficients: List[float]
    b: float
    name: str | None = None


class Problem(BaseModel):
    optimization: Optimization
    objective_coefficients: List[float]
    constraints: List[Constraint] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_widths(self) -> "Problem":
        width = len(self.objective_coefficients)
        for idx, cons in enumerate(self.constraints):
            if len(cons.coefficients) != width:
                raise ValueError(
                    f"Constraint {self.constraint_name(idx)} has {len(cons.coefficients)} "
                    f"coefficients, expected {width}."
                )
        return self

    @property
    def num_variables(self) -> int:
        return len(self.objective_coefficients)

    def constraint_name(self, idx: int) -> str:
        return self.constraints[idx].name or f"c{idx + 1}"


class Variable(BaseModel):
    """Column identity in a tableau; ids are unique within one tableau."""

    model_config = ConfigDict(frozen=True)

    kind: VariableKind
    id: int

    @property
    def name(self) -> str:
        return f"{_PREFIXES[self.kind]}{self.id}"


class SolveOptions(BaseModel):
    big_m: float = 1e9
    max_iterations: int = Field(default=15, gt=0)
    tol: float = Field(default=1e-6, gt=0)


class Solution(BaseModel):
    status: Status
    objective_value: Optional[float] = None
    x: Dict[int, float] | None = None
    iterations: int = 0
    message: str = ""

    def matches(self, other: "Solution", tol: float = 1e-6) -> bool:
        """
        Compare two solutions by status and, when both are feasible, by objective
        value and per-variable values looked up by id (basis order is irrelevant).
        """

        if self.status != other.status:
            return False
        if self.status != "feasible":
            return True
        if not math.isclose(self.objective_value, other.objective_value, rel_tol=tol, abs_tol=tol):
            return False
        mine = self.x or {}
        theirs = other.x or {}
        if mine.keys() != theirs.keys():
            return False
        return all(math.isclose(mine[k], theirs[k], rel_tol=tol, abs_tol=tol) for k in mine)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Solution):
            return NotImplemented
        return self.matches(other)
