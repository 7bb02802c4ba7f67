import re
from typing import Dict, List, Tuple

from ..schemas import Constraint, Problem

_TOKEN_SPLIT = re.compile(r",|;|\band\b", re.IGNORECASE)
_COMPARATOR = re.compile(r"(<=|>=|==|=)")
_TERM_PATTERN = re.compile(r"([+-]?\s*\d*\.?\d*)\s*([A-Za-z_][\w]*)")
_NUMBER_PATTERN = re.compile(r"[+-]?\s*\d+(?:\.\d+)?")
_VARIABLE_NAME = re.compile(r"^x(\d+)$")
_NON_NEGATIVE = re.compile(r"^x\d+\s*>=\s*0(?:\.0*)?$")
_MULTI_BOUND = re.compile(
    r"(?<![\w.])(x\d+(?:\s*,\s*x\d+)+)\s*(<=|>=|==|=)\s*([+-]?\d+(?:\.\d+)?)(?![\w.])"
)


def parse_problem(spec: str) -> Problem:
    """
    Small rule-based parser for specs like:
      "maximize 4x0 + 5x1 subject to 2x0 + x1 <= 8, x0 + 2x1 <= 7, x1 <= 3"
    Variables are named x0, x1, ...; non-negativity is implicit, so bare
    "x1 >= 0" segments are ignored. A listed bound such as "x0, x1 >= 2"
    becomes one constraint per variable.
    """

    if not spec or not spec.strip():
        raise ValueError("Specification is empty.")

    normalized = " ".join(spec.replace("\n", " ").split())
    pieces = re.split(r"subject to|such that|s\.t\.", normalized, flags=re.IGNORECASE)
    objective_part = pieces[0].strip()
    constraints_part = pieces[1].strip() if len(pieces) > 1 else ""

    match = re.match(r"(maximize|minimize|max|min)\s*(.*)", objective_part, flags=re.IGNORECASE)
    if not match:
        raise ValueError("Objective must start with 'maximize' or 'minimize'.")
    optimization = "max" if match.group(1).lower().startswith("max") else "min"
    objective_str = match.group(2).strip()
    if not objective_str:
        raise ValueError("Objective expression is missing.")

    objective_terms, objective_constant = _parse_linear_expr(objective_str)
    if abs(objective_constant) > 1e-12:
        raise ValueError("Objective constants are not supported.")
    highest = max(objective_terms, default=-1)

    rows: List[Tuple[str, Dict[int, float], float, str]] = []
    constraints_part = _MULTI_BOUND.sub(_expand_bound, constraints_part)
    tokens = [tok.strip() for tok in _TOKEN_SPLIT.split(constraints_part) if tok.strip()]
    for token in tokens:
        if _NON_NEGATIVE.match(token):
            continue

        comp_match = _COMPARATOR.search(token)
        if not comp_match:
            raise ValueError(f"Could not parse constraint segment '{token}'.")
        cmp = comp_match.group(1)
        lhs_str = token[: comp_match.start()].strip()
        rhs_str = token[comp_match.end() :].strip()
        if not lhs_str or not rhs_str:
            raise ValueError(f"Incomplete constraint expression '{token}'.")
        terms, constant = _parse_linear_expr(lhs_str)
        try:
            rhs_value = float(rhs_str.replace(" ", ""))
        except ValueError as exc:
            raise ValueError(f"Right-hand side '{rhs_str}' is not numeric.") from exc
        cmp_norm = "==" if cmp == "=" else cmp
        rows.append((f"c{len(rows) + 1}", terms, rhs_value - constant, cmp_norm))
        highest = max(highest, max(terms, default=-1))

    width = highest + 1
    objective = [objective_terms.get(idx, 0.0) for idx in range(width)]
    constraints = [
        Constraint(
            name=name,
            cmp=cmp,  # type: ignore[arg-type]
            coefficients=[terms.get(idx, 0.0) for idx in range(width)],
            b=rhs,
        )
        for name, terms, rhs, cmp in rows
    ]
    return Problem(optimization=optimization, objective_coefficients=objective, constraints=constraints)


def _parse_linear_expr(expr_str: str) -> Tuple[Dict[int, float], float]:
    expr_clean = expr_str.replace("*", "")
    coeffs: Dict[int, float] = {}
    spans: List[Tuple[int, int]] = []

    for match in _TERM_PATTERN.finditer(expr_clean):
        coef_text = match.group(1).replace(" ", "")
        var_match = _VARIABLE_NAME.match(match.group(2))
        if not var_match:
            raise ValueError(f"Variable '{match.group(2)}' must be named x0, x1, ...")
        if coef_text in ("", "+"):
            coef = 1.0
        elif coef_text == "-":
            coef = -1.0
        else:
            coef = float(coef_text)
        idx = int(var_match.group(1))
        coeffs[idx] = coeffs.get(idx, 0.0) + coef
        spans.append(match.span())

    remaining = list(expr_clean)
    for start, end in spans:
        for pos in range(start, end):
            remaining[pos] = " "
    remaining_str = "".join(remaining)

    constant = 0.0
    for num_match in _NUMBER_PATTERN.finditer(remaining_str):
        text = num_match.group(0).replace(" ", "")
        if text:
            constant += float(text)

    return coeffs, constant


def _expand_bound(match: "re.Match[str]") -> str:
    names, cmp, rhs = match.groups()
    return ", ".join(f"{name.strip()} {cmp} {rhs}" for name in names.split(","))
