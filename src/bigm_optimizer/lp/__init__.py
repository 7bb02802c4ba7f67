"""Big-M simplex building blocks."""

from .tableau import Tableau, standardize
from .simplex import run, simplex_solve
from .parser import parse_problem

__all__ = ["Tableau", "standardize", "run", "simplex_solve", "parse_problem"]
