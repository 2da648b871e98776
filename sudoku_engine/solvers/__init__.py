"""Solvers module for Sudoku puzzles."""

from .base_solver import BaseSolver, Grid, SolverStats
from .backtracking import (
    BacktrackingSolver,
    count_solutions,
    has_unique_solution,
    random_solved_grid,
    search,
    solve,
)

__all__ = [
    "BaseSolver",
    "Grid",
    "SolverStats",
    "BacktrackingSolver",
    "count_solutions",
    "has_unique_solution",
    "random_solved_grid",
    "search",
    "solve",
]
