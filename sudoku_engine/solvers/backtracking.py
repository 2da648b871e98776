"""Backtracking search with the most-constrained-cell (MRV) heuristic."""

from __future__ import annotations
import random
from typing import List, Optional, Sequence

from .base_solver import BaseSolver, Grid, SolverStats
from ..core.board import Board
from ..core.constants import CELLS, DIGITS, PEERS, SIZE


def search(
    values: Sequence[int],
    limit: int = 1,
    rng: Optional[random.Random] = None,
    stats: Optional[SolverStats] = None,
) -> List[List[int]]:
    """
    Find up to ``limit`` solutions of a flat 81-digit grid.

    At each node the empty cell with the fewest candidates is chosen (ties
    go to the lowest row, then column). An empty cell without candidates
    ends the branch. Candidates are tried in ascending order, or in a
    shuffled order when ``rng`` is given. The search stops as soon as
    ``limit`` solutions have been found, so it never enumerates more than
    it needs.

    Args:
        values: 81 digits in row-major order, 0 for empty.
        limit: Stop after this many solutions.
        rng: Optional random generator used to shuffle candidate order.
        stats: Optional stats object updated with search counters.

    Returns:
        The solutions found, each a flat list of 81 digits.
    """
    if len(values) != CELLS:
        raise ValueError(f"Grid must have {CELLS} values, got {len(values)}")
    solutions: List[List[int]] = []

    def backtrack(grid: List[int]) -> bool:
        """Returns True once the limit is reached."""
        if stats is not None:
            stats.iterations += 1

        best = -1
        best_cands: List[int] = []
        for i in range(CELLS):
            if grid[i]:
                continue
            used = {grid[p] for p in PEERS[i]}
            cands = [d for d in DIGITS if d not in used]
            if not cands:
                if stats is not None:
                    stats.backtracks += 1
                return False
            if best < 0 or len(cands) < len(best_cands):
                best, best_cands = i, cands

        if best < 0:
            solutions.append(grid)
            return len(solutions) >= limit

        if stats is not None:
            stats.nodes_explored += 1
        if rng is not None:
            rng.shuffle(best_cands)

        for digit in best_cands:
            trial = list(grid)
            trial[best] = digit
            if backtrack(trial):
                return True
        return False

    if _has_duplicate(values):
        return solutions
    backtrack(list(values))
    return solutions


def _has_duplicate(values: Sequence[int]) -> bool:
    return any(values[i] and any(values[p] == values[i] for p in PEERS[i]) for i in range(CELLS))


def _given_values(board: Board) -> List[int]:
    return [cell.value if cell.given else 0 for cell in board]


def _to_rows(flat: List[int]) -> Grid:
    return [flat[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]


def solve(board: Board) -> Optional[Grid]:
    """
    Solve a puzzle from its given cells.

    Values the player entered are ignored, so the result always comes from
    the puzzle's starting state.

    Returns:
        The solved 9x9 grid, or None when the givens admit no solution.
    """
    found = search(_given_values(board), limit=1)
    return _to_rows(found[0]) if found else None


def count_solutions(board: Board, limit: int = 2) -> int:
    """
    Count the solutions of a puzzle's givens, stopping at ``limit``.

    Args:
        board: The puzzle board.
        limit: Maximum solutions to count before stopping.

    Returns:
        Number of solutions found (up to limit).
    """
    return len(search(_given_values(board), limit=limit))


def has_unique_solution(board: Board) -> bool:
    """Check if a puzzle has exactly one solution."""
    return count_solutions(board, limit=2) == 1


def random_solved_grid(rng: random.Random) -> Grid:
    """Build a random complete grid by shuffled backtracking from an empty board."""
    found = search([0] * CELLS, limit=1, rng=rng)
    if not found:
        raise RuntimeError("Failed to create solved grid")
    return _to_rows(found[0])


class BacktrackingSolver(BaseSolver):
    """
    Recursive backtracking solver.

    Features:
    - Minimum Remaining Values (MRV) heuristic for cell selection
    - Ascending candidate order for deterministic results
    - Search counters for performance analysis
    """

    name = "MRV+Backtracking"

    def _solve(self, values: List[int]) -> Optional[List[int]]:
        found = search(values, limit=1, stats=self.stats)
        return found[0] if found else None
