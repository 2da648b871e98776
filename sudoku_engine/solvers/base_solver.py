"""Base solver interface and common utilities."""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional, Dict, Any, List
import time
import tracemalloc

from ..core.board import Board
from ..core.constants import SIZE


Grid = List[List[int]]


@dataclass
class SolverStats:
    """Statistics from a solver run."""
    # Core metrics
    solved: bool = False
    time_seconds: float = 0.0
    memory_bytes: int = 0
    iterations: int = 0

    # Search metrics
    backtracks: int = 0
    nodes_explored: int = 0

    algorithm: str = ""
    extra: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert stats to dictionary."""
        return {
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "memory_bytes": self.memory_bytes,
            "iterations": self.iterations,
            "backtracks": self.backtracks,
            "nodes_explored": self.nodes_explored,
            "algorithm": self.algorithm,
            **self.extra
        }


class BaseSolver(ABC):
    """Abstract base class for Sudoku solvers."""

    name: str = "BaseSolver"

    def __init__(self, track_memory: bool = False):
        self.track_memory = track_memory
        self.stats = SolverStats(algorithm=self.name)

    def solve(self, board: Board) -> tuple[Optional[Grid], SolverStats]:
        """
        Solve a puzzle from its givens, with timing and optional memory tracking.

        Args:
            board: The puzzle to solve. Only given cells are used.

        Returns:
            Tuple of (solved 9x9 grid or None, stats).
        """
        self.stats = SolverStats(algorithm=self.name)
        givens = [cell.value if cell.given else 0 for cell in board]

        if self.track_memory:
            tracemalloc.start()
        start_time = time.perf_counter()

        try:
            flat = self._solve(givens)
        finally:
            self.stats.time_seconds = time.perf_counter() - start_time
            if self.track_memory:
                _, peak = tracemalloc.get_traced_memory()
                tracemalloc.stop()
                self.stats.memory_bytes = peak

        self.stats.solved = flat is not None
        if flat is None:
            return None, self.stats
        return [flat[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)], self.stats

    @abstractmethod
    def _solve(self, values: List[int]) -> Optional[List[int]]:
        """
        Internal solve method to be implemented by subclasses.

        Args:
            values: 81 digits in row-major order, 0 for empty.

        Returns:
            The 81 solved digits, or None if no solution exists.
        """
        pass
