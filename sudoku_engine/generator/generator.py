"""Sudoku puzzle generator with symmetric digging and difficulty rating."""

from __future__ import annotations
import logging
import os
import random
from dataclasses import dataclass, replace
from enum import Enum
from typing import List, Optional, Tuple, Union

from ..config import DEFAULT_CONFIG, EngineConfig
from ..core.board import Board, board_from_grid
from ..core.constants import CELLS, SIZE, cell_coord, cell_index
from ..hints import Tier
from ..rater import Difficulty, DifficultyRating, rate
from ..solvers import Grid, random_solved_grid, search

logger = logging.getLogger(__name__)


class Symmetry(Enum):
    """Which cells are cleared together while digging."""
    NONE = "none"
    CENTRAL = "central"
    DIAGONAL = "diagonal"

    def mates(self, row: int, col: int) -> List[Tuple[int, int]]:
        """Cells cleared together with (row, col), excluding itself."""
        if self is Symmetry.NONE:
            return []
        if self is Symmetry.CENTRAL:
            mate = (SIZE - 1 - row, SIZE - 1 - col)
        else:
            mate = (col, row)
        return [] if mate == (row, col) else [mate]


@dataclass
class GeneratedPuzzle:
    """A generated puzzle with its rating and its unique solution."""
    board: Board
    rating: DifficultyRating
    solution: Grid
    attempts: int = 1

    @property
    def clues(self) -> int:
        return self.board.count_givens()


def looks_easy(rating: DifficultyRating) -> bool:
    """Stricter check applied to puzzles requested as easy."""
    return (
        rating.bucket is Difficulty.EASY
        and rating.tier_count(Tier.HARD) == 0
        and rating.tier_count(Tier.MEDIUM) <= 2
        and rating.steps <= 50
        and rating.tier_count(Tier.SINGLE) >= 10
    )


def _easy_distance(rating: DifficultyRating) -> Tuple[int, int, int]:
    return (rating.tier_count(Tier.HARD), rating.tier_count(Tier.MEDIUM), rating.steps)


class SudokuGenerator:
    """
    Generator for Sudoku puzzles with various difficulty levels.

    Algorithm:
    1. Generate a complete valid Sudoku solution using randomized backtracking
    2. Dig givens out in random order, with their symmetric mates, keeping
       each removal only while the puzzle still has a unique solution
    3. Rate the result by replaying the hint cascade
    """

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None,
                 config: EngineConfig = DEFAULT_CONFIG):
        """
        Initialize the generator.

        Args:
            seed: Random seed for reproducibility.
            rng: Random generator to use instead of a seeded one.
            config: Digging and rating limits.
        """
        self.rng = rng if rng is not None else random.Random(seed)
        self.config = config

    def generate(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        symmetry: Union[Symmetry, str, None] = None,
        max_remove_failures: Optional[int] = None,
    ) -> GeneratedPuzzle:
        """
        Generate a puzzle for the requested difficulty.

        Only ``easy`` is steered: digging keeps the clue floor and the
        result must pass ``looks_easy``. That check is retried up to
        ``config.max_easy_attempts`` times; if no attempt passes, the
        attempt closest to easy is returned.

        Args:
            difficulty: Desired difficulty level.
            symmetry: Symmetry of the clue pattern (default from config).
            max_remove_failures: Consecutive failed removals before digging
                                 stops (default from config).
        """
        difficulty = Difficulty(difficulty)
        symmetry = Symmetry(symmetry or self.config.symmetry)
        max_failures = max_remove_failures or self.config.max_remove_failures

        if difficulty is not Difficulty.EASY:
            return self._generate_once(difficulty, symmetry, max_failures)

        best: Optional[GeneratedPuzzle] = None
        for attempt in range(1, self.config.max_easy_attempts + 1):
            puzzle = self._generate_once(difficulty, symmetry, max_failures)
            if looks_easy(puzzle.rating):
                return replace(puzzle, attempts=attempt)
            logger.debug("Easy attempt %d rejected: %s", attempt, puzzle.rating.to_dict())
            if best is None or _easy_distance(puzzle.rating) < _easy_distance(best.rating):
                best = replace(puzzle, attempts=attempt)

        logger.warning("No easy puzzle passed after %d attempts; returning the closest one",
                       self.config.max_easy_attempts)
        return replace(best, attempts=self.config.max_easy_attempts)

    def generate_matching(self, difficulty: Union[Difficulty, str], max_attempts: int = 10,
                          symmetry: Union[Symmetry, str, None] = None) -> GeneratedPuzzle:
        """
        Regenerate until the rated bucket equals ``difficulty``.

        Returns the closest attempt when none matches within ``max_attempts``.
        """
        difficulty = Difficulty(difficulty)
        closest: Optional[GeneratedPuzzle] = None
        for attempt in range(1, max_attempts + 1):
            puzzle = self.generate(difficulty, symmetry)
            if puzzle.rating.bucket is difficulty:
                return replace(puzzle, attempts=attempt)
            gap = abs(puzzle.rating.bucket.rank - difficulty.rank)
            if closest is None or gap < abs(closest.rating.bucket.rank - difficulty.rank):
                closest = replace(puzzle, attempts=attempt)
        logger.warning("No %s puzzle after %d attempts; returning a %s one",
                       difficulty.value, max_attempts, closest.rating.bucket.value)
        return replace(closest, attempts=max_attempts)

    def generate_batch(self, count: int, difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
                       symmetry: Union[Symmetry, str, None] = None) -> List[GeneratedPuzzle]:
        """
        Generate multiple puzzles of the same difficulty.

        Args:
            count: Number of puzzles to generate.
            difficulty: Desired difficulty level.
            symmetry: Symmetry of the clue pattern.
        """
        return [self.generate(difficulty, symmetry) for _ in range(count)]

    def generate_with_solution(
        self,
        difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
        symmetry: Union[Symmetry, str, None] = None,
    ) -> Tuple[Board, Grid]:
        """Generate a puzzle along with its solution grid."""
        puzzle = self.generate(difficulty, symmetry)
        return puzzle.board, puzzle.solution

    def _generate_once(self, difficulty: Difficulty, symmetry: Symmetry, max_failures: int) -> GeneratedPuzzle:
        solution = random_solved_grid(self.rng)
        values = self._dig(solution, difficulty, symmetry, max_failures)
        board = board_from_grid([values[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)], as_givens=True)
        rating = rate(board, self.config)
        logger.debug("Generated %d-clue puzzle rated %s", board.count_givens(), rating.bucket.value)
        return GeneratedPuzzle(board=board, rating=rating, solution=solution)

    def _dig(self, solution: Grid, difficulty: Difficulty, symmetry: Symmetry, max_failures: int) -> List[int]:
        """
        Remove givens from a full grid while the solution stays unique.

        Positions are visited in a shuffled order. Each removal clears the
        cell and its symmetric mates together and is reverted when a second
        solution appears.
        """
        values = [v for row in solution for v in row]
        positions = list(range(CELLS))
        self.rng.shuffle(positions)
        floor = self.config.easy_clue_floor if difficulty is Difficulty.EASY else 0

        clues = CELLS
        failures = 0
        for index in positions:
            if failures >= max_failures or clues <= floor:
                break
            if not values[index]:
                continue

            r, c = cell_coord(index)
            group = [index] + [cell_index(mr, mc) for mr, mc in symmetry.mates(r, c)]
            group = [i for i in dict.fromkeys(group) if values[i]]
            if clues - len(group) < floor:
                continue

            saved = [(i, values[i]) for i in group]
            for i in group:
                values[i] = 0

            if len(search(values, limit=2)) != 1:
                for i, v in saved:
                    values[i] = v
                failures += 1
                continue

            clues -= len(group)
            failures = 0

        logger.debug("Dug down to %d clues (%d trailing failures)", clues, failures)
        return values

    @staticmethod
    def save_to_folder(puzzles: List[GeneratedPuzzle], folder_path: str, prefix: str = "puzzle") -> None:
        """
        Save a list of puzzles to a folder as individual text files.

        Args:
            puzzles: Generated puzzles.
            folder_path: Directory to save the puzzles.
            prefix: Prefix for the filename (default: "puzzle").
        """
        os.makedirs(folder_path, exist_ok=True)

        for i, puzzle in enumerate(puzzles, 1):
            file_path = os.path.join(folder_path, f"{prefix}_{i}.txt")
            with open(file_path, "w") as f:
                f.write(puzzle.board.to_string())
                f.write(f"\n\nRating: {puzzle.rating.bucket.value} ({puzzle.rating.steps} steps)\n")
                f.write("\nPretty format:\n")
                f.write(str(puzzle.board))


def generate(
    difficulty: Union[Difficulty, str] = Difficulty.MEDIUM,
    symmetry: Union[Symmetry, str] = Symmetry.CENTRAL,
    max_remove_failures: int = DEFAULT_CONFIG.max_remove_failures,
    rng: Optional[random.Random] = None,
    config: EngineConfig = DEFAULT_CONFIG,
) -> GeneratedPuzzle:
    """Generate one puzzle; see ``SudokuGenerator.generate``."""
    return SudokuGenerator(rng=rng, config=config).generate(difficulty, symmetry, max_remove_failures)
