"""Generator module for creating Sudoku puzzles."""

from .generator import GeneratedPuzzle, SudokuGenerator, Symmetry, generate, looks_easy
from ..rater import Difficulty

__all__ = ["Difficulty", "GeneratedPuzzle", "SudokuGenerator", "Symmetry", "generate", "looks_easy"]
