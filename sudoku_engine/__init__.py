"""Sudoku engine: board model, solver, hints, generator and difficulty rater."""

from .config import DEFAULT_CONFIG, EngineConfig, load_config
from .core import (
    Board,
    CandidateRef,
    Cell,
    ConfigError,
    Coord,
    FormatError,
    clear_value,
    compute_candidates,
    detect_conflicts,
    parse_board_string,
    serialize_board,
    set_value,
)
from .generator import GeneratedPuzzle, SudokuGenerator, Symmetry, generate
from .hints import HintResult, HintService, Technique, find_next_hint
from .rater import Difficulty, DifficultyRating, rate
from .solvers import count_solutions, solve

__version__ = "1.0.0"

__all__ = [
    "DEFAULT_CONFIG",
    "Board",
    "CandidateRef",
    "Cell",
    "ConfigError",
    "Coord",
    "Difficulty",
    "DifficultyRating",
    "EngineConfig",
    "FormatError",
    "GeneratedPuzzle",
    "HintResult",
    "HintService",
    "SudokuGenerator",
    "Symmetry",
    "Technique",
    "clear_value",
    "compute_candidates",
    "count_solutions",
    "detect_conflicts",
    "find_next_hint",
    "generate",
    "load_config",
    "parse_board_string",
    "rate",
    "serialize_board",
    "set_value",
    "solve",
]
