"""Core module for Sudoku board representation and validation."""

from .board import (
    Board,
    CandidateRef,
    Cell,
    Coord,
    board_from_grid,
    clear_manual_candidates,
    clear_value,
    compute_candidates,
    create_empty_board,
    givens_only,
    parse_board_string,
    serialize_board,
    set_value,
    suppress_candidates,
    toggle_candidate,
)
from .errors import ConfigError, FormatError
from .validator import ConflictMap, detect_conflicts, is_valid_board, is_valid_placement, validate_solution

__all__ = [
    "Board",
    "CandidateRef",
    "Cell",
    "ConfigError",
    "ConflictMap",
    "Coord",
    "FormatError",
    "board_from_grid",
    "clear_manual_candidates",
    "clear_value",
    "compute_candidates",
    "create_empty_board",
    "detect_conflicts",
    "givens_only",
    "is_valid_board",
    "is_valid_placement",
    "parse_board_string",
    "serialize_board",
    "set_value",
    "suppress_candidates",
    "toggle_candidate",
    "validate_solution",
]
