"""Validation utilities for Sudoku boards."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence, Set

from .constants import BOXES, COLS, PEERS, ROWS, SIZE, cell_coord, cell_index, key_of

if TYPE_CHECKING:
    from .board import Board


@dataclass
class ConflictMap:
    """Units and cells holding a duplicated digit."""
    rows: Set[int] = field(default_factory=set)
    cols: Set[int] = field(default_factory=set)
    boxes: Set[int] = field(default_factory=set)
    cells: Set[str] = field(default_factory=set)  # "r,c"

    def __bool__(self) -> bool:
        return bool(self.cells)


def detect_conflicts(board: Board) -> ConflictMap:
    """
    Find duplicate non-zero digits in every row, column and box.

    Args:
        board: The board to scan.

    Returns:
        A ConflictMap with the offending unit indices and "r,c" cell keys.
    """
    conflicts = ConflictMap()
    values = [cell.value for cell in board]
    for kind, units, found in (("row", ROWS, conflicts.rows),
                               ("col", COLS, conflicts.cols),
                               ("box", BOXES, conflicts.boxes)):
        for index, unit in enumerate(units):
            for i, a in enumerate(unit):
                if not values[a]:
                    continue
                for b in unit[i + 1:]:
                    if values[a] == values[b]:
                        found.add(index)
                        conflicts.cells.add(key_of(*cell_coord(a)))
                        conflicts.cells.add(key_of(*cell_coord(b)))
    return conflicts


def is_valid_board(board: Board) -> bool:
    """
    Check if the board state has no conflicts.

    Does not check if the board is complete.
    """
    return not detect_conflicts(board)


def is_valid_placement(board: Board, row: int, col: int, value: int) -> bool:
    """
    Check if placing a value at (row, col) keeps the board conflict-free.

    Args:
        board: The board.
        row: Row index.
        col: Column index.
        value: Value to check (1 to 9).
    """
    if value < 1 or value > SIZE:
        return False
    return all(board[peer].value != value for peer in PEERS[cell_index(row, col)])


def validate_solution(puzzle: Board, solution: Sequence[Sequence[int]]) -> bool:
    """
    Validate that a solved grid correctly solves the puzzle.

    Args:
        puzzle: The original puzzle.
        solution: The proposed 9x9 digit grid.

    Returns:
        True if the grid is complete, conflict-free and keeps every given.
    """
    if len(solution) != SIZE or any(len(row) != SIZE for row in solution):
        return False

    for cell in puzzle:
        if cell.given and cell.value and solution[cell.r][cell.c] != cell.value:
            return False

    for units in (ROWS, COLS, BOXES):
        for unit in units:
            digits = {solution[r][c] for r, c in map(cell_coord, unit)}
            if digits != set(range(1, SIZE + 1)):
                return False
    return True
