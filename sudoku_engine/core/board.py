"""Immutable Sudoku board model with derived candidates."""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from typing import FrozenSet, Iterable, Iterator, List, NamedTuple, Optional, Sequence, Tuple, Union
import re

import numpy as np

from .constants import ALL_DIGITS, BOX, CELLS, SIZE, box_index, cell_index
from .errors import FormatError
from .validator import is_valid_board


class Coord(NamedTuple):
    r: int
    c: int


class CandidateRef(NamedTuple):
    """A single pencil mark: digit ``d`` in cell (``r``, ``c``)."""
    r: int
    c: int
    d: int


@dataclass(frozen=True)
class Cell:
    """
    One cell of the grid.

    ``candidates`` is derived state: it is rebuilt by ``compute_candidates``
    from the board values, the ``suppressed`` marks (digits removed by hints
    or by the user) and the ``manual_cands`` marks (digits the user switched
    on even if they are not allowed).
    """
    r: int
    c: int
    value: int = 0
    given: bool = False
    candidates: FrozenSet[int] = field(default_factory=frozenset)
    suppressed: FrozenSet[int] = field(default_factory=frozenset)
    manual_cands: FrozenSet[int] = field(default_factory=frozenset)

    @property
    def box(self) -> int:
        return box_index(self.r, self.c)

    @property
    def coord(self) -> Coord:
        return Coord(self.r, self.c)

    def is_empty(self) -> bool:
        return self.value == 0


class Board:
    """
    A 9x9 grid of cells in row-major order.

    Boards are never modified in place: every mutation helper in this
    module returns a new board that shares the untouched cells.
    """

    def __init__(self, cells: Optional[Sequence[Cell]] = None):
        """
        Initialize a board.

        Args:
            cells: Optional 81 cells in row-major order. If None, creates
                   an empty board.
        """
        if cells is None:
            cells = [Cell(r, c) for r in range(SIZE) for c in range(SIZE)]
        cells = tuple(cells)
        if len(cells) != CELLS:
            raise ValueError(f"Board needs {CELLS} cells, got {len(cells)}")
        for i, cell in enumerate(cells):
            if cell_index(cell.r, cell.c) != i:
                raise ValueError(f"Cell ({cell.r}, {cell.c}) is out of row-major order")
        self._cells: Tuple[Cell, ...] = cells

    @property
    def cells(self) -> Tuple[Cell, ...]:
        return self._cells

    def cell(self, row: int, col: int) -> Cell:
        _check_coord(row, col)
        return self._cells[cell_index(row, col)]

    def __getitem__(self, pos: Union[int, Tuple[int, int]]) -> Cell:
        if isinstance(pos, tuple):
            return self.cell(*pos)
        return self._cells[pos]

    def __iter__(self) -> Iterator[Cell]:
        return iter(self._cells)

    def rows(self) -> List[Tuple[Cell, ...]]:
        return [self._cells[r * SIZE:(r + 1) * SIZE] for r in range(SIZE)]

    def with_cells(self, updated: Iterable[Cell]) -> Board:
        """Return a new board with the given cells swapped in by coordinate."""
        cells = list(self._cells)
        for cell in updated:
            cells[cell_index(cell.r, cell.c)] = cell
        return Board(cells)

    def get(self, row: int, col: int) -> int:
        """Get value at position (row, col). 0 means empty."""
        return self.cell(row, col).value

    def is_empty(self, row: int, col: int) -> bool:
        return self.cell(row, col).value == 0

    def count_empty(self) -> int:
        return sum(1 for cell in self._cells if cell.value == 0)

    def count_filled(self) -> int:
        return CELLS - self.count_empty()

    def count_givens(self) -> int:
        return sum(1 for cell in self._cells if cell.given and cell.value)

    def is_complete(self) -> bool:
        return self.count_empty() == 0

    def is_solved(self) -> bool:
        """Check if the puzzle is completely and correctly filled."""
        return self.is_complete() and is_valid_board(self)

    def values(self) -> List[List[int]]:
        """The digit grid as nested lists (0 for empty)."""
        return [[cell.value for cell in row] for row in self.rows()]

    def to_array(self) -> np.ndarray:
        """The digit grid as a 9x9 int32 array."""
        return np.array([cell.value for cell in self._cells], dtype=np.int32).reshape(SIZE, SIZE)

    def to_string(self) -> str:
        return serialize_board(self)

    def __str__(self) -> str:
        """Pretty-print the board."""
        lines = []
        horizontal_sep = '+' + (('-' * (BOX * 2 + 1)) + '+') * BOX

        for i, row in enumerate(self.rows()):
            if i % BOX == 0:
                lines.append(horizontal_sep)

            row_str = '|'
            for j, cell in enumerate(row):
                row_str += f' {cell.value}' if cell.value else ' .'
                if (j + 1) % BOX == 0:
                    row_str += ' |'
            lines.append(row_str)

        lines.append(horizontal_sep)
        return '\n'.join(lines)

    def __repr__(self) -> str:
        return f"Board(givens={self.count_givens()}, filled={self.count_filled()})"

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return self._cells == other._cells

    def __hash__(self) -> int:
        return hash(self._cells)


def _check_coord(row: int, col: int) -> None:
    if not (0 <= row < SIZE and 0 <= col < SIZE):
        raise ValueError(f"Cell ({row}, {col}) is outside the 9x9 grid")


def _check_digit(digit: int) -> None:
    if digit < 0 or digit > SIZE:
        raise ValueError(f"Value must be 0-{SIZE}, got {digit}")


def create_empty_board() -> Board:
    return Board()


def compute_candidates(board: Board) -> Board:
    """
    Rebuild every cell's candidates from scratch.

    Empty cells get the digits not used in their row, column or box, minus
    their suppressed digits, plus their manual digits. Filled cells get none.
    """
    grid = board.to_array()
    row_used = [set(grid[r][grid[r] != 0].tolist()) for r in range(SIZE)]
    col_used = [set(grid[:, c][grid[:, c] != 0].tolist()) for c in range(SIZE)]
    box_used = []
    for b in range(SIZE):
        br, bc = (b // BOX) * BOX, (b % BOX) * BOX
        block = grid[br:br + BOX, bc:bc + BOX].flatten()
        box_used.append(set(block[block != 0].tolist()))

    cells = []
    for cell in board:
        if cell.value:
            cands: FrozenSet[int] = frozenset()
        else:
            used = row_used[cell.r] | col_used[cell.c] | box_used[cell.box]
            cands = (ALL_DIGITS - used - cell.suppressed) | cell.manual_cands
        if cands != cell.candidates:
            cell = replace(cell, candidates=cands)
        cells.append(cell)
    return Board(cells)


def set_value(board: Board, row: int, col: int, digit: int, as_given: bool = False) -> Board:
    """
    Place ``digit`` at (row, col).

    The cell becomes given when ``as_given`` is true (a given cell stays
    given either way) and loses its candidate, suppressed and manual marks.
    Neighbours keep their stale candidates until ``compute_candidates``.
    """
    _check_digit(digit)
    if digit == 0:
        return clear_value(board, row, col)
    cell = board.cell(row, col)
    updated = replace(
        cell,
        value=digit,
        given=cell.given or as_given,
        candidates=frozenset(),
        suppressed=frozenset(),
        manual_cands=frozenset(),
    )
    return board.with_cells([updated])


def clear_value(board: Board, row: int, col: int) -> Board:
    """Empty (row, col); its suppressed and manual marks survive."""
    cell = board.cell(row, col)
    return board.with_cells([replace(cell, value=0, candidates=frozenset())])


def suppress_candidates(board: Board, refs: Iterable[CandidateRef]) -> Board:
    """Mark each (cell, digit) pair as suppressed. Candidates are not recomputed."""
    extra = {}
    for r, c, d in refs:
        extra.setdefault((r, c), set()).add(d)
    updated = []
    for (r, c), digits in extra.items():
        cell = board.cell(r, c)
        updated.append(replace(
            cell,
            suppressed=cell.suppressed | digits,
            manual_cands=cell.manual_cands - digits,
        ))
    return board.with_cells(updated)


def toggle_candidate(board: Board, row: int, col: int, digit: int) -> Board:
    """
    Flip a pencil mark the way a player does.

    A visible candidate is switched off (suppressed); a hidden one is
    switched on (manual), even if the digit is not allowed there.
    """
    _check_digit(digit)
    cell = board.cell(row, col)
    if cell.value:
        return board
    if digit in cell.candidates:
        updated = replace(cell, suppressed=cell.suppressed | {digit},
                          manual_cands=cell.manual_cands - {digit})
    else:
        updated = replace(cell, suppressed=cell.suppressed - {digit},
                          manual_cands=cell.manual_cands | {digit})
    return compute_candidates(board.with_cells([updated]))


def clear_manual_candidates(board: Board) -> Board:
    return Board([replace(cell, manual_cands=frozenset()) if cell.manual_cands else cell
                  for cell in board])


def givens_only(board: Board) -> Board:
    """Keep the given digits and drop everything else, including pencil marks."""
    return Board([
        Cell(cell.r, cell.c, value=cell.value if cell.given else 0, given=cell.given and bool(cell.value))
        for cell in board
    ])


def board_from_grid(grid: Union[Sequence[Sequence[int]], np.ndarray], as_givens: bool = True) -> Board:
    """
    Create a board from a 9x9 grid of digits (0 for empty).

    Args:
        grid: Nested lists or a numpy array.
        as_givens: Mark the non-zero digits as givens.
    """
    arr = np.asarray(grid, dtype=np.int32)
    if arr.shape != (SIZE, SIZE):
        raise ValueError(f"Grid shape must be ({SIZE}, {SIZE}), got {arr.shape}")
    if arr.min() < 0 or arr.max() > SIZE:
        raise ValueError(f"Grid values must be 0-{SIZE}")
    cells = []
    for r in range(SIZE):
        for c in range(SIZE):
            v = int(arr[r, c])
            cells.append(Cell(r, c, value=v, given=as_givens and v != 0))
    return compute_candidates(Board(cells))


_WHITESPACE = re.compile(r"\s+")


def parse_board_string(s: str, require_givens: bool = False) -> Board:
    """
    Parse an 81-character puzzle string.

    Whitespace is ignored. ``0`` or ``.`` marks an empty cell and ``1``-``9``
    a given. Raises FormatError for any other shape or character and, with
    ``require_givens``, when the string holds no givens at all.
    """
    compact = _WHITESPACE.sub("", s)
    if len(compact) != CELLS:
        raise FormatError(f"Board string must be {CELLS} characters, got {len(compact)}")

    cells = []
    for i, ch in enumerate(compact):
        r, c = divmod(i, SIZE)
        if ch in "0.":
            cells.append(Cell(r, c))
        elif ch in "123456789":
            cells.append(Cell(r, c, value=int(ch), given=True))
        else:
            raise FormatError(f"Invalid character {ch!r} at position {i + 1}")

    board = Board(cells)
    if require_givens and board.count_givens() == 0:
        raise FormatError("Board string contains no givens")
    return compute_candidates(board)


def serialize_board(board: Board) -> str:
    """Canonical 81-character form, ``0`` for empty cells."""
    return "".join(str(cell.value) for cell in board)
