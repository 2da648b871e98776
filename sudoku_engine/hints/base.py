"""Helpers shared by the technique detectors."""

from __future__ import annotations
from typing import Callable, FrozenSet, Iterable, List, Optional, Sequence, Tuple

from ..core.board import Board, CandidateRef, Coord
from ..core.constants import BOXES, COLS, ROWS, cell_coord
from .types import HintResult

Detector = Callable[[Board], Optional[HintResult]]

UNIT_ORDER: Tuple[Tuple[str, List[List[int]]], ...] = (("row", ROWS), ("col", COLS), ("box", BOXES))


def candidate_map(board: Board) -> List[FrozenSet[int]]:
    """Candidates of every cell by flat index; filled cells have none."""
    return [frozenset() if cell.value else cell.candidates for cell in board]


def coord(index: int) -> Coord:
    return Coord(*cell_coord(index))


def coords(indices: Iterable[int]) -> Tuple[Coord, ...]:
    return tuple(coord(i) for i in indices)


def refs(indices: Iterable[int], digit: int) -> Tuple[CandidateRef, ...]:
    return tuple(CandidateRef(*cell_coord(i), digit) for i in indices)


def cells_with(cands: Sequence[FrozenSet[int]], unit: Iterable[int], digit: int) -> List[int]:
    """Cells of ``unit`` where ``digit`` is still a candidate."""
    return [i for i in unit if digit in cands[i]]
