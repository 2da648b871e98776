"""Locked candidates: a digit confined to the overlap of a box and a line."""

from __future__ import annotations
from typing import FrozenSet, List, Optional, Sequence

from ..core.board import Board
from ..core.constants import BOXES, COLS, DIGITS, ROWS, box_index, cell_coord
from .base import candidate_map, cells_with, coord, coords, refs
from .labels import cells_label, highlight, unit_name
from .types import HintResult, HintStep, Technique, UnitRef

LINES = (("row", ROWS), ("col", COLS))


def _line_of(kind: str, index: int) -> int:
    r, c = cell_coord(index)
    return r if kind == "row" else c


def _outside(unit: Sequence[int], excluded: Sequence[int], cands: Sequence[FrozenSet[int]], d: int) -> List[int]:
    skip = set(excluded)
    return [i for i in unit if i not in skip and d in cands[i]]


def find_pointing(board: Board) -> Optional[HintResult]:
    """
    Box to line: a digit's candidates in a box all sit in one row or column,
    so the digit leaves the rest of that line.
    """
    cands = candidate_map(board)
    for b, box in enumerate(BOXES):
        for d in DIGITS:
            spots = cells_with(cands, box, d)
            if len(spots) < 2:
                continue
            for kind, lines in LINES:
                indices = {_line_of(kind, i) for i in spots}
                if len(indices) != 1:
                    continue
                line = indices.pop()
                eliminated = _outside(lines[line], box, cands, d)
                if eliminated:
                    return _build(Technique.POINTING, d, ("box", b), (kind, line), spots, eliminated)
    return None


def find_claiming(board: Board) -> Optional[HintResult]:
    """
    Line to box: a digit's candidates in a row or column all sit in one box,
    so the digit leaves the rest of that box.
    """
    cands = candidate_map(board)
    for kind, lines in LINES:
        for idx, line in enumerate(lines):
            for d in DIGITS:
                spots = cells_with(cands, line, d)
                if len(spots) < 2:
                    continue
                boxes = {box_index(*cell_coord(i)) for i in spots}
                if len(boxes) != 1:
                    continue
                b = boxes.pop()
                eliminated = _outside(BOXES[b], line, cands, d)
                if eliminated:
                    return _build(Technique.CLAIMING, d, (kind, idx), ("box", b), spots, eliminated)
    return None


def _build(technique: Technique, d: int, source: tuple, other: tuple,
           spots: List[int], eliminated: List[int]) -> HintResult:
    src_name = unit_name(*source)
    other_name = unit_name(*other)
    steps = (
        HintStep(
            title=f"{d} is locked in {src_name}",
            message=(f"In {src_name}, {d} can only go in {cells_label(spots)}, "
                     f"all of which lie in {other_name}."),
            highlight=highlight((source, other), coords(spots), refs(spots, d)),
        ),
        HintStep(
            title=f"Remove {d} from the rest of {other_name}",
            message=(f"Whichever of those cells holds {d}, the rest of {other_name} cannot. "
                     f"Eliminate {d} from {cells_label(eliminated)}."),
            highlight=highlight((source, other), coords(spots), refs(eliminated, d)),
        ),
    )
    return HintResult(
        kind=technique,
        digit=d,
        target=coord(eliminated[0]),
        steps=steps,
        eliminations=refs(eliminated, d),
        unit=UnitRef(*source),
    )
