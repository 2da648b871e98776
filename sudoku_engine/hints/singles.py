"""Naked and hidden singles: the techniques that place a digit."""

from __future__ import annotations
from typing import Optional

from ..core.board import Board, CandidateRef, Coord
from ..core.constants import CELLS, DIGITS, ROW_LETTERS, cell_coord
from .base import UNIT_ORDER, candidate_map, cells_with
from .labels import coord_label, unit_highlight, unit_name
from .types import HintHighlight, HintResult, HintStep, Technique, UnitRef


def find_naked_single(board: Board) -> Optional[HintResult]:
    """Any empty cell with exactly one candidate, in scan order."""
    cands = candidate_map(board)
    for i in range(CELLS):
        if len(cands[i]) == 1:
            (digit,) = cands[i]
            return _build_naked_single(board, *cell_coord(i), digit)
    return None


def _build_naked_single(board: Board, r: int, c: int, d: int) -> HintResult:
    label = coord_label(r, c)
    box = board.cell(r, c).box
    focus = HintHighlight(rows=(r,), cols=(c,), boxes=(box,),
                          cells=(Coord(r, c),), cand_targets=(CandidateRef(r, c, d),))
    steps = (
        HintStep(
            title=f"Only one candidate at {label}",
            message=f"{label} has a single pencil mark: {d}.",
            highlight=focus,
        ),
        HintStep(
            title="Why only one?",
            message=(f"Other digits are blocked by its row {ROW_LETTERS[r]}, "
                     f"column {c + 1}, and box {box + 1}."),
            highlight=focus,
        ),
    )
    return HintResult(
        kind=Technique.NAKED_SINGLE,
        digit=d,
        target=Coord(r, c),
        steps=steps,
        placement=CandidateRef(r, c, d),
    )


def find_hidden_single(board: Board) -> Optional[HintResult]:
    """
    A digit with exactly one possible cell in some unit.

    All rows are scanned first, then all columns, then all boxes.
    """
    cands = candidate_map(board)
    for kind, units in UNIT_ORDER:
        for idx, unit in enumerate(units):
            for d in DIGITS:
                spots = cells_with(cands, unit, d)
                if len(spots) == 1:
                    r, c = cell_coord(spots[0])
                    return _build_hidden_single(kind, idx, r, c, d)
    return None


def _build_hidden_single(kind: str, idx: int, r: int, c: int, d: int) -> HintResult:
    label = coord_label(r, c)
    u_name = unit_name(kind, idx)
    scan = unit_highlight(kind, idx)
    steps = (
        HintStep(
            title=f"Scan {u_name}",
            message=f"Find where {d} can go within {u_name}.",
            highlight=scan,
        ),
        HintStep(
            title=f"Only {label} works",
            message=f"{d} can only go at {label} in this {u_name}.",
            highlight=HintHighlight(rows=scan.rows, cols=scan.cols, boxes=scan.boxes,
                                    cells=(Coord(r, c),), cand_targets=(CandidateRef(r, c, d),)),
        ),
    )
    return HintResult(
        kind=Technique.HIDDEN_SINGLE,
        digit=d,
        target=Coord(r, c),
        steps=steps,
        placement=CandidateRef(r, c, d),
        unit=UnitRef(kind, idx),
    )
