"""BUG+1: one cell away from a Bivalue Universal Grave."""

from __future__ import annotations
from collections import Counter
from typing import Optional

from ..core.board import Board, CandidateRef
from ..core.constants import CELLS, DIGITS, box_index, cell_coord
from .base import UNIT_ORDER, candidate_map, cells_with, coord
from .labels import coord_label, digits_label, highlight
from .types import HintResult, HintStep, Technique


def find_bug_plus_one(board: Board) -> Optional[HintResult]:
    """
    Every empty cell is bivalue except one cell with three candidates.

    Exactly one digit may have an odd number of candidate occurrences over
    the whole grid, it must be one of the three, and every unit must show
    each unsolved digit exactly twice apart from that digit in the units of
    the three-candidate cell. Without the digit there the grid would be a
    grave with no unique solution, so the digit is placed.
    """
    cands = candidate_map(board)
    empties = [i for i in range(CELLS) if not board[i].value]
    if not empties:
        return None

    extra = -1
    for i in empties:
        size = len(cands[i])
        if size == 2:
            continue
        if size == 3 and extra < 0:
            extra = i
            continue
        return None
    if extra < 0:
        return None

    counts = Counter(d for i in empties for d in cands[i])
    odd = [d for d in DIGITS if counts[d] % 2]
    if len(odd) != 1 or odd[0] not in cands[extra]:
        return None
    digit = odd[0]

    r, c = cell_coord(extra)
    home = {"row": r, "col": c, "box": box_index(r, c)}
    for kind, units in UNIT_ORDER:
        for idx, unit in enumerate(units):
            for d in DIGITS:
                seen = len(cells_with(cands, unit, d))
                expected = 3 if d == digit and idx == home[kind] else 2
                if seen and seen != expected:
                    return None

    label = coord_label(r, c)
    others = sorted(cands[extra] - {digit})
    units = list(home.items())
    steps = (
        HintStep(
            title="Almost every cell is bivalue",
            message=(f"Every empty cell has two candidates except {label}, "
                     f"which has {digits_label(cands[extra])}."),
            highlight=highlight(units, [coord(extra)]),
        ),
        HintStep(
            title=f"{digit} breaks the parity",
            message=(f"{digit} is the only digit that appears an odd number of times. "
                     f"If {label} were {digits_label(others)}, every unit would hold each "
                     f"candidate exactly twice and the puzzle would not have a unique solution."),
            highlight=highlight(units, [coord(extra)], [CandidateRef(r, c, digit)]),
        ),
        HintStep(
            title=f"Place {digit} at {label}",
            message=f"So {label} must be {digit}.",
            highlight=highlight([], [coord(extra)], [CandidateRef(r, c, digit)]),
        ),
    )
    return HintResult(
        kind=Technique.BUG,
        digit=digit,
        target=coord(extra),
        steps=steps,
        placement=CandidateRef(r, c, digit),
    )
