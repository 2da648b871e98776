"""Naked and hidden pairs inside a single unit."""

from __future__ import annotations
from itertools import combinations
from typing import List, Optional, Tuple

from ..core.board import Board, CandidateRef
from ..core.constants import DIGITS, cell_coord
from .base import UNIT_ORDER, candidate_map, cells_with, coord, coords, refs
from .labels import cells_label, digits_label, highlight, unit_name
from .types import HintResult, HintStep, Technique, UnitRef


def _as_refs(pairs: List[Tuple[int, int]]) -> Tuple[CandidateRef, ...]:
    return tuple(CandidateRef(*cell_coord(i), d) for i, d in pairs)


def find_naked_pair(board: Board) -> Optional[HintResult]:
    """Two cells of a unit holding the same two candidates and nothing else."""
    cands = candidate_map(board)
    for kind, units in UNIT_ORDER:
        for idx, unit in enumerate(units):
            bivalue = [i for i in unit if len(cands[i]) == 2]
            for a, b in combinations(bivalue, 2):
                if cands[a] != cands[b]:
                    continue
                pair = sorted(cands[a])
                eliminated = [(i, d) for i in unit if i not in (a, b) for d in pair if d in cands[i]]
                if eliminated:
                    return _build_naked_pair(kind, idx, (a, b), pair, eliminated)
    return None


def _build_naked_pair(kind: str, idx: int, cells: Tuple[int, int], pair: List[int],
                      eliminated: List[Tuple[int, int]]) -> HintResult:
    u_name = unit_name(kind, idx)
    digits = digits_label(pair)
    removed = _as_refs(eliminated)
    pair_marks = tuple(ref for d in pair for ref in refs(cells, d))
    steps = (
        HintStep(
            title=f"Naked pair {digits} in {u_name}",
            message=f"{cells_label(cells)} both hold exactly the candidates {digits}.",
            highlight=highlight([(kind, idx)], coords(cells), pair_marks),
        ),
        HintStep(
            title="The pair owns both digits",
            message=(f"Those two cells must take {digits} between them, so no other cell in "
                     f"{u_name} can. Eliminate them from {cells_label(sorted({i for i, _ in eliminated}))}."),
            highlight=highlight([(kind, idx)], coords(cells), removed),
        ),
    )
    return HintResult(
        kind=Technique.NAKED_PAIR,
        digit=removed[0].d,
        target=coord(eliminated[0][0]),
        steps=steps,
        eliminations=removed,
        unit=UnitRef(kind, idx),
    )


def find_hidden_pair(board: Board) -> Optional[HintResult]:
    """Two digits confined to the same two cells of a unit; other candidates go."""
    cands = candidate_map(board)
    for kind, units in UNIT_ORDER:
        for idx, unit in enumerate(units):
            spots = {d: cells_with(cands, unit, d) for d in DIGITS}
            twos = [d for d in DIGITS if len(spots[d]) == 2]
            for d1, d2 in combinations(twos, 2):
                if spots[d1] != spots[d2]:
                    continue
                cells = tuple(spots[d1])
                eliminated = [(i, d) for i in cells for d in sorted(cands[i]) if d not in (d1, d2)]
                if eliminated:
                    return _build_hidden_pair(kind, idx, cells, [d1, d2], eliminated)
    return None


def _build_hidden_pair(kind: str, idx: int, cells: Tuple[int, ...], pair: List[int],
                       eliminated: List[Tuple[int, int]]) -> HintResult:
    u_name = unit_name(kind, idx)
    digits = digits_label(pair)
    pair_marks = tuple(ref for d in pair for ref in refs(cells, d))
    removed = _as_refs(eliminated)
    steps = (
        HintStep(
            title=f"Hidden pair {digits} in {u_name}",
            message=f"In {u_name}, {digits} can only go in {cells_label(cells)}.",
            highlight=highlight([(kind, idx)], coords(cells), pair_marks),
        ),
        HintStep(
            title="Trim the pair cells",
            message=(f"{cells_label(cells)} must hold {digits}, so their other candidates "
                     f"can be removed."),
            highlight=highlight([(kind, idx)], coords(cells), removed),
        ),
    )
    return HintResult(
        kind=Technique.HIDDEN_PAIR,
        digit=pair[0],
        target=coord(cells[0]),
        steps=steps,
        eliminations=removed,
        unit=UnitRef(kind, idx),
    )
