"""Wing patterns built from bivalue cells: XY-Wing, W-Wing and XYZ-Wing."""

from __future__ import annotations
from itertools import combinations
from typing import FrozenSet, List, Optional, Sequence, Tuple

from ..core.board import Board
from ..core.constants import CELLS, COLS, PEERS, ROWS
from .base import candidate_map, cells_with, coord, coords, refs
from .labels import cells_label, digits_label, highlight, index_label, unit_name
from .types import HintResult, HintStep, Technique, UnitRef


def _pattern_marks(cells: Sequence[int], cands: Sequence[FrozenSet[int]]):
    return tuple(ref for i in cells for d in sorted(cands[i]) for ref in refs([i], d))


def find_xy_wing(board: Board) -> Optional[HintResult]:
    """
    Pivot {X,Y} sees pincers {X,Z} and {Y,Z}.

    Whatever the pivot holds, one pincer becomes Z, so a cell seeing both
    pincers cannot be Z.
    """
    cands = candidate_map(board)
    bivalue = [i for i in range(CELLS) if len(cands[i]) == 2]
    for pivot in bivalue:
        pc = cands[pivot]
        pincers = [i for i in bivalue if i in PEERS[pivot]]
        for a, b in combinations(pincers, 2):
            shared_a, shared_b = cands[a] & pc, cands[b] & pc
            if len(shared_a) != 1 or len(shared_b) != 1 or shared_a == shared_b:
                continue
            z_a, z_b = cands[a] - pc, cands[b] - pc
            if z_a != z_b:
                continue
            (z,) = z_a
            eliminated = sorted(i for i in PEERS[a] & PEERS[b] if z in cands[i])
            if eliminated:
                return _build_wing(Technique.XY_WING, z, pivot, (a, b), eliminated, cands,
                                   f"Whether {index_label(pivot)} is {digits_label(shared_a)} or "
                                   f"{digits_label(shared_b)}, one of the pincers must be {z}.")
    return None


def find_xyz_wing(board: Board) -> Optional[HintResult]:
    """
    Pivot {X,Y,Z} sees pincers {X,Z} and {Y,Z}.

    One of the three cells is Z, so only cells seeing all three lose Z.
    """
    cands = candidate_map(board)
    for pivot in range(CELLS):
        pc = cands[pivot]
        if len(pc) != 3:
            continue
        pincers = [i for i in sorted(PEERS[pivot]) if len(cands[i]) == 2 and cands[i] <= pc]
        for a, b in combinations(pincers, 2):
            if cands[a] == cands[b]:
                continue
            (z,) = cands[a] & cands[b]
            eliminated = sorted(i for i in PEERS[pivot] & PEERS[a] & PEERS[b] if z in cands[i])
            if eliminated:
                return _build_wing(Technique.XYZ_WING, z, pivot, (a, b), eliminated, cands,
                                   f"The pivot {index_label(pivot)} or one of the pincers must be {z}, "
                                   f"so only cells seeing all three are affected.")
    return None


def _build_wing(technique: Technique, z: int, pivot: int, pincers: Tuple[int, int],
                eliminated: List[int], cands: Sequence[FrozenSet[int]], reason: str) -> HintResult:
    a, b = pincers
    pattern = (pivot, a, b)
    steps = (
        HintStep(
            title=f"{technique.value} pivot {index_label(pivot)}",
            message=(f"Pivot {index_label(pivot)} ({digits_label(cands[pivot])}) sees "
                     f"{index_label(a)} ({digits_label(cands[a])}) and "
                     f"{index_label(b)} ({digits_label(cands[b])})."),
            highlight=highlight([], coords(pattern), _pattern_marks(pattern, cands)),
        ),
        HintStep(
            title=f"One of them is {z}",
            message=reason,
            highlight=highlight([], coords(pattern), refs((a, b), z)),
        ),
        HintStep(
            title=f"Remove {z}",
            message=f"Eliminate {z} from {cells_label(eliminated)}.",
            highlight=highlight([], coords(pattern), refs(eliminated, z)),
        ),
    )
    return HintResult(
        kind=technique,
        digit=z,
        target=coord(eliminated[0]),
        steps=steps,
        eliminations=refs(eliminated, z),
    )


def _strong_link(cands: Sequence[FrozenSet[int]], digit: int, p: int, q: int) -> Optional[Tuple[str, int, int, int]]:
    """
    A row or column where ``digit`` has exactly two cells, one seeing ``p``
    and the other seeing ``q``. Returns (kind, index, end near p, end near q).
    """
    for kind, units in (("row", ROWS), ("col", COLS)):
        for idx, unit in enumerate(units):
            spots = cells_with(cands, unit, digit)
            if len(spots) != 2 or p in spots or q in spots:
                continue
            s1, s2 = spots
            if s1 in PEERS[p] and s2 in PEERS[q]:
                return kind, idx, s1, s2
            if s2 in PEERS[p] and s1 in PEERS[q]:
                return kind, idx, s2, s1
    return None


def find_w_wing(board: Board) -> Optional[HintResult]:
    """
    Two identical bivalue cells {X,Y} that do not see each other, joined by
    a strong link on X. They cannot both be X, so one is Y and every cell
    seeing both loses Y.
    """
    cands = candidate_map(board)
    bivalue = [i for i in range(CELLS) if len(cands[i]) == 2]
    for p, q in combinations(bivalue, 2):
        if cands[p] != cands[q] or q in PEERS[p]:
            continue
        for x in sorted(cands[p]):
            (y,) = cands[p] - {x}
            link = _strong_link(cands, x, p, q)
            if link is None:
                continue
            eliminated = sorted(i for i in PEERS[p] & PEERS[q] if y in cands[i])
            if eliminated:
                return _build_w_wing(x, y, (p, q), link, eliminated)
    return None


def _build_w_wing(x: int, y: int, wings: Tuple[int, int], link: Tuple[str, int, int, int],
                  eliminated: List[int]) -> HintResult:
    kind, idx, s1, s2 = link
    p, q = wings
    u_name = unit_name(kind, idx)
    pair = digits_label((x, y))
    steps = (
        HintStep(
            title=f"Matching pair {pair}",
            message=f"{index_label(p)} and {index_label(q)} both hold exactly {pair}.",
            highlight=highlight([], coords(wings), refs(wings, x) + refs(wings, y)),
        ),
        HintStep(
            title=f"Strong link on {x} in {u_name}",
            message=(f"{x} must go in {index_label(s1)} or {index_label(s2)}. {index_label(s1)} sees "
                     f"{index_label(p)} and {index_label(s2)} sees {index_label(q)}, so the pair cells "
                     f"cannot both be {x}: one of them is {y}."),
            highlight=highlight([(kind, idx)], coords(wings + (s1, s2)), refs((s1, s2), x)),
        ),
        HintStep(
            title=f"Remove {y}",
            message=f"Eliminate {y} from {cells_label(eliminated)}.",
            highlight=highlight([], coords(wings), refs(eliminated, y)),
        ),
    )
    return HintResult(
        kind=Technique.W_WING,
        digit=y,
        target=coord(eliminated[0]),
        steps=steps,
        eliminations=refs(eliminated, y),
        unit=UnitRef(kind, idx),
    )
