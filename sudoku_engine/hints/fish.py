"""Single-digit line patterns: Swordfish, Jellyfish and Skyscraper."""

from __future__ import annotations
from itertools import combinations
from typing import Dict, FrozenSet, List, Optional, Sequence, Tuple

from ..core.board import Board
from ..core.constants import COLS, DIGITS, PEERS, ROWS, cell_coord
from .base import candidate_map, cells_with, coord, coords, refs
from .labels import cells_label, coord_label, highlight, lines_label
from .types import HintResult, HintStep, Technique, UnitRef

PLURAL = {"row": "rows", "col": "columns"}
ORIENTATIONS = (("row", ROWS, "col", COLS), ("col", COLS, "row", ROWS))


def _position(kind: str, index: int) -> Tuple[int, int]:
    """(line, cross line) of a cell for the given orientation."""
    r, c = cell_coord(index)
    return (r, c) if kind == "row" else (c, r)


def find_swordfish(board: Board) -> Optional[HintResult]:
    return _find_fish(board, 3, Technique.SWORDFISH)


def find_jellyfish(board: Board) -> Optional[HintResult]:
    return _find_fish(board, 4, Technique.JELLYFISH)


def _find_fish(board: Board, size: int, technique: Technique) -> Optional[HintResult]:
    """
    ``size`` base lines whose candidates for a digit all fall on the same
    ``size`` cover lines. The digit must fill those cover lines from the
    base lines, so it leaves every other cell of the cover lines.
    """
    cands = candidate_map(board)
    for kind, lines, cross_kind, cross_lines in ORIENTATIONS:
        for d in DIGITS:
            positions: Dict[int, FrozenSet[int]] = {}
            for idx, line in enumerate(lines):
                spots = cells_with(cands, line, d)
                if 2 <= len(spots) <= size:
                    positions[idx] = frozenset(_position(kind, i)[1] for i in spots)

            for base in combinations(sorted(positions), size):
                cover = sorted(frozenset().union(*(positions[b] for b in base)))
                if len(cover) != size:
                    continue
                eliminated = [i for x in cover for i in cross_lines[x]
                              if d in cands[i] and _position(kind, i)[0] not in base]
                if eliminated:
                    spots = [i for b in base for i in cells_with(cands, lines[b], d)]
                    return _build_fish(technique, d, kind, cross_kind, list(base), cover, spots, eliminated)
    return None


def _build_fish(technique: Technique, d: int, kind: str, cross_kind: str, base: List[int],
                cover: List[int], spots: List[int], eliminated: List[int]) -> HintResult:
    base_units = [(kind, i) for i in base]
    cover_units = [(cross_kind, i) for i in cover]
    steps = (
        HintStep(
            title=f"{technique.value} on {d}",
            message=(f"In {lines_label(kind, base)}, {d} can only go in "
                     f"{lines_label(cross_kind, cover)}."),
            highlight=highlight(base_units, coords(spots), refs(spots, d)),
        ),
        HintStep(
            title=f"{d} fills {lines_label(cross_kind, cover)}",
            message=(f"Each of those {len(base)} {PLURAL[kind]} needs its own {d}, and they share only "
                     f"{len(cover)} {PLURAL[cross_kind]}, so those {PLURAL[cross_kind]} get their {d} from them."),
            highlight=highlight(base_units + cover_units, coords(spots), refs(spots, d)),
        ),
        HintStep(
            title=f"Remove {d} elsewhere",
            message=f"Eliminate {d} from {cells_label(eliminated)}.",
            highlight=highlight(cover_units, coords(spots), refs(eliminated, d)),
        ),
    )
    return HintResult(
        kind=technique,
        digit=d,
        target=coord(eliminated[0]),
        steps=steps,
        eliminations=refs(eliminated, d),
        unit=UnitRef(kind, base[0]),
    )


def find_skyscraper(board: Board) -> Optional[HintResult]:
    """
    Two parallel strong links on a digit sharing exactly one cross line.

    The ends that do not share it (the towers) cannot both be free of the
    digit, so any cell seeing both towers loses it. Rows first, then columns.
    """
    cands = candidate_map(board)
    for kind, lines, cross_kind, _ in ORIENTATIONS:
        for d in DIGITS:
            links = []
            for idx, line in enumerate(lines):
                spots = cells_with(cands, line, d)
                if len(spots) == 2:
                    links.append((idx, spots))

            for (i1, s1), (i2, s2) in combinations(links, 2):
                shared = ({_position(kind, i)[1] for i in s1} &
                          {_position(kind, i)[1] for i in s2})
                if len(shared) != 1:
                    continue
                base = shared.pop()
                tower1 = next(i for i in s1 if _position(kind, i)[1] != base)
                tower2 = next(i for i in s2 if _position(kind, i)[1] != base)
                eliminated = sorted(i for i in PEERS[tower1] & PEERS[tower2] if d in cands[i])
                if eliminated:
                    return _build_skyscraper(d, kind, cross_kind, (i1, i2), base,
                                             s1 + s2, (tower1, tower2), eliminated)
    return None


def _build_skyscraper(d: int, kind: str, cross_kind: str, lines: Tuple[int, int], base: int,
                      spots: Sequence[int], towers: Tuple[int, int], eliminated: List[int]) -> HintResult:
    t1, t2 = (coord_label(*cell_coord(t)) for t in towers)
    line_units = [(kind, i) for i in lines]
    steps = (
        HintStep(
            title=f"Two strong links on {d}",
            message=(f"In {lines_label(kind, list(lines))}, {d} has exactly two spots each: "
                     f"{cells_label(spots)}."),
            highlight=highlight(line_units, coords(spots), refs(spots, d)),
        ),
        HintStep(
            title="Shared base",
            message=(f"One end of each link lies in {lines_label(cross_kind, [base])}, so at most "
                     f"one of those ends is {d}. One of the towers {t1} and {t2} must be {d}."),
            highlight=highlight(line_units + [(cross_kind, base)], coords(towers), refs(towers, d)),
        ),
        HintStep(
            title=f"Remove {d} from cells seeing both towers",
            message=f"Eliminate {d} from {cells_label(eliminated)}.",
            highlight=highlight([], coords(towers), refs(eliminated, d)),
        ),
    )
    return HintResult(
        kind=Technique.SKYSCRAPER,
        digit=d,
        target=coord(eliminated[0]),
        steps=steps,
        eliminations=refs(eliminated, d),
        unit=UnitRef(kind, lines[0]),
    )
