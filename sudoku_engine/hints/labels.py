"""Human-readable names for cells and units (rows A-I, columns 1-9)."""

from typing import Dict, Iterable, List, Sequence, Tuple

from ..core.board import CandidateRef, Coord
from ..core.constants import ROW_LETTERS, cell_coord
from .types import HintHighlight


def coord_label(r: int, c: int) -> str:
    return f"{ROW_LETTERS[r]}{c + 1}"


def index_label(index: int) -> str:
    return coord_label(*cell_coord(index))


def cells_label(indices: Iterable[int]) -> str:
    return ", ".join(index_label(i) for i in indices)


def digits_label(digits: Iterable[int]) -> str:
    return "/".join(str(d) for d in sorted(digits))


def unit_name(kind: str, idx: int) -> str:
    if kind == "row":
        letter = ROW_LETTERS[idx]
        return f"row {letter} ({letter}1–{letter}9)"
    if kind == "col":
        return f"column {idx + 1} (A{idx + 1}–I{idx + 1})"
    return f"box {idx + 1}"


def lines_label(kind: str, indices: Sequence[int]) -> str:
    """Short list of rows or columns, e.g. ``rows A, D, G``."""
    if kind == "row":
        return "rows " + ", ".join(ROW_LETTERS[i] for i in indices)
    return "columns " + ", ".join(str(i + 1) for i in indices)


def unit_highlight(kind: str, idx: int) -> HintHighlight:
    if kind == "row":
        return HintHighlight(rows=(idx,))
    if kind == "col":
        return HintHighlight(cols=(idx,))
    return HintHighlight(boxes=(idx,))


def highlight(units: Iterable[Tuple[str, int]] = (), cells: Iterable[Coord] = (),
              cand_targets: Iterable[CandidateRef] = ()) -> HintHighlight:
    """Build a highlight from (kind, index) units plus cells and candidate marks."""
    picked: Dict[str, List[int]] = {"row": [], "col": [], "box": []}
    for kind, idx in units:
        if idx not in picked[kind]:
            picked[kind].append(idx)
    return HintHighlight(rows=tuple(picked["row"]), cols=tuple(picked["col"]), boxes=tuple(picked["box"]),
                         cells=tuple(cells), cand_targets=tuple(cand_targets))
