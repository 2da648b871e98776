"""Board geometry shared by every part of the engine."""

from typing import FrozenSet, List, Tuple

SIZE = 9
BOX = 3
CELLS = SIZE * SIZE
DIGITS: Tuple[int, ...] = tuple(range(1, SIZE + 1))
ALL_DIGITS: FrozenSet[int] = frozenset(DIGITS)

ROW_LETTERS = "ABCDEFGHI"


def box_index(row: int, col: int) -> int:
    """Get the box index (0 to 8) for a cell."""
    return (row // BOX) * BOX + (col // BOX)


def cell_index(row: int, col: int) -> int:
    return row * SIZE + col


def cell_coord(index: int) -> Tuple[int, int]:
    return divmod(index, SIZE)


def key_of(row: int, col: int) -> str:
    return f"{row},{col}"


def _build_units() -> Tuple[List[List[int]], List[List[int]], List[List[int]]]:
    rows = [[cell_index(r, c) for c in range(SIZE)] for r in range(SIZE)]
    cols = [[cell_index(r, c) for r in range(SIZE)] for c in range(SIZE)]
    boxes = []
    for b in range(SIZE):
        br, bc = (b // BOX) * BOX, (b % BOX) * BOX
        boxes.append([cell_index(br + i, bc + j) for i in range(BOX) for j in range(BOX)])
    return rows, cols, boxes


ROWS, COLS, BOXES = _build_units()


def _build_peers() -> Tuple[FrozenSet[int], ...]:
    peers = []
    for i in range(CELLS):
        r, c = cell_coord(i)
        group = set(ROWS[r]) | set(COLS[c]) | set(BOXES[box_index(r, c)])
        group.discard(i)
        peers.append(frozenset(group))
    return tuple(peers)


# Read-only, built once per process.
PEERS: Tuple[FrozenSet[int], ...] = _build_peers()
