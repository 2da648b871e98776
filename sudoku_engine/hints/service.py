"""The technique cascade: find the easiest next logical step."""

from __future__ import annotations
import logging
from typing import Optional, Sequence, Tuple

from ..core.board import Board, compute_candidates
from .base import Detector
from .bug import find_bug_plus_one
from .fish import find_jellyfish, find_skyscraper, find_swordfish
from .intersections import find_claiming, find_pointing
from .singles import find_hidden_single, find_naked_single
from .subsets import find_hidden_pair, find_naked_pair
from .types import HintResult
from .wings import find_w_wing, find_xy_wing, find_xyz_wing

logger = logging.getLogger(__name__)

# Ascending apparent complexity. The rater counts which of these fire, so
# the order is what makes its buckets meaningful.
DEFAULT_TECHNIQUES: Tuple[Detector, ...] = (
    find_naked_single,
    find_hidden_single,
    find_pointing,
    find_claiming,
    find_naked_pair,
    find_hidden_pair,
    find_bug_plus_one,
    find_swordfish,
    find_jellyfish,
    find_skyscraper,
    find_xy_wing,
    find_w_wing,
    find_xyz_wing,
)


class HintService:
    """
    Runs the detectors in a fixed order and returns the first match.

    The service keeps no board state between calls; every call works on
    the board it is given.
    """

    def __init__(self, techniques: Optional[Sequence[Detector]] = None):
        """
        Args:
            techniques: Detectors to try, in priority order. Defaults to
                        the full cascade. An empty sequence finds nothing.
        """
        self.techniques: Tuple[Detector, ...] = DEFAULT_TECHNIQUES if techniques is None else tuple(techniques)

    def find_next_hint(self, board: Board) -> Optional[HintResult]:
        """
        Find the next step for ``board``.

        Returns:
            The lowest-priority matching hint, or None when no implemented
            technique applies (the puzzle may still be solvable).
        """
        with_cands = compute_candidates(board)
        for detect in self.techniques:
            hint = detect(with_cands)
            if hint is not None:
                logger.debug("%s: %s at %s", hint.kind.value, hint.digit, hint.target)
                return hint
        return None


_default_service = HintService()


def find_next_hint(board: Board) -> Optional[HintResult]:
    """Find the next step with the default cascade."""
    return _default_service.find_next_hint(board)
