"""Technique engine: human-style solving hints."""

from .bug import find_bug_plus_one
from .fish import find_jellyfish, find_skyscraper, find_swordfish
from .intersections import find_claiming, find_pointing
from .service import DEFAULT_TECHNIQUES, HintService, find_next_hint
from .singles import find_hidden_single, find_naked_single
from .subsets import find_hidden_pair, find_naked_pair
from .types import HintHighlight, HintResult, HintStep, Technique, Tier, UnitRef
from .wings import find_w_wing, find_xy_wing, find_xyz_wing

__all__ = [
    "DEFAULT_TECHNIQUES",
    "HintHighlight",
    "HintResult",
    "HintService",
    "HintStep",
    "Technique",
    "Tier",
    "UnitRef",
    "find_bug_plus_one",
    "find_claiming",
    "find_hidden_pair",
    "find_hidden_single",
    "find_jellyfish",
    "find_naked_pair",
    "find_naked_single",
    "find_next_hint",
    "find_pointing",
    "find_skyscraper",
    "find_swordfish",
    "find_w_wing",
    "find_xy_wing",
    "find_xyz_wing",
]
