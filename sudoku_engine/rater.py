"""Difficulty rating by replaying the hint cascade like a human would."""

from __future__ import annotations
import logging
from collections import Counter
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Optional, Union

from .config import DEFAULT_CONFIG, EngineConfig
from .core.board import Board, clear_manual_candidates, compute_candidates
from .hints import HintService, Technique, Tier

logger = logging.getLogger(__name__)


class Difficulty(Enum):
    """Difficulty levels (rating buckets), easiest first."""
    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"
    EXPERT = "expert"

    @property
    def rank(self) -> int:
        return list(Difficulty).index(self)


@dataclass
class DifficultyRating:
    """
    Outcome of a rating run.

    ``by_technique`` is keyed by technique name (``Technique.value``);
    ``Technique`` members are accepted and stored by name.
    """
    bucket: Difficulty
    steps: int
    by_technique: Dict[str, int] = field(default_factory=dict)
    solved: bool = False

    def __post_init__(self):
        self.by_technique = {_technique(key).value: n for key, n in self.by_technique.items()}

    def tier_count(self, tier: Tier) -> int:
        return sum(n for name, n in self.by_technique.items() if Technique(name).tier is tier)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "bucket": self.bucket.value,
            "steps": self.steps,
            "byTechnique": dict(self.by_technique),
            "solved": self.solved,
        }


def _technique(key: Union[Technique, str]) -> Technique:
    try:
        return Technique(key)
    except ValueError:
        names = ", ".join(t.value for t in Technique)
        raise ValueError(f"Unknown technique {key!r}; expected one of: {names}") from None


def classify(by_technique: Dict[Union[Technique, str], int], steps: int, solved: bool) -> Difficulty:
    """Map a technique histogram to a bucket."""
    if not solved:
        # Needs guessing beyond the implemented technique set
        return Difficulty.EXPERT

    tiers: Counter = Counter()
    for name, n in by_technique.items():
        tiers[_technique(name).tier] += n
    hard, medium = tiers[Tier.HARD], tiers[Tier.MEDIUM]

    if hard >= 2 or steps > 180:
        return Difficulty.EXPERT
    if hard >= 1 or medium > 8 or steps > 120:
        return Difficulty.HARD
    if medium >= 3 or steps > 60:
        return Difficulty.MEDIUM
    return Difficulty.EASY


def rate(board: Board, config: EngineConfig = DEFAULT_CONFIG,
         service: Optional[HintService] = None) -> DifficultyRating:
    """
    Rate a puzzle by solving a copy of it step by step.

    Manual pencil marks are dropped first so they cannot steer the
    detectors. Stops when no hint is found or ``config.max_rating_steps``
    steps have been applied.
    """
    service = service or HintService()
    work = compute_candidates(clear_manual_candidates(board))
    by_technique: Counter = Counter()
    steps = 0

    while steps < config.max_rating_steps:
        hint = service.find_next_hint(work)
        if hint is None:
            break
        by_technique[hint.kind.value] += 1
        steps += 1
        work = hint.apply(work)
    else:
        logger.warning("Rating stopped at the %d step cap", config.max_rating_steps)

    solved = work.is_complete()
    bucket = classify(by_technique, steps, solved)
    logger.debug("Rated %s after %d steps (solved=%s): %s", bucket.value, steps, solved, dict(by_technique))
    return DifficultyRating(bucket=bucket, steps=steps, by_technique=dict(by_technique), solved=solved)
