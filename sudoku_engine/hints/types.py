"""Data types exchanged between the technique engine and its callers."""

from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, NamedTuple, Optional, Tuple

from ..core.board import Board, CandidateRef, Coord, compute_candidates, set_value, suppress_candidates


class Tier(Enum):
    """How much reasoning a technique takes; drives the difficulty buckets."""
    SINGLE = "single"
    MEDIUM = "medium"
    HARD = "hard"


class Technique(Enum):
    """Solving techniques, in the order the cascade tries them."""
    NAKED_SINGLE = "Naked Single"
    HIDDEN_SINGLE = "Hidden Single"
    POINTING = "Locked Candidates (Pointing)"
    CLAIMING = "Locked Candidates (Claiming)"
    NAKED_PAIR = "Naked Pair"
    HIDDEN_PAIR = "Hidden Pair"
    BUG = "BUG+1"
    SWORDFISH = "Swordfish"
    JELLYFISH = "Jellyfish"
    SKYSCRAPER = "Skyscraper"
    XY_WING = "XY-Wing"
    W_WING = "W-Wing"
    XYZ_WING = "XYZ-Wing"

    @property
    def tier(self) -> Tier:
        """Get the complexity tier of this technique."""
        tiers = {
            Technique.NAKED_SINGLE: Tier.SINGLE,
            Technique.HIDDEN_SINGLE: Tier.SINGLE,
            Technique.POINTING: Tier.MEDIUM,
            Technique.CLAIMING: Tier.MEDIUM,
            Technique.NAKED_PAIR: Tier.MEDIUM,
            Technique.HIDDEN_PAIR: Tier.MEDIUM,
        }
        return tiers.get(self, Tier.HARD)


class UnitRef(NamedTuple):
    kind: str  # "row" | "col" | "box"
    index: int


@dataclass(frozen=True)
class HintHighlight:
    """What the UI should emphasise for one explanation step. No solving meaning."""
    rows: Tuple[int, ...] = ()
    cols: Tuple[int, ...] = ()
    boxes: Tuple[int, ...] = ()
    cells: Tuple[Coord, ...] = ()
    cand_targets: Tuple[CandidateRef, ...] = ()

    def to_dict(self) -> Dict[str, Any]:
        return {
            "rows": list(self.rows),
            "cols": list(self.cols),
            "boxes": list(self.boxes),
            "cells": [{"r": r, "c": c} for r, c in self.cells],
            "candTargets": [{"r": r, "c": c, "d": d} for r, c, d in self.cand_targets],
        }


@dataclass(frozen=True)
class HintStep:
    title: str
    message: str
    highlight: HintHighlight = field(default_factory=HintHighlight)

    def to_dict(self) -> Dict[str, Any]:
        return {"title": self.title, "message": self.message, "highlight": self.highlight.to_dict()}


@dataclass(frozen=True)
class HintResult:
    """
    One logical step found by the technique engine.

    Single techniques carry a ``placement``; elimination techniques carry
    the (cell, digit) pairs they rule out in ``eliminations``.
    """
    kind: Technique
    digit: int
    target: Coord
    steps: Tuple[HintStep, ...]
    placement: Optional[CandidateRef] = None
    eliminations: Tuple[CandidateRef, ...] = ()
    unit: Optional[UnitRef] = None

    def apply(self, board: Board) -> Board:
        """
        Commit the step to ``board`` and return the new board.

        Placements set the cell's value. Eliminations are recorded as
        suppressed marks rather than deleted, so clearing a value later
        still leaves the deduction in place. Candidates are recomputed.
        """
        if self.placement is not None:
            r, c, d = self.placement
            board = set_value(board, r, c, d)
        else:
            board = suppress_candidates(board, self.eliminations)
        return compute_candidates(board)

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {
            "kind": self.kind.value,
            "digit": self.digit,
            "target": {"r": self.target.r, "c": self.target.c},
            "steps": [step.to_dict() for step in self.steps],
        }
        if self.placement is not None:
            data["placement"] = {"r": self.placement.r, "c": self.placement.c, "d": self.placement.d}
        if self.eliminations:
            data["eliminations"] = [{"r": r, "c": c, "d": d} for r, c, d in self.eliminations]
        if self.unit is not None:
            data["unit"] = {"kind": self.unit.kind, "index": self.unit.index}
        return data
