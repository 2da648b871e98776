"""Benchmarking framework for the puzzle generator and difficulty rater."""

from __future__ import annotations
import json
import logging
import os
import random
import time
from collections import Counter
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

import numpy as np
from tqdm import tqdm

from ..config import DEFAULT_CONFIG, EngineConfig
from ..generator import GeneratedPuzzle, SudokuGenerator, Symmetry
from ..rater import Difficulty

logger = logging.getLogger(__name__)


@dataclass
class BenchmarkResult:
    """Results from a single generated puzzle."""
    puzzle_id: int
    requested: str
    rated: str
    clues: int
    steps: int
    solved: bool
    time_seconds: float
    attempts: int = 1
    by_technique: Dict[str, int] = field(default_factory=dict)

    @property
    def matched(self) -> bool:
        return self.requested == self.rated

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary."""
        return {
            "puzzle_id": self.puzzle_id,
            "requested": self.requested,
            "rated": self.rated,
            "matched": self.matched,
            "clues": self.clues,
            "steps": self.steps,
            "solved": self.solved,
            "time_seconds": self.time_seconds,
            "attempts": self.attempts,
            "by_technique": dict(self.by_technique),
        }


class Benchmark:
    """
    Benchmark for puzzle generation.

    Generates puzzles for each requested difficulty, rates them and
    records timing, clue counts and the techniques the rater needed.
    """

    def __init__(
        self,
        puzzles_per_difficulty: int = 10,
        difficulties: Optional[List[Difficulty]] = None,
        symmetry: Optional[Symmetry] = None,
        seed: Optional[int] = None,
        config: EngineConfig = DEFAULT_CONFIG,
    ):
        """
        Initialize the benchmark.

        Args:
            puzzles_per_difficulty: Number of puzzles to generate per difficulty.
            difficulties: List of difficulties to test (default: all).
            symmetry: Clue symmetry (default from config).
            seed: Random seed for reproducibility.
            config: Generator and rater limits.
        """
        self.puzzles_per_difficulty = puzzles_per_difficulty
        self.difficulties = difficulties or list(Difficulty)
        self.symmetry = symmetry
        self.seed = seed
        self.config = config

        self.puzzles: Dict[str, List[GeneratedPuzzle]] = {}
        self.results: List[BenchmarkResult] = []

    def run(self, show_progress: bool = True) -> List[BenchmarkResult]:
        """
        Generate and rate every puzzle.

        Returns:
            List of BenchmarkResult objects.
        """
        generator = SudokuGenerator(rng=random.Random(self.seed), config=self.config)
        self.puzzles = {}
        self.results = []

        total = len(self.difficulties) * self.puzzles_per_difficulty
        pbar = tqdm(total=total, desc="Generating", disable=not show_progress)

        for difficulty in self.difficulties:
            batch = self.puzzles.setdefault(difficulty.value, [])
            for puzzle_id in range(self.puzzles_per_difficulty):
                start = time.perf_counter()
                puzzle = generator.generate(difficulty, self.symmetry)
                elapsed = time.perf_counter() - start

                batch.append(puzzle)
                self.results.append(BenchmarkResult(
                    puzzle_id=puzzle_id,
                    requested=difficulty.value,
                    rated=puzzle.rating.bucket.value,
                    clues=puzzle.clues,
                    steps=puzzle.rating.steps,
                    solved=puzzle.rating.solved,
                    time_seconds=elapsed,
                    attempts=puzzle.attempts,
                    by_technique=dict(puzzle.rating.by_technique),
                ))
                pbar.update(1)

        pbar.close()
        logger.info("Benchmarked %d puzzles", len(self.results))
        return self.results

    def get_summary(self) -> Dict[str, Any]:
        """Get summary statistics from benchmark results."""
        summary = {
            "total_puzzles": len(self.results),
            "difficulties": [d.value for d in self.difficulties],
            "results_by_difficulty": {},
            "technique_usage": {},
        }

        usage: Counter = Counter()
        for r in self.results:
            usage.update(r.by_technique)
        summary["technique_usage"] = dict(usage.most_common())

        for difficulty in self.difficulties:
            diff_results = [r for r in self.results if r.requested == difficulty.value]
            if not diff_results:
                continue
            times = [r.time_seconds for r in diff_results]
            clues = [r.clues for r in diff_results]
            summary["results_by_difficulty"][difficulty.value] = {
                "tested": len(diff_results),
                "match_rate": sum(1 for r in diff_results if r.matched) / len(diff_results) * 100,
                "rated": dict(Counter(r.rated for r in diff_results)),
                "avg_time_seconds": float(np.mean(times)),
                "max_time_seconds": float(np.max(times)),
                "avg_clues": float(np.mean(clues)),
                "min_clues": int(np.min(clues)),
                "avg_steps": float(np.mean([r.steps for r in diff_results])),
            }

        return summary

    def save_results(self, output_dir: str) -> None:
        """Save benchmark results and generated puzzles to files."""
        os.makedirs(output_dir, exist_ok=True)

        results_file = os.path.join(output_dir, "benchmark_results.json")
        with open(results_file, "w") as f:
            json.dump([r.to_dict() for r in self.results], f, indent=2)

        summary_file = os.path.join(output_dir, "benchmark_summary.json")
        with open(summary_file, "w") as f:
            json.dump(self.get_summary(), f, indent=2)

        puzzles_dir = os.path.join(output_dir, "puzzles")
        for difficulty, puzzles in self.puzzles.items():
            diff_dir = os.path.join(puzzles_dir, difficulty)
            SudokuGenerator.save_to_folder(puzzles, diff_dir, prefix=f"puzzle_{difficulty}")

        logger.info("Results and puzzles saved to %s", output_dir)
