"""Visualization utilities for benchmark results."""

from __future__ import annotations
import os
from collections import Counter
from typing import List

import matplotlib.pyplot as plt
import numpy as np
import seaborn as sns

from ..hints import Technique
from ..rater import Difficulty
from .benchmark import BenchmarkResult


class Visualizer:
    """
    Chart generator for generation benchmark results.

    Compares requested and rated difficulty, technique usage, timing and
    clue counts.
    """

    COLORS = {
        "easy": "#2ecc71",    # Green
        "medium": "#3498db",  # Blue
        "hard": "#f39c12",    # Orange
        "expert": "#e74c3c",  # Red
    }

    def __init__(self, results: List[BenchmarkResult], output_dir: str = "results"):
        """
        Initialize the visualizer.

        Args:
            results: List of benchmark results.
            output_dir: Directory to save generated charts.
        """
        self.results = results
        self.output_dir = output_dir
        os.makedirs(output_dir, exist_ok=True)

        plt.style.use('seaborn-v0_8-whitegrid')
        sns.set_palette("husl")

    def _requested(self) -> List[str]:
        present = {r.requested for r in self.results}
        return [d.value for d in Difficulty if d.value in present]

    def _save(self, name: str) -> str:
        plt.tight_layout()
        path = os.path.join(self.output_dir, name)
        plt.savefig(path, dpi=150, bbox_inches='tight')
        plt.close()
        return path

    def generate_all(self) -> List[str]:
        """
        Generate all charts.

        Returns:
            List of paths to generated chart files.
        """
        return [
            self.plot_bucket_confusion(),
            self.plot_technique_usage(),
            self.plot_time_distribution(),
            self.plot_clue_counts(),
        ]

    def plot_bucket_confusion(self) -> str:
        """Heatmap of requested difficulty against rated bucket."""
        fig, ax = plt.subplots(figsize=(8, 6))

        buckets = [d.value for d in Difficulty]
        requested = self._requested()
        matrix = np.zeros((len(requested), len(buckets)), dtype=int)
        for r in self.results:
            matrix[requested.index(r.requested), buckets.index(r.rated)] += 1

        sns.heatmap(matrix, annot=True, fmt="d", cmap="Blues", cbar=False,
                    xticklabels=[b.capitalize() for b in buckets],
                    yticklabels=[d.capitalize() for d in requested], ax=ax)

        ax.set_xlabel('Rated Bucket', fontsize=12)
        ax.set_ylabel('Requested Difficulty', fontsize=12)
        ax.set_title('Requested vs Rated Difficulty', fontsize=14, fontweight='bold')

        return self._save("bucket_confusion.png")

    def plot_technique_usage(self) -> str:
        """Horizontal bar chart of total technique applications."""
        fig, ax = plt.subplots(figsize=(10, 6))

        usage: Counter = Counter()
        for r in self.results:
            usage.update(r.by_technique)
        names = [t.value for t in Technique if usage[t.value]]
        counts = [usage[name] for name in names]

        y = np.arange(len(names))
        ax.barh(y, counts, color=sns.color_palette("husl", len(names)), edgecolor='black', linewidth=0.5)
        ax.set_yticks(y)
        ax.set_yticklabels(names)
        ax.invert_yaxis()
        if counts and max(counts) / max(min(counts), 1) > 100:
            ax.set_xscale('log')

        ax.set_xlabel('Applications', fontsize=12)
        ax.set_title('Technique Usage While Rating', fontsize=14, fontweight='bold')

        return self._save("technique_usage.png")

    def plot_time_distribution(self) -> str:
        """Create box plot showing generation time per requested difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        requested = self._requested()
        data = [[r.time_seconds for r in self.results if r.requested == d] for d in requested]

        bp = ax.boxplot(data, patch_artist=True)
        ax.set_xticks(range(1, len(requested) + 1))
        ax.set_xticklabels([d.capitalize() for d in requested])

        for patch, diff in zip(bp['boxes'], requested):
            patch.set_facecolor(self.COLORS.get(diff, "#95a5a6"))
            patch.set_alpha(0.7)

        ax.set_xlabel('Requested Difficulty', fontsize=12)
        ax.set_ylabel('Time (seconds)', fontsize=12)
        ax.set_title('Generation Time Distribution', fontsize=14, fontweight='bold')

        return self._save("time_distribution.png")

    def plot_clue_counts(self) -> str:
        """Create bar chart of average clue count per requested difficulty."""
        fig, ax = plt.subplots(figsize=(10, 6))

        requested = self._requested()
        avg_clues = [np.mean([r.clues for r in self.results if r.requested == d]) for d in requested]
        colors = [self.COLORS.get(d, "#95a5a6") for d in requested]

        bars = ax.bar([d.capitalize() for d in requested], avg_clues, color=colors,
                      edgecolor='black', linewidth=0.5)

        for bar, clues in zip(bars, avg_clues):
            height = bar.get_height()
            ax.annotate(f'{clues:.1f}',
                        xy=(bar.get_x() + bar.get_width() / 2, height),
                        xytext=(0, 3),
                        textcoords="offset points",
                        ha='center', va='bottom', fontsize=10)

        ax.set_xlabel('Requested Difficulty', fontsize=12)
        ax.set_ylabel('Average Clues', fontsize=12)
        ax.set_title('Clue Count by Difficulty', fontsize=14, fontweight='bold')
        ax.set_ylim(0, 81)

        return self._save("clue_counts.png")

    def generate_summary_table(self) -> str:
        """Generate a markdown summary table."""
        lines = [
            "# Benchmark Summary\n",
            "| Difficulty | Puzzles | Match Rate | Avg Time | Avg Clues | Avg Steps |",
            "|------------|---------|------------|----------|-----------|-----------|"
        ]

        for diff in self._requested():
            diff_results = [r for r in self.results if r.requested == diff]
            matched = sum(1 for r in diff_results if r.matched)
            match_rate = matched / len(diff_results) * 100

            avg_time = np.mean([r.time_seconds for r in diff_results])
            avg_clues = np.mean([r.clues for r in diff_results])
            avg_steps = np.mean([r.steps for r in diff_results])

            lines.append(
                f"| {diff.capitalize()} | {len(diff_results)} | {match_rate:.1f}% | "
                f"{avg_time:.3f}s | {avg_clues:.1f} | {avg_steps:.1f} |"
            )

        content = "\n".join(lines)

        path = os.path.join(self.output_dir, "benchmark_summary.md")
        with open(path, "w") as f:
            f.write(content)

        return path
