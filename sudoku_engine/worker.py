"""Background puzzle generation on a concurrent.futures executor."""

from __future__ import annotations
import logging
import random
import time
from concurrent.futures import Executor, Future, ProcessPoolExecutor, ThreadPoolExecutor
from dataclasses import dataclass
from typing import Optional

from .config import DEFAULT_CONFIG, EngineConfig
from .core.board import Board
from .generator import SudokuGenerator
from .rater import DifficultyRating

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationRequest:
    """One generation job."""
    difficulty: str = "medium"
    symmetry: Optional[str] = None
    seed: Optional[int] = None


@dataclass(frozen=True)
class GenerationResponse:
    """Result of a generation job."""
    board: Board
    rating: DifficultyRating
    elapsed_seconds: float


def run_generation(request: GenerationRequest, config: EngineConfig = DEFAULT_CONFIG) -> GenerationResponse:
    """Generate one puzzle for ``request``. Module level so process pools can pickle it."""
    start = time.perf_counter()
    generator = SudokuGenerator(rng=random.Random(request.seed), config=config)
    puzzle = generator.generate(request.difficulty, request.symmetry)
    elapsed = time.perf_counter() - start
    logger.debug("Generated %s puzzle in %.3fs", puzzle.rating.bucket.value, elapsed)
    return GenerationResponse(board=puzzle.board, rating=puzzle.rating, elapsed_seconds=elapsed)


class PuzzleWorker:
    """
    Runs generation off the caller's thread.

    Each ``submit`` is a single request/response round trip; a running
    generation is not cancelled. Use as a context manager or call
    ``shutdown`` when done.
    """

    def __init__(self, max_workers: int = 1, use_processes: bool = True,
                 config: EngineConfig = DEFAULT_CONFIG):
        self.config = config
        self.use_processes = use_processes
        executor_cls = ProcessPoolExecutor if use_processes else ThreadPoolExecutor
        self._executor: Executor = executor_cls(max_workers=max_workers)

    def submit(self, request: GenerationRequest) -> Future:
        """Queue a request; the future resolves to a ``GenerationResponse``."""
        logger.debug("Submitting %s", request)
        return self._executor.submit(run_generation, request, self.config)

    def generate(self, request: GenerationRequest, timeout: Optional[float] = None) -> GenerationResponse:
        """Submit and wait for the response."""
        return self.submit(request).result(timeout=timeout)

    def shutdown(self, wait: bool = True) -> None:
        self._executor.shutdown(wait=wait)

    def __enter__(self) -> PuzzleWorker:
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.shutdown()
