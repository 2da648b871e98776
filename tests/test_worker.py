"""Unit tests for background generation."""

from sudoku_engine.config import EngineConfig
from sudoku_engine.solvers import count_solutions
from sudoku_engine.worker import GenerationRequest, GenerationResponse, PuzzleWorker, run_generation

FAST = EngineConfig(max_remove_failures=8)


class TestRunGeneration:
    """Tests for the job function."""

    def test_response(self):
        response = run_generation(GenerationRequest("medium", seed=3), FAST)
        assert isinstance(response, GenerationResponse)
        assert count_solutions(response.board) == 1
        assert response.elapsed_seconds > 0

    def test_seed_is_reproducible(self):
        request = GenerationRequest("hard", symmetry="none", seed=17)
        first = run_generation(request, FAST)
        second = run_generation(request, FAST)
        assert first.board.to_string() == second.board.to_string()
        assert first.rating == second.rating


class TestPuzzleWorker:
    """Tests for the executor wrapper."""

    def test_thread_round_trip(self):
        with PuzzleWorker(use_processes=False, config=FAST) as worker:
            response = worker.generate(GenerationRequest("medium", seed=5), timeout=120)
        assert count_solutions(response.board) == 1

    def test_submit_returns_future(self):
        request = GenerationRequest("medium", seed=6)
        with PuzzleWorker(max_workers=2, use_processes=False, config=FAST) as worker:
            futures = [worker.submit(request) for _ in range(2)]
            boards = [f.result(timeout=120).board.to_string() for f in futures]
        assert boards[0] == boards[1]

    def test_process_round_trip(self):
        request = GenerationRequest("medium", seed=8)
        with PuzzleWorker(use_processes=True, config=FAST) as worker:
            response = worker.generate(request, timeout=120)
        assert response.board.to_string() == run_generation(request, FAST).board.to_string()
