"""Unit tests for puzzle generator."""

import os
import random

import pytest
from sudoku_engine.config import EngineConfig
from sudoku_engine.core.board import board_from_grid
from sudoku_engine.core.validator import is_valid_board, validate_solution
from sudoku_engine.generator import (
    Difficulty,
    GeneratedPuzzle,
    SudokuGenerator,
    Symmetry,
    generate,
    looks_easy,
)
from sudoku_engine.rater import DifficultyRating
from sudoku_engine.solvers import count_solutions

# Shallow digging keeps the slower tests quick
FAST = EngineConfig(max_remove_failures=8)


def _givens(board):
    return {(cell.r, cell.c) for cell in board if cell.given}


class TestSudokuGenerator:
    """Tests for SudokuGenerator class."""

    def test_easy_puzzle(self):
        """Easy puzzles keep the clue floor, are unique and rate easy."""
        puzzle = SudokuGenerator(seed=42).generate(Difficulty.EASY, Symmetry.CENTRAL)

        assert puzzle.clues >= 40
        assert count_solutions(puzzle.board) == 1
        assert validate_solution(puzzle.board, puzzle.solution)
        assert puzzle.rating.bucket is Difficulty.EASY
        assert puzzle.rating.solved

    def test_givens_match_solution(self):
        puzzle = SudokuGenerator(seed=7, config=FAST).generate("medium")
        for cell in puzzle.board:
            assert cell.given == (cell.value != 0)
            if cell.given:
                assert cell.value == puzzle.solution[cell.r][cell.c]

    def test_central_symmetry(self):
        puzzle = SudokuGenerator(seed=1, config=FAST).generate("hard", Symmetry.CENTRAL)
        givens = _givens(puzzle.board)
        assert givens == {(8 - r, 8 - c) for r, c in givens}

    def test_diagonal_symmetry(self):
        puzzle = SudokuGenerator(seed=2, config=FAST).generate("hard", "diagonal")
        givens = _givens(puzzle.board)
        assert givens == {(c, r) for r, c in givens}
        assert count_solutions(puzzle.board) == 1

    def test_no_symmetry(self):
        puzzle = SudokuGenerator(seed=3, config=FAST).generate("medium", Symmetry.NONE)
        assert count_solutions(puzzle.board) == 1
        assert puzzle.clues < 81

    def test_symmetry_defaults_to_config(self):
        config = EngineConfig(max_remove_failures=8, symmetry="diagonal")
        puzzle = SudokuGenerator(seed=4, config=config).generate("medium")
        givens = _givens(puzzle.board)
        assert givens == {(c, r) for r, c in givens}

    def test_same_seed_same_puzzle(self):
        first = SudokuGenerator(seed=123, config=FAST).generate("medium")
        second = SudokuGenerator(seed=123, config=FAST).generate("medium")
        assert first.board.to_string() == second.board.to_string()

    def test_different_seeds(self):
        first = SudokuGenerator(seed=123, config=FAST).generate("medium")
        second = SudokuGenerator(seed=456, config=FAST).generate("medium")
        assert first.solution != second.solution

    def test_shared_rng(self):
        rng = random.Random(9)
        puzzle = SudokuGenerator(rng=rng, config=FAST).generate("medium")
        assert count_solutions(puzzle.board) == 1

    def test_generate_with_solution(self):
        """Test generating puzzle with solution."""
        generator = SudokuGenerator(seed=42, config=FAST)
        puzzle, solution = generator.generate_with_solution(Difficulty.MEDIUM)

        assert board_from_grid(solution).is_solved()
        for cell in puzzle:
            if cell.value:
                assert cell.value == solution[cell.r][cell.c]

    def test_generate_with_solution_symmetry(self):
        generator = SudokuGenerator(seed=8, config=FAST)
        puzzle, _ = generator.generate_with_solution("medium", Symmetry.DIAGONAL)
        givens = _givens(puzzle)
        assert givens == {(c, r) for r, c in givens}

    def test_generate_batch(self):
        """Test batch generation."""
        puzzles = SudokuGenerator(seed=42, config=FAST).generate_batch(3, Difficulty.MEDIUM)

        assert len(puzzles) == 3
        assert len({p.board.to_string() for p in puzzles}) == 3
        for puzzle in puzzles:
            assert is_valid_board(puzzle.board)

    def test_generate_matching_easy(self):
        puzzle = SudokuGenerator(seed=5).generate_matching(Difficulty.EASY, max_attempts=3)
        assert puzzle.rating.bucket is Difficulty.EASY
        assert 1 <= puzzle.attempts <= 3

    def test_rejects_unknown_difficulty(self):
        with pytest.raises(ValueError):
            SudokuGenerator(seed=1).generate("impossible")

    def test_module_level_generate(self):
        puzzle = generate("medium", Symmetry.CENTRAL, max_remove_failures=8, rng=random.Random(11))
        assert isinstance(puzzle, GeneratedPuzzle)
        assert count_solutions(puzzle.board) == 1

    def test_save_to_folder(self, tmp_path):
        puzzles = SudokuGenerator(seed=42, config=FAST).generate_batch(2, "medium")
        SudokuGenerator.save_to_folder(puzzles, str(tmp_path), prefix="medium")

        assert sorted(os.listdir(tmp_path)) == ["medium_1.txt", "medium_2.txt"]
        text = (tmp_path / "medium_1.txt").read_text()
        assert text.splitlines()[0] == puzzles[0].board.to_string()
        assert "Rating:" in text


class TestSymmetry:
    """Tests for symmetric mates."""

    def test_central(self):
        assert Symmetry.CENTRAL.mates(0, 1) == [(8, 7)]
        assert Symmetry.CENTRAL.mates(4, 4) == []

    def test_diagonal(self):
        assert Symmetry.DIAGONAL.mates(2, 7) == [(7, 2)]
        assert Symmetry.DIAGONAL.mates(3, 3) == []

    def test_none(self):
        assert Symmetry.NONE.mates(0, 0) == []


class TestLooksEasy:
    """Tests for the strict easy check."""

    def test_singles_only(self):
        rating = DifficultyRating(Difficulty.EASY, 41, {"Naked Single": 30, "Hidden Single": 11}, True)
        assert looks_easy(rating)

    def test_too_many_steps(self):
        rating = DifficultyRating(Difficulty.EASY, 55, {"Naked Single": 55}, True)
        assert not looks_easy(rating)

    def test_too_few_singles(self):
        rating = DifficultyRating(Difficulty.EASY, 9, {"Naked Single": 9}, True)
        assert not looks_easy(rating)

    def test_medium_bucket(self):
        rating = DifficultyRating(Difficulty.MEDIUM, 40, {"Naked Single": 37, "Naked Pair": 3}, True)
        assert not looks_easy(rating)
