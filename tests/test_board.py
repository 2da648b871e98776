"""Unit tests for the board model and validation."""

import pytest
import numpy as np
from sudoku_engine.core.board import (
    Board,
    CandidateRef,
    Cell,
    board_from_grid,
    clear_manual_candidates,
    clear_value,
    compute_candidates,
    create_empty_board,
    givens_only,
    parse_board_string,
    serialize_board,
    set_value,
    suppress_candidates,
    toggle_candidate,
)
from sudoku_engine.core.constants import PEERS, box_index, cell_index
from sudoku_engine.core.errors import FormatError
from sudoku_engine.core.validator import (
    detect_conflicts,
    is_valid_board,
    is_valid_placement,
    validate_solution,
)

from puzzles import TEST_PUZZLE, TEST_SOLUTION


class TestBoard:
    """Tests for the Board class."""

    def test_create_empty_board(self):
        """Test creating an empty 9x9 board."""
        board = create_empty_board()
        assert len(board.cells) == 81
        assert board.count_empty() == 81
        assert board.count_filled() == 0
        assert board.count_givens() == 0

    def test_cells_in_row_major_order(self):
        board = Board()
        assert board[cell_index(4, 7)].coord == (4, 7)
        assert board[4, 7] is board.cell(4, 7)

    def test_rejects_wrong_cell_count(self):
        with pytest.raises(ValueError):
            Board([Cell(0, 0)])

    def test_rejects_out_of_order_cells(self):
        cells = [Cell(r, c) for r in range(9) for c in range(9)]
        cells[0], cells[1] = cells[1], cells[0]
        with pytest.raises(ValueError):
            Board(cells)

    def test_box_index(self):
        assert Cell(0, 0).box == 0
        assert Cell(4, 4).box == 4
        assert Cell(8, 2).box == 6
        assert box_index(2, 8) == 2

    def test_peers(self):
        """Every cell has 20 peers and never itself."""
        for i, peers in enumerate(PEERS):
            assert len(peers) == 20
            assert i not in peers

    def test_to_array(self):
        board = parse_board_string(TEST_PUZZLE)
        arr = board.to_array()
        assert arr.shape == (9, 9)
        assert arr[0, 0] == 5
        assert arr[0, 2] == 0
        assert board.values()[0][:3] == [5, 3, 0]

    def test_pretty_print(self):
        board = parse_board_string(TEST_PUZZLE)
        text = str(board)
        assert text.splitlines()[0].startswith("+")
        assert "| 5 3 . |" in text

    def test_equality(self):
        assert parse_board_string(TEST_PUZZLE) == parse_board_string(TEST_PUZZLE)
        assert parse_board_string(TEST_PUZZLE) != Board()


class TestParsing:
    """Tests for string parsing and serialization."""

    def test_round_trip(self):
        board = parse_board_string(TEST_PUZZLE)
        assert serialize_board(board) == TEST_PUZZLE
        assert board.to_string() == TEST_PUZZLE

    def test_dots_and_whitespace(self):
        dotted = TEST_PUZZLE.replace("0", ".")
        spaced = "\n".join(dotted[i:i + 9] for i in range(0, 81, 9))
        assert serialize_board(parse_board_string(spaced)) == TEST_PUZZLE

    def test_all_zero_string_parses(self):
        board = parse_board_string("0" * 81)
        assert board.count_empty() == 81
        assert all(cell.candidates == frozenset(range(1, 10)) for cell in board)

    def test_require_givens(self):
        with pytest.raises(FormatError):
            parse_board_string("0" * 81, require_givens=True)

    def test_bad_length(self):
        with pytest.raises(FormatError):
            parse_board_string("0" * 80)

    def test_bad_character(self):
        with pytest.raises(FormatError):
            parse_board_string("x" + "0" * 80)

    def test_parsed_digits_are_givens(self):
        board = parse_board_string(TEST_PUZZLE)
        assert board.cell(0, 0).given
        assert not board.cell(0, 2).given
        assert board.count_givens() == 30

    def test_from_grid_accepts_numpy(self):
        grid = np.zeros((9, 9), dtype=int)
        grid[8, 8] = 9
        board = board_from_grid(grid)
        assert board.get(8, 8) == 9
        assert board.cell(8, 8).given

    def test_from_grid_rejects_bad_shape(self):
        with pytest.raises(ValueError):
            board_from_grid([[0] * 9] * 8)


class TestCandidates:
    """Tests for candidate derivation and pencil marks."""

    def test_candidates_exclude_peers(self):
        board = compute_candidates(set_value(set_value(Board(), 0, 0, 5), 0, 1, 3))
        candidates = board.cell(0, 2).candidates
        assert 5 not in candidates
        assert 3 not in candidates
        assert len(candidates) == 7

    def test_filled_cells_have_no_candidates(self):
        board = parse_board_string(TEST_PUZZLE)
        assert board.cell(0, 0).candidates == frozenset()

    def test_candidate_invariant(self):
        """Candidates are the allowed digits minus suppressed plus manual."""
        board = parse_board_string(TEST_PUZZLE)
        board = suppress_candidates(board, [CandidateRef(0, 2, 1)])
        board = toggle_candidate(board, 0, 2, 5)
        board = compute_candidates(board)
        cell = board.cell(0, 2)
        allowed = {d for d in range(1, 10) if is_valid_placement(board, 0, 2, d)}
        assert cell.candidates == (allowed - cell.suppressed) | cell.manual_cands
        assert 1 not in cell.candidates
        assert 5 in cell.candidates

    def test_suppress_removes_manual_mark(self):
        board = toggle_candidate(parse_board_string(TEST_PUZZLE), 0, 2, 5)
        board = compute_candidates(suppress_candidates(board, [CandidateRef(0, 2, 5)]))
        cell = board.cell(0, 2)
        assert 5 not in cell.manual_cands
        assert 5 in cell.suppressed
        assert 5 not in cell.candidates

    def test_toggle_twice_restores(self):
        board = parse_board_string(TEST_PUZZLE)
        digit = min(board.cell(0, 2).candidates)
        off = toggle_candidate(board, 0, 2, digit)
        assert digit not in off.cell(0, 2).candidates
        on = toggle_candidate(off, 0, 2, digit)
        assert digit in on.cell(0, 2).candidates

    def test_toggle_on_filled_cell_is_noop(self):
        board = parse_board_string(TEST_PUZZLE)
        assert toggle_candidate(board, 0, 0, 1) is board

    def test_clear_manual_candidates(self):
        board = toggle_candidate(parse_board_string(TEST_PUZZLE), 0, 2, 5)
        assert not clear_manual_candidates(board).cell(0, 2).manual_cands


class TestValueEdits:
    """Tests for copy-on-write value edits."""

    def test_set_value_returns_new_board(self):
        board = Board()
        updated = set_value(board, 4, 4, 7)
        assert updated.get(4, 4) == 7
        assert board.get(4, 4) == 0

    def test_set_value_clears_marks(self):
        board = suppress_candidates(parse_board_string(TEST_PUZZLE), [CandidateRef(0, 2, 1)])
        cell = set_value(board, 0, 2, 4).cell(0, 2)
        assert cell.value == 4
        assert not cell.candidates and not cell.suppressed and not cell.manual_cands

    def test_given_is_sticky(self):
        board = parse_board_string(TEST_PUZZLE)
        assert set_value(board, 0, 0, 9).cell(0, 0).given
        assert set_value(Board(), 0, 0, 9, as_given=True).cell(0, 0).given
        assert not set_value(Board(), 0, 0, 9).cell(0, 0).given

    def test_set_zero_clears(self):
        board = set_value(Board(), 1, 1, 3)
        assert set_value(board, 1, 1, 0).is_empty(1, 1)

    def test_invalid_digit(self):
        with pytest.raises(ValueError):
            set_value(Board(), 0, 0, 10)

    def test_invalid_coordinate(self):
        with pytest.raises(ValueError):
            set_value(Board(), 9, 0, 1)

    def test_clear_value_keeps_suppressed(self):
        board = suppress_candidates(Board(), [CandidateRef(0, 0, 2)])
        board = clear_value(set_value(board, 0, 0, 0), 0, 0)
        board = compute_candidates(board)
        assert board.cell(0, 0).suppressed == frozenset({2})
        assert 2 not in board.cell(0, 0).candidates

    def test_givens_only(self):
        board = set_value(parse_board_string(TEST_PUZZLE), 0, 2, 4)
        reset = givens_only(board)
        assert reset.get(0, 2) == 0
        assert reset.get(0, 0) == 5
        assert serialize_board(reset) == TEST_PUZZLE


class TestValidation:
    """Tests for validation functions."""

    def test_empty_board_valid(self):
        assert is_valid_board(Board())
        assert not detect_conflicts(Board())

    def test_row_conflict(self):
        board = set_value(set_value(Board(), 0, 0, 5), 0, 8, 5)
        conflicts = detect_conflicts(board)
        assert conflicts.rows == {0}
        assert conflicts.cols == set()
        assert conflicts.cells == {"0,0", "0,8"}
        assert not is_valid_board(board)

    def test_box_conflict(self):
        board = set_value(set_value(Board(), 0, 0, 5), 1, 1, 5)
        conflicts = detect_conflicts(board)
        assert conflicts.boxes == {0}
        assert conflicts.rows == set() and conflicts.cols == set()

    def test_is_valid_placement(self):
        board = parse_board_string(TEST_PUZZLE)
        assert not is_valid_placement(board, 0, 2, 5)
        assert is_valid_placement(board, 0, 2, 4)
        assert not is_valid_placement(board, 0, 2, 0)

    def test_validate_solution(self):
        puzzle = parse_board_string(TEST_PUZZLE)
        grid = [[int(ch) for ch in TEST_SOLUTION[r * 9:(r + 1) * 9]] for r in range(9)]
        assert validate_solution(puzzle, grid)
        grid[0][0], grid[0][1] = grid[0][1], grid[0][0]
        assert not validate_solution(puzzle, grid)

    def test_solved_board(self):
        assert parse_board_string(TEST_SOLUTION).is_solved()
        assert not parse_board_string(TEST_PUZZLE).is_solved()
