"""Tests for phase-offset (stride) optimization."""

import copy

import pytest

from conftest import are_rotations
from pulsecodes.bits import PARITY_EVEN, PARITY_NONE, frame_codeword
from pulsecodes.stats import column_sums, max_brightness, theoretical_minimum
from pulsecodes.stride import (
    TIE_LARGEST,
    TIE_SMALLEST,
    apply_fixed_stride,
    greedy_optimum_stride,
    greedy_reduce_overlaps,
    heaviest_first,
    optimize_strides,
    place_row,
    refine_row,
)
from pulsecodes.table import build_compact_table


def _peak(table, n_rows=None):
    return max_brightness(column_sums(table, n_rows))


# Rows 1..3 cover frames 0-2 once each; row 0 is a weight-two codeword
LEVELING_TABLE = [[1, 1, 0, 0], [1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0]]


@pytest.fixture
def compact_table():
    table = build_compact_table(24, 8, PARITY_NONE)
    heaviest_first(table)
    return table


class TestHeaviestFirst:
    def test_reverses_in_place(self):
        table = build_compact_table(4, 4, PARITY_NONE)
        heaviest_first(table)
        assert table == [[1, 1, 1, 0], [1, 0, 1, 0], [1, 1, 0, 0], [1, 0, 0, 0]]


class TestFixedStride:
    def test_zero_stride_is_noop(self, compact_table):
        before = copy.deepcopy(compact_table)
        apply_fixed_stride(compact_table, 0)
        assert compact_table == before

    def test_full_length_stride_is_noop(self):
        table = [[1, 0, 0, 0]] * 3
        apply_fixed_stride(table, 4)
        assert table == [[1, 0, 0, 0]] * 3

    def test_unit_stride_shifts_right(self):
        table = [[1, 0, 0, 0] for _ in range(4)]
        apply_fixed_stride(table, 1)
        assert table == [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]]

    def test_stride_wraps(self):
        table = [[1, 0, 0, 0] for _ in range(3)]
        apply_fixed_stride(table, 3)
        # row 2 shifts by 6 mod 4 = 2
        assert table == [[1, 0, 0, 0], [0, 0, 0, 1], [0, 0, 1, 0]]

    def test_negative_stride_raises(self):
        with pytest.raises(ValueError, match="non-negative"):
            apply_fixed_stride([[1, 0]], -1)

    def test_empty_table(self):
        table = []
        apply_fixed_stride(table, 2)
        assert table == []


class TestPlaceRow:
    def test_ties_prefer_largest_rotation(self):
        table = [[1, 0, 0, 0], [1, 0, 0, 0]]
        assert place_row(table, 1) == 3
        assert table[1] == [0, 1, 0, 0]

    def test_ties_prefer_smallest_rotation(self):
        table = [[1, 0, 0, 0], [1, 0, 0, 0]]
        assert place_row(table, 1, tie_break=TIE_SMALLEST) == 1
        assert table[1] == [0, 0, 0, 1]

    def test_ignores_rows_below(self):
        table = [[1, 0, 0, 0], [1, 0, 0, 0], [0, 1, 0, 0], [0, 1, 0, 0]]
        place_row(table, 1)
        assert table[1] == [0, 1, 0, 0]

    def test_never_raises_partial_peak(self, compact_table):
        for i in range(1, len(compact_table)):
            before = _peak(compact_table, i + 1)
            place_row(compact_table, i)
            assert _peak(compact_table, i + 1) <= before

    def test_unknown_tie_break_raises(self):
        with pytest.raises(ValueError, match="Unknown tie break"):
            place_row([[1, 0], [1, 0]], 1, tie_break="random")


class TestGreedyOptimumStride:
    def test_spreads_single_pulses(self):
        table = [[1, 0, 0, 0] for _ in range(4)]
        greedy_optimum_stride(table)
        assert table == [[1, 0, 0, 0], [0, 1, 0, 0], [0, 0, 1, 0], [0, 0, 0, 1]]
        assert _peak(table) == 1

    def test_first_row_fixed(self, compact_table):
        first = list(compact_table[0])
        greedy_optimum_stride(compact_table)
        assert compact_table[0] == first

    def test_rows_only_rotate(self, compact_table):
        before = copy.deepcopy(compact_table)
        greedy_optimum_stride(compact_table)
        for old, new in zip(before, compact_table):
            assert are_rotations(old, new)

    def test_empty_table(self):
        table = []
        greedy_optimum_stride(table)
        assert table == []


class TestRefineRow:
    def test_moves_away_from_collision(self):
        table = [[1, 0, 0, 0], [1, 0, 0, 0]]
        assert refine_row(table, 0) == 3
        assert table[0] == [0, 1, 0, 0]

    def test_leveling_prefers_higher_floor(self):
        table = copy.deepcopy(LEVELING_TABLE)
        assert refine_row(table, 0, level=True) == 2
        assert table[0] == [0, 0, 1, 1]
        assert column_sums(table) == [1, 1, 2, 1]

    def test_without_leveling_takes_largest_tie(self):
        table = copy.deepcopy(LEVELING_TABLE)
        assert refine_row(table, 0, level=False) == 3
        assert table[0] == [0, 1, 1, 0]

    def test_leveling_with_smallest_tie_break(self):
        table = copy.deepcopy(LEVELING_TABLE)
        assert refine_row(table, 0, level=True, tie_break=TIE_SMALLEST) == 1
        assert table[0] == [1, 0, 0, 1]

    def test_smallest_tie_break_keeps_current(self):
        table = copy.deepcopy(LEVELING_TABLE)
        assert refine_row(table, 0, level=False, tie_break=TIE_SMALLEST) == 0
        assert table == LEVELING_TABLE

    def test_never_raises_table_peak(self, compact_table):
        greedy_optimum_stride(compact_table)
        for _ in range(3):
            for i in range(len(compact_table)):
                before = _peak(compact_table)
                refine_row(compact_table, i)
                assert _peak(compact_table) <= before


class TestGreedyReduceOverlaps:
    def test_round_never_raises_peak(self, compact_table):
        before = _peak(compact_table)
        greedy_reduce_overlaps(compact_table)
        assert _peak(compact_table) <= before

    def test_preserves_rows_up_to_rotation(self, compact_table):
        before = copy.deepcopy(compact_table)
        greedy_reduce_overlaps(compact_table, level=False)
        for old, new in zip(before, compact_table):
            assert are_rotations(old, new)


class TestOptimizeStrides:
    def test_stride_zero_no_rounds_is_noop(self, compact_table):
        before = copy.deepcopy(compact_table)
        optimize_strides(compact_table, stride=0, rounds=0)
        assert compact_table == before

    def test_greedy_reaches_bound_for_single_pulses(self):
        table = [[1, 0, 0, 0, 0, 0] for _ in range(6)]
        optimize_strides(table, rounds=2)
        assert _peak(table) == 1 == theoretical_minimum(table)

    def test_deterministic(self):
        a = build_compact_table(30, 10, PARITY_EVEN)
        b = copy.deepcopy(a)
        optimize_strides(a, rounds=5)
        optimize_strides(b, rounds=5)
        assert a == b

    @pytest.mark.parametrize("stride", [-1, 0, 1, 3])
    @pytest.mark.parametrize("rounds", [0, 1, 4])
    def test_bound_never_exceeds_peak(self, compact_table, stride, rounds):
        optimize_strides(compact_table, stride=stride, rounds=rounds)
        assert theoretical_minimum(compact_table) <= _peak(compact_table)

    def test_refinement_rounds_never_raise_peak(self, compact_table):
        optimize_strides(compact_table, stride=2, rounds=0)
        before = _peak(compact_table)
        optimize_strides(compact_table, stride=0, rounds=3)
        assert _peak(compact_table) <= before

    def test_simple_encoding_rows(self):
        table = [frame_codeword(i, 3) for i in range(8)]
        heaviest_first(table)
        optimize_strides(table, rounds=3)
        assert all(len(row) == 12 for row in table)
        assert theoretical_minimum(table) <= _peak(table)

    def test_negative_rounds_raises(self):
        with pytest.raises(ValueError, match="rounds must be non-negative"):
            optimize_strides([[1, 0]], rounds=-1)

    def test_unknown_tie_break_raises(self):
        with pytest.raises(ValueError, match="Unknown tie break"):
            optimize_strides([[1, 0]], tie_break="random")

    def test_empty_table(self):
        table = []
        optimize_strides(table)
        assert table == []

    def test_default_tie_break_is_largest(self):
        a = [[1, 0, 0, 0], [1, 0, 0, 0]]
        b = copy.deepcopy(a)
        optimize_strides(a, rounds=0)
        optimize_strides(b, rounds=0, tie_break=TIE_LARGEST)
        assert a == b
