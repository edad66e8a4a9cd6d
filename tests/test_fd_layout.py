"""Tests for the tail / cycle layout calculator."""

import math

import pytest

from floyd.fd_layout import (
    CELL_WIDTH,
    MIN_CYCLE_RADIUS,
    compute_array_cells,
    compute_layout,
    split_walk,
    successor,
    walk_from_zero,
)


class TestWalk:
    def test_successor_bounds(self):
        nums = [1, 3, 4, 2, 2]
        assert successor(nums, 0) == 1
        assert successor(nums, 5) is None
        assert successor(nums, -1) is None
        assert successor([9, 0], 0) is None

    def test_walk_stops_on_revisit(self):
        path, reentry = walk_from_zero([1, 3, 4, 2, 2])
        assert path == [0, 1, 3, 2, 4]
        assert reentry == 2

    def test_walk_stops_when_leaving_array(self):
        path, reentry = walk_from_zero([1, 7, 2])
        assert path == [0, 1]
        assert reentry is None

    def test_walk_empty(self):
        assert walk_from_zero([]) == ([], None)

    def test_split(self):
        assert split_walk([0, 1, 3, 2, 4], 2) == ([0, 1, 3], [2, 4])
        assert split_walk([0, 1], None) == ([0, 1], [])


class TestComputeLayout:
    def test_tail_and_cycle_flags(self):
        nodes = compute_layout([1, 3, 4, 2, 2])
        assert [n.index for n in nodes] == [0, 1, 3, 2, 4]
        assert [n.in_cycle for n in nodes] == [False, False, False, True, True]
        assert [n.index for n in nodes if n.cycle_entry] == [2]
        assert [n.value for n in nodes] == [1, 3, 2, 4, 2]

    def test_tail_is_horizontal(self):
        nodes = compute_layout([1, 3, 4, 2, 2])
        tail = [n for n in nodes if not n.in_cycle]
        assert [(n.x, n.y) for n in tail] == [(100.0, 80.0), (180.0, 80.0), (260.0, 80.0)]

    def test_cycle_is_a_circle_starting_at_top(self):
        nodes = compute_layout([1, 3, 4, 2, 2])
        entry, other = [n for n in nodes if n.in_cycle]
        center_x = 100 + 3 * 80 + MIN_CYCLE_RADIUS
        assert entry.x == pytest.approx(center_x)
        assert entry.y == pytest.approx(120 - MIN_CYCLE_RADIUS)
        assert other.x == pytest.approx(center_x)
        assert other.y == pytest.approx(120 + MIN_CYCLE_RADIUS)

    def test_radius_grows_with_cycle(self):
        nums = [2, 5, 9, 6, 9, 3, 8, 9, 7, 1]
        nodes = compute_layout(nums)
        cycle = [n for n in nodes if n.in_cycle]
        tail = [n for n in nodes if not n.in_cycle]
        radius = max(MIN_CYCLE_RADIUS, 20 * len(cycle))
        center_x = 100 + 80 * len(tail) + radius
        for node in cycle:
            assert math.hypot(node.x - center_x, node.y - 120) == pytest.approx(radius)

    def test_clockwise_order(self):
        # 0 -> 1 -> 2 -> 3 -> 1: cycle of three
        nodes = compute_layout([1, 2, 3, 1])
        cycle = [n for n in nodes if n.in_cycle]
        assert [n.index for n in cycle] == [1, 2, 3]
        # second node sits to the right of the first (clockwise from the top)
        assert cycle[1].x > cycle[0].x
        assert cycle[1].y > cycle[0].y

    def test_self_loop(self):
        nodes = compute_layout([3, 3, 3, 3, 3])
        assert [(n.index, n.in_cycle, n.cycle_entry) for n in nodes] == [
            (0, False, False),
            (3, True, True),
        ]

    def test_malformed_input_is_all_tail(self):
        nodes = compute_layout([1, 7, 2])
        assert [n.index for n in nodes] == [0, 1]
        assert not any(n.in_cycle or n.cycle_entry for n in nodes)

    def test_stable(self):
        nums = [2, 5, 9, 6, 9, 3, 8, 9, 7, 1]
        assert compute_layout(nums) == compute_layout(nums)

    def test_empty(self):
        assert compute_layout([]) == []


class TestArrayCells:
    def test_positions(self):
        cells = compute_array_cells([3, 1, 3, 4, 2])
        assert [c.value for c in cells] == [3, 1, 3, 4, 2]
        assert [c.x for c in cells] == [50 + i * CELL_WIDTH for i in range(5)]
        assert all(c.y == 50 for c in cells)
        assert not any(c.highlighted or c.is_result for c in cells)
