import logging
import math
from typing import List, Optional, Sequence, Tuple

from floyd.fd_model import ArrayElement, LayoutNode

logger = logging.getLogger(__name__)

# 数组格子
ARRAY_ORIGIN = (50.0, 50.0)
CELL_WIDTH = 60.0

# 链表节点：尾部水平排列，环部分圆形排列
TAIL_ORIGIN = (100.0, 80.0)
TAIL_SPACING = 80.0
CYCLE_CENTER_Y = 120.0
MIN_CYCLE_RADIUS = 60.0
RADIUS_PER_NODE = 20.0


def successor(nums: Sequence[int], index: int) -> Optional[int]:
    """
    Follow ``index -> nums[index]``. Returns None when either end of the
    hop falls outside the array.
    """
    if index < 0 or index >= len(nums):
        return None
    target = nums[index]
    if target < 0 or target >= len(nums):
        return None
    return target


def walk_from_zero(nums: Sequence[int]) -> Tuple[List[int], Optional[int]]:
    """
    Visit indices starting at 0 until one repeats.

    Returns the visited path in arrival order and the re-entry index
    (the first index seen twice), or None if the walk left the array or
    ran out of its step allowance.
    """
    path: List[int] = []
    if not nums:
        return path, None

    seen = set()
    current = 0
    limit = 2 * len(nums)
    for _ in range(limit):
        if current in seen:
            return path, current
        seen.add(current)
        path.append(current)
        nxt = successor(nums, current)
        if nxt is None:
            logger.warning(
                "walk left the array at index %d (value %r)", current, nums[current]
            )
            return path, None
        current = nxt

    logger.warning("walk stopped after %d steps without revisiting", limit)
    return path, None


def split_walk(path: List[int], reentry: Optional[int]) -> Tuple[List[int], List[int]]:
    """Split a walk into (tail, cycle) at the first occurrence of ``reentry``."""
    if reentry is None or reentry not in path:
        return list(path), []
    cut = path.index(reentry)
    return path[:cut], path[cut:]


def compute_layout(nums: Sequence[int]) -> List[LayoutNode]:
    """
    Place every index reachable from 0: the tail on a horizontal line,
    the cycle evenly around a circle to its right starting at the top
    and running clockwise. Nodes come back in walk order.
    """
    path, reentry = walk_from_zero(nums)
    tail, cycle = split_walk(path, reentry)

    positions = {}
    tail_x, tail_y = TAIL_ORIGIN
    for i, idx in enumerate(tail):
        positions[idx] = (tail_x + i * TAIL_SPACING, tail_y)

    if cycle:
        radius = max(MIN_CYCLE_RADIUS, len(cycle) * RADIUS_PER_NODE)
        center_x = tail_x + len(tail) * TAIL_SPACING + radius
        for i, idx in enumerate(cycle):
            angle = -math.pi / 2 + (2 * math.pi * i) / len(cycle)
            positions[idx] = (
                center_x + radius * math.cos(angle),
                CYCLE_CENTER_Y + radius * math.sin(angle),
            )

    cycle_members = set(cycle)
    nodes = []
    for idx in path:
        x, y = positions[idx]
        nodes.append(
            LayoutNode(
                index=idx,
                value=nums[idx],
                x=x,
                y=y,
                in_cycle=idx in cycle_members,
                cycle_entry=idx == reentry,
            )
        )
    return nodes


def compute_array_cells(nums: Sequence[int]) -> List[ArrayElement]:
    origin_x, origin_y = ARRAY_ORIGIN
    return [
        ArrayElement(index=i, value=value, x=origin_x + i * CELL_WIDTH, y=origin_y)
        for i, value in enumerate(nums)
    ]


def cell_anchor(index: int, drop: float = 40.0) -> Tuple[float, float]:
    """Point under the middle of an array cell, used for movement arrows."""
    origin_x, origin_y = ARRAY_ORIGIN
    return origin_x + index * CELL_WIDTH + CELL_WIDTH / 2, origin_y + drop
