import logging
from typing import Callable, Dict, List, Optional, Sequence, Tuple

from floyd.fd_code import VARIABLE_LINES, code_lines_for
from floyd.fd_layout import cell_anchor, compute_array_cells, compute_layout, successor
from floyd.fd_model import (
    Annotation,
    Arrow,
    CanvasState,
    Phase,
    Pointer,
    Step,
    Variable,
)

logger = logging.getLogger(__name__)

POINTER_COLORS = {
    "slow": "#4CAF50",
    "fast": "#F44336",
    "pre1": "#9C27B0",
    "pre2": "#00BCD4",
}

ANNOTATION_POS = (400.0, 50.0)
NOTE_COLOR = "#666"
PHASE_COLOR = "#1976D2"
MEETING_COLOR = "#FF9800"
RESULT_COLOR = "#4CAF50"

Trajectory = List[Tuple[int, int]]


class IterationBudget:
    """
    Loop allowance shared by both phases. Valid input never runs out;
    it only keeps malformed input from looping forever.
    """

    def __init__(self, limit: int):
        self.limit = max(0, limit)
        self.used = 0

    @classmethod
    def for_input(cls, nums: Sequence[int]) -> "IterationBudget":
        return cls(2 * len(nums))

    @property
    def exhausted(self) -> bool:
        return self.used >= self.limit

    def spend(self) -> bool:
        if self.exhausted:
            return False
        self.used += 1
        return True


def _double_hop(nums: Sequence[int], index: int) -> Optional[int]:
    first = successor(nums, index)
    return None if first is None else successor(nums, first)


def prime_pointers(nums: Sequence[int]) -> Tuple[int, int, bool]:
    """
    The move made before the phase 1 loop: slow one hop from 0, fast two.
    Returns (slow, fast, ok); a pointer that cannot move stays at 0.
    """
    slow = successor(nums, 0)
    fast = _double_hop(nums, 0)
    ok = slow is not None and fast is not None
    return (0 if slow is None else slow), (0 if fast is None else fast), ok


def seek_meeting(
    nums: Sequence[int], slow: int, fast: int, budget: IterationBudget
) -> Tuple[Trajectory, bool]:
    """
    Phase 1 loop. Returns the (slow, fast) pair after every iteration and
    whether the pointers actually met.
    """
    trajectory: Trajectory = []
    while slow != fast:
        if not budget.spend():
            logger.warning("phase 1 stopped after %d iterations", budget.used)
            return trajectory, False
        next_slow = successor(nums, slow)
        next_fast = _double_hop(nums, fast)
        if next_slow is None or next_fast is None:
            return trajectory, False
        slow, fast = next_slow, next_fast
        trajectory.append((slow, fast))
    return trajectory, True


def seek_entry(
    nums: Sequence[int], meeting: int, budget: IterationBudget
) -> Tuple[Trajectory, bool]:
    """Phase 2 loop: pre1 from 0 and pre2 from the meeting point, one hop each."""
    pre1, pre2 = 0, meeting
    trajectory: Trajectory = []
    while pre1 != pre2:
        if not budget.spend():
            logger.warning("phase 2 stopped after %d iterations", budget.used)
            return trajectory, False
        next_pre1 = successor(nums, pre1)
        next_pre2 = successor(nums, pre2)
        if next_pre1 is None or next_pre2 is None:
            return trajectory, False
        pre1, pre2 = next_pre1, next_pre2
        trajectory.append((pre1, pre2))
    return trajectory, True


class _FloydRun:
    """
    Walks the phases INIT -> PHASE1 -> MEETING -> PHASE2 -> RESULT,
    emitting one step per pointer movement plus the boundary steps.
    """

    def __init__(self, nums: Sequence[int]):
        self.nums = tuple(nums)
        self.cells = compute_array_cells(self.nums)
        self.nodes = compute_layout(self.nums)
        self.budget = IterationBudget.for_input(self.nums)
        self.steps: List[Step] = []
        self.visited = set()  # indices any pointer has landed on so far

        self.slow = self.fast = 0
        self.met = False
        self.pre1 = 0
        self.pre2 = 0
        self.entry_found = False

        self._handlers: Dict[Phase, Callable[[], Optional[Phase]]] = {
            Phase.INIT: self._init,
            Phase.PHASE1: self._phase1,
            Phase.MEETING: self._meeting,
            Phase.PHASE2: self._phase2,
            Phase.RESULT: self._result,
        }

    def run(self) -> List[Step]:
        phase: Optional[Phase] = Phase.INIT
        while phase is not None:
            phase = self._handlers[phase]()
        logger.debug("generated %d steps for %d values", len(self.steps), len(self.nums))
        return self.steps

    # ---------- Phase handlers ----------

    def _init(self) -> Phase:
        canvas = self._canvas()
        canvas.annotations.append(
            self._annotation(
                "init-annotation",
                "Array as linked list: nums[i] is the node after node i",
                NOTE_COLOR,
                14,
            )
        )
        self._emit(
            Phase.INIT,
            "init",
            "Initialize: read the array as a linked list, nums[i] points from node i to node nums[i]",
            {"slow": 0, "fast": 0},
            canvas,
        )
        return Phase.PHASE1

    def _phase1(self) -> Phase:
        self.slow, self.fast, primed = prime_pointers(self.nums)

        canvas = self._pointer_canvas("slow", self.slow, "fast", self.fast)
        canvas.annotations.append(
            self._annotation(
                "phase1-start",
                "Phase 1: fast and slow pointers look for the meeting point",
                PHASE_COLOR,
            )
        )
        self._emit(
            Phase.PHASE1,
            "prime",
            f"Phase 1 begins: slow moves one step to {self.slow}, fast moves two steps to {self.fast}",
            {"slow": self.slow, "fast": self.fast},
            canvas,
        )

        if not primed:
            self.met = False
            return Phase.MEETING

        trajectory, self.met = seek_meeting(self.nums, self.slow, self.fast, self.budget)
        for iteration, (slow, fast) in enumerate(trajectory, start=1):
            prev_slow, prev_fast = self.slow, self.fast
            self.slow, self.fast = slow, fast

            canvas = self._pointer_canvas("slow", slow, "fast", fast)
            from_x, from_y = cell_anchor(prev_slow)
            to_x, to_y = cell_anchor(slow)
            canvas.arrows.append(
                Arrow(
                    id=f"slow-move-{iteration}",
                    from_x=from_x,
                    from_y=from_y,
                    to_x=to_x,
                    to_y=to_y,
                    color=POINTER_COLORS["slow"],
                    label="slow",
                    animated=True,
                )
            )
            canvas.annotations.append(
                self._annotation(
                    "phase1-loop",
                    f"Phase 1: looking for the meeting point (iteration {iteration})",
                    PHASE_COLOR,
                )
            )
            self._emit(
                Phase.PHASE1,
                "phase1_loop",
                f"slow: {prev_slow} → {slow}, fast: {prev_fast} → {fast}",
                {"slow": slow, "fast": fast},
                canvas,
            )
        return Phase.MEETING

    def _meeting(self) -> Phase:
        canvas = self._canvas()
        canvas.pointers = [self._pointer("slow", self.slow), self._pointer("fast", self.fast)]
        canvas.highlight(self.slow)
        if self.met:
            text = f"Meeting point: index {self.slow}, value {self.nums[self.slow]}"
            description = f"slow and fast meet at index {self.slow}!"
        else:
            canvas.highlight(self.fast)
            text = f"No meeting point: slow stopped at {self.slow}, fast at {self.fast}"
            description = f"The pointers never met (slow at {self.slow}, fast at {self.fast})"
        canvas.annotations.append(self._annotation("meet-point", text, MEETING_COLOR))
        self._emit(
            Phase.MEETING,
            "meeting",
            description,
            {"slow": self.slow, "fast": self.fast},
            canvas,
        )
        return Phase.PHASE2

    def _phase2(self) -> Phase:
        self.pre1, self.pre2 = 0, self.slow

        canvas = self._pointer_canvas("pre1", self.pre1, "pre2", self.pre2)
        canvas.annotations.append(
            self._annotation(
                "phase2-start",
                "Phase 2: start from index 0 and from the meeting point to find the cycle entry",
                PHASE_COLOR,
            )
        )
        self._emit(
            Phase.PHASE2,
            "phase2_start",
            f"Phase 2 begins: pre1 starts at 0, pre2 starts at meeting point {self.slow}",
            {"pre1": self.pre1, "pre2": self.pre2},
            canvas,
        )

        if self.met:
            trajectory, self.entry_found = seek_entry(self.nums, self.pre2, self.budget)
        else:
            trajectory, self.entry_found = [], False
        for iteration, (pre1, pre2) in enumerate(trajectory, start=1):
            prev_pre1, prev_pre2 = self.pre1, self.pre2
            self.pre1, self.pre2 = pre1, pre2

            canvas = self._pointer_canvas("pre1", pre1, "pre2", pre2)
            canvas.annotations.append(
                self._annotation(
                    "phase2-loop",
                    f"Phase 2: looking for the cycle entry (iteration {iteration})",
                    PHASE_COLOR,
                )
            )
            self._emit(
                Phase.PHASE2,
                "phase2_loop",
                f"pre1: {prev_pre1} → {pre1}, pre2: {prev_pre2} → {pre2}",
                {"pre1": pre1, "pre2": pre2},
                canvas,
            )
        return Phase.RESULT

    def _result(self) -> None:
        canvas = self._canvas()
        if self.entry_found:
            # 环入口的下标就是重复的数字
            canvas.mark_result(self.pre1)
            text = f"Duplicate found: {self.pre1}"
            description = f"Found the duplicate number: {self.pre1} (the cycle entry)"
        else:
            canvas.highlight(self.pre1)
            canvas.highlight(self.pre2)
            text = "No cycle entry found"
            description = f"Stopped without a cycle entry (pre1 at {self.pre1}, pre2 at {self.pre2})"
        canvas.annotations.append(self._annotation("result", text, RESULT_COLOR, 20))
        self._emit(
            Phase.RESULT,
            "result",
            description,
            {"pre1": self.pre1, "result": self.pre1 if self.entry_found else "-"},
            canvas,
        )
        return None

    # ---------- Helpers ----------

    def _canvas(self) -> CanvasState:
        canvas = CanvasState.from_base(self.cells, self.nodes)
        for cell in canvas.array_elements:
            cell.visited = cell.index in self.visited
        return canvas

    def _pointer_canvas(self, first, first_at, second, second_at) -> CanvasState:
        self.visited.update((first_at, second_at))
        canvas = self._canvas()
        canvas.pointers = [self._pointer(first, first_at), self._pointer(second, second_at)]
        canvas.highlight(first_at)
        canvas.highlight(second_at)
        return canvas

    @staticmethod
    def _pointer(name: str, index: int) -> Pointer:
        return Pointer(name=name, target_index=index, color=POINTER_COLORS[name], label=name)

    @staticmethod
    def _annotation(ann_id: str, text: str, color: str, font_size: int = 16) -> Annotation:
        x, y = ANNOTATION_POS
        return Annotation(id=ann_id, x=x, y=y, text=text, color=color, font_size=font_size)

    def _emit(self, phase: Phase, kind: str, description: str, values, canvas: CanvasState):
        lines = VARIABLE_LINES[kind]
        variables = tuple(
            Variable(name=name, value=value, line=lines[name])
            for name, value in values.items()
        )
        self.steps.append(
            Step(
                id=len(self.steps),
                phase=phase,
                description=description,
                code_lines=code_lines_for(kind),
                variables=variables,
                canvas=canvas,
            )
        )


def generate_steps(nums: Sequence[int]) -> List[Step]:
    """
    Simulate the two-phase pointer search over ``nums`` and return the full,
    already materialized step sequence. ``nums`` is never modified.
    """
    if not nums:
        return []
    return _FloydRun(nums).run()
