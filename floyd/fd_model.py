import copy
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, List, Optional, Tuple, Union


LANGUAGES: Tuple[str, ...] = ("java", "python", "golang", "javascript")


class Phase(Enum):
    """Stages of the two-phase pointer walk."""

    INIT = "init"
    PHASE1 = "phase1"  # slow / fast 找相遇点
    MEETING = "meeting"
    PHASE2 = "phase2"  # pre1 / pre2 找环入口
    RESULT = "result"


@dataclass
class ArrayElement:
    index: int
    value: int
    x: float
    y: float
    highlighted: bool = False
    visited: bool = False
    is_result: bool = False


@dataclass
class LayoutNode:
    """
    One index reachable from 0. The index doubles as the node identity,
    the value is the successor index.
    """

    index: int
    value: int
    x: float
    y: float
    highlighted: bool = False
    in_cycle: bool = False
    cycle_entry: bool = False


@dataclass(frozen=True)
class Pointer:
    name: str
    target_index: int
    color: str
    label: str


@dataclass(frozen=True)
class Arrow:
    id: str
    from_x: float
    from_y: float
    to_x: float
    to_y: float
    color: str
    label: Optional[str] = None
    animated: bool = False
    dashed: bool = False


@dataclass(frozen=True)
class Annotation:
    id: str
    x: float
    y: float
    text: str
    color: str
    font_size: int = 14


@dataclass(frozen=True)
class Variable:
    name: str
    value: Union[int, str]
    line: int


@dataclass
class CanvasState:
    """
    Everything a renderer needs for a single moment. Each step owns its
    own instance; nothing in here is shared with another step.
    """

    array_elements: List[ArrayElement]
    nodes: List[LayoutNode]
    pointers: List[Pointer] = field(default_factory=list)
    arrows: List[Arrow] = field(default_factory=list)
    annotations: List[Annotation] = field(default_factory=list)
    highlighted_indices: List[int] = field(default_factory=list)
    found_duplicate: Optional[int] = None
    _node_index: Dict[int, LayoutNode] = field(
        default_factory=dict, init=False, repr=False, compare=False
    )

    def __post_init__(self):
        self._node_index = {node.index: node for node in self.nodes}

    @classmethod
    def from_base(cls, cells: List[ArrayElement], nodes: List[LayoutNode]):
        return cls(
            array_elements=copy.deepcopy(cells),
            nodes=copy.deepcopy(nodes),
        )

    def node_for(self, index: int) -> Optional[LayoutNode]:
        return self._node_index.get(index)

    def highlight(self, index: int):
        """Highlight the array cell and the layout node for ``index``."""
        if 0 <= index < len(self.array_elements):
            self.array_elements[index].highlighted = True
            if index not in self.highlighted_indices:
                self.highlighted_indices.append(index)
        node = self.node_for(index)
        if node is not None:
            node.highlighted = True

    def mark_result(self, duplicate: int):
        for cell in self.array_elements:
            if cell.value == duplicate:
                cell.is_result = True
                self.highlight(cell.index)
        self.highlight(duplicate)
        node = self.node_for(duplicate)
        if node is not None:
            node.cycle_entry = True
        self.found_duplicate = duplicate


@dataclass(frozen=True)
class Step:
    id: int
    phase: Phase
    description: str
    code_lines: Dict[str, Tuple[int, ...]]
    variables: Tuple[Variable, ...]
    canvas: CanvasState

    # canvas 与 code_lines 是可变容器：Step 可比较，但不可哈希
    __hash__ = None

    def lines_for(self, language: str) -> Tuple[int, ...]:
        return self.code_lines.get(language, ())

    def pointer(self, name: str) -> Optional[Pointer]:
        for pointer in self.canvas.pointers:
            if pointer.name == name:
                return pointer
        return None
