from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class NodeType(Enum):
    INPUT = "INPUT"
    AND = "AND"
    OR = "OR"
    NOT = "NOT"
    OUTPUT = "OUTPUT"

    @property
    def is_labelled(self) -> bool:
        return self in (NodeType.INPUT, NodeType.OUTPUT)


class Node:
    def __init__(
        self,
        node_id: int,
        node_type: NodeType,
        x: float = 0,
        y: float = 0,
        state: bool = False,
        label: str = "",
        inputs: Optional[List[int]] = None,
    ):
        self.id = node_id
        self.type = node_type
        self.x = x
        self.y = y
        self.state = state
        self.label = label
        self.inputs: List[int] = list(inputs or [])

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    @position.setter
    def position(self, value: Tuple[float, float]):
        self.x, self.y = value

    def freeze(self) -> "NodeRecord":
        return NodeRecord(
            self.id, self.type, self.x, self.y, self.state, self.label, tuple(self.inputs)
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "x": self.x,
            "y": self.y,
            "state": self.state,
            "label": self.label,
            "inputs": list(self.inputs),
        }

    def __eq__(self, other):
        if not isinstance(other, Node):
            return NotImplemented
        return self.to_dict() == other.to_dict()

    __hash__ = None

    def __repr__(self):
        return f"Node({self.id}, {self.type.value}, ({self.x}, {self.y}), state={self.state})"


@dataclass(frozen=True)
class NodeRecord:
    """Read-only copy of a node as held in snapshots."""

    id: int
    type: NodeType
    x: float = 0
    y: float = 0
    state: bool = False
    label: str = ""
    inputs: Tuple[int, ...] = ()

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def freeze(self) -> "NodeRecord":
        return self

    def thaw(self) -> Node:
        return Node(self.id, self.type, self.x, self.y, self.state, self.label, self.inputs)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "type": self.type.value,
            "x": self.x,
            "y": self.y,
            "state": self.state,
            "label": self.label,
            "inputs": list(self.inputs),
        }


@dataclass(frozen=True)
class Connection:
    source: int
    target: int

    def touches(self, node_id: int) -> bool:
        return self.source == node_id or self.target == node_id

    def to_dict(self) -> Dict[str, int]:
        return {"from": self.source, "to": self.target}


class IdAllocator:
    """Monotonic node id source. Ids are never handed out twice until reset()."""

    FIRST_ID = 1

    def __init__(self):
        self._next = self.FIRST_ID

    @property
    def peek(self) -> int:
        return self._next

    def next(self) -> int:
        node_id = self._next
        self._next += 1
        return node_id

    def reset(self):
        self._next = self.FIRST_ID

    def reseed(self, ids):
        """Advance past every id in ``ids``; never moves backwards."""
        highest = max(ids, default=self.FIRST_ID - 1)
        self._next = max(self._next, highest + 1)
