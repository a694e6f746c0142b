import logging
from dataclasses import dataclass
from typing import Iterable, List, Optional, Tuple, Union

from logicboard.model.geometry import Position, contains, overlaps
from logicboard.model.node import (Connection, IdAllocator, Node, NodeRecord,
                                   NodeType)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Snapshot:
    """Read-only copy of a circuit's nodes and connections.

    Live nodes passed in are frozen into records, so a snapshot shares no
    mutable state with the circuit it came from.
    """

    nodes: Tuple[NodeRecord, ...] = ()
    connections: Tuple[Connection, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "nodes", tuple(n.freeze() for n in self.nodes))
        object.__setattr__(self, "connections", tuple(self.connections))

    @classmethod
    def capture(cls, nodes: Iterable[Node], connections: Iterable[Connection]):
        return cls(tuple(nodes), tuple(connections))

    def node_ids(self) -> List[int]:
        return [n.id for n in self.nodes]


class Circuit:
    def __init__(self, allocator: Optional[IdAllocator] = None):
        self.nodes: List[Node] = []
        self.connections: List[Connection] = []
        self.allocator = allocator or IdAllocator()

    def get_node(self, node_id: int) -> Optional[Node]:
        for node in self.nodes:
            if node.id == node_id:
                return node
        return None

    def node_at(self, x: float, y: float) -> Optional[Node]:
        for node in self.nodes:
            if contains(node.position, (x, y)):
                return node
        return None

    def _collides(self, position: Position, ignore: Optional[int] = None) -> bool:
        return any(
            overlaps(position, n.position) for n in self.nodes if n.id != ignore
        )

    def add_node(
        self,
        node_type: Union[NodeType, str],
        label: str = "",
        position: Position = (0, 0),
    ) -> Optional[int]:
        node_type = NodeType(node_type)
        if self._collides(position):
            logger.debug("add %s at %s rejected: overlap", node_type.value, position)
            return None

        x, y = position
        node = Node(
            self.allocator.next(),
            node_type,
            x,
            y,
            label=label if node_type.is_labelled else "",
        )
        self.nodes.append(node)
        return node.id

    def move_node(self, node_id: int, position: Position) -> bool:
        node = self.get_node(node_id)
        if node is None:
            return False
        if self._collides(position, ignore=node_id):
            logger.debug("move of node %s to %s rejected: overlap", node_id, position)
            return False
        node.position = position
        return True

    def toggle_input(self, node_id: int) -> bool:
        node = self.get_node(node_id)
        if node is None or node.type is not NodeType.INPUT:
            return False
        node.state = not node.state
        return True

    def set_label(self, node_id: int, text: str) -> bool:
        node = self.get_node(node_id)
        if node is None or not node.type.is_labelled:
            return False
        node.label = text
        return True

    def connect(self, source_id: int, target_id: int) -> bool:
        if source_id == target_id:
            logger.debug("connect %s -> itself rejected", source_id)
            return False
        target = self.get_node(target_id)
        if target is None or self.get_node(source_id) is None:
            logger.debug("connect %s -> %s rejected: unknown node", source_id, target_id)
            return False

        # parallel edges are kept, each one feeds a separate input slot
        self.connections.append(Connection(source_id, target_id))
        target.inputs.append(source_id)
        return True

    def delete_node(self, node_id: int) -> bool:
        node = self.get_node(node_id)
        if node is None:
            return False

        self.nodes.remove(node)
        self.connections = [c for c in self.connections if not c.touches(node_id)]
        for other in self.nodes:
            other.inputs = [i for i in other.inputs if i != node_id]
        return True

    def clear(self):
        self.nodes.clear()
        self.connections.clear()

    def snapshot(self) -> Snapshot:
        return Snapshot.capture(self.nodes, self.connections)

    def restore(self, snapshot: Snapshot):
        self.nodes = [n.thaw() for n in snapshot.nodes]
        self.connections = list(snapshot.connections)
