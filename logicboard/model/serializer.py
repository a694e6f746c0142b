import json
import logging
from numbers import Real
from typing import Any, Dict, List, Union

from logicboard.model.circuit import Circuit, Snapshot
from logicboard.model.node import Connection, Node, NodeType

logger = logging.getLogger(__name__)


class CircuitFormatError(ValueError):
    """Raised when a saved scheme cannot be turned back into a circuit."""


def _is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def _is_number(value) -> bool:
    return isinstance(value, Real) and not isinstance(value, bool)


class CircuitSerializer:
    @staticmethod
    def serialize(circuit: Union[Circuit, Snapshot]) -> Dict[str, Any]:
        return {
            "nodes": [n.to_dict() for n in circuit.nodes],
            "connections": [c.to_dict() for c in circuit.connections],
        }

    @staticmethod
    def deserialize(data: Any) -> Snapshot:
        if not isinstance(data, dict):
            raise CircuitFormatError("scheme must be a JSON object")
        if "nodes" not in data or "connections" not in data:
            raise CircuitFormatError("scheme must contain 'nodes' and 'connections'")
        if not isinstance(data["nodes"], list):
            raise CircuitFormatError("'nodes' must be a list")
        if not isinstance(data["connections"], list):
            raise CircuitFormatError("'connections' must be a list")

        nodes: List[Node] = []
        seen = set()
        for node_data in data["nodes"]:
            node = CircuitSerializer._read_node(node_data)
            if node.id in seen:
                raise CircuitFormatError(f"duplicate node id {node.id}")
            seen.add(node.id)
            nodes.append(node)

        for node in nodes:
            for src in node.inputs:
                if src not in seen:
                    raise CircuitFormatError(
                        f"node {node.id} takes input from unknown node {src}"
                    )

        connections = []
        for conn_data in data["connections"]:
            if not isinstance(conn_data, dict):
                raise CircuitFormatError("connection entries must be objects")
            source = conn_data.get("from")
            target = conn_data.get("to")
            if not (_is_int(source) and _is_int(target)):
                raise CircuitFormatError("connection 'from'/'to' must be integers")
            if source not in seen or target not in seen:
                raise CircuitFormatError(
                    f"connection {source} -> {target} references an unknown node"
                )
            connections.append(Connection(source, target))

        return Snapshot(tuple(nodes), tuple(connections))

    @staticmethod
    def _read_node(node_data: Any) -> Node:
        if not isinstance(node_data, dict):
            raise CircuitFormatError("node entries must be objects")

        node_id = node_data.get("id")
        if not _is_int(node_id):
            raise CircuitFormatError(f"node id must be an integer, got {node_id!r}")

        try:
            node_type = NodeType(node_data.get("type"))
        except ValueError:
            raise CircuitFormatError(
                f"node {node_id} has unknown type {node_data.get('type')!r}"
            ) from None

        x, y = node_data.get("x"), node_data.get("y")
        if not (_is_number(x) and _is_number(y)):
            raise CircuitFormatError(f"node {node_id} needs numeric 'x' and 'y'")

        state = node_data.get("state", False)
        if not isinstance(state, bool):
            raise CircuitFormatError(f"node {node_id} 'state' must be a boolean")

        label = node_data.get("label", "")
        if not isinstance(label, str):
            raise CircuitFormatError(f"node {node_id} 'label' must be a string")

        inputs = node_data.get("inputs", [])
        if not isinstance(inputs, list) or not all(_is_int(i) for i in inputs):
            raise CircuitFormatError(f"node {node_id} 'inputs' must be a list of ids")

        return Node(node_id, node_type, x, y, state, label, inputs)

    @staticmethod
    def dumps(circuit: Union[Circuit, Snapshot]) -> str:
        return json.dumps(CircuitSerializer.serialize(circuit))

    @staticmethod
    def loads(blob: Union[str, bytes]) -> Snapshot:
        try:
            data = json.loads(blob)
        except (TypeError, ValueError) as e:
            raise CircuitFormatError(f"not valid JSON: {e}") from e
        except RecursionError as e:
            raise CircuitFormatError("scheme is nested too deeply") from e
        return CircuitSerializer.deserialize(data)


def save_circuit(path: str, circuit: Union[Circuit, Snapshot]):
    with open(path, "w", encoding="utf-8") as f:
        json.dump(CircuitSerializer.serialize(circuit), f, indent=4)
    logger.info("saved %d nodes to %s", len(circuit.nodes), path)


def load_circuit(path: str) -> Snapshot:
    # bytes, so a bad encoding surfaces as a format error from loads()
    with open(path, "rb") as f:
        snapshot = CircuitSerializer.loads(f.read())
    logger.info("loaded %d nodes from %s", len(snapshot.nodes), path)
    return snapshot
