import json

import pytest

from logicboard.model.node import NodeType
from logicboard.model.serializer import (CircuitFormatError, CircuitSerializer,
                                         load_circuit, save_circuit)


def _build(circuit):
    a = circuit.add_node(NodeType.INPUT, "A", (0, 0))
    b = circuit.add_node(NodeType.INPUT, "B", (0, 100.5))
    g = circuit.add_node(NodeType.AND, position=(100, 0))
    o = circuit.add_node(NodeType.OUTPUT, "Y", (200, 0))
    circuit.toggle_input(a)
    circuit.connect(a, g)
    circuit.connect(b, g)
    circuit.connect(b, g)
    circuit.connect(g, o)
    return a, b, g, o


def test_serialize_layout(circuit):
    a, b, g, o = _build(circuit)
    data = CircuitSerializer.serialize(circuit)
    assert data["nodes"][0] == {
        "id": a,
        "type": "INPUT",
        "x": 0,
        "y": 0,
        "state": True,
        "label": "A",
        "inputs": [],
    }
    assert data["nodes"][2]["inputs"] == [a, b, b]
    assert data["connections"][-1] == {"from": g, "to": o}


def test_round_trip(circuit):
    _build(circuit)
    snapshot = CircuitSerializer.loads(CircuitSerializer.dumps(circuit))
    assert snapshot == circuit.snapshot()


def test_optional_fields_default():
    blob = json.dumps(
        {"nodes": [{"id": 3, "type": "OR", "x": 1, "y": 2}], "connections": []}
    )
    node = CircuitSerializer.loads(blob).nodes[0]
    assert node.state is False
    assert node.label == ""
    assert node.inputs == ()


@pytest.mark.parametrize(
    "blob",
    [
        "{not json",
        "[]",
        json.dumps({"nodes": []}),
        json.dumps({"nodes": {}, "connections": []}),
        json.dumps({"nodes": [{"id": 1, "type": "XOR", "x": 0, "y": 0}], "connections": []}),
        json.dumps({"nodes": [{"id": "1", "type": "AND", "x": 0, "y": 0}], "connections": []}),
        json.dumps({"nodes": [{"id": 1, "type": "AND", "x": "0", "y": 0}], "connections": []}),
        json.dumps({"nodes": [{"id": 1, "type": "AND", "x": 0, "y": 0, "state": 1}], "connections": []}),
        json.dumps({"nodes": [{"id": 1, "type": "AND", "x": 0, "y": 0, "inputs": [2]}], "connections": []}),
        json.dumps(
            {
                "nodes": [
                    {"id": 1, "type": "AND", "x": 0, "y": 0},
                    {"id": 1, "type": "OR", "x": 100, "y": 0},
                ],
                "connections": [],
            }
        ),
        json.dumps(
            {"nodes": [{"id": 1, "type": "AND", "x": 0, "y": 0}], "connections": [{"from": 1, "to": 2}]}
        ),
    ],
)
def test_malformed_input_rejected(blob):
    with pytest.raises(CircuitFormatError):
        CircuitSerializer.loads(blob)


def test_save_and_load_file(tmp_path, circuit):
    _build(circuit)
    path = tmp_path / "scheme.json"
    save_circuit(str(path), circuit)
    saved = json.loads(path.read_text())
    assert len(saved["nodes"]) == 4
    assert load_circuit(str(path)) == circuit.snapshot()


def test_load_rejects_bad_encoding(tmp_path):
    path = tmp_path / "garbled.json"
    path.write_bytes(b'{"nodes": [], "connections": [], "x": "\xff\xfe"}')
    with pytest.raises(CircuitFormatError):
        load_circuit(str(path))


def test_load_rejects_deep_nesting():
    with pytest.raises(CircuitFormatError):
        CircuitSerializer.loads("[" * 200000 + "]" * 200000)


def test_non_ascii_labels_survive_file_round_trip(tmp_path, circuit):
    circuit.add_node(NodeType.INPUT, "Вход", (0, 0))
    path = tmp_path / "scheme.json"
    save_circuit(str(path), circuit)
    assert load_circuit(str(path)).nodes[0].label == "Вход"
