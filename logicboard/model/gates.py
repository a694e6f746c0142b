from typing import Callable, Dict, List

from logicboard.model.node import NodeType


def and_gate(states: List[bool]) -> bool:
    # all() of nothing is True
    return all(states)


def or_gate(states: List[bool]) -> bool:
    return any(states)


def not_gate(states: List[bool]) -> bool:
    if not states:
        # an unconnected NOT reads low, not high
        return False
    return not states[0]


def output_bulb(states: List[bool]) -> bool:
    return states[0] if states else False


RULES: Dict[NodeType, Callable[[List[bool]], bool]] = {
    NodeType.AND: and_gate,
    NodeType.OR: or_gate,
    NodeType.NOT: not_gate,
    NodeType.OUTPUT: output_bulb,
}


def compute(node_type: NodeType, states: List[bool]) -> bool:
    """Evaluate a computed node type over its resolved input states."""
    return RULES[node_type](states)
