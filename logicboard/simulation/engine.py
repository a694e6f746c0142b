import logging

from logicboard.constants import SIMULATION_PASSES
from logicboard.model import gates
from logicboard.model.circuit import Circuit
from logicboard.model.node import NodeType

logger = logging.getLogger(__name__)


class SimulationEngine:
    """Settles a circuit with a fixed number of in-place sweeps.

    Nodes are visited in insertion order and every update is visible to the
    nodes that come after it in the same sweep, so a forward reference only
    catches up on the next sweep. There is no convergence check: feedback
    loops and chains deeper than ``passes`` are left wherever the last sweep
    put them.
    """

    def __init__(self, circuit: Circuit, passes: int = SIMULATION_PASSES):
        self.circuit = circuit
        self.passes = passes

    def run(self):
        nodes = self.circuit.nodes
        by_id = {node.id: node for node in nodes}
        logger.debug("simulating %d nodes, %d passes", len(nodes), self.passes)

        for _ in range(self.passes):
            for node in nodes:
                if node.type is NodeType.INPUT:
                    continue
                states = [
                    by_id[src].state if src in by_id else False for src in node.inputs
                ]
                node.state = gates.compute(node.type, states)


def simulate(circuit: Circuit, passes: int = SIMULATION_PASSES) -> Circuit:
    SimulationEngine(circuit, passes).run()
    return circuit
