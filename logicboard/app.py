import logging
from typing import Callable, Optional, Tuple, Union

from PySide6.QtCore import QObject, Signal
from PySide6.QtGui import QUndoStack

from logicboard.commands.actions import SnapshotCommand
from logicboard.constants import DEFAULT_SCHEME_FILE
from logicboard.model.circuit import Circuit, Snapshot
from logicboard.model.node import NodeType
from logicboard.model.serializer import (CircuitFormatError, CircuitSerializer,
                                         load_circuit, save_circuit)
from logicboard.settings import Settings
from logicboard.simulation.engine import SimulationEngine

logger = logging.getLogger(__name__)

LabelPrompt = Callable[[str], Optional[str]]


class Editor(QObject):
    """Entry point for every edit coming from the presentation layer.

    Each ``request_*`` call runs to completion, pushes an undo command when
    it committed a change, and emits ``circuit_changed`` so views can redraw.
    Drag moves change the circuit without touching the undo stack.
    """

    circuit_changed = Signal(object)
    history_changed = Signal(bool, bool)
    load_failed = Signal(str)

    def __init__(
        self,
        settings: Optional[Settings] = None,
        label_prompt: Optional[LabelPrompt] = None,
        parent=None,
    ):
        super().__init__(parent)
        self.settings = settings or Settings()
        self.label_prompt = label_prompt
        self.circuit = Circuit()
        self.undo_stack = QUndoStack(self)
        self.simulation = SimulationEngine(self.circuit)
        self.pending_source: Optional[int] = None
        self._element_type = self.settings.element_type
        # last committed (or undone/redone to) state
        self.snapshot = self.circuit.snapshot()

        self.undo_stack.indexChanged.connect(self._on_index_changed)
        self.new_session()

    @property
    def element_type(self) -> NodeType:
        return self._element_type

    @element_type.setter
    def element_type(self, value: Union[NodeType, str]):
        self._element_type = NodeType(value)
        self.settings.element_type = self._element_type

    @property
    def can_undo(self) -> bool:
        return self.undo_stack.canUndo()

    @property
    def can_redo(self) -> bool:
        return self.undo_stack.canRedo()

    def new_session(self):
        self.circuit.clear()
        self.circuit.allocator.reset()
        self.undo_stack.clear()
        self.pending_source = None
        self._settle()

    def _on_index_changed(self, index: int):
        self.history_changed.emit(self.can_undo, self.can_redo)

    def _settle(self):
        self.snapshot = self.circuit.snapshot()
        self.circuit_changed.emit(self.snapshot)

    def _commit(self, text: str):
        before = self.snapshot
        after = self.circuit.snapshot()
        self.undo_stack.push(SnapshotCommand(self.circuit, before, after, text))
        self.snapshot = after
        self.circuit_changed.emit(after)

    def request_add_node(self, position: Tuple[float, float]) -> Optional[int]:
        node_id = self.circuit.add_node(self._element_type, "", position)
        if node_id is not None:
            self._commit(f"Add {self._element_type.value}")
        return node_id

    def request_move_node(self, node_id: int, position: Tuple[float, float]) -> bool:
        if not self.circuit.move_node(node_id, position):
            return False
        self.circuit_changed.emit(self.circuit.snapshot())
        return True

    def request_connect_start(self, node_id: int) -> bool:
        if self.circuit.get_node(node_id) is None:
            return False
        self.pending_source = node_id
        return True

    def request_connect_finish(
        self, target: Union[int, Tuple[float, float]]
    ) -> bool:
        source, self.pending_source = self.pending_source, None
        if source is None:
            return False

        if isinstance(target, (tuple, list)):
            node = self.circuit.node_at(*target)
            if node is None:
                return False
            target = node.id

        if not self.circuit.connect(source, target):
            return False
        self._commit("Connect")
        return True

    def request_toggle_input(self, node_id: int) -> bool:
        if not self.circuit.toggle_input(node_id):
            return False
        self._commit("Toggle input")
        return True

    def request_set_label(self, node_id: int, text: Optional[str] = None) -> bool:
        node = self.circuit.get_node(node_id)
        if node is None or not node.type.is_labelled:
            return False
        if text is None:
            if self.label_prompt is None:
                return False
            text = self.label_prompt(node.label)
            if text is None:
                return False

        self.circuit.set_label(node_id, text)
        self._commit("Set label")
        return True

    def request_delete_node(self, node_id: int) -> bool:
        if not self.circuit.delete_node(node_id):
            return False
        if self.pending_source == node_id:
            self.pending_source = None
        self._commit("Delete")
        return True

    def request_simulate(self) -> bool:
        self.simulation.run()
        self._commit("Simulate")
        return True

    def request_undo(self) -> bool:
        if not self.undo_stack.canUndo():
            return False
        self.undo_stack.undo()
        self._settle()
        return True

    def request_redo(self) -> bool:
        if not self.undo_stack.canRedo():
            return False
        self.undo_stack.redo()
        self._settle()
        return True

    def request_save(self) -> str:
        return CircuitSerializer.dumps(self.circuit)

    def request_load(self, blob: Union[str, bytes]) -> bool:
        try:
            snapshot = CircuitSerializer.loads(blob)
        except CircuitFormatError as e:
            logger.warning("could not load scheme: %s", e)
            self.load_failed.emit(str(e))
            return False
        self._replace(snapshot)
        return True

    def _replace(self, snapshot: Snapshot):
        self.circuit.restore(snapshot)
        self.circuit.allocator.reseed(snapshot.node_ids())
        self.pending_source = None
        self._commit("Load")

    def save_to_path(self, path: Optional[str] = None) -> str:
        path = path or self.settings.last_path or DEFAULT_SCHEME_FILE
        save_circuit(path, self.circuit)
        self.settings.last_path = path
        return path

    def load_from_path(self, path: Optional[str] = None) -> bool:
        path = path or self.settings.last_path or DEFAULT_SCHEME_FILE
        try:
            snapshot = load_circuit(path)
        except (OSError, CircuitFormatError) as e:
            logger.warning("could not load scheme from %s: %s", path, e)
            self.load_failed.emit(str(e))
            return False
        self.settings.last_path = path
        self._replace(snapshot)
        return True
