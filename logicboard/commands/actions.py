from PySide6.QtGui import QUndoCommand

from logicboard.model.circuit import Circuit, Snapshot


class SnapshotCommand(QUndoCommand):
    """Swaps the whole circuit between the states before and after an edit.

    The edit has already been applied when the command is pushed, so the
    redo() that QUndoStack.push() runs straight away is skipped.
    """

    def __init__(self, circuit: Circuit, before: Snapshot, after: Snapshot, text: str):
        super().__init__(text)
        self.circuit = circuit
        self.before = before
        self.after = after
        self._applied = True

    def redo(self):
        if self._applied:
            self._applied = False
            return
        self.circuit.restore(self.after)

    def undo(self):
        self.circuit.restore(self.before)
