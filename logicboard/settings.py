from typing import Optional

from PySide6.QtCore import QSettings

from logicboard.constants import (DEFAULT_ELEMENT_TYPE, SETTINGS_APPLICATION,
                                  SETTINGS_ORGANIZATION)
from logicboard.model.node import NodeType


class Settings:
    """Persistent editor preferences backed by QSettings."""

    def __init__(self, store: Optional[QSettings] = None):
        self.store = store or QSettings(SETTINGS_ORGANIZATION, SETTINGS_APPLICATION)

    @property
    def element_type(self) -> NodeType:
        value = self.store.value("editor/element_type", DEFAULT_ELEMENT_TYPE, type=str)
        try:
            return NodeType(value)
        except ValueError:
            return NodeType(DEFAULT_ELEMENT_TYPE)

    @element_type.setter
    def element_type(self, value: NodeType):
        self.store.setValue("editor/element_type", value.value)

    @property
    def last_path(self) -> str:
        return self.store.value("files/last_path", "", type=str)

    @last_path.setter
    def last_path(self, path: str):
        self.store.setValue("files/last_path", path)

    def sync(self):
        self.store.sync()
