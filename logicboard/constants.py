NODE_WIDTH = 60
NODE_HEIGHT = 40

SIMULATION_PASSES = 5

DEFAULT_ELEMENT_TYPE = "INPUT"
DEFAULT_SCHEME_FILE = "scheme.json"

SETTINGS_ORGANIZATION = "LogicBoard"
SETTINGS_APPLICATION = "LogicBoard"
