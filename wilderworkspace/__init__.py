"""WilderWorkspace: provision a local Wildermyth modding workspace."""

__version__ = "0.1.0"

TOOL_NAME = "WilderWorkspace"
GAME_NAME = "Wildermyth"
