"""Files bundled with the workspace tool."""
