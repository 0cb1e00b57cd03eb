"""canvasmap: command server for Miro boards with frame spatial mapping."""

__version__ = "0.1.0"
