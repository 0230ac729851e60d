"""TVGlance: browse the TVMaze catalog."""

__version__ = "0.1.0"
