"""Single-list to-do core with write-through key-value persistence."""

__version__ = "0.1.0"
