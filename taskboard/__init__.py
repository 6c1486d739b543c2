"""Task board: columns of ordered tasks with favorites, moves and image attachments."""

__version__ = "1.0.0"
