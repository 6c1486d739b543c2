"""Record store contract and its SQLAlchemy implementation."""
from taskboard.store.interfaces import BoardStore, BoardTransaction
from taskboard.store.sql import SqlBoardStore

__all__ = ["BoardStore", "BoardTransaction", "SqlBoardStore"]
