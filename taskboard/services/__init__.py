"""Board services wired over one record store and one column-lock registry."""
from __future__ import annotations

from typing import Optional

from sqlalchemy.orm import sessionmaker

from taskboard.config import Settings, settings as default_settings
from taskboard.services.attachments import AttachmentManager
from taskboard.services.board import BoardAssembler
from taskboard.services.columns import ColumnLifecycleManager
from taskboard.services.placement import PlacementEngine
from taskboard.services.tasks import TaskLifecycleManager
from taskboard.store import BoardStore, SqlBoardStore
from taskboard.utils.locks import ColumnLockRegistry


class BoardServices:
    """Process-wide service graph.

    Every writer shares ``placement`` and therefore the same column locks;
    building a second graph over the same database would split them.
    """

    def __init__(self, store: BoardStore, settings: Optional[Settings] = None) -> None:
        self.settings = settings or default_settings
        self.store = store
        self.locks = ColumnLockRegistry(timeout=self.settings.COLUMN_LOCK_TIMEOUT)

        self.placement = PlacementEngine(store, self.locks)
        self.board = BoardAssembler(store)
        self.attachments = AttachmentManager(store, self.settings)
        self.tasks = TaskLifecycleManager(self.placement, self.attachments, self.settings)
        self.columns = ColumnLifecycleManager(self.placement, self.settings)

    @classmethod
    def from_session_factory(cls, session_factory: sessionmaker, settings: Optional[Settings] = None) -> "BoardServices":
        return cls(SqlBoardStore(session_factory), settings)


__all__ = [
    "BoardServices",
    "AttachmentManager",
    "BoardAssembler",
    "ColumnLifecycleManager",
    "PlacementEngine",
    "TaskLifecycleManager",
]
