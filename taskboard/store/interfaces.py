from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import AbstractContextManager
from typing import Iterable, Optional

from taskboard.models import Task, TaskAttachment, TaskColumn


class BoardTransaction(ABC):
    """Reads and writes that commit or roll back together."""

    @abstractmethod
    def get_task(self, task_id: int) -> Optional[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_tasks(self, column_id: int) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_all_tasks(self) -> list[Task]:
        """Every task on the board, read in one statement."""
        raise NotImplementedError

    @abstractmethod
    def get_tasks_from(self, column_id: int, sort_order: int, exclude_task_id: int) -> list[Task]:
        raise NotImplementedError

    @abstractmethod
    def get_max_sort_order(self, column_id: int) -> int:
        """Largest task ``sort_order`` in the column, 0 when it is empty."""
        raise NotImplementedError

    @abstractmethod
    def count_tasks(self, column_id: int) -> int:
        raise NotImplementedError

    @abstractmethod
    def get_column(self, column_id: int) -> Optional[TaskColumn]:
        raise NotImplementedError

    @abstractmethod
    def get_columns(self) -> list[TaskColumn]:
        """All columns, ascending by column ``sort_order``."""
        raise NotImplementedError

    @abstractmethod
    def get_max_column_sort_order(self) -> int:
        raise NotImplementedError

    @abstractmethod
    def list_attachments(self, task_id: int) -> list[TaskAttachment]:
        raise NotImplementedError

    @abstractmethod
    def get_all_attachments(self) -> list[TaskAttachment]:
        raise NotImplementedError

    @abstractmethod
    def get_attachment(self, attachment_id: int) -> Optional[TaskAttachment]:
        raise NotImplementedError

    @abstractmethod
    def lock_columns(self, column_ids: Iterable[int]) -> None:
        """Take store-level write locks on the given column rows."""
        raise NotImplementedError

    @abstractmethod
    def add(self, record: object) -> None:
        raise NotImplementedError

    @abstractmethod
    def delete(self, record: object) -> None:
        raise NotImplementedError

    @abstractmethod
    def flush(self) -> None:
        """Push pending writes so generated ids become visible."""
        raise NotImplementedError


class BoardStore(ABC):
    @abstractmethod
    def transaction(self) -> AbstractContextManager[BoardTransaction]:
        """Open a read-write unit of work, committed on clean exit."""
        raise NotImplementedError

    @abstractmethod
    def snapshot(self) -> AbstractContextManager[BoardTransaction]:
        """Open a read-only unit of work; never commits."""
        raise NotImplementedError
