"""SQLAlchemy-backed record store.

Each :meth:`SqlBoardStore.transaction` owns one ``Session``: everything
written through the yielded :class:`SqlBoardTransaction` is committed in a
single ``COMMIT`` when the block exits cleanly and rolled back otherwise, so a
caller never observes half of a multi-row update.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterable, Iterator, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, sessionmaker

from taskboard.errors import StorageError
from taskboard.models import Task, TaskAttachment, TaskColumn
from taskboard.store.interfaces import BoardStore, BoardTransaction

logger = logging.getLogger(__name__)


class SqlBoardTransaction(BoardTransaction):
    def __init__(self, session: Session) -> None:
        self.session = session

    # -- tasks --------------------------------------------------------------

    def get_task(self, task_id: int) -> Optional[Task]:
        return self.session.get(Task, task_id)

    def get_tasks(self, column_id: int) -> list[Task]:
        return (
            self.session.query(Task)
            .filter(Task.column_id == column_id)
            .order_by(Task.sort_order.asc(), Task.id.asc())
            .all()
        )

    def get_all_tasks(self) -> list[Task]:
        return self.session.query(Task).order_by(Task.column_id.asc(), Task.sort_order.asc(), Task.id.asc()).all()

    def get_tasks_from(self, column_id: int, sort_order: int, exclude_task_id: int) -> list[Task]:
        """Tasks in *column_id* at or after *sort_order*, other than *exclude_task_id*."""
        return (
            self.session.query(Task)
            .filter(
                Task.column_id == column_id,
                Task.id != exclude_task_id,
                Task.sort_order >= sort_order,
            )
            .all()
        )

    def get_max_sort_order(self, column_id: int) -> int:
        value = self.session.query(func.max(Task.sort_order)).filter(Task.column_id == column_id).scalar()
        return value or 0

    def count_tasks(self, column_id: int) -> int:
        return self.session.query(func.count(Task.id)).filter(Task.column_id == column_id).scalar() or 0

    # -- columns ------------------------------------------------------------

    def get_column(self, column_id: int) -> Optional[TaskColumn]:
        return self.session.get(TaskColumn, column_id)

    def get_columns(self) -> list[TaskColumn]:
        return self.session.query(TaskColumn).order_by(TaskColumn.sort_order.asc(), TaskColumn.id.asc()).all()

    def get_max_column_sort_order(self) -> int:
        return self.session.query(func.max(TaskColumn.sort_order)).scalar() or 0

    def lock_columns(self, column_ids: Iterable[int]) -> None:
        ids = sorted(set(column_ids))
        if not ids:
            return
        # FOR UPDATE is dropped by dialects without row locks (SQLite).
        (
            self.session.query(TaskColumn.id)
            .filter(TaskColumn.id.in_(ids))
            .order_by(TaskColumn.id)
            .with_for_update()
            .all()
        )

    # -- attachments --------------------------------------------------------

    def list_attachments(self, task_id: int) -> list[TaskAttachment]:
        return (
            self.session.query(TaskAttachment)
            .filter(TaskAttachment.task_id == task_id)
            .order_by(TaskAttachment.uploaded_at.asc(), TaskAttachment.id.asc())
            .all()
        )

    def get_all_attachments(self) -> list[TaskAttachment]:
        return (
            self.session.query(TaskAttachment)
            .order_by(TaskAttachment.uploaded_at.asc(), TaskAttachment.id.asc())
            .all()
        )

    def get_attachment(self, attachment_id: int) -> Optional[TaskAttachment]:
        return self.session.get(TaskAttachment, attachment_id)

    # -- writes -------------------------------------------------------------

    def add(self, record: object) -> None:
        self.session.add(record)

    def delete(self, record: object) -> None:
        self.session.delete(record)

    def flush(self) -> None:
        self.session.flush()


class SqlBoardStore(BoardStore):
    """Record store over a SQLAlchemy ``sessionmaker``.

    Parameters
    ----------
    session_factory:
        Factory producing sessions bound to the board database.
    """

    def __init__(self, session_factory: sessionmaker) -> None:
        self._session_factory = session_factory

    @contextmanager
    def transaction(self) -> Iterator[SqlBoardTransaction]:
        session = self._session_factory(expire_on_commit=False)
        try:
            yield SqlBoardTransaction(session)
            session.commit()
        except SQLAlchemyError as exc:
            session.rollback()
            logger.exception("Board transaction rolled back")
            raise StorageError("The board store is unavailable, please retry") from exc
        except BaseException:
            session.rollback()
            raise
        finally:
            session.close()

    @contextmanager
    def snapshot(self) -> Iterator[SqlBoardTransaction]:
        session = self._session_factory(expire_on_commit=False)
        try:
            yield SqlBoardTransaction(session)
        except SQLAlchemyError as exc:
            logger.exception("Board read failed")
            raise StorageError("The board store is unavailable, please retry") from exc
        finally:
            # close() detaches loaded rows with their state intact; rollback() would expire them.
            session.close()
