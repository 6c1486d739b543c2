"""Placement engine: assigns and maintains task ``sort_order`` values.

All position-dependent writes run inside :meth:`PlacementEngine.column_scope`,
which holds the in-process lock of every touched column, opens one store
transaction and takes the store's row locks on the same columns.  The
read-max-then-insert of a new task, the insert-shift of a move and the
delete-if-empty check of a column are therefore serialized per column and
either commit as a whole or not at all.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Iterator, Optional

from taskboard.errors import NotFoundError, StorageError
from taskboard.models import Task
from taskboard.store.interfaces import BoardStore, BoardTransaction
from taskboard.utils.locks import ColumnLockRegistry

logger = logging.getLogger(__name__)

# A task that keeps changing column while we wait for its locks is
# reported as a transient failure after this many attempts.
TASK_SCOPE_ATTEMPTS = 3


class PlacementEngine:
    """Compute and maintain task positions within columns.

    Parameters
    ----------
    store:
        Record store holding tasks and columns.
    locks:
        Shared per-column lock registry.  Every component that writes
        positions must use the same registry.
    """

    def __init__(self, store: BoardStore, locks: Optional[ColumnLockRegistry] = None) -> None:
        self.store = store
        self.locks = locks or ColumnLockRegistry()

    # ------------------------------------------------------------------
    # Critical sections
    # ------------------------------------------------------------------

    @contextmanager
    def column_scope(self, *column_ids: int) -> Iterator[BoardTransaction]:
        """Yield a transaction serialized against other writers of *column_ids*."""
        with self.locks.hold(column_ids):
            with self.store.transaction() as tx:
                tx.lock_columns(column_ids)
                yield tx

    @contextmanager
    def task_scope(self, task_id: int, *extra_column_ids: int) -> Iterator[tuple[BoardTransaction, Task]]:
        """Yield ``(tx, task)`` holding the task's current column and *extra_column_ids*.

        The task's column is peeked first and verified again once the locks
        are held; if a concurrent move changed it in between, the locks are
        released and the sequence starts over.
        """
        for _ in range(TASK_SCOPE_ATTEMPTS):
            with self.store.snapshot() as peek:
                task = peek.get_task(task_id)
                if task is None:
                    raise NotFoundError(f"Task {task_id} not found")
                seen_column_id = task.column_id

            with self.column_scope(seen_column_id, *extra_column_ids) as tx:
                task = tx.get_task(task_id)
                if task is None:
                    raise NotFoundError(f"Task {task_id} not found")
                if task.column_id == seen_column_id:
                    yield tx, task
                    return
            logger.debug("Task %s changed column while locking, retrying", task_id)

        raise StorageError(f"Task {task_id} is being moved concurrently, please retry")

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------

    def assign_initial_position(self, tx: BoardTransaction, column_id: int) -> int:
        """Next free position at the end of *column_id*.

        *tx* must come from :meth:`column_scope` covering *column_id* and the
        new task must be written through the same *tx*, otherwise two
        concurrent inserts can compute the same value.
        """
        if tx.get_column(column_id) is None:
            raise NotFoundError(f"Column {column_id} not found")
        return tx.get_max_sort_order(column_id) + 1

    def move(self, task_id: int, target_column_id: int, target_sort_order: int) -> Task:
        """Place a task at ``(target_column_id, target_sort_order)``.

        Every other task of the target column at or after the requested
        position is shifted down by one.  Nothing is decremented and the
        source column keeps its gap.  Moving inside the same column to a
        later position applies the same rule verbatim.
        """
        with self.task_scope(task_id, target_column_id) as (tx, task):
            if tx.get_column(target_column_id) is None:
                raise NotFoundError(f"Column {target_column_id} not found")

            displaced = tx.get_tasks_from(target_column_id, target_sort_order, exclude_task_id=task.id)
            for other in displaced:
                other.sort_order += 1

            source_column_id = task.column_id
            task.column_id = target_column_id
            task.sort_order = target_sort_order

        logger.info(
            "Moved task %s from column %s to column %s at %s (%d shifted)",
            task_id,
            source_column_id,
            target_column_id,
            target_sort_order,
            len(displaced),
        )
        return task

    def reassign_on_column_change(self, tx: BoardTransaction, task: Task, new_column_id: int) -> bool:
        """Append *task* to the end of *new_column_id* if that is a different column.

        Editing a task is not a positioning gesture, so a column change made
        through an update always lands at the end of the destination.
        Returns ``True`` when the task changed column.
        """
        if task.column_id == new_column_id:
            return False
        task.sort_order = self.assign_initial_position(tx, new_column_id)
        task.column_id = new_column_id
        return True
