"""Board assembler: composes columns, ordered tasks and attachment summaries.

Reads only.  A whole board is built from three single-statement reads
(columns, tasks, attachments) taken in one snapshot, so a task moved by a
concurrent request shows up exactly once.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional

from taskboard.errors import NotFoundError
from taskboard.models import Task, TaskAttachment, TaskColumn
from taskboard.schemas import AttachmentResponse, BoardResponse, ColumnResponse, TaskResponse
from taskboard.services.ordering import display_order
from taskboard.store.interfaces import BoardStore
from taskboard.utils.timezone import as_utc


def serialize_attachment(attachment: TaskAttachment) -> AttachmentResponse:
    return AttachmentResponse(
        id=attachment.id,
        file_name=attachment.file_name,
        content_type=attachment.content_type,
        file_size=attachment.file_size,
        uploaded_at=as_utc(attachment.uploaded_at),
    )


def serialize_task(
    task: Task, column_name: str, attachments: Optional[Iterable[TaskAttachment]] = None
) -> TaskResponse:
    return TaskResponse(
        id=task.id,
        name=task.name,
        description=task.description or "",
        deadline=as_utc(task.deadline),
        created_at=as_utc(task.created_at),
        updated_at=as_utc(task.updated_at),
        is_favorite=task.is_favorite,
        column_id=task.column_id,
        column_name=column_name,
        sort_order=task.sort_order,
        attachments=[serialize_attachment(a) for a in attachments or []],
    )


def _serialize_column(
    column: TaskColumn, tasks: Iterable[Task], attachments: Dict[int, List[TaskAttachment]]
) -> ColumnResponse:
    return ColumnResponse(
        id=column.id,
        name=column.name,
        sort_order=column.sort_order,
        tasks=[serialize_task(t, column.name, attachments.get(t.id)) for t in display_order(tasks)],
    )


class BoardAssembler:
    def __init__(self, store: BoardStore) -> None:
        self.store = store

    def assemble(self) -> BoardResponse:
        """Columns ascending by ``sort_order``, each with tasks in display order."""
        with self.store.snapshot() as tx:
            columns = tx.get_columns()
            tasks = tx.get_all_tasks()
            attachments = tx.get_all_attachments()

        tasks_by_column: Dict[int, List[Task]] = defaultdict(list)
        for task in tasks:
            tasks_by_column[task.column_id].append(task)
        attachments_by_task: Dict[int, List[TaskAttachment]] = defaultdict(list)
        for attachment in attachments:
            attachments_by_task[attachment.task_id].append(attachment)

        return BoardResponse(
            columns=[_serialize_column(c, tasks_by_column.get(c.id, []), attachments_by_task) for c in columns]
        )

    def list_columns(self) -> List[ColumnResponse]:
        return self.assemble().columns

    def get_column(self, column_id: int) -> ColumnResponse:
        with self.store.snapshot() as tx:
            column = tx.get_column(column_id)
            if column is None:
                raise NotFoundError(f"Column {column_id} not found")
            tasks = tx.get_tasks(column_id)
            attachments = {t.id: tx.list_attachments(t.id) for t in tasks}
        return _serialize_column(column, tasks, attachments)

    def list_tasks(self) -> List[TaskResponse]:
        """Every task, column by column, in display order inside each column."""
        return [task for column in self.assemble().columns for task in column.tasks]

    def column_tasks(self, column_id: int) -> List[TaskResponse]:
        return self.get_column(column_id).tasks

    def get_task(self, task_id: int) -> TaskResponse:
        with self.store.snapshot() as tx:
            task = tx.get_task(task_id)
            if task is None:
                raise NotFoundError(f"Task {task_id} not found")
            column = tx.get_column(task.column_id)
            attachments = tx.list_attachments(task.id)
        return serialize_task(task, column.name if column else "", attachments)
