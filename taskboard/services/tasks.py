"""Task lifecycle: create, update and delete task records.

Positions are always delegated to the :class:`PlacementEngine`; attachment
binaries are always delegated to the :class:`AttachmentManager`.
"""

from __future__ import annotations

import logging
from typing import Optional

from taskboard.config import Settings, settings as default_settings
from taskboard.errors import ValidationError
from taskboard.models import Task
from taskboard.schemas import TaskCreate, TaskUpdate
from taskboard.services.attachments import AttachmentManager
from taskboard.services.placement import PlacementEngine

logger = logging.getLogger(__name__)


class TaskLifecycleManager:
    def __init__(
        self,
        placement: PlacementEngine,
        attachments: AttachmentManager,
        settings: Optional[Settings] = None,
    ) -> None:
        self.placement = placement
        self.attachments = attachments
        self.settings = settings or default_settings

    def _clean_fields(self, name: str, description: Optional[str]) -> tuple[str, str]:
        name = (name or "").strip()
        description = description or ""
        if not name:
            raise ValidationError("Task name is required")
        if len(name) > self.settings.TASK_NAME_MAX_LENGTH:
            raise ValidationError(f"Task name must be at most {self.settings.TASK_NAME_MAX_LENGTH} characters")
        if len(description) > self.settings.TASK_DESCRIPTION_MAX_LENGTH:
            raise ValidationError(
                f"Task description must be at most {self.settings.TASK_DESCRIPTION_MAX_LENGTH} characters"
            )
        return name, description

    def create(self, task_in: TaskCreate) -> Task:
        """Create a task at the end of its column."""
        name, description = self._clean_fields(task_in.name, task_in.description)

        with self.placement.column_scope(task_in.column_id) as tx:
            sort_order = self.placement.assign_initial_position(tx, task_in.column_id)
            task = Task(
                name=name,
                description=description,
                deadline=task_in.deadline,
                is_favorite=False,
                column_id=task_in.column_id,
                sort_order=sort_order,
            )
            tx.add(task)
            tx.flush()

        logger.info("Created task %s in column %s at %s", task.id, task.column_id, task.sort_order)
        return task

    def update(self, task_id: int, task_in: TaskUpdate) -> Task:
        """Replace every mutable field; a column change appends to the new column."""
        name, description = self._clean_fields(task_in.name, task_in.description)

        with self.placement.task_scope(task_id, task_in.column_id) as (tx, task):
            task.name = name
            task.description = description
            task.deadline = task_in.deadline
            task.is_favorite = task_in.is_favorite
            moved = self.placement.reassign_on_column_change(tx, task, task_in.column_id)

        if moved:
            logger.info("Task %s re-homed to column %s at %s", task_id, task.column_id, task.sort_order)
        else:
            logger.info("Updated task %s", task_id)
        return task

    def delete(self, task_id: int) -> None:
        """Delete a task with its attachment records, then its attachment files."""
        with self.placement.task_scope(task_id) as (tx, task):
            for attachment in tx.list_attachments(task.id):
                tx.delete(attachment)
            tx.flush()
            tx.delete(task)

        logger.info("Deleted task %s", task_id)
        # Binary cleanup runs after commit, outside every column lock.
        self.attachments.on_task_deleted(task_id)
