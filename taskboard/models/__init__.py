"""Task Board Database Models"""
from taskboard.models.task_column import TaskColumn
from taskboard.models.task import Task
from taskboard.models.task_attachment import TaskAttachment

__all__ = [
    "TaskColumn",
    "Task",
    "TaskAttachment",
]
