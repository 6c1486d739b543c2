"""
Pydantic schemas for request/response validation
"""
from taskboard.schemas.attachment import AttachmentResponse
from taskboard.schemas.task import TaskCreate, TaskMove, TaskResponse, TaskUpdate
from taskboard.schemas.column import BoardResponse, ColumnCreate, ColumnResponse

__all__ = [
    "AttachmentResponse",
    "TaskCreate",
    "TaskUpdate",
    "TaskMove",
    "TaskResponse",
    "ColumnCreate",
    "ColumnResponse",
    "BoardResponse",
]
