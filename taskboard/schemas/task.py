"""Schemas for tasks"""
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from taskboard.schemas.attachment import AttachmentResponse
from taskboard.schemas.base import CamelModel


class TaskCreate(CamelModel):
    name: str
    description: str = ""
    deadline: Optional[datetime] = None
    column_id: int


class TaskUpdate(CamelModel):
    """Full replacement of a task's mutable fields."""

    name: str
    description: str = ""
    deadline: Optional[datetime] = None
    is_favorite: bool = False
    column_id: int


class TaskMove(CamelModel):
    column_id: int
    sort_order: int


class TaskResponse(CamelModel):
    id: int
    name: str
    description: str
    deadline: Optional[datetime]
    created_at: datetime
    updated_at: datetime
    is_favorite: bool
    column_id: int
    column_name: str
    sort_order: int
    attachments: List[AttachmentResponse] = Field(default_factory=list)
