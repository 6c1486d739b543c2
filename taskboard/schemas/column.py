"""Schemas for board columns"""
from typing import List

from pydantic import Field

from taskboard.schemas.base import CamelModel
from taskboard.schemas.task import TaskResponse


class ColumnCreate(CamelModel):
    name: str


class ColumnResponse(CamelModel):
    id: int
    name: str
    sort_order: int
    tasks: List[TaskResponse] = Field(default_factory=list)


class BoardResponse(CamelModel):
    columns: List[ColumnResponse] = Field(default_factory=list)
