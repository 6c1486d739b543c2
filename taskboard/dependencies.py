"""FastAPI dependencies resolving the process-wide board services."""
from fastapi import Request

from taskboard.services import (
    AttachmentManager,
    BoardAssembler,
    BoardServices,
    ColumnLifecycleManager,
    PlacementEngine,
    TaskLifecycleManager,
)


def get_services(request: Request) -> BoardServices:
    return request.app.state.services


def get_board(request: Request) -> BoardAssembler:
    return get_services(request).board


def get_placement(request: Request) -> PlacementEngine:
    return get_services(request).placement


def get_task_manager(request: Request) -> TaskLifecycleManager:
    return get_services(request).tasks


def get_column_manager(request: Request) -> ColumnLifecycleManager:
    return get_services(request).columns


def get_attachment_manager(request: Request) -> AttachmentManager:
    return get_services(request).attachments
