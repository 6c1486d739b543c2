"""Version 1 HTTP routers"""
from fastapi import APIRouter

from taskboard.api.v1 import attachments, board, columns, tasks

api_router = APIRouter()
api_router.include_router(board.router, prefix="/board", tags=["board"])
api_router.include_router(tasks.router, prefix="/tasks", tags=["tasks"])
api_router.include_router(columns.router, prefix="/columns", tags=["columns"])
api_router.include_router(attachments.router, prefix="/attachments", tags=["attachments"])

__all__ = ["api_router"]
