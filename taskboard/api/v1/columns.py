"""Column endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from taskboard.dependencies import get_board, get_column_manager
from taskboard.schemas import ColumnCreate, ColumnResponse
from taskboard.services import BoardAssembler, ColumnLifecycleManager

router = APIRouter()


@router.get("", response_model=List[ColumnResponse])
def list_columns(board: BoardAssembler = Depends(get_board)):
    return board.list_columns()


@router.get("/{column_id}", response_model=ColumnResponse)
def read_column(column_id: int, board: BoardAssembler = Depends(get_board)):
    return board.get_column(column_id)


@router.post("", response_model=ColumnResponse, status_code=status.HTTP_201_CREATED)
def create_column(
    column_in: ColumnCreate,
    columns: ColumnLifecycleManager = Depends(get_column_manager),
    board: BoardAssembler = Depends(get_board),
):
    """Append a column to the end of the board."""
    column = columns.create(column_in)
    return board.get_column(column.id)


@router.delete("/{column_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_column(column_id: int, columns: ColumnLifecycleManager = Depends(get_column_manager)):
    """Delete a column; rejected with 409 while it still holds tasks."""
    columns.delete(column_id)
