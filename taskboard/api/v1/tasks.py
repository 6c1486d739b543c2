"""Task endpoints"""
from typing import List

from fastapi import APIRouter, Depends, status

from taskboard.dependencies import get_board, get_placement, get_task_manager
from taskboard.schemas import TaskCreate, TaskMove, TaskResponse, TaskUpdate
from taskboard.services import BoardAssembler, PlacementEngine, TaskLifecycleManager

router = APIRouter()


@router.get("", response_model=List[TaskResponse])
def list_tasks(board: BoardAssembler = Depends(get_board)):
    """List every task, column by column, in display order."""
    return board.list_tasks()


@router.get("/column/{column_id}", response_model=List[TaskResponse])
def list_column_tasks(column_id: int, board: BoardAssembler = Depends(get_board)):
    return board.column_tasks(column_id)


@router.get("/{task_id}", response_model=TaskResponse)
def read_task(task_id: int, board: BoardAssembler = Depends(get_board)):
    return board.get_task(task_id)


@router.post("", response_model=TaskResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    task_in: TaskCreate,
    tasks: TaskLifecycleManager = Depends(get_task_manager),
    board: BoardAssembler = Depends(get_board),
):
    """Create a task at the end of its column."""
    task = tasks.create(task_in)
    return board.get_task(task.id)


@router.put("/{task_id}", response_model=TaskResponse)
def update_task(
    task_id: int,
    task_in: TaskUpdate,
    tasks: TaskLifecycleManager = Depends(get_task_manager),
    board: BoardAssembler = Depends(get_board),
):
    """Replace a task's fields; a new column appends the task to its end."""
    tasks.update(task_id, task_in)
    return board.get_task(task_id)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_task(task_id: int, tasks: TaskLifecycleManager = Depends(get_task_manager)):
    tasks.delete(task_id)


@router.patch("/{task_id}/move", response_model=TaskResponse)
def move_task(
    task_id: int,
    move_in: TaskMove,
    placement: PlacementEngine = Depends(get_placement),
    board: BoardAssembler = Depends(get_board),
):
    """Place a task at an explicit column and position, shifting later tasks down."""
    placement.move(task_id, move_in.column_id, move_in.sort_order)
    return board.get_task(task_id)
