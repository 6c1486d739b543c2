"""Board endpoint"""
from fastapi import APIRouter, Depends

from taskboard.dependencies import get_board
from taskboard.schemas import BoardResponse
from taskboard.services import BoardAssembler

router = APIRouter()


@router.get("", response_model=BoardResponse)
def read_board(board: BoardAssembler = Depends(get_board)):
    """Return every column with its tasks, favorites first then by name."""
    return board.assemble()
