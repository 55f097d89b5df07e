from __future__ import annotations

from typing import List

from fastapi import APIRouter, Depends, HTTPException, Response, status

from ..repositories import Repository, get_repository
from ..schemas import TaskCreate, TaskOut, TaskUpdate

router = APIRouter(
    prefix="/api/todos",
    tags=["todos"],
)


# Ids live in a signed 64-bit INTEGER column
MAX_TODO_ID = 2**63 - 1


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Todo not found")


def _check_id(todo_id: int) -> None:
    """Ids the table cannot hold are reported as unknown."""
    if not (1 <= todo_id <= MAX_TODO_ID):
        raise _not_found()


# PUBLIC_INTERFACE
@router.get(
    "",
    response_model=List[TaskOut],
    summary="List Todos",
    description="Return every task ordered by ascending id.",
    responses={
        200: {"description": "List retrieved successfully"},
        500: {"description": "Storage failure"},
    },
)
def list_todos(repo: Repository = Depends(get_repository)) -> List[TaskOut]:
    return [TaskOut.model_validate(t) for t in repo.list()]


# PUBLIC_INTERFACE
@router.post(
    "",
    response_model=TaskOut,
    status_code=status.HTTP_201_CREATED,
    summary="Create Todo",
    description="Create a new task from its text. New tasks start uncompleted.",
    responses={
        201: {"description": "Todo created successfully"},
        400: {"description": "Text missing or empty"},
    },
)
def create_todo(payload: TaskCreate, repo: Repository = Depends(get_repository)) -> TaskOut:
    """
    Create a new task and return the stored row.
    """
    return TaskOut.model_validate(repo.create(payload))


# PUBLIC_INTERFACE
@router.put(
    "/{todo_id}",
    response_model=TaskOut,
    summary="Update Todo",
    description="Overwrite the fields sent in the body, typically the completed flag.",
    responses={
        200: {"description": "Todo updated"},
        400: {"description": "No updatable field in body or invalid value"},
        404: {"description": "Todo not found"},
    },
)
def update_todo(todo_id: int, payload: TaskUpdate, repo: Repository = Depends(get_repository)) -> TaskOut:
    """
    Update a task. Fields omitted from the body, or sent as null, are left untouched.
    """
    _check_id(todo_id)
    if not payload.changes():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Body must contain 'completed' or 'text'",
        )
    updated = repo.update(todo_id, payload)
    if updated is None:
        raise _not_found()
    return TaskOut.model_validate(updated)


# PUBLIC_INTERFACE
@router.delete(
    "/{todo_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Delete Todo",
    description="Permanently delete a task by id.",
    responses={
        204: {"description": "Todo deleted"},
        404: {"description": "Todo not found"},
    },
)
def delete_todo(todo_id: int, repo: Repository = Depends(get_repository)) -> Response:
    """
    Delete a task. Returns 204 on success, 404 if not found.
    """
    _check_id(todo_id)
    if not repo.delete(todo_id):
        raise _not_found()
    return Response(status_code=status.HTTP_204_NO_CONTENT)
