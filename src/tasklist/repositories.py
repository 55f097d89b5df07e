from __future__ import annotations

from abc import ABC, abstractmethod
from typing import List, Optional

from fastapi import Request

from .models import Task
from .schemas import TaskCreate, TaskUpdate


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def list(self) -> List[Task]:
        """Return every Task ordered by ascending id."""

    @abstractmethod
    def create(self, data: TaskCreate) -> Task:
        """Insert a new Task with completed=False and return it."""

    @abstractmethod
    def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        """Overwrite the fields sent in ``data``. Return the updated Task or None if not found."""

    @abstractmethod
    def delete(self, task_id: int) -> bool:
        """Delete a Task by id. Return True if deleted, False if not found."""


# PUBLIC_INTERFACE
def get_repository(request: Request) -> Repository:
    """
    FastAPI dependency returning the repository created for this app instance.
    """
    return request.app.state.repository
