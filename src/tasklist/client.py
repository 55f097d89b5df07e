from __future__ import annotations

import logging
from enum import Enum
from typing import Dict, List, Optional

import httpx

from .schemas import TaskOut

logger = logging.getLogger(__name__)


class TaskPhase(str, Enum):
    """In-flight state of a single task as seen by the client."""

    IDLE = "idle"
    PENDING_TOGGLE = "pending-toggle"
    PENDING_DELETE = "pending-delete"


# PUBLIC_INTERFACE
class TaskListClient:
    """
    Holds the task list and the pending-create text, and keeps them in step
    with the service through one HTTP call per action.

    ``http`` must be an ``httpx.AsyncClient`` whose ``base_url`` points at the
    API prefix (e.g. ``http://localhost:5678/api``).

    Every failure is logged and leaves the previous state in place. A task
    with a toggle or delete in flight ignores further toggles and deletes
    until that call finishes, so responses cannot be applied out of order.
    """

    def __init__(self, http: httpx.AsyncClient) -> None:
        self._http = http
        self.tasks: List[TaskOut] = []
        self.pending_text: str = ""
        self._phases: Dict[int, TaskPhase] = {}

    def find(self, task_id: int) -> Optional[TaskOut]:
        for task in self.tasks:
            if task.id == task_id:
                return task
        return None

    def phase(self, task_id: int) -> TaskPhase:
        return self._phases.get(task_id, TaskPhase.IDLE)

    async def load(self) -> None:
        """Replace the held list with the service's list."""
        try:
            response = await self._http.get("/todos")
            response.raise_for_status()
            tasks = [TaskOut.model_validate(item) for item in response.json()]
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to fetch todos: %s", exc)
            return
        self.tasks = tasks

    async def submit(self) -> Optional[TaskOut]:
        """
        Create a task from the pending text.

        Returns the created task, or None when the text is blank or the
        call failed.
        """
        text = self.pending_text
        if text.strip() == "":
            return None
        try:
            response = await self._http.post("/todos", json={"text": text})
            response.raise_for_status()
            task = TaskOut.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to add todo: %s", exc)
            return None
        self.tasks = [*self.tasks, task]
        # Keep text typed while the request was in flight.
        if self.pending_text == text:
            self.pending_text = ""
        return task

    async def toggle(self, task_id: int) -> bool:
        """
        Flip the completed flag of a held task.

        Returns True when the list was updated from the service response.
        """
        task = self.find(task_id)
        if task is None or self.phase(task_id) is not TaskPhase.IDLE:
            return False

        self._phases[task_id] = TaskPhase.PENDING_TOGGLE
        try:
            response = await self._http.put(f"/todos/{task_id}", json={"completed": not task.completed})
            response.raise_for_status()
            updated = TaskOut.model_validate(response.json())
        except (httpx.HTTPError, ValueError) as exc:
            logger.error("Failed to toggle todo %s: %s", task_id, exc)
            return False
        finally:
            self._phases.pop(task_id, None)

        self.tasks = [updated if t.id == task_id else t for t in self.tasks]
        return True

    async def delete(self, task_id: int) -> bool:
        """
        Delete a held task.

        Any completed HTTP exchange removes the task locally, since a 404
        means it is already gone. Transport failures keep it.
        """
        if self.find(task_id) is None or self.phase(task_id) is not TaskPhase.IDLE:
            return False

        self._phases[task_id] = TaskPhase.PENDING_DELETE
        try:
            response = await self._http.delete(f"/todos/{task_id}")
        except httpx.HTTPError as exc:
            logger.error("Failed to delete todo %s: %s", task_id, exc)
            return False
        finally:
            self._phases.pop(task_id, None)

        if response.status_code not in (204, 404):
            logger.warning("Unexpected status %s deleting todo %s", response.status_code, task_id)
        self.tasks = [t for t in self.tasks if t.id != task_id]
        return True

    def render(self) -> List[str]:
        """One display line per task."""
        lines = []
        for task in self.tasks:
            line = f"[{'x' if task.completed else ' '}] {task.id}: {task.text}"
            phase = self.phase(task.id)
            if phase is not TaskPhase.IDLE:
                line += f" ({phase.value})"
            lines.append(line)
        return lines
