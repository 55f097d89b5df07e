from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new task. Only the text is client supplied.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"text": "buy milk"}})

    text: str = Field(..., min_length=1, description="Task text, stored as sent")


# PUBLIC_INTERFACE
class TaskUpdate(BaseModel):
    """
    Schema for updating an existing task.
    Only the fields present in the body are written.
    """

    model_config = ConfigDict(json_schema_extra={"example": {"completed": True}})

    text: Optional[str] = Field(default=None, min_length=1, description="Replacement task text")
    completed: Optional[bool] = Field(default=None, description="Completion status flag")

    def changes(self) -> dict:
        """Return the fields that were sent with a non-null value."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Task as returned by the API and held by the client.
    """

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={"example": {"id": 1, "text": "buy milk", "completed": False}},
    )

    id: int = Field(..., description="Unique identifier of the task")
    text: str = Field(..., description="Task text")
    completed: bool = Field(..., description="Completion status flag")
