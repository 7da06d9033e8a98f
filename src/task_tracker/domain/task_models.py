from __future__ import annotations
from pydantic import BaseModel, ConfigDict, Field, field_validator
from enum import Enum
from datetime import datetime, timezone
from typing import Any, Optional

TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000

SORTABLE_FIELDS = ("createdAt", "title", "priority", "completed")
UPDATABLE_FIELDS = ("title", "description", "completed", "priority")


class TaskPriority(str, Enum):
    low = "low"
    medium = "medium"
    high = "high"


PRIORITY_VALUES = tuple(p.value for p in TaskPriority)

PRIORITY_RANK = {
    TaskPriority.high.value: 3,
    TaskPriority.medium.value: 2,
    TaskPriority.low.value: 1,
}


def priority_rank(value: Any) -> int:
    """Rank used when ordering by priority (high > medium > low).

    Anything that is not a known priority ranks as medium.
    """
    if isinstance(value, TaskPriority):
        value = value.value
    return PRIORITY_RANK.get(value, PRIORITY_RANK[TaskPriority.medium.value])


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class TaskCreate(BaseModel):
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool = False
    priority: TaskPriority = TaskPriority.medium


class TaskUpdate(BaseModel):
    """Partial update; only fields that were explicitly set are applied."""
    title: Optional[str] = Field(default=None, min_length=1, max_length=TITLE_MAX_LENGTH)
    description: Optional[str] = Field(default=None, min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    completed: Optional[bool] = None
    priority: Optional[TaskPriority] = None

    def changes(self) -> dict[str, Any]:
        return self.model_dump(exclude_unset=True)


class Task(BaseModel):
    model_config = ConfigDict(populate_by_name=True, str_strip_whitespace=True)

    id: int = Field(gt=0)
    title: str = Field(min_length=1, max_length=TITLE_MAX_LENGTH)
    description: str = Field(min_length=1, max_length=DESCRIPTION_MAX_LENGTH)
    completed: bool = False
    priority: TaskPriority = TaskPriority.medium
    created_at: datetime = Field(default_factory=utcnow, alias="createdAt")

    @field_validator("priority", mode="before")
    @classmethod
    def _lower_priority(cls, v: Any) -> Any:
        return v.lower() if isinstance(v, str) else v

    @field_validator("created_at")
    @classmethod
    def _assume_utc(cls, v: datetime) -> datetime:
        # naive seed timestamps would not compare with aware ones
        return v.replace(tzinfo=timezone.utc) if v.tzinfo is None else v

    def sort_key(self, field: str) -> Any:
        if field == "createdAt":
            return self.created_at
        if field == "priority":
            return priority_rank(self.priority)
        if field == "title":
            return self.title.lower()
        if field == "completed":
            return self.completed
        raise ValueError(f"Unsortable field: {field}")
