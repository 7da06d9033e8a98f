from __future__ import annotations
import threading
from typing import Iterable, List, Optional

from task_tracker.domain.task_models import Task, TaskCreate, TaskPriority, TaskUpdate, utcnow


class InMemoryTaskRepo:
    """
    Process-local task store.

    Owns the task sequence and the id counter. Every public method runs under
    one lock so reads never observe a half-applied mutation, and hands out
    copies so callers cannot mutate stored records.
    """
    def __init__(self, seed: Optional[Iterable[Task]] = None):
        self._lock = threading.Lock()
        self._tasks: List[Task] = []
        seen = set()
        for task in seed or ():
            if task.id in seen:
                raise ValueError(f"Duplicate task id in seed data: {task.id}")
            seen.add(task.id)
            self._tasks.append(task.model_copy())
        # ids are never reused, even after deletes
        self._next_id = max(seen, default=0) + 1

    def __len__(self) -> int:
        with self._lock:
            return len(self._tasks)

    def count(self) -> int:
        return len(self)

    def _index_of(self, task_id: int) -> Optional[int]:
        for i, task in enumerate(self._tasks):
            if task.id == task_id:
                return i
        return None

    def list(
        self,
        completed: Optional[bool] = None,
        sort_by: Optional[str] = None,
        order: str = "desc",
    ) -> List[Task]:
        with self._lock:
            tasks = [t.model_copy() for t in self._tasks]

        if completed is not None:
            tasks = [t for t in tasks if t.completed is completed]

        # list.sort is stable and keeps ties in original order even with reverse=True
        if sort_by:
            tasks.sort(key=lambda t: t.sort_key(sort_by), reverse=(order == "desc"))
        else:
            # newest first
            tasks.sort(key=lambda t: t.created_at, reverse=True)
        return tasks

    def get(self, task_id: int) -> Optional[Task]:
        with self._lock:
            idx = self._index_of(task_id)
            return self._tasks[idx].model_copy() if idx is not None else None

    def list_by_priority(self, level: str) -> List[Task]:
        priority = TaskPriority(level)
        with self._lock:
            return [t.model_copy() for t in self._tasks if t.priority == priority]

    def create(self, data: TaskCreate) -> Task:
        with self._lock:
            task = Task(
                id=self._next_id,
                title=data.title,
                description=data.description,
                completed=data.completed,
                priority=data.priority,
                created_at=utcnow(),
            )
            self._next_id += 1
            self._tasks.append(task)
            return task.model_copy()

    def update(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        changes = data.changes()
        if not changes:
            raise ValueError("update requires at least one field")

        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return None
            # re-validated so unsanitized updates raise instead of being stored
            current = self._tasks[idx]
            updated = Task.model_validate({**current.model_dump(), **changes})
            self._tasks[idx] = updated
            return updated.model_copy()

    def delete(self, task_id: int) -> Optional[Task]:
        with self._lock:
            idx = self._index_of(task_id)
            if idx is None:
                return None
            return self._tasks.pop(idx)
