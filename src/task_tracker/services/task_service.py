import logging
from typing import List, Optional
from task_tracker.domain.query import TaskQuery
from task_tracker.domain.task_models import Task, TaskCreate, TaskUpdate
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo

logger = logging.getLogger("tasks.api")

class TaskService:
    def __init__(self, repo: InMemoryTaskRepo):
        self.repo = repo

    def create_task(self, data: TaskCreate) -> Task:
        task = self.repo.create(data)
        logger.info(
            "task.create",
            extra={"category": "tasks", "event": "task.create", "task_id": task.id, "title": task.title},
        )
        return task

    def get_task(self, task_id: int) -> Optional[Task]:
        return self.repo.get(task_id)

    def list_tasks(self, query: Optional[TaskQuery] = None) -> List[Task]:
        query = query or TaskQuery()
        return self.repo.list(completed=query.completed, sort_by=query.sort_by, order=query.order)

    def list_by_priority(self, level: str) -> List[Task]:
        return self.repo.list_by_priority(level)

    def update_task(self, task_id: int, data: TaskUpdate) -> Optional[Task]:
        task = self.repo.update(task_id, data)
        if task is not None:
            logger.info(
                "task.update",
                extra={"category": "tasks", "event": "task.update", "task_id": task_id, "fields": sorted(data.changes())},
            )
        return task

    def delete_task(self, task_id: int) -> Optional[Task]:
        task = self.repo.delete(task_id)
        if task is not None:
            logger.info("task.delete", extra={"category": "tasks", "event": "task.delete", "task_id": task_id})
        return task

    def count(self) -> int:
        return self.repo.count()
