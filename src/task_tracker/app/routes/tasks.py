from __future__ import annotations

import json
import logging
from typing import Any, List, Optional, Union

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel, ConfigDict, Field

from task_tracker.app.errors import ApiError
from task_tracker.domain.query import normalize_list_query, normalize_priority_level
from task_tracker.domain.task_models import Task, TaskPriority
from task_tracker.domain.validation import ValidationResult, parse_task_id, validate_create, validate_update
from task_tracker.services.task_service import TaskService

router = APIRouter(prefix="/api/v1/tasks", tags=["tasks"])
logger = logging.getLogger("tasks.api")

ACCEPTED_CONTENT_TYPES = ["application/json", "application/json; charset=utf-8"]


class TaskFilters(BaseModel):
    completed: Optional[bool] = None


class TaskSorting(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    sort_by: Optional[str] = Field(default=None, alias="sortBy")
    order: str


class TaskListEnvelope(BaseModel):
    tasks: List[Task]
    count: int
    filters: TaskFilters
    sorting: TaskSorting


class TaskPriorityEnvelope(BaseModel):
    tasks: List[Task]
    count: int
    priority: TaskPriority


class TaskMutationResponse(BaseModel):
    message: str
    task: Task


def get_service(request: Request) -> TaskService:
    # Wired in main.create_app
    return request.app.state.task_service


def _checked(result: ValidationResult, **log_extra: Any):
    if not result.ok:
        logger.info(
            "task.validation_failed",
            extra={"category": "tasks", "event": "task.validation_failed", "error": result.error,
                   "details": result.details, **log_extra},
        )
        raise ApiError(400, result.error, result.details)
    return result.value


def _not_found(task_id: int) -> ApiError:
    logger.info("task.not_found", extra={"category": "tasks", "event": "task.not_found", "task_id": task_id})
    return ApiError(404, "Task not found", f"No task found with ID: {task_id}")


async def read_json_object(request: Request) -> dict[str, Any]:
    content_type = request.headers.get("content-type")
    if not content_type:
        raise ApiError(
            400,
            "Missing Content-Type header",
            "Content-Type header is required for this request. Please set it to application/json.",
            acceptedTypes=ACCEPTED_CONTENT_TYPES,
        )
    if content_type.split(";")[0].strip().lower() != "application/json":
        raise ApiError(
            415,
            "Unsupported Media Type",
            f"Content-Type '{content_type}' is not supported. This API only accepts JSON data.",
            acceptedTypes=ACCEPTED_CONTENT_TYPES,
            receivedType=content_type,
        )

    raw = await request.body()
    if not raw.strip():
        return {}
    try:
        body = json.loads(raw)
    except ValueError:
        raise ApiError(400, "Invalid JSON", "Request body contains invalid JSON")
    if not isinstance(body, dict):
        raise ApiError(400, "Invalid request body", "Request body must be a JSON object")
    return body


@router.get("", response_model=Union[List[Task], TaskListEnvelope])
async def list_tasks(request: Request, svc: TaskService = Depends(get_service)):
    query = _checked(normalize_list_query(request.query_params))
    tasks = svc.list_tasks(query)
    if not query.has_params:
        return tasks
    return TaskListEnvelope(
        tasks=tasks,
        count=len(tasks),
        filters=TaskFilters(completed=query.completed),
        sorting=TaskSorting(sort_by=query.sort_by, order=query.order),
    )


@router.get("/priority/{level}", response_model=TaskPriorityEnvelope)
async def list_tasks_by_priority(level: str, svc: TaskService = Depends(get_service)):
    level = _checked(normalize_priority_level(level), priority_level=level)
    tasks = svc.list_by_priority(level)
    return TaskPriorityEnvelope(tasks=tasks, count=len(tasks), priority=level)


@router.get("/{task_id}", response_model=Task)
async def get_task(task_id: str, svc: TaskService = Depends(get_service)):
    tid = _checked(parse_task_id(task_id))
    task = svc.get_task(tid)
    if task is None:
        raise _not_found(tid)
    return task


@router.post("", response_model=TaskMutationResponse, status_code=201)
async def create_task(request: Request, svc: TaskService = Depends(get_service)):
    body = await read_json_object(request)
    data = _checked(validate_create(body))
    task = svc.create_task(data)
    return TaskMutationResponse(message="Task created successfully", task=task)


@router.put("/{task_id}", response_model=TaskMutationResponse)
async def update_task(task_id: str, request: Request, svc: TaskService = Depends(get_service)):
    body = await read_json_object(request)
    tid = _checked(parse_task_id(task_id))
    data = _checked(validate_update(body), task_id=tid)
    task = svc.update_task(tid, data)
    if task is None:
        raise _not_found(tid)
    return TaskMutationResponse(message="Task updated successfully", task=task)


@router.delete("/{task_id}", response_model=TaskMutationResponse)
async def delete_task(task_id: str, svc: TaskService = Depends(get_service)):
    tid = _checked(parse_task_id(task_id))
    task = svc.delete_task(tid)
    if task is None:
        raise _not_found(tid)
    return TaskMutationResponse(message="Task deleted successfully", task=task)
