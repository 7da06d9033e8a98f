"""Field rules for task payloads.

Validators never raise on bad input. They return a ValidationResult holding
either the sanitized value or a headline error with itemized messages, which
the HTTP layer turns into a 400 response.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, List, Mapping, Optional, TypeVar

from task_tracker.domain.task_models import (
    DESCRIPTION_MAX_LENGTH,
    PRIORITY_VALUES,
    TITLE_MAX_LENGTH,
    UPDATABLE_FIELDS,
    TaskCreate,
    TaskPriority,
    TaskUpdate,
)

T = TypeVar("T")

_MISSING = object()


@dataclass
class ValidationResult(Generic[T]):
    value: Optional[T] = None
    error: Optional[str] = None
    details: List[str] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def accept(cls, value: T) -> "ValidationResult[T]":
        return cls(value=value)

    @classmethod
    def reject(cls, error: str, details: List[str]) -> "ValidationResult[T]":
        return cls(error=error, details=list(details))


def _check_text(label: str, value: Any, limit: int, required: bool) -> List[str]:
    if value is _MISSING:
        return [f"{label} is required"] if required else []
    if required and (value is None or value == ""):
        return [f"{label} is required"]
    if not isinstance(value, str):
        return [f"{label} must be a string"]
    trimmed = value.strip()
    if not trimmed:
        return [f"{label} cannot be empty or contain only whitespace"]
    if len(trimmed) > limit:
        return [f"{label} cannot exceed {limit} characters"]
    return []


def _coerce_completed(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.lower() in ("true", "false"):
        return value.lower() == "true"
    return None


def _check_completed(value: Any) -> List[str]:
    if value is _MISSING or _coerce_completed(value) is not None:
        return []
    return ["Completed must be a boolean value (true or false)"]


def _check_priority(value: Any) -> List[str]:
    if value is _MISSING:
        return []
    if not isinstance(value, str):
        return ["Priority must be a string"]
    if value.lower() not in PRIORITY_VALUES:
        return [f"Priority must be one of: {', '.join(PRIORITY_VALUES)}"]
    return []


def _field_errors(body: Mapping[str, Any], required: bool) -> List[str]:
    return [
        *_check_text("Title", body.get("title", _MISSING), TITLE_MAX_LENGTH, required),
        *_check_text("Description", body.get("description", _MISSING), DESCRIPTION_MAX_LENGTH, required),
        *_check_completed(body.get("completed", _MISSING)),
        *_check_priority(body.get("priority", _MISSING)),
    ]


def _without_id(body: Mapping[str, Any]) -> dict[str, Any]:
    # identity is assigned by the store, never by the client
    return {k: v for k, v in body.items() if k != "id"}


def validate_create(body: Mapping[str, Any]) -> ValidationResult[TaskCreate]:
    body = _without_id(body)
    if not body:
        return ValidationResult.reject(
            "Request body is required",
            ["Please provide task data in the request body"],
        )

    errors = _field_errors(body, required=True)
    if errors:
        return ValidationResult.reject("Validation failed", errors)

    completed = body.get("completed", False)
    priority = body.get("priority", TaskPriority.medium.value)
    return ValidationResult.accept(
        TaskCreate(
            title=body["title"].strip(),
            description=body["description"].strip(),
            completed=_coerce_completed(completed),
            priority=TaskPriority(priority.lower()),
        )
    )


def validate_update(body: Mapping[str, Any]) -> ValidationResult[TaskUpdate]:
    body = _without_id(body)
    if not body:
        return ValidationResult.reject(
            "Request body is required",
            [f"Please provide at least one field to update ({', '.join(UPDATABLE_FIELDS)})"],
        )

    # unknown keys are dropped silently
    clean = {k: v for k, v in body.items() if k in UPDATABLE_FIELDS}
    if not clean:
        return ValidationResult.reject(
            "No valid fields provided",
            [f"Allowed fields are: {', '.join(UPDATABLE_FIELDS)}"],
        )

    errors = _field_errors(clean, required=False)
    if errors:
        return ValidationResult.reject("Validation failed", errors)

    changes: dict[str, Any] = {}
    if "title" in clean:
        changes["title"] = clean["title"].strip()
    if "description" in clean:
        changes["description"] = clean["description"].strip()
    if "completed" in clean:
        changes["completed"] = _coerce_completed(clean["completed"])
    if "priority" in clean:
        changes["priority"] = TaskPriority(clean["priority"].lower())
    return ValidationResult.accept(TaskUpdate(**changes))


def parse_task_id(raw: str) -> ValidationResult[int]:
    if raw is None or raw == "":
        return ValidationResult.reject(
            "Task ID is required",
            ["Please provide a valid task ID in the URL"],
        )
    invalid = ValidationResult.reject("Invalid task ID", ["Task ID must be a positive integer"])
    if not (raw.isascii() and raw.isdigit()):
        return invalid
    try:
        value = int(raw)
    except ValueError:
        # past the interpreter's int-string conversion limit
        return invalid
    if value <= 0:
        return invalid
    return ValidationResult.accept(value)
