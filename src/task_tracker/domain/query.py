from __future__ import annotations

from dataclasses import dataclass
from typing import List, Mapping, Optional, Tuple

from task_tracker.domain.task_models import PRIORITY_VALUES, SORTABLE_FIELDS
from task_tracker.domain.validation import ValidationResult

SORT_ORDERS = ("asc", "desc")
DEFAULT_ORDER = "desc"

# query parameters that switch the list endpoint to the annotated envelope
LIST_PARAMS = ("completed", "sortBy", "order")


@dataclass(frozen=True)
class TaskQuery:
    completed: Optional[bool] = None
    sort_by: Optional[str] = None
    order: str = DEFAULT_ORDER
    has_params: bool = False


def normalize_list_query(params: Mapping[str, str]) -> ValidationResult[TaskQuery]:
    """Turn raw `completed` / `sortBy` / `order` parameters into a TaskQuery.

    Every offending parameter is reported; the headline names the first one.
    """
    problems: List[Tuple[str, str]] = []

    completed: Optional[bool] = None
    raw = params.get("completed")
    if raw is not None:
        if raw.lower() in ("true", "false"):
            completed = raw.lower() == "true"
        else:
            problems.append(("Invalid completed filter", 'completed parameter must be "true" or "false"'))

    sort_by = params.get("sortBy")
    if sort_by is not None and sort_by not in SORTABLE_FIELDS:
        problems.append(("Invalid sort field", f"sortBy must be one of: {', '.join(SORTABLE_FIELDS)}"))

    order = DEFAULT_ORDER
    raw = params.get("order")
    if raw is not None:
        if raw.lower() in SORT_ORDERS:
            order = raw.lower()
        else:
            problems.append(("Invalid sort order", 'order parameter must be "asc" or "desc"'))

    if problems:
        return ValidationResult.reject(problems[0][0], [detail for _, detail in problems])

    return ValidationResult.accept(
        TaskQuery(
            completed=completed,
            sort_by=sort_by,
            order=order,
            has_params=any(name in params for name in LIST_PARAMS),
        )
    )


def normalize_priority_level(level: Optional[str]) -> ValidationResult[str]:
    if not level:
        return ValidationResult.reject(
            "Priority level is required",
            ["Please provide a valid priority level in the URL"],
        )
    if level.lower() not in PRIORITY_VALUES:
        return ValidationResult.reject(
            "Invalid priority level",
            [f"Priority level must be one of: {', '.join(PRIORITY_VALUES)}"],
        )
    return ValidationResult.accept(level.lower())
