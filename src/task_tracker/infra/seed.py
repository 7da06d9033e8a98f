from __future__ import annotations
import json
import logging
from pathlib import Path
from typing import List, Optional

from pydantic import BaseModel, ValidationError

from task_tracker.domain.task_models import Task

logger = logging.getLogger("tasks.system")


class SeedTask(Task):
    # seed entries must state completion explicitly
    completed: bool


class SeedFile(BaseModel):
    tasks: List[SeedTask]


def load_seed_tasks(path: Optional[Path]) -> List[Task]:
    """
    Read the startup seed file (`{"tasks": [...]}`).

    A missing or broken seed never stops the service: the store just starts
    empty and the problem is logged.
    """
    if path is None:
        return []

    if not path.exists():
        logger.info(
            "seed.missing",
            extra={"category": "system", "event": "seed.missing", "seed_path": str(path)},
        )
        return []

    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        seed = SeedFile.model_validate(raw)
    except (OSError, ValueError, ValidationError) as e:
        logger.warning(
            "seed.invalid",
            extra={"category": "system", "event": "seed.invalid", "seed_path": str(path), "error": str(e)},
        )
        return []

    ids = [t.id for t in seed.tasks]
    if len(ids) != len(set(ids)):
        logger.warning(
            "seed.invalid",
            extra={"category": "system", "event": "seed.invalid", "seed_path": str(path), "error": "duplicate task ids"},
        )
        return []

    logger.info(
        "seed.loaded",
        extra={"category": "system", "event": "seed.loaded", "seed_path": str(path), "count": len(seed.tasks)},
    )
    return [Task.model_validate(t.model_dump()) for t in seed.tasks]
