import json
import logging
from pathlib import Path

import pytest

from task_tracker.domain.task_models import TaskCreate, TaskPriority
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo
from task_tracker.infra.seed import load_seed_tasks


def _write(path: Path, payload) -> Path:
    path.write_text(json.dumps(payload), encoding="utf-8")
    return path


def test_loads_tasks_with_defaults(tmp_path: Path) -> None:
    path = _write(
        tmp_path / "task.json",
        {
            "tasks": [
                {"id": 1, "title": "Set up environment", "description": "Install tools", "completed": True},
                {
                    "id": 7,
                    "title": "Ship",
                    "description": "Release",
                    "completed": False,
                    "priority": "High",
                    "createdAt": "2024-05-01T12:00:00Z",
                },
            ]
        },
    )
    tasks = load_seed_tasks(path)
    assert [t.id for t in tasks] == [1, 7]
    assert tasks[0].priority is TaskPriority.medium
    assert tasks[0].created_at is not None
    assert tasks[1].priority is TaskPriority.high

    assert len(InMemoryTaskRepo(tasks)) == 2


def test_seeded_store_continues_after_max_id(tmp_path: Path) -> None:
    path = _write(tmp_path / "task.json", {"tasks": [{"id": 7, "title": "a", "description": "b", "completed": False}]})
    repo = InMemoryTaskRepo(load_seed_tasks(path))
    assert repo.create(TaskCreate(title="x", description="y")).id == 8


def test_none_path_means_no_seed() -> None:
    assert load_seed_tasks(None) == []


def test_missing_file_is_not_fatal(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger="tasks.system"):
        assert load_seed_tasks(tmp_path / "nope.json") == []
    assert any(r.msg == "seed.missing" for r in caplog.records)


@pytest.mark.parametrize(
    "content",
    [
        "{not json",
        json.dumps([{"id": 1}]),
        json.dumps({"items": []}),
        json.dumps({"tasks": [{"id": 1, "title": "a", "description": "b"}]}),
        json.dumps({"tasks": [{"id": 1, "title": "", "description": "b", "completed": False}]}),
        json.dumps({"tasks": [{"id": 1, "title": "a", "description": "b", "completed": False, "priority": "urgent"}]}),
        json.dumps(
            {
                "tasks": [
                    {"id": 1, "title": "a", "description": "b", "completed": False},
                    {"id": 1, "title": "c", "description": "d", "completed": True},
                ]
            }
        ),
    ],
)
def test_broken_seed_degrades_to_empty(tmp_path: Path, caplog: pytest.LogCaptureFixture, content: str) -> None:
    path = tmp_path / "task.json"
    path.write_text(content, encoding="utf-8")
    with caplog.at_level(logging.WARNING, logger="tasks.system"):
        tasks = load_seed_tasks(path)
    assert tasks == []
    assert any(r.msg == "seed.invalid" for r in caplog.records)

    repo = InMemoryTaskRepo(tasks)
    assert len(repo) == 0
