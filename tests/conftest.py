"""Shared fixtures: a fresh store and app per test."""

import logging
from collections.abc import AsyncGenerator
from datetime import datetime, timedelta, timezone

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from task_tracker.config import Settings
from task_tracker.domain.task_models import Task
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo

BASE_TIME = datetime(2024, 1, 1, 9, 0, tzinfo=timezone.utc)


@pytest.fixture(autouse=True)
def _restore_root_logging():
    # create_app replaces the root handlers
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


def make_task(task_id: int, **overrides) -> Task:
    fields = {
        "id": task_id,
        "title": f"Task {task_id}",
        "description": f"Description {task_id}",
        "completed": False,
        "priority": "medium",
        "created_at": BASE_TIME + timedelta(hours=task_id),
    }
    fields.update(overrides)
    return Task(**fields)


@pytest.fixture
def seed_tasks() -> list[Task]:
    return [
        make_task(1, title="Set up environment", completed=True, priority="high"),
        make_task(2, title="write docs", priority="low"),
        make_task(3, title="Review PR", completed=True),
        make_task(4, title="deploy", priority="high"),
    ]


@pytest.fixture
def repo(seed_tasks) -> InMemoryTaskRepo:
    return InMemoryTaskRepo(seed_tasks)


@pytest.fixture
def settings() -> Settings:
    return Settings(seed_path=None, log_dir=None, log_level="WARNING")


@pytest_asyncio.fixture
async def app(settings, repo):
    from task_tracker.app.main import create_app

    return create_app(settings, repo=repo)


@pytest_asyncio.fixture
async def client(app) -> AsyncGenerator[AsyncClient, None]:
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as c:
        yield c
