import logging
from typing import Optional

from fastapi import FastAPI

from task_tracker.app.errors import register_error_handlers
from task_tracker.app.middleware.access_log import AccessLogMiddleware
from task_tracker.app.routes import health, tasks
from task_tracker.config import Settings
from task_tracker.infra.db.task_repo_memory import InMemoryTaskRepo
from task_tracker.infra.seed import load_seed_tasks
from task_tracker.observability.logging import setup_logging
from task_tracker.services.task_service import TaskService

logger = logging.getLogger("tasks.system")


def create_app(settings: Optional[Settings] = None, repo: Optional[InMemoryTaskRepo] = None) -> FastAPI:
    settings = settings or Settings.from_env()
    setup_logging(settings.log_level, settings.log_dir)
    logger.info(
        "system.start",
        extra={"category": "system", "event": "system.start", "environment": settings.environment},
    )

    app = FastAPI(title="Task Tracker API", debug=False)
    app.add_middleware(AccessLogMiddleware)
    register_error_handlers(app, debug=settings.debug)

    # --- store wiring: one store per app ---
    if repo is None:
        repo = InMemoryTaskRepo(load_seed_tasks(settings.seed_path))
    app.state.settings = settings
    app.state.task_service = TaskService(repo)
    logger.info(
        "store.ready",
        extra={"category": "system", "event": "store.ready", "tasks": repo.count()},
    )

    # Routers
    app.include_router(tasks.router)
    app.include_router(health.router)

    return app
