from fastapi import APIRouter, Depends

from task_tracker.app.routes.tasks import get_service
from task_tracker.services.task_service import TaskService

router = APIRouter(tags=["health"])


@router.get("/health")
async def health(svc: TaskService = Depends(get_service)):
    return {"status": "ok", "tasks": svc.count()}
