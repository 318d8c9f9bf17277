# =============================================================================
# app/routers/tasks.py - Task Status Endpoints
# =============================================================================
# Lets clients follow queued email jobs (event invitations, player
# welcome emails) by the task_id returned when they were queued.
# =============================================================================

import logging
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Path
from pydantic import BaseModel

from app.auth import AuthUser, get_current_user

logger = logging.getLogger(__name__)

router = APIRouter()

STATUS_MESSAGES = {
    "PENDING": "Waiting in queue...",
    "STARTED": "Sending...",
    "RETRY": "Retrying after a delivery failure...",
    "SUCCESS": "Complete",
    "FAILURE": "Failed",
}


class TaskStatusResponse(BaseModel):
    """Response model for task status."""
    task_id: str
    status: str
    message: str | None = None
    result: dict | None = None
    error: str | None = None


@router.get("/{task_id}", response_model=TaskStatusResponse)
async def get_task_status(
    task_id: Annotated[str, Path(description="Celery task ID")],
    user: AuthUser = Depends(get_current_user),
):
    """
    Get the status of a background email task.

    - PENDING: Task is waiting in queue (or unknown)
    - STARTED: A worker is sending
    - RETRY: The provider failed and the send will be retried
    - SUCCESS: Done; result holds sent/failed/skipped counts
    - FAILURE: The task gave up; error holds the reason
    """
    try:
        from workers.celery_app import celery_app

        result = celery_app.AsyncResult(task_id)

        response = TaskStatusResponse(
            task_id=task_id,
            status=result.status,
            message=STATUS_MESSAGES.get(result.status),
        )

        if result.status == "SUCCESS":
            response.result = result.result
        elif result.status == "FAILURE":
            response.error = str(result.result) if result.result else "Unknown error"

        return response

    except Exception as e:
        logger.error(f"Error getting task status: {e}")
        raise HTTPException(status_code=500, detail=f"Failed to get task status: {e}")
