"""To-do list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING

from fastapi import APIRouter, HTTPException, Request, Response, status

from study_tracker.api.models import TaskCreate, TaskListResponse, TaskResponse

if TYPE_CHECKING:
    from study_tracker.containers import AppContainer

router = APIRouter(prefix="/tasks", tags=["tasks"])


@router.get("")
async def list_tasks(request: Request) -> TaskListResponse:
    """Return all tasks, newest first, with the completed count."""
    container: AppContainer = request.app.state.container
    tracker_service = container.tracker_service
    return TaskListResponse(
        tasks=[TaskResponse.from_task(task) for task in tracker_service.list_tasks()],
        completed=tracker_service.completed_tasks(),
    )


@router.post("", status_code=status.HTTP_201_CREATED)
async def add_task(payload: TaskCreate, request: Request) -> TaskResponse:
    """Add a task."""
    container: AppContainer = request.app.state.container
    task = container.tracker_service.add_task(payload.text)
    if task is None:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Task text is required",
        )
    return TaskResponse.from_task(task)


@router.post("/{task_id}/toggle")
async def toggle_task(task_id: str, request: Request) -> TaskResponse:
    """Flip a task's completed flag."""
    container: AppContainer = request.app.state.container
    task = container.tracker_service.toggle_task(task_id)
    if task is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return TaskResponse.from_task(task)


@router.delete("/{task_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_task(task_id: str, request: Request) -> Response:
    """Delete a task."""
    container: AppContainer = request.app.state.container
    if not container.tracker_service.delete_task(task_id):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
