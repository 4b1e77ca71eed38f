"""To-do list management."""

from dataclasses import dataclass, replace
from datetime import datetime
from uuid import uuid4

from study_tracker.domain.models import AppState, Task
from study_tracker.services.clock import epoch_ms


@dataclass
class TaskService:
    """CRUD operations for to-do tasks, newest first."""

    def list_tasks(self, state: AppState) -> list[Task]:
        """Return all tasks."""
        return list(state.tasks)

    def add_task(self, state: AppState, text: str, now: datetime) -> Task | None:
        """Add a task; blank text is ignored."""
        cleaned = text.strip()
        if not cleaned:
            return None
        task = Task(
            id=uuid4().hex,
            text=cleaned,
            completed=False,
            created_at_ms=epoch_ms(now),
        )
        state.tasks.insert(0, task)
        return task

    def toggle_task(self, state: AppState, task_id: str) -> Task | None:
        """Flip a task's completed flag; None if the id is unknown."""
        for index, task in enumerate(state.tasks):
            if task.id == task_id:
                updated = replace(task, completed=not task.completed)
                state.tasks[index] = updated
                return updated
        return None

    def delete_task(self, state: AppState, task_id: str) -> bool:
        """Remove a task; return False if the id is unknown."""
        remaining = [task for task in state.tasks if task.id != task_id]
        if len(remaining) == len(state.tasks):
            return False
        state.tasks[:] = remaining
        return True

    def completed_count(self, state: AppState) -> int:
        """Return the number of completed tasks."""
        return sum(1 for task in state.tasks if task.completed)
