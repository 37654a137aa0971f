# =============================================================================
# core/services/task_catalog.py - Released Task Catalogue
# =============================================================================
# Released tasks are maintained in code rather than in the store, which keeps
# task IDs unique and lets each task ship together with its implementation.
# TASK_LIST is ordered oldest first; the last entry is the current task.
# =============================================================================

from core.models import TaskListEntry
from lib.utils import utc_now_iso

TASK_LIST: list[TaskListEntry] = [
    TaskListEntry(
        id="task-0000001",
        name="Interactive Color Palette Generator",
        description=(
            "A beautiful tool to generate and explore color palettes "
            "with live preview and export functionality"
        ),
        created_at="2024-01-15T10:00:00Z",
    ),
]


def get_latest_task() -> TaskListEntry | None:
    """The most recently released task, or None if nothing is released yet."""
    return TASK_LIST[-1] if TASK_LIST else None


def get_all_tasks() -> list[TaskListEntry]:
    """All tasks, newest first."""
    return list(reversed(TASK_LIST))


def get_task_by_id(task_id: str) -> TaskListEntry | None:
    return next((task for task in TASK_LIST if task.id == task_id), None)


def task_exists(task_id: str) -> bool:
    return any(task.id == task_id for task in TASK_LIST)


def get_task_count() -> int:
    return len(TASK_LIST)


def add_task(name: str, description: str) -> str:
    """
    Append a task to the catalogue.

    Returns:
        The new task ID (task-NNNNNNN)

    Raises:
        ValueError: If the generated ID is already taken
    """
    task_id = f"task-{len(TASK_LIST) + 1:07d}"
    if task_exists(task_id):
        raise ValueError(f"Task ID {task_id} already exists")

    TASK_LIST.append(
        TaskListEntry(id=task_id, name=name, description=description, created_at=utc_now_iso())
    )
    return task_id
