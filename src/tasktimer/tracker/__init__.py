"""Time tracking core: a global stopwatch plus timed tasks.

This package provides:
- The TaskTimerStore that owns stopwatch and task state
- JSON file key-value persistence
- View and ticker interfaces for the surrounding runtime

Example:
    from tasktimer.tracker import AsyncTicker, LocalStorage, TaskTimerStore

    store = TaskTimerStore(
        LocalStorage("~/.tasktimer/storage.json"),
        ticker=AsyncTicker(interval=1.0),
    )
    task = store.add_task("Write report")
    store.toggle_task_timer(task.id)
"""

from tasktimer.tracker.formatting import elapsed_seconds, format_elapsed, now_ms
from tasktimer.tracker.storage import TASKS_KEY, LocalStorage
from tasktimer.tracker.store import TaskTimerStore
from tasktimer.tracker.ticker import AsyncTicker, Ticker
from tasktimer.tracker.types import Task, TaskView, TrackerSnapshot
from tasktimer.tracker.view import NullView, TrackerView

__all__ = [
    # Store
    "TaskTimerStore",
    # Types
    "Task",
    "TaskView",
    "TrackerSnapshot",
    # Storage
    "LocalStorage",
    "TASKS_KEY",
    # Runtime collaborators
    "TrackerView",
    "NullView",
    "Ticker",
    "AsyncTicker",
    # Formatting
    "format_elapsed",
    "elapsed_seconds",
    "now_ms",
]
