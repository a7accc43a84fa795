"""TaskTimer - a stopwatch and per-task time tracker with local persistence."""

from importlib.metadata import version, PackageNotFoundError

try:
    __version__ = version("tasktimer")
except PackageNotFoundError:
    __version__ = "0.0.0-dev"

from tasktimer.tracker.store import TaskTimerStore
from tasktimer.tracker.types import Task

__all__ = ["TaskTimerStore", "Task"]
