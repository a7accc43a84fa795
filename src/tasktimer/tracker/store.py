"""Task timer store: global stopwatch, task timers and persistence.

This module provides the TaskTimerStore class that owns all tracker
state and exposes it to a view through snapshots.
"""

import json
import logging
from typing import Callable

from pydantic import TypeAdapter, ValidationError

from tasktimer.tracker.formatting import elapsed_seconds, format_elapsed, now_ms
from tasktimer.tracker.storage import TASKS_KEY, LocalStorage, encode_tasks
from tasktimer.tracker.ticker import Ticker
from tasktimer.tracker.types import Task, TaskView, TrackerSnapshot
from tasktimer.tracker.view import NullView, TrackerView

logger = logging.getLogger(__name__)

ZERO_DISPLAY = format_elapsed(0)

_task_list_adapter = TypeAdapter(list[Task])


class TaskTimerStore:
    """Owns the global stopwatch and the ordered task list.

    The TaskTimerStore handles:
    - Starting, stopping and resetting a display-only global stopwatch
    - Adding, deleting and toggling timed tasks (at most one running)
    - Persisting the task list to a key-value storage slot
    - Reporting state to a view after every change

    Commands never raise for unknown ids or blank names; they are ignored.

    Example:
        store = TaskTimerStore(LocalStorage("~/.tasktimer/storage.json"))
        task = store.add_task("Write report")
        store.toggle_task_timer(task.id)   # start
        store.toggle_task_timer(task.id)   # stop, time is added
    """

    def __init__(
        self,
        storage: LocalStorage,
        view: TrackerView | None = None,
        ticker: Ticker | None = None,
        clock: Callable[[], int] = now_ms,
        delete_stops_global_timer: bool = False,
    ) -> None:
        """Initialize the store and load persisted tasks.

        Args:
            storage: Key-value storage holding the task list.
            view: View to report state to.
            ticker: Drives ``tick`` while the global stopwatch runs.
            clock: Returns the current time in epoch ms.
            delete_stops_global_timer: Stop the global stopwatch when a
                running task is deleted, instead of only discarding the
                task's own running interval.
        """
        self._storage = storage
        self._view = view or NullView()
        self._ticker = ticker
        self._clock = clock
        self._delete_stops_global_timer = delete_stops_global_timer

        self._tasks: list[Task] = []

        self._global_running = False
        self._global_start: int | None = None
        self._global_display = ZERO_DISPLAY

        self.load_tasks()
        self._render()

    # -- state accessors --------------------------------------------------

    @property
    def tasks(self) -> list[Task]:
        """Copies of all tasks in display order."""
        return [task.model_copy() for task in self._tasks]

    @property
    def running_task(self) -> Task | None:
        """The running task, if any."""
        for task in self._tasks:
            if task.is_running:
                return task.model_copy()
        return None

    @property
    def global_running(self) -> bool:
        """Whether the global stopwatch is running."""
        return self._global_running

    @property
    def global_display(self) -> str:
        """Formatted global stopwatch value.

        Derived from the clock while running; the last shown value while
        stopped.
        """
        if self._global_running:
            return format_elapsed(self.global_elapsed_seconds())
        return self._global_display

    def global_elapsed_seconds(self) -> int:
        """Whole seconds since the global stopwatch started, or 0 if stopped."""
        if not self._global_running or self._global_start is None:
            return 0
        return elapsed_seconds(self._global_start, self._clock())

    def get_task(self, task_id: int) -> Task | None:
        """Get a copy of a task by ID.

        Args:
            task_id: The task ID.

        Returns:
            The task if found.
        """
        task = self._find(task_id)
        return task.model_copy() if task else None

    def task_display_seconds(self, task: Task) -> int:
        """Accumulated seconds plus the live interval if the task is running."""
        if task.is_running and task.start_time is not None:
            return task.time_spent + elapsed_seconds(task.start_time, self._clock())
        return task.time_spent

    def snapshot(self) -> TrackerSnapshot:
        """Build the data a view needs to draw the tracker."""
        return TrackerSnapshot(
            tasks=[
                TaskView(
                    id=task.id,
                    name=task.name,
                    time_spent=format_elapsed(task.time_spent),
                    current_time=format_elapsed(self.task_display_seconds(task)),
                    is_running=task.is_running,
                )
                for task in self._tasks
            ],
            global_elapsed=self.global_display,
            global_running=self._global_running,
        )

    # -- global stopwatch -------------------------------------------------

    def toggle_global_timer(self) -> None:
        """Start the global stopwatch if stopped, stop it if running."""
        if self._global_running:
            self.stop_global_timer()
        else:
            self.start_global_timer()

    def start_global_timer(self) -> None:
        """Start the global stopwatch from zero. No-op if already running."""
        if self._global_running:
            return

        if self._ticker is not None:
            self._ticker.start(self.tick)
        self._global_running = True
        self._global_start = self._clock()

        logger.debug("Global timer started")
        self._render()

    def stop_global_timer(self) -> None:
        """Stop the global stopwatch. No-op if not running.

        The elapsed value is not attributed to any task; the display keeps
        the value shown at the moment of stopping.
        """
        if not self._global_running:
            return

        if self._ticker is not None:
            self._ticker.cancel()
        self._global_display = format_elapsed(self.global_elapsed_seconds())
        self._global_running = False
        self._global_start = None

        logger.debug(f"Global timer stopped at {self._global_display}")
        self._render()

    def reset_global_timer(self) -> None:
        """Stop the global stopwatch and zero its display."""
        self.stop_global_timer()
        self._global_display = ZERO_DISPLAY
        self._render()

    def tick(self) -> None:
        """Recompute the global stopwatch display and push it to the view.

        Invoked once per interval by the ticker, or by the host directly
        when no ticker is configured.
        """
        if not self._global_running or self._global_start is None:
            return

        self._global_display = format_elapsed(self.global_elapsed_seconds())
        self._view.update_clock(self._global_display)

    # -- tasks -----------------------------------------------------------

    def add_task(self, name: str) -> Task | None:
        """Append a new stopped task.

        Args:
            name: Task label; surrounding whitespace is trimmed.

        Returns:
            The created task, or None if the name was blank.
        """
        name = (name or "").strip()
        if not name:
            return None

        task = Task(id=self._next_id(), name=name, time_spent=0, is_running=False)
        self._tasks.append(task)
        self.save_tasks()

        logger.info(f"Added task: {task.name} ({task.id})")
        self._render()
        return task.model_copy()

    def toggle_task_timer(self, task_id: int) -> bool:
        """Start or stop a task's timer.

        Starting a task first stops whichever other task is running.

        Args:
            task_id: The task ID.

        Returns:
            True if the task was found.
        """
        task = self._find(task_id)
        if task is None:
            return False

        if task.is_running:
            self._stop_task_timer(task)
            return True

        for other in self._tasks:
            if other.is_running:
                self._stop_task_timer(other)

        task.is_running = True
        task.start_time = self._clock()
        self.save_tasks()

        logger.info(f"Started task: {task.name} ({task.id})")
        self._render()
        return True

    def _stop_task_timer(self, task: Task) -> None:
        """Stop a running task and add the whole elapsed seconds to it."""
        if not task.is_running:
            return

        now = self._clock()
        start = task.start_time if task.start_time is not None else now
        added = elapsed_seconds(start, now)

        task.time_spent += added
        task.is_running = False
        task.start_time = None
        self.save_tasks()

        logger.info(f"Stopped task: {task.name} ({task.id}) +{added}s")
        self._render()

    def delete_task(self, task_id: int) -> bool:
        """Remove a task, keeping the order of the rest.

        A running task's current interval is discarded with it. With
        ``delete_stops_global_timer`` the global stopwatch is stopped too.

        Args:
            task_id: The task ID.

        Returns:
            True if the task was found and removed.
        """
        task = self._find(task_id)
        if task is None:
            return False

        if task.is_running and self._delete_stops_global_timer:
            self.stop_global_timer()

        self._tasks = [t for t in self._tasks if t.id != task_id]
        self.save_tasks()

        logger.info(f"Deleted task: {task.name} ({task_id})")
        self._render()
        return True

    # -- persistence -----------------------------------------------------

    def save_tasks(self) -> None:
        """Write the full task list to storage, overwriting the slot."""
        payload = encode_tasks([task.to_storage() for task in self._tasks])
        self._storage.set_item(TASKS_KEY, payload)
        logger.debug(f"Saved {len(self._tasks)} tasks")

    def load_tasks(self) -> None:
        """Replace the in-memory task list with the stored one.

        An empty slot leaves the current list untouched. Stored data that
        does not parse as a task list is logged and replaced by an empty
        list in memory; the stored value is kept until the next save.
        """
        raw = self._storage.get_item(TASKS_KEY)
        if not raw:
            logger.debug("No stored tasks")
            return

        try:
            tasks = _task_list_adapter.validate_python(json.loads(raw))
        except (json.JSONDecodeError, ValidationError) as e:
            logger.warning(f"Discarding malformed stored tasks: {e}")
            self._tasks = []
            return

        running = [t for t in tasks if t.is_running]
        if len(running) > 1:
            logger.warning(f"Stored data has {len(running)} running tasks")

        self._tasks = tasks
        logger.debug(f"Loaded {len(self._tasks)} tasks")

    # -- helpers ---------------------------------------------------------

    def _find(self, task_id: int) -> Task | None:
        for task in self._tasks:
            if task.id == task_id:
                return task
        return None

    def _next_id(self) -> int:
        """Creation timestamp, bumped past existing ids to stay unique."""
        candidate = self._clock()
        if self._tasks:
            candidate = max(candidate, max(t.id for t in self._tasks) + 1)
        return candidate

    def _render(self) -> None:
        self._view.render(self.snapshot())
