"""Type definitions for the time tracker.

This module defines the Pydantic models for persisted tasks and the
read-only data handed to views after each state change.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Task(BaseModel):
    """A named unit of work with its own accumulated time.

    Field aliases match the persisted camelCase layout so stored data
    round-trips unchanged.

    Attributes:
        id: Unique task identifier, derived from the creation timestamp.
        name: Task label, trimmed of surrounding whitespace.
        time_spent: Whole seconds accumulated over completed intervals.
        is_running: Whether the task's timer is currently running.
        start_time: Epoch milliseconds when the current interval began.
    """

    model_config = ConfigDict(populate_by_name=True, extra="allow")

    id: int = Field(..., description="Unique task identifier")
    name: str = Field(..., description="Task label")
    time_spent: int = Field(
        default=0,
        alias="timeSpent",
        description="Accumulated whole seconds"
    )
    is_running: bool = Field(
        default=False,
        alias="isRunning",
        description="Whether the task timer is running"
    )
    start_time: int | None = Field(
        default=None,
        alias="startTime",
        description="Epoch ms when the running interval began"
    )

    def to_storage(self) -> dict[str, Any]:
        """Serialize to the persisted layout.

        Returns:
            Dict keyed by camelCase names; ``startTime`` is omitted when unset.
        """
        data = self.model_dump(by_alias=True)
        if self.start_time is None:
            data.pop("startTime", None)
        return data


class TaskView(BaseModel):
    """Per-task data a view needs to draw one row.

    Attributes:
        id: Task identifier.
        name: Task label.
        time_spent: Formatted ``HH:MM:SS`` accumulated time.
        current_time: Formatted accumulated time plus the live interval.
        is_running: Whether the task timer is running.
    """

    id: int
    name: str
    time_spent: str
    current_time: str
    is_running: bool


class TrackerSnapshot(BaseModel):
    """Everything a view needs after a state change.

    Attributes:
        tasks: Tasks in display (insertion) order.
        global_elapsed: Formatted global stopwatch value.
        global_running: Whether the global stopwatch is running.
    """

    tasks: list[TaskView] = Field(default_factory=list)
    global_elapsed: str = "00:00:00"
    global_running: bool = False
