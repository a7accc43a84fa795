"""Rich console rendering for the tracker."""

from contextlib import contextmanager
from typing import Iterator

from rich.console import Console
from rich.live import Live
from rich.panel import Panel
from rich.table import Table

from tasktimer.tracker.types import TrackerSnapshot
from tasktimer.tracker.view import TrackerView


def build_task_table(snapshot: TrackerSnapshot, title: str = "Tasks") -> Table:
    """Build a table of tasks in display order.

    Args:
        snapshot: Tracker state to draw
        title: Table title

    Returns:
        Rich table with one row per task
    """
    table = Table(title=title)
    table.add_column("ID", style="cyan")
    table.add_column("Name", style="white")
    table.add_column("Time", style="yellow", justify="right")
    table.add_column("Status", style="green")

    for task in snapshot.tasks:
        table.add_row(
            str(task.id),
            task.name,
            task.current_time,
            "[green]Running[/green]" if task.is_running else "[dim]Stopped[/dim]",
        )

    return table


def build_clock_panel(display: str, running: bool) -> Panel:
    """Build the global stopwatch panel."""
    style = "bold red" if running else "bold blue"
    return Panel(
        f"[{style}]{display}[/{style}]",
        title="Stopwatch",
        subtitle="[dim]Press Enter to return[/dim]",
        expand=False,
    )


class ConsoleView(TrackerView):
    """Renders tracker state to a rich console.

    Snapshots are buffered and printed by ``flush`` so that a command
    which changes state several times prints one table. Inside ``live``
    the stopwatch panel is redrawn on every clock update.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._snapshot: TrackerSnapshot | None = None
        self._dirty = False
        self._live: Live | None = None

    @property
    def snapshot(self) -> TrackerSnapshot | None:
        """The last snapshot received."""
        return self._snapshot

    def render(self, snapshot: TrackerSnapshot) -> None:
        self._snapshot = snapshot
        self._dirty = True
        if self._live is not None:
            self._live.update(build_clock_panel(snapshot.global_elapsed, snapshot.global_running))

    def update_clock(self, display: str) -> None:
        if self._snapshot is not None:
            self._snapshot = self._snapshot.model_copy(update={"global_elapsed": display})
        if self._live is not None:
            running = self._snapshot.global_running if self._snapshot else True
            self._live.update(build_clock_panel(display, running))

    def flush(self) -> None:
        """Print the latest snapshot if it changed since the last flush."""
        if not self._dirty or self._snapshot is None:
            return
        self._dirty = False

        if self._snapshot.tasks:
            self._console.print(build_task_table(self._snapshot))
        else:
            self._console.print("[yellow]No tasks.[/yellow]")

    @contextmanager
    def live(self) -> Iterator[None]:
        """Show a continuously updated stopwatch panel."""
        snapshot = self._snapshot or TrackerSnapshot()
        panel = build_clock_panel(snapshot.global_elapsed, snapshot.global_running)
        with Live(panel, console=self._console, refresh_per_second=4, transient=True) as live:
            self._live = live
            try:
                yield
            finally:
                self._live = None
