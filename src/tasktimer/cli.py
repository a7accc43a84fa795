"""Command-line interface for TaskTimer.

CONCEPTS:
---------
- STOPWATCH: A single global timer, independent of any task. It is
             display-only and never saved; it lives as long as a session.

- TASK:      A named unit of work with its own accumulated time. At most
             one task runs at a time; starting one stops the other.
             Tasks are saved to the storage file after every change.
"""

import argparse
import asyncio
import logging
import sys
import threading
from typing import NoReturn

from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel

from tasktimer import __version__
from tasktimer.config import settings
from tasktimer.console import ConsoleView, build_task_table
from tasktimer.tracker import AsyncTicker, LocalStorage, TaskTimerStore, Ticker, TrackerView

console = Console()

logger = logging.getLogger(__name__)

SESSION_HELP = (
    "Commands:\n"
    "  start, stop     - Start/stop the stopwatch\n"
    "  reset           - Stop the stopwatch and zero it\n"
    "  add <name>      - Add a task\n"
    "  toggle <id>     - Start/stop a task\n"
    "  delete <id>     - Delete a task\n"
    "  list            - Show tasks\n"
    "  watch           - Show a live stopwatch until Enter\n"
    "  help            - Show this help\n"
    "  quit, exit, q   - Leave the session"
)


def setup_logging(verbose: bool = False) -> None:
    """Configure logging."""
    if verbose:
        level = logging.DEBUG
    else:
        level = getattr(logging, settings.log_level.upper(), logging.WARNING)
    fmt = "%(name)s: %(message)s" if verbose else "%(message)s"
    logging.basicConfig(
        level=level,
        format=fmt,
        handlers=[RichHandler(rich_tracebacks=True, console=console, show_path=verbose)],
    )


def open_store(view: TrackerView | None = None, ticker: Ticker | None = None) -> TaskTimerStore:
    """Create a store over the configured storage file."""
    path = settings.get_storage_path()
    logger.debug(f"Using storage file {path}")
    return TaskTimerStore(
        LocalStorage(path),
        view=view,
        ticker=ticker,
        delete_stops_global_timer=settings.delete_stops_global_timer,
    )


def _parse_task_id(raw: str) -> int | None:
    try:
        return int(raw)
    except ValueError:
        return None


def cmd_add(args: argparse.Namespace) -> None:
    """Add a new task."""
    store = open_store()
    task = store.add_task(" ".join(args.name))

    if task is None:
        console.print("[red]Error:[/red] Task name cannot be empty")
        sys.exit(1)

    console.print(f"[green]Added task:[/green] {task.name}")
    console.print(f"  ID: {task.id}")


def cmd_list(args: argparse.Namespace) -> None:
    """List all tasks."""
    store = open_store()
    snapshot = store.snapshot()

    if not snapshot.tasks:
        console.print("[yellow]No tasks.[/yellow]")
        return

    console.print(build_task_table(snapshot))


def cmd_toggle(args: argparse.Namespace) -> None:
    """Start or stop a task."""
    store = open_store()

    if not store.toggle_task_timer(args.task_id):
        console.print(f"[red]Task not found:[/red] {args.task_id}")
        sys.exit(1)

    task = store.get_task(args.task_id)
    if task.is_running:
        console.print(f"[green]Started:[/green] {task.name}")
    else:
        console.print(f"[yellow]Stopped:[/yellow] {task.name}")
    console.print(build_task_table(store.snapshot()))


def cmd_delete(args: argparse.Namespace) -> None:
    """Delete a task."""
    store = open_store()

    task = store.get_task(args.task_id)
    if not task:
        console.print(f"[red]Task not found:[/red] {args.task_id}")
        sys.exit(1)

    store.delete_task(args.task_id)
    console.print(f"[green]Deleted:[/green] {task.name}")


def cmd_version(args: argparse.Namespace) -> None:
    """Show version information."""
    console.print(f"tasktimer v{__version__}")


async def read_line(prompt: str) -> str:
    """Read a line from the console without blocking the event loop.

    The read runs on a daemon thread so an interrupted session can exit
    while the thread is still waiting for input.

    Raises:
        EOFError: If input is closed.
    """
    loop = asyncio.get_running_loop()
    future: asyncio.Future[str] = loop.create_future()

    def _resolve(result: str | None, error: BaseException | None) -> None:
        if future.done():
            return
        if error is not None:
            future.set_exception(error)
        else:
            future.set_result(result or "")

    def _reader() -> None:
        try:
            line = console.input(prompt)
        except (EOFError, KeyboardInterrupt) as e:
            loop.call_soon_threadsafe(_resolve, None, EOFError(str(e)))
            return
        loop.call_soon_threadsafe(_resolve, line, None)

    threading.Thread(target=_reader, name="console_reader", daemon=True).start()
    return await future


def handle_session_command(store: TaskTimerStore, view: ConsoleView, line: str) -> bool:
    """Apply one session command.

    Args:
        store: The tracker store
        view: Console view bound to the store
        line: Raw input line

    Returns:
        False when the session should end
    """
    command, _, arg = line.partition(" ")
    command = command.lower()
    arg = arg.strip()

    if command in ("quit", "exit", "q"):
        return False

    if command in ("start", "stop"):
        store.toggle_global_timer()
    elif command == "reset":
        store.reset_global_timer()
    elif command == "add":
        if store.add_task(arg) is None:
            console.print("[dim]Usage: add <name>[/dim]")
    elif command in ("toggle", "delete"):
        task_id = _parse_task_id(arg)
        if task_id is None:
            console.print(f"[dim]Usage: {command} <id>[/dim]")
        elif command == "toggle":
            if not store.toggle_task_timer(task_id):
                console.print(f"[red]Task not found:[/red] {task_id}")
        elif not store.delete_task(task_id):
            console.print(f"[red]Task not found:[/red] {task_id}")
    elif command == "list":
        view.render(store.snapshot())
    elif command == "help":
        console.print(Panel(SESSION_HELP, title="Session Help"))
    else:
        console.print(f"[red]Unknown command:[/red] {command}. Type 'help' for commands.")

    return True


async def session_loop(store: TaskTimerStore, view: ConsoleView) -> None:
    """Run the interactive session until the user quits.

    Args:
        store: Store wired to ``view`` and an async ticker
        view: Console view bound to the store
    """
    console.print("\n[dim]Type a command, or 'quit' to exit. Use 'help' for commands.[/dim]\n")

    try:
        while True:
            view.flush()

            marker = "[red]●[/red]" if store.global_running else "[dim]○[/dim]"
            prompt = f"{marker} [bold cyan]{store.global_display}[/bold cyan] > "

            try:
                line = (await read_line(prompt)).strip()
            except EOFError:
                console.print("\n[dim]Goodbye![/dim]")
                break

            if not line:
                continue

            if line.lower() == "watch":
                with view.live():
                    store.tick()
                    try:
                        await read_line("")
                    except EOFError:
                        pass
                continue

            if not handle_session_command(store, view, line):
                console.print("[dim]Goodbye![/dim]")
                break
    finally:
        store.stop_global_timer()


def cmd_session(args: argparse.Namespace) -> None:
    """Start an interactive session with a live stopwatch."""

    async def _run() -> None:
        view = ConsoleView(console)
        store = open_store(view=view, ticker=AsyncTicker(interval=settings.tick_interval))
        await session_loop(store, view)

    try:
        asyncio.run(_run())
    except KeyboardInterrupt:
        console.print("\n[dim]Interrupted.[/dim]")


def main() -> NoReturn:
    """Main entry point for the TaskTimer CLI."""
    parser = argparse.ArgumentParser(
        prog="tasktimer",
        description="TaskTimer - stopwatch and per-task time tracking",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show detailed output")

    subparsers = parser.add_subparsers(dest="command", metavar="COMMAND")

    # add
    add_parser = subparsers.add_parser("add", help="Add a task")
    add_parser.add_argument("name", nargs="+", help="Task name")
    add_parser.set_defaults(func=cmd_add)

    # list
    list_parser = subparsers.add_parser("list", help="List tasks and time spent")
    list_parser.set_defaults(func=cmd_list)

    # toggle
    toggle_parser = subparsers.add_parser(
        "toggle",
        help="Start or stop a task",
        description="Start a stopped task (stopping any other running task) or stop a running one."
    )
    toggle_parser.add_argument("task_id", type=int, help="Task ID")
    toggle_parser.set_defaults(func=cmd_toggle)

    # delete
    delete_parser = subparsers.add_parser("delete", help="Delete a task")
    delete_parser.add_argument("task_id", type=int, help="Task ID")
    delete_parser.set_defaults(func=cmd_delete)

    # session
    session_parser = subparsers.add_parser(
        "session",
        help="Interactive session with a live stopwatch",
        description="Run an interactive loop with the global stopwatch and task commands."
    )
    session_parser.set_defaults(func=cmd_session)

    # version
    version_parser = subparsers.add_parser("version", help="Show version information")
    version_parser.set_defaults(func=cmd_version)

    args = parser.parse_args()
    setup_logging(args.verbose)

    if args.command is None:
        parser.print_help()
        sys.exit(0)

    try:
        args.func(args)
    except OSError as e:
        console.print(f"[red]Storage error:[/red] {e}")
        sys.exit(1)

    sys.exit(0)


if __name__ == "__main__":
    main()
