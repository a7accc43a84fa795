"""View interface the tracker reports state changes to."""

from abc import ABC, abstractmethod

from tasktimer.tracker.types import TrackerSnapshot


class TrackerView(ABC):
    """Receives tracker state; owns all presentation.

    The store calls ``render`` after every mutating command and
    ``update_clock`` on every stopwatch tick.
    """

    @abstractmethod
    def render(self, snapshot: TrackerSnapshot) -> None:
        """Draw the full tracker state.

        Args:
            snapshot: Ordered tasks and the global stopwatch value.
        """
        pass

    @abstractmethod
    def update_clock(self, display: str) -> None:
        """Refresh the global stopwatch display.

        Args:
            display: Formatted ``HH:MM:SS`` value.
        """
        pass


class NullView(TrackerView):
    """View that discards all updates."""

    def render(self, snapshot: TrackerSnapshot) -> None:
        pass

    def update_clock(self, display: str) -> None:
        pass
