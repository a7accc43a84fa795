"""Shared fixtures for tracker tests."""

import pytest

from tasktimer.tracker import LocalStorage, TaskTimerStore, Ticker, TrackerSnapshot, TrackerView

# Arbitrary fixed epoch ms so ids and start times are predictable
T0 = 1_700_000_000_000


class ManualClock:
    """Clock returning epoch ms that only moves when advanced."""

    def __init__(self, start_ms: int = T0) -> None:
        self.now = start_ms

    def __call__(self) -> int:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += int(seconds * 1000)


class RecordingView(TrackerView):
    """View that keeps everything it is given."""

    def __init__(self) -> None:
        self.snapshots: list[TrackerSnapshot] = []
        self.clock_updates: list[str] = []

    @property
    def last(self) -> TrackerSnapshot:
        return self.snapshots[-1]

    def render(self, snapshot: TrackerSnapshot) -> None:
        self.snapshots.append(snapshot)

    def update_clock(self, display: str) -> None:
        self.clock_updates.append(display)


class FakeTicker(Ticker):
    """Ticker that records start/cancel and fires only when told to."""

    def __init__(self) -> None:
        self.callback = None
        self.starts = 0
        self.cancels = 0

    @property
    def is_active(self) -> bool:
        return self.callback is not None

    def start(self, callback) -> None:
        self.callback = callback
        self.starts += 1

    def cancel(self) -> None:
        self.callback = None
        self.cancels += 1

    def fire(self) -> None:
        if self.callback is not None:
            self.callback()


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()


@pytest.fixture
def view() -> RecordingView:
    return RecordingView()


@pytest.fixture
def ticker() -> FakeTicker:
    return FakeTicker()


@pytest.fixture
def storage(tmp_path) -> LocalStorage:
    return LocalStorage(tmp_path / "storage.json")


@pytest.fixture
def store(storage, view, ticker, clock) -> TaskTimerStore:
    return TaskTimerStore(storage, view=view, ticker=ticker, clock=clock)
