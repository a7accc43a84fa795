"""Tests for settings loading."""

from pathlib import Path

from tasktimer.config import TASKTIMER_DIR, Settings


class TestSettings:
    """Tests for the Settings class."""

    def test_defaults(self, monkeypatch):
        """Defaults apply when nothing is configured."""
        for name in ("STORAGE_PATH", "TICK_INTERVAL", "DELETE_STOPS_GLOBAL_TIMER", "LOG_LEVEL"):
            monkeypatch.delenv(f"TASKTIMER_{name}", raising=False)

        s = Settings(_env_file=None)

        assert s.storage_path is None
        assert s.tick_interval == 1.0
        assert s.delete_stops_global_timer is False
        assert s.log_level == "WARNING"
        assert s.get_storage_path() == TASKTIMER_DIR / "storage.json"

    def test_environment_overrides(self, monkeypatch, tmp_path):
        """TASKTIMER_* variables override defaults."""
        monkeypatch.setenv("TASKTIMER_STORAGE_PATH", str(tmp_path / "s.json"))
        monkeypatch.setenv("TASKTIMER_TICK_INTERVAL", "0.5")
        monkeypatch.setenv("TASKTIMER_DELETE_STOPS_GLOBAL_TIMER", "true")

        s = Settings(_env_file=None)

        assert s.get_storage_path() == tmp_path / "s.json"
        assert s.tick_interval == 0.5
        assert s.delete_stops_global_timer is True

    def test_storage_path_tilde_is_expanded(self, monkeypatch, tmp_path):
        """A ~ in the configured path resolves to the home directory."""
        monkeypatch.setenv("HOME", str(tmp_path))

        s = Settings(_env_file=None, storage_path=Path("~/tracker.json"))

        assert s.get_storage_path() == tmp_path / "tracker.json"
