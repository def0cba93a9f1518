"""Shared pytest fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest

from grove.events import Event, EventBus
from grove.project.facade import ProjectFacade
from grove.project.headless import HeadlessWindow


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    for name in (
        "GROVE_DEBUG",
        "GROVE_SETTINGS_PATH",
        "GROVE_STORAGE_DIR",
        "GROVE_DEBUG_LOGGING",
        "GROVE_SHOW_HIDDEN_FILES",
        "GROVE_FIND_FILE_LIMIT",
        "GROVE_LOG_DIR",
    ):
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A small project: one source directory, a readme, and hidden clutter."""

    root = tmp_path / "project"
    (root / "src").mkdir(parents=True)
    (root / "src" / "main.py").write_text("print('hello')\n", encoding="utf-8")
    (root / "README.md").write_text("# Project\n", encoding="utf-8")
    (root / ".hidden").write_text("secret\n", encoding="utf-8")
    (root / ".git").mkdir()
    (root / ".git" / "config").write_text("[core]\n", encoding="utf-8")
    return root


class RecordingBus(EventBus):
    """Event bus that remembers every published event."""

    __slots__ = ("events",)

    def __init__(self) -> None:
        super().__init__()
        self.events: list[Event] = []

    def publish(self, event: Event) -> None:
        self.events.append(event)
        super().publish(event)

    def of_type(self, event_type: type[Event]) -> list[Event]:
        return [event for event in self.events if isinstance(event, event_type)]


@pytest.fixture
def bus() -> RecordingBus:
    return RecordingBus()


@pytest.fixture
def window() -> HeadlessWindow:
    return HeadlessWindow("main")


@pytest.fixture
def facade(window: HeadlessWindow, bus: RecordingBus) -> ProjectFacade:
    return ProjectFacade(lambda: (window,), storage={}, event_bus=bus)
