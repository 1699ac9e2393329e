"""Shared pytest fixtures."""

from __future__ import annotations

import os

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

import pytest

from metatags.editor.memory_editor import MemoryEditor
from metatags.events import EventBus

NESTED_SAMPLE = (
    "<important>Keep <childOne>child one</childOne> and "
    "<childTwo>child two</childTwo> safe</important>"
)


@pytest.fixture
def nested_sample() -> str:
    return NESTED_SAMPLE


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def editor() -> MemoryEditor:
    return MemoryEditor()


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in (
        "METATAGS_DEFAULT_TAG",
        "METATAGS_HIGHLIGHT_COLOR",
        "METATAGS_AUTOSAVE_PATH",
        "METATAGS_AUTOSAVE_TIMEOUT_MS",
        "METATAGS_DEBUG_LOGGING",
        "METATAGS_DRAFT_SNAPSHOTS",
        "METATAGS_DRAFT_INTERVAL",
        "METATAGS_LOG_DIR",
        "METATAGS_DEBUG",
        "METATAGS_SETTINGS_PATH",
    ):
        monkeypatch.delenv(name, raising=False)
