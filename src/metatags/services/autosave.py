"""Debounced save-if-changed for editor content.

Every text change restarts a quiet-period window. Once the window elapses
without further edits, the current content is handed to the save action,
but only when it differs from what was saved last. Losing focus flushes
immediately. The controller is toolkit-agnostic: a UI timer (or a test)
drives it by calling :meth:`AutosaveController.poll`.
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import Any, Callable

from ..events import DocumentAutosaved, EventBus

__all__ = ["AutosaveController", "file_save_action", "write_autosave"]

LOGGER = logging.getLogger(__name__)

ContentProvider = Callable[[], str]
SaveAction = Callable[[str], None]


class AutosaveController:
    """Debounce text changes and save content that actually changed."""

    def __init__(
        self,
        content_provider: ContentProvider,
        save_action: SaveAction,
        timeout_ms: int,
        *,
        clock: Callable[[], float] = time.monotonic,
        event_bus: EventBus[Any] | None = None,
    ) -> None:
        if content_provider is None:
            raise TypeError("content_provider is required")
        self._content_provider = content_provider
        self._clock = clock
        self._bus = event_bus
        self._deadline: float | None = None
        self._save_action: SaveAction
        self._timeout = 0.0
        self._last_saved = ""
        self.update(save_action, timeout_ms)

    def update(self, save_action: SaveAction, timeout_ms: int) -> None:
        """Replace the save action and timeout, and re-baseline the saved content."""

        if save_action is None:
            raise TypeError("save_action is required")
        if timeout_ms <= 0:
            raise ValueError("Timeout must be greater than zero.")
        self._save_action = save_action
        self._timeout = timeout_ms / 1000.0
        self._last_saved = self._content_provider()

    @property
    def timeout_ms(self) -> int:
        return int(round(self._timeout * 1000))

    @property
    def pending(self) -> bool:
        return self._deadline is not None

    def seconds_until_due(self) -> float | None:
        if self._deadline is None:
            return None
        return max(0.0, self._deadline - self._clock())

    def notify_text_changed(self) -> None:
        """Restart the quiet-period window."""

        self._deadline = self._clock() + self._timeout

    def poll(self) -> bool:
        """Save if the quiet period has elapsed; return ``True`` when saved."""

        if self._deadline is None or self._clock() < self._deadline:
            return False
        self._deadline = None
        return self.save_if_changed()

    def flush(self) -> bool:
        """Save immediately if content changed (used when the editor loses focus)."""

        return self.save_if_changed()

    def save_if_changed(self) -> bool:
        current = self._content_provider()
        if current == self._last_saved:
            return False
        self._last_saved = current
        self._save_action(current)
        LOGGER.debug("Autosaved %d characters", len(current))
        if self._bus is not None:
            self._bus.publish(DocumentAutosaved(length=len(current)))
        return True


def write_autosave(path: Path, text: str) -> Path:
    """Atomically write ``text`` to ``path``."""

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(path.suffix + ".tmp")
    tmp_path.write_text(text, encoding="utf-8")
    tmp_path.replace(path)
    return path


def file_save_action(path: Path) -> SaveAction:
    """Return a save action that writes autosaved content to ``path``."""

    def _save(text: str) -> None:
        write_autosave(path, text)

    return _save
