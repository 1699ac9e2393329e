"""Qt timers driving autosave and draft snapshot capture."""

from __future__ import annotations

import logging
from typing import Any

from PySide6.QtCore import QObject, Qt, QTimer

from ..editor.qt_editor import TagTextEdit
from ..services.autosave import AutosaveController
from ..services.draft_snapshots import DraftSnapshotRecorder

LOGGER = logging.getLogger(__name__)


class AutosaveBinding(QObject):
    """Connect a :class:`TagTextEdit` to an :class:`AutosaveController`.

    Text changes restart a single-shot timer; its expiry polls the
    controller, and losing focus flushes it.
    """

    def __init__(self, editor: TagTextEdit, controller: AutosaveController, parent: Any | None = None) -> None:
        super().__init__(parent)
        self._controller = controller
        self._timer = QTimer(self)
        self._timer.setSingleShot(True)
        self._timer.setTimerType(Qt.TimerType.PreciseTimer)
        self._timer.timeout.connect(self._on_timeout)
        editor.textChanged.connect(self._on_text_changed)
        editor.focusLost.connect(self._controller.flush)

    @property
    def controller(self) -> AutosaveController:
        return self._controller

    def _on_text_changed(self) -> None:
        self._controller.notify_text_changed()
        self._timer.start(self._controller.timeout_ms)

    def _on_timeout(self) -> None:
        if self._controller.poll():
            return
        remaining = self._controller.seconds_until_due()
        if remaining is not None:
            # Timer fired a hair before the debounce deadline.
            self._timer.start(max(1, int(remaining * 1000)))


class DraftSnapshotTimer(QObject):
    """Periodically capture every editor attached to a recorder."""

    def __init__(self, recorder: DraftSnapshotRecorder, parent: Any | None = None) -> None:
        super().__init__(parent)
        self._recorder = recorder
        self._timer = QTimer(self)
        self._timer.setInterval(int(recorder.interval * 1000))
        self._timer.timeout.connect(self._on_tick)

    def start(self) -> None:
        self._timer.start()

    def stop(self) -> None:
        self._timer.stop()

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def _on_tick(self) -> None:
        captured = self._recorder.capture_all()
        LOGGER.debug("Captured %d draft snapshot(s)", captured)
