"""PySide6 main window wiring the tag editor, command buttons and colour checklist."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable

from PySide6.QtCore import QByteArray
from PySide6.QtWidgets import (
    QCheckBox,
    QDialog,
    QDialogButtonBox,
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QMainWindow,
    QPlainTextEdit,
    QPushButton,
    QVBoxLayout,
    QWidget,
)

from .core.colors import Color
from .editor.qt_editor import TagTextEdit
from .events import EventBus, StatusMessage
from .services.autosave import AutosaveController, file_save_action
from .services.draft_snapshots import DraftSnapshotRecorder, DraftSnapshotStore
from .services.settings import SETTINGS_DIR, Settings, SettingsStore
from .tags.manager import MetaTagManager
from .ui.color_checklist import ColorChecklist
from .ui.controller import TagCommandController
from .ui.timers import AutosaveBinding, DraftSnapshotTimer

__all__ = ["MainWindow", "RecoveredDraftsDialog", "SAMPLE_DOCUMENT", "WindowContext"]

LOGGER = logging.getLogger(__name__)

SAMPLE_DOCUMENT = (
    "Intro text before tags.\n"
    "<note/> This paragraph includes a closed note tag.\n"
    "Here is an encapsulated tag: <summary>This is wrapped content.</summary>\n"
    "Here is a nested example: <important>Keep <childOne>child one</childOne> and "
    "<childTwo>child two</childTwo> safe</important>."
)


@dataclass(slots=True)
class WindowContext:
    """Shared context passed to the main window when constructing the UI."""

    settings: Settings | None = None
    settings_store: SettingsStore | None = None
    draft_store: DraftSnapshotStore | None = None


class ColorChecklistWidget(QWidget):
    """Row of colour-filled checkboxes mirroring a :class:`ColorChecklist`."""

    def __init__(self, model: ColorChecklist, parent: Any | None = None) -> None:
        super().__init__(parent)
        self._model = model
        self._layout = QHBoxLayout(self)
        self._layout.setContentsMargins(0, 0, 0, 0)
        self._checkboxes: list[QCheckBox] = []
        self.rebuild()

    def rebuild(self) -> None:
        for checkbox in self._checkboxes:
            self._layout.removeWidget(checkbox)
            checkbox.deleteLater()
        self._checkboxes = []
        for index, entry in enumerate(self._model.entries()):
            checkbox = QCheckBox(self)
            checkbox.setChecked(entry.checked)
            checkbox.setToolTip(entry.color.to_hex())
            checkbox.setStyleSheet(
                "QCheckBox::indicator {"
                f" background-color: rgba({entry.color.r}, {entry.color.g}, {entry.color.b}, {entry.color.a});"
                " border: 1px solid rgb(200, 200, 200); width: 18px; height: 18px; }"
            )
            checkbox.toggled.connect(self._make_toggle_handler(index))
            self._layout.addWidget(checkbox)
            self._checkboxes.append(checkbox)

    def _make_toggle_handler(self, index: int) -> Callable[[bool], None]:
        def _handler(checked: bool) -> None:
            self._model.set_checked(index, checked)

        return _handler


class RecoveredDraftsDialog(QDialog):
    """Read-only view of every captured draft."""

    def __init__(self, combined_text: str, parent: Any | None = None) -> None:
        super().__init__(parent)
        self.setWindowTitle("Recovered Drafts")
        self.setMinimumSize(400, 300)
        layout = QVBoxLayout(self)
        self.text_view = QPlainTextEdit(self)
        self.text_view.setReadOnly(True)
        self.text_view.setPlainText(combined_text)
        layout.addWidget(self.text_view)
        buttons = QDialogButtonBox(QDialogButtonBox.StandardButton.Close, self)
        buttons.rejected.connect(self.reject)
        layout.addWidget(buttons)


class MainWindow(QMainWindow):
    """Demo shell for inserting and inspecting metatags."""

    def __init__(self, context: WindowContext | None = None) -> None:
        super().__init__()
        self._context = context or WindowContext()
        self._settings = self._context.settings or Settings()
        self._bus: EventBus[Any] = EventBus()

        self.setWindowTitle("Named Metatag Manager")
        self._restore_geometry()
        self.editor = TagTextEdit(self)
        self.tag_name_input = QLineEdit(self)
        self.tag_name_input.setPlaceholderText(f"Tag name (default: {self._settings.default_tag_name})")
        self.status_label = QLabel(self)
        self.status_label.setObjectName("statusText")

        self.manager = MetaTagManager(self.editor, event_bus=self._bus)
        self.checklist = ColorChecklist(event_bus=self._bus)
        self.checklist.init(
            [Color.coerce(value) for value in self._settings.palette],
            list(self._settings.palette_checked),
        )
        self.controller = TagCommandController(
            self.manager,
            settings=self._settings,
            checklist=self.checklist,
            event_bus=self._bus,
        )
        self._bus.subscribe(StatusMessage, self._on_status_message)

        self.checklist_widget = ColorChecklistWidget(self.checklist, self)
        self._build_layout()

        self.editor.set_text(SAMPLE_DOCUMENT)
        self.autosave = AutosaveBinding(
            self.editor,
            AutosaveController(
                self.editor.get_text,
                file_save_action(self._autosave_path()),
                self._settings.autosave_timeout_ms,
                event_bus=self._bus,
            ),
            self,
        )

        self.drafts = DraftSnapshotRecorder(
            interval=self._settings.draft_snapshot_interval,
            store=self._context.draft_store,
        )
        self.drafts.restore()
        self.drafts.attach(self.editor.toPlainText, name=self.editor.objectName())
        self.draft_timer = DraftSnapshotTimer(self.drafts, self)
        if self._settings.draft_snapshots_enabled:
            self.draft_timer.start()

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------
    def _build_layout(self) -> None:
        central = QWidget(self)
        layout = QVBoxLayout(central)
        layout.addWidget(self.tag_name_input)

        buttons = QGridLayout()
        commands: list[tuple[str, Callable[[], Any]]] = [
            ("Add tag", lambda: self.controller.add_tag(self.tag_name_input.text())),
            ("Remove tag", lambda: self.controller.remove_tag(self.tag_name_input.text())),
            ("Hide tag", lambda: self.controller.hide_tag(self.tag_name_input.text())),
            ("Show tag", lambda: self.controller.show_tag(self.tag_name_input.text())),
            ("Highlight", lambda: self.controller.hilite_tag(self.tag_name_input.text())),
            ("Clear highlight", lambda: self.controller.clear_hilite_tag(self.tag_name_input.text())),
            ("List tags", self.controller.list_tags),
            ("List tags (details)", self.controller.list_tags_with_details),
            ("Is present?", lambda: self.controller.check_tag(self.tag_name_input.text())),
            ("Get content", lambda: self.controller.get_content(self.tag_name_input.text())),
            ("Add colour", self._on_add_colour_clicked),
            ("Recovered drafts", self.show_recovered_drafts),
        ]
        for index, (label, handler) in enumerate(commands):
            button = QPushButton(label, self)
            button.clicked.connect(lambda _checked=False, fn=handler: fn())
            buttons.addWidget(button, index // 4, index % 4)
        layout.addLayout(buttons)

        layout.addWidget(self.editor, 1)
        layout.addWidget(self.checklist_widget)
        layout.addWidget(self.status_label)
        self.setCentralWidget(central)

    # ------------------------------------------------------------------
    # Handlers
    # ------------------------------------------------------------------
    def _on_status_message(self, event: StatusMessage) -> None:
        self.status_label.setText(event.message)

    def _on_add_colour_clicked(self) -> None:
        self.controller.add_colour_checkbox()
        self.checklist_widget.rebuild()

    def show_recovered_drafts(self) -> None:
        dialog = RecoveredDraftsDialog(self.drafts.combined_text(), self)
        dialog.exec()

    def _restore_geometry(self) -> None:
        encoded = self._settings.window_geometry
        if not encoded:
            self.resize(900, 600)
            return
        if not self.restoreGeometry(QByteArray.fromBase64(encoded.encode("ascii"))):
            LOGGER.debug("Stored window geometry could not be restored.")
            self.resize(900, 600)

    def _autosave_path(self) -> Path:
        if self._settings.autosave_path:
            return Path(self._settings.autosave_path).expanduser()
        return SETTINGS_DIR / "autosave" / "document.txt"

    def closeEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        self.autosave.controller.flush()
        self.drafts.capture_all()
        try:
            self.drafts.persist()
        except OSError as exc:
            LOGGER.warning("Failed to persist draft snapshots: %s", exc)
        store = self._context.settings_store
        if store is not None:
            colors, checked = self.checklist.get_current_state()
            self._settings.palette = [color.to_hex() for color in colors]
            self._settings.palette_checked = checked
            self._settings.window_geometry = bytes(self.saveGeometry().toBase64().data()).decode("ascii")
            try:
                store.save(self._settings)
            except OSError as exc:
                LOGGER.warning("Failed to save settings: %s", exc)
        super().closeEvent(event)
