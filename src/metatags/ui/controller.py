"""Command handlers behind the main window's tag buttons.

Each handler runs one :class:`~metatags.tags.manager.MetaTagManager`
operation for the name typed by the user and returns the status line to
display. The same line is published as a :class:`StatusMessage`.
"""

from __future__ import annotations

import logging
from typing import Any

from ..core.colors import Color
from ..events import ColorToggled, EventBus, StatusMessage
from ..services.settings import Settings
from ..tags.errors import TagError
from ..tags.manager import MetaTagManager
from .color_checklist import ColorChecklist

__all__ = ["TagCommandController"]

LOGGER = logging.getLogger(__name__)


class TagCommandController:
    """Translate button presses into tag operations and status messages."""

    def __init__(
        self,
        manager: MetaTagManager,
        *,
        settings: Settings | None = None,
        checklist: ColorChecklist | None = None,
        event_bus: EventBus[Any] | None = None,
    ) -> None:
        self._manager = manager
        self._settings = settings or Settings()
        self._checklist = checklist
        self._bus = event_bus
        self._last_status = ""
        if event_bus is not None:
            event_bus.subscribe(ColorToggled, self.handle_color_toggled)

    @property
    def last_status(self) -> str:
        return self._last_status

    def resolve_name(self, raw_name: str | None) -> str:
        """Blank input falls back to the configured default tag name."""

        if raw_name is None or not raw_name.strip():
            return self._settings.default_tag_name
        return raw_name.strip()

    # ------------------------------------------------------------------
    # Tag commands
    # ------------------------------------------------------------------
    def add_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        try:
            self._manager.add_tag(name)
        except TagError as exc:
            LOGGER.info("Add tag '%s' rejected: %s", name, exc)
            return self._status(f"Add failed: {exc.message}")
        return self._status(f"Added tag '{name}'.")

    def remove_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        if self._manager.remove_tag(name):
            return self._status(f"Removed tag '{name}'.")
        return self._status(f"No tag '{name}' found to remove.")

    def hide_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        if self._manager.hide_tag(name, True):
            return self._status(f"Hid tag '{name}'.")
        return self._status(f"No tag '{name}' hidden.")

    def show_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        if self._manager.hide_tag(name, False):
            return self._status(f"Restored tag '{name}'.")
        return self._status(f"No hidden tag '{name}' to restore.")

    def hilite_tag(self, raw_name: str | None, color: Color | str | None = None) -> str:
        name = self.resolve_name(raw_name)
        resolved = color if color is not None else self._settings.highlight_color
        if self._manager.hilite_tag(name, True, resolved):
            return self._status(f"Highlighted tag '{name}'.")
        return self._status(f"No tag '{name}' to highlight.")

    def clear_hilite_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        if self._manager.hilite_tag(name, False):
            return self._status(f"Cleared highlight for '{name}'.")
        return self._status(f"No tag '{name}' highlight to clear.")

    def list_tags(self) -> str:
        tags = self._manager.list_tag_names()
        if not tags:
            return self._status("No tags found.")
        return self._status(f"Tags: {', '.join(tags)}")

    def list_tags_with_details(self) -> str:
        details = self._manager.list_tag_details()
        if not details:
            return self._status("No tags found.")
        return self._status(f"Tags: {', '.join(detail.describe() for detail in details)}")

    def check_tag(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        if self._manager.is_tag_present(name):
            return self._status(f"Tag '{name}' is present.")
        return self._status(f"Tag '{name}' is not present.")

    def get_content(self, raw_name: str | None) -> str:
        name = self.resolve_name(raw_name)
        content = self._manager.get_tag_content(name)
        return self._status(f"Content for '{name}': {content}")

    # ------------------------------------------------------------------
    # Colour checklist commands
    # ------------------------------------------------------------------
    def add_colour_checkbox(self) -> str:
        if self._checklist is None:
            return self._status("No colour checklist attached.")
        color = self._checklist.add_color()
        return self._status(f"Added colour checkbox for '{color.to_hex()}'.")

    def handle_color_toggled(self, event: ColorToggled) -> None:
        state = "checked" if event.checked else "unchecked"
        self._status(f"Color '{event.color.to_hex()}' checkbox is {state}.")

    def _status(self, message: str) -> str:
        self._last_status = message
        if self._bus is not None:
            self._bus.publish(StatusMessage(message=message))
        return message
