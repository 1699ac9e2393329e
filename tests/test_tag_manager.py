"""Tests for :class:`metatags.tags.manager.MetaTagManager`."""

from __future__ import annotations

from unittest.mock import MagicMock, call

import pytest

from metatags.core.colors import Color
from metatags.editor.memory_editor import MemoryEditor
from metatags.editor.overlay import Hidden, HighlightColor
from metatags.editor.surface import SelectionSnapshot
from metatags.events import EventBus, TagAdded, TagHighlightChanged, TagRemoved, TagVisibilityChanged
from metatags.tags.errors import InvalidTagNameError, TagConflictError
from metatags.tags.manager import DEFAULT_HIGHLIGHT, MetaTagManager


@pytest.fixture
def recorded(event_bus: EventBus) -> list[object]:
    events: list[object] = []
    for event_type in (TagAdded, TagRemoved, TagVisibilityChanged, TagHighlightChanged):
        event_bus.subscribe(event_type, events.append)
    return events


def _manager(text: str, event_bus: EventBus | None = None) -> tuple[MemoryEditor, MetaTagManager]:
    editor = MemoryEditor(text)
    return editor, MetaTagManager(editor, event_bus=event_bus)


# =============================================================================
# Insertion
# =============================================================================


class TestAddTag:
    def test_wraps_selected_text(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("Hello world", event_bus)
        editor.select(6, 11)

        manager.add_tag("place")

        assert editor.get_text() == "Hello <place>world</place>"
        assert editor.get_selection().text == "<place>world</place>"
        assert recorded == [TagAdded(name="place", is_self_closing=False)]

    def test_inserts_self_closing_at_caret(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("Hello world", event_bus)
        editor.select(5)

        manager.add_tag("mark")

        assert editor.get_text() == "Hello<mark/> world"
        assert recorded == [TagAdded(name="mark", is_self_closing=True)]

    def test_conflict_leaves_buffer_untouched(self, recorded: list[object], event_bus: EventBus) -> None:
        editor, manager = _manager("a <n>b</n> c", event_bus)
        editor.select(0, 12)

        with pytest.raises(TagConflictError):
            manager.add_tag("n")

        assert editor.get_text() == "a <n>b</n> c"
        assert recorded == []

    def test_blank_name_rejected(self) -> None:
        editor, manager = _manager("text")
        editor.select(0, 4)

        with pytest.raises(InvalidTagNameError):
            manager.add_tag("  ")

        assert editor.get_text() == "text"

    def test_add_then_remove_restores_text(self) -> None:
        editor, manager = _manager("keep this safe")
        editor.select(5, 9)

        manager.add_tag("n")
        assert editor.get_text() == "keep <n>this</n> safe"
        assert manager.remove_tag("n")

        assert editor.get_text() == "keep this safe"


# =============================================================================
# Removal
# =============================================================================


class TestRemoveTag:
    def test_unwraps_and_publishes_span(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("x <n>y <c/> z</n>", event_bus)

        assert manager.remove_tag("n")

        assert editor.get_text() == "x y <c/> z"
        assert recorded == [TagRemoved(name="n", start=2, end=17)]

    def test_missing_tag_returns_false(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("plain", event_bus)

        assert not manager.remove_tag("n")
        assert editor.get_text() == "plain"
        assert recorded == []

    def test_uses_surface_calls_only(self) -> None:
        surface = MagicMock()
        surface.get_text.return_value = "<n/>tail"
        manager = MetaTagManager(surface)

        assert manager.remove_tag("n")

        surface.set_text.assert_called_once_with("tail")


# =============================================================================
# Overlay requests
# =============================================================================


class TestHideTag:
    def test_exact_span_passed_to_surface(self) -> None:
        surface = MagicMock()
        surface.get_text.return_value = "Intro <summary>wrapped</summary> tail"
        manager = MetaTagManager(surface)

        assert manager.hide_tag("summary", True)

        surface.set_range_attribute.assert_called_once_with(6, 32, Hidden(True))

    def test_hide_twice_calls_overlay_identically(self) -> None:
        surface = MagicMock()
        surface.get_text.return_value = "ab<n/>cd"
        manager = MetaTagManager(surface)

        manager.hide_tag("n", True)
        manager.hide_tag("n", True)

        assert surface.set_range_attribute.call_args_list == [
            call(2, 6, Hidden(True)),
            call(2, 6, Hidden(True)),
        ]

    def test_hidden_range_recorded_in_memory_overlay(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("see <n>secret</n>!", event_bus)

        manager.hide_tag("n", True)

        assert editor.overlay.hidden_ranges() == ((4, 17),)
        assert editor.overlay.visible_text(editor.get_text()) == "see !"
        assert recorded == [TagVisibilityChanged(name="n", start=4, end=17, hidden=True)]

        manager.hide_tag("n", False)

        assert editor.overlay.hidden_ranges() == ()

    def test_missing_tag(self) -> None:
        surface = MagicMock()
        surface.get_text.return_value = "nothing"
        manager = MetaTagManager(surface)

        assert not manager.hide_tag("n", True)
        surface.set_range_attribute.assert_not_called()


class TestHiliteTag:
    def test_default_color_is_yellow(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("<n>x</n>", event_bus)

        assert manager.hilite_tag("n", True)

        assert editor.overlay.highlight_ranges() == ((0, 8, DEFAULT_HIGHLIGHT),)
        assert recorded == [TagHighlightChanged(name="n", start=0, end=8, color=Color(255, 255, 0))]

    def test_color_name_is_coerced(self) -> None:
        surface = MagicMock()
        surface.get_text.return_value = "<n>x</n>"
        manager = MetaTagManager(surface)

        manager.hilite_tag("n", True, "red")

        surface.set_range_attribute.assert_called_once_with(0, 8, HighlightColor(Color(255, 0, 0)))

    def test_clear_highlight(self, event_bus: EventBus, recorded: list[object]) -> None:
        editor, manager = _manager("<n>x</n>", event_bus)
        manager.hilite_tag("n", True, Color.named("blue"))

        assert manager.hilite_tag("n", False)

        assert editor.overlay.highlight_ranges() == ()
        assert recorded[-1] == TagHighlightChanged(name="n", start=0, end=8, color=None)


# =============================================================================
# Queries
# =============================================================================


def test_queries_read_current_buffer(nested_sample: str) -> None:
    editor, manager = _manager("<note/> " + nested_sample)

    assert manager.list_tag_names()[:2] == ["note", "important"]
    assert [detail.describe() for detail in manager.list_tag_details()] == [
        "note (closed)",
        "important (encapsulating)",
        "childOne (encapsulating)",
        "childTwo (encapsulating)",
    ]
    assert manager.is_tag_present("childOne")
    assert not manager.is_tag_present("missing")
    assert manager.get_tag_content("important") == "Keep child one and child two safe"


def test_trailing_nul_padding_is_ignored() -> None:
    surface = MagicMock()
    surface.get_selection.return_value = SelectionSnapshot(text="\0", start=0, end=1)
    manager = MetaTagManager(surface)

    manager.add_tag("n")

    surface.set_selection_text.assert_called_once_with("<n/>")
