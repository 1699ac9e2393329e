"""Tests for the PySide6 :class:`TagTextEdit` surface."""

from __future__ import annotations

import pytest

pytest.importorskip("PySide6")

from PySide6.QtGui import QTextFormat  # noqa: E402

from metatags.core.colors import Color  # noqa: E402
from metatags.editor.overlay import Hidden, HighlightColor  # noqa: E402
from metatags.editor.qt_editor import TagTextEdit, from_qt_offset, to_qcolor, to_qt_offset  # noqa: E402
from metatags.tags.manager import MetaTagManager  # noqa: E402


@pytest.fixture
def text_edit(qtbot) -> TagTextEdit:  # type: ignore[no-untyped-def]
    widget = TagTextEdit()
    qtbot.addWidget(widget)
    return widget


def test_offset_conversion_handles_astral_characters() -> None:
    text = "a\U0001F600b<n/>"

    assert to_qt_offset(text, 2) == 3
    assert to_qt_offset(text, 3) == 4
    assert from_qt_offset(text, 3) == 2
    assert from_qt_offset(text, 99) == len(text)


def test_to_qcolor() -> None:
    assert to_qcolor(None).alpha() == 0
    assert to_qcolor(Color(1, 2, 3)).getRgb() == (1, 2, 3, 255)


def test_selection_round_trip(text_edit: TagTextEdit) -> None:
    text_edit.set_text("line one\nline two")
    text_edit.select(5, 13)

    selection = text_edit.get_selection()

    assert selection.text == "one\nline"
    assert (selection.start, selection.end) == (5, 13)


def test_manager_wraps_selection(text_edit: TagTextEdit) -> None:
    text_edit.set_text("Hello world")
    text_edit.select(6, 11)
    manager = MetaTagManager(text_edit)

    manager.add_tag("place")

    assert text_edit.get_text() == "Hello <place>world</place>"
    selection = text_edit.get_selection()
    assert selection.text == "<place>world</place>"
    assert (selection.start, selection.end) == (6, 26)


def test_manager_inserts_self_closing_at_caret(text_edit: TagTextEdit) -> None:
    text_edit.set_text("Hello")
    text_edit.select(5)

    MetaTagManager(text_edit).add_tag("end")

    assert text_edit.get_text() == "Hello<end/>"


def test_hide_and_show_marks_characters(text_edit: TagTextEdit) -> None:
    text_edit.set_text("ab<n>x</n>cd")
    manager = MetaTagManager(text_edit)

    assert manager.hide_tag("n", True)

    assert text_edit.is_hidden_at(2)
    assert text_edit.is_hidden_at(9)
    assert not text_edit.is_hidden_at(1)
    assert not text_edit.is_hidden_at(10)
    assert text_edit.get_text() == "ab<n>x</n>cd"

    manager.hide_tag("n", False)

    assert not text_edit.is_hidden_at(2)


def test_show_restores_pixel_sized_font(text_edit: TagTextEdit) -> None:
    font = text_edit.font()
    font.setPixelSize(20)
    text_edit.setFont(font)
    text_edit.set_text("ab<n>x</n>cd")
    text_edit.set_range_attribute(0, 12, HighlightColor(Color.named("yellow")))
    manager = MetaTagManager(text_edit)

    manager.hide_tag("n", True)
    manager.hide_tag("n", False)

    fmt = text_edit.char_format_at(2)
    assert not text_edit.is_hidden_at(2)
    assert not fmt.hasProperty(int(QTextFormat.Property.FontPointSize))
    assert not fmt.hasProperty(int(QTextFormat.Property.ForegroundBrush))
    assert text_edit.highlight_at(2).getRgb() == (255, 255, 0, 255)


def test_highlight_sets_background(text_edit: TagTextEdit) -> None:
    text_edit.set_text("<n/> tail")

    text_edit.set_range_attribute(0, 4, HighlightColor(Color.named("red")))

    assert text_edit.highlight_at(0).getRgb() == (255, 0, 0, 255)
    assert text_edit.highlight_at(3).getRgb() == (255, 0, 0, 255)

    text_edit.set_range_attribute(0, 4, HighlightColor(None))

    assert text_edit.highlight_at(0).alpha() == 0


def test_set_text_resets_formatting(text_edit: TagTextEdit) -> None:
    text_edit.set_text("abc")
    text_edit.set_range_attribute(0, 3, Hidden(True))

    text_edit.set_text("xyz")

    assert not text_edit.is_hidden_at(0)


def test_unsupported_attribute_rejected(text_edit: TagTextEdit) -> None:
    text_edit.set_text("abc")

    with pytest.raises(TypeError):
        text_edit.set_range_attribute(0, 1, "bold")  # type: ignore[arg-type]
