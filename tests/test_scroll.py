"""Test viewport scrolling."""

import pytest

from tedit.commands import CommandRegistry
from tedit.keyboard import KeyEvent, KeyType
from tedit.line import Line
from tedit.model import TextBuffer, TextPos


def special(value):
    return KeyEvent(key_type=KeyType.SPECIAL, value=value, raw=value, is_sequence=True)


def make_buffer(num_lines=50, text="x", rows=10, cols=20):
    buffer = TextBuffer([Line(text) for _ in range(num_lines)])
    buffer.size = TextPos(rows, cols)
    return buffer


def test_visible_area_excludes_bars_and_gutter():
    buffer = make_buffer(rows=10, cols=20)
    assert buffer.visible_rows == 8
    assert buffer.visible_cols == 15


def test_scroll_down_makes_cursor_last_visible_row():
    buffer = make_buffer()
    buffer.location = TextPos(8, 0)
    buffer.cursor_location = TextPos(8, 0)
    buffer.scroll()
    assert buffer.top_visible == 1

    buffer.location.row = buffer.cursor_location.row = 30
    buffer.scroll()
    assert buffer.top_visible == 23


def test_scroll_up_snaps_to_cursor_row():
    buffer = make_buffer()
    buffer.top_visible = 20
    buffer.location = TextPos(5, 0)
    buffer.cursor_location = TextPos(5, 0)
    buffer.scroll()
    assert buffer.top_visible == 5


def test_horizontal_scroll_uses_character_column():
    buffer = make_buffer(num_lines=1, text="€" * 40)
    buffer.location = TextPos(0, 3 * 20)
    buffer.cursor_location = TextPos(0, 20)
    buffer.scroll()
    assert buffer.left_visible == 6

    buffer.location.col = 6
    buffer.cursor_location.col = 2
    buffer.scroll()
    assert buffer.left_visible == 2


def test_scroll_is_idempotent():
    buffer = make_buffer(num_lines=40, text="y" * 60)
    buffer.location = TextPos(33, 47)
    buffer.cursor_location = TextPos(33, 47)
    buffer.scroll()
    first = (buffer.top_visible, buffer.left_visible)
    buffer.scroll()
    assert (buffer.top_visible, buffer.left_visible) == first


def test_cursor_stays_visible_while_moving_down():
    buffer = make_buffer()
    registry = CommandRegistry()
    for _ in range(30):
        registry.execute(buffer, special('down'), 4)
        row = buffer.location.row
        assert buffer.top_visible <= row < buffer.top_visible + buffer.visible_rows


def test_resize_rescrolls_and_requests_redraw():
    buffer = make_buffer(rows=40)
    buffer.location = TextPos(30, 0)
    buffer.cursor_location = TextPos(30, 0)
    buffer.scroll()
    assert buffer.top_visible == 0
    buffer.redraw = False

    buffer.resize(10, 20)
    assert buffer.size == TextPos(10, 20)
    assert buffer.top_visible == 23
    assert buffer.redraw


def test_diverging_cursor_rows_fail_loudly():
    buffer = make_buffer()
    buffer.location = TextPos(3, 0)
    buffer.cursor_location = TextPos(4, 0)
    with pytest.raises(AssertionError):
        buffer.scroll()


def test_horizontal_scroll_follows_wider_gutter():
    buffer = make_buffer(num_lines=1000, text="z" * 30, rows=10, cols=20)
    assert buffer.visible_cols == 15
    buffer.lines.append(Line("z" * 30))
    assert buffer.visible_cols == 14
    buffer.location = TextPos(1000, 14)
    buffer.cursor_location = TextPos(1000, 14)
    buffer.scroll()
    assert buffer.left_visible == 1
