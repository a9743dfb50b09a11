"""Test keyboard and mouse token parsing."""

from unittest.mock import Mock

import pytest

from eep.keyboard import KeyboardHandler, KeyType, MouseEvent, ScrollDirection, parse_mouse


class MockTerminal:
    """Mock terminal interface returning queued curtsies tokens."""

    def __init__(self, keys=None):
        self._key_queue = list(keys or [])

    def get_key(self, timeout=None):
        if self._key_queue:
            return self._key_queue.pop(0)
        return None


def parse(token):
    return KeyboardHandler(Mock()).parse_event(token)


@pytest.mark.parametrize("token, value", [
    ("<UP>", "up"),
    ("<DOWN>", "down"),
    ("<LEFT>", "left"),
    ("<RIGHT>", "right"),
    ("<BACKSPACE>", "backspace"),
    ("<Ctrl-h>", "backspace"),
    ("\x7f", "backspace"),
    ("<Ctrl-j>", "enter"),
    ("<Ctrl-m>", "enter"),
    ("\r", "enter"),
    ("<ESC>", "escape"),
    ("\x1b", "escape"),
])
def test_special_keys(token, value):
    event = parse(token)
    assert event.key_type == KeyType.SPECIAL
    assert event.value == value


def test_regular_characters():
    event = parse("a")
    assert event.key_type == KeyType.REGULAR
    assert event.value == "a"
    assert parse(":").value == ":"
    assert parse("$").value == "$"


def test_space_and_tab_tokens():
    assert parse("<SPACE>").value == " "
    assert parse("<TAB>").value == "\t"
    assert parse("\t").key_type == KeyType.REGULAR


def test_ctrl_and_alt():
    event = parse("<Ctrl-x>")
    assert event.key_type == KeyType.CTRL
    assert event.value == "x"
    assert event.is_ctrl
    event = parse("<Esc+u>")
    assert event.key_type == KeyType.ALT
    assert event.value == "u"
    assert event.is_alt


def test_sgr_wheel_reports():
    assert parse("\x1b[<64;10;5M") == MouseEvent(ScrollDirection.UP, raw="\x1b[<64;10;5M")
    assert parse("\x1b[<65;1;1M").direction == ScrollDirection.DOWN


def test_wheel_with_modifier_bits():
    """Shift/ctrl bits do not hide the wheel button."""
    assert parse_mouse("\x1b[<80;3;3M").direction == ScrollDirection.UP


def test_x10_wheel_report():
    report = "\x1b[M" + chr(32 + 65) + "!!"
    assert parse_mouse(report).direction == ScrollDirection.DOWN


def test_clicks_are_not_wheel_events():
    assert parse_mouse("\x1b[<0;10;5M") is None
    assert parse_mouse("a") is None


def test_get_event_from_terminal():
    handler = KeyboardHandler(MockTerminal(["i", "\x1b[<64;1;1M"]))
    assert handler.get_event().value == "i"
    assert isinstance(handler.get_event(), MouseEvent)
    assert handler.get_event() is None


def split_sgr_report(report):
    """Tokens as curtsies yields an SGR mouse report: ESC [ < then one token per byte."""
    assert report.startswith("\x1b[<")
    return ["\x1b[<"] + list(report[3:])


def test_split_wheel_report_is_reassembled():
    handler = KeyboardHandler(MockTerminal(split_sgr_report("\x1b[<64;10;5M") + ["x"]))
    event = handler.get_event()
    assert event == MouseEvent(ScrollDirection.UP, raw="\x1b[<64;10;5M")
    # The key after the report is delivered normally
    assert handler.get_event().value == "x"
    assert handler.get_event() is None


def test_split_click_report_is_swallowed():
    """Non-wheel reports produce no event and none of their characters leak out."""
    handler = KeyboardHandler(MockTerminal(split_sgr_report("\x1b[<0;3;7m") + ["i"]))
    assert handler.get_event() is None
    assert handler.get_event().value == "i"


def test_incomplete_report_is_dropped():
    handler = KeyboardHandler(MockTerminal(["\x1b[<", "6", "5", ";"]))
    assert handler.get_event() is None
    assert handler.get_event() is None
