import curses

import pytest

from radiance.core.input import Key, KeyEvent
from radiance.ui.terminal import _options_line, _wrap, map_key


@pytest.mark.parametrize(
    "code,key",
    [
        (curses.KEY_UP, Key.UP),
        (curses.KEY_DOWN, Key.DOWN),
        (curses.KEY_LEFT, Key.LEFT),
        (curses.KEY_RIGHT, Key.RIGHT),
        (curses.KEY_ENTER, Key.ENTER),
        (10, Key.ENTER),
        (13, Key.ENTER),
        (27, Key.ESC),
    ],
)
def test_special_keys(code, key):
    assert map_key(code) == KeyEvent(key)


def test_printable_keys():
    event = map_key(ord("E"))
    assert event == KeyEvent(Key.CHAR, "E")
    assert event.is_char("e")


def test_unmapped_codes():
    assert map_key(0) is None
    assert map_key(curses.KEY_F1) is None


def test_wrap():
    assert _wrap("the quick brown fox", 9) == ["the quick", "brown fox"]
    assert _wrap("abcdefghij", 4) == ["abcd", "efgh", "ij"]
    assert _wrap("", 5) == [""]


def test_options_line_marks_selection():
    assert _options_line(("No", "Yes"), 1) == "  No     [ Yes ]"
