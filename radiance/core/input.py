"""Input events fed to the controller by the renderer.

A cycle yields exactly one of: a ``KeyEvent``, a non-key event
(``ResizeEvent``, ``UnmappedEvent``) or ``None`` when the bounded input wait timed out.
"""
from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union


class Key(Enum):
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"
    ENTER = "enter"
    ESC = "esc"
    CHAR = "char"


@dataclass(frozen=True)
class KeyEvent:
    key: Key
    char: Optional[str] = None

    @classmethod
    def of_char(cls, ch: str) -> "KeyEvent":
        return cls(Key.CHAR, ch)

    def is_char(self, *chars: str) -> bool:
        """Case-insensitive match against letter keys."""
        if self.key is not Key.CHAR or not self.char:
            return False
        return self.char.lower() in {c.lower() for c in chars}


@dataclass(frozen=True)
class ResizeEvent:
    columns: int
    rows: int


@dataclass(frozen=True)
class UnmappedEvent:
    """Key code the renderer does not translate (function keys, mouse...)."""
    code: int


InputEvent = Union[KeyEvent, ResizeEvent, UnmappedEvent, None]

# WASD mirrors the arrow keys on the map
_WASD = {"w": Key.UP, "a": Key.LEFT, "s": Key.DOWN, "d": Key.RIGHT}


def direction_of(event: KeyEvent, allow_wasd: bool = False) -> Optional[Key]:
    if event.key in (Key.UP, Key.DOWN, Key.LEFT, Key.RIGHT):
        return event.key
    if allow_wasd and event.key is Key.CHAR and event.char:
        return _WASD.get(event.char.lower())
    return None


DELTAS = {
    Key.UP: (0, -1),
    Key.DOWN: (0, 1),
    Key.LEFT: (-1, 0),
    Key.RIGHT: (1, 0),
}
