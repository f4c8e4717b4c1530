"""Curses renderer and key reader.

``Screen`` owns the terminal for the whole session: it is the only place
where drawing primitives are called. It draws the view models produced by
``radiance.core.view`` and turns key codes into ``KeyEvent``s.
"""
from __future__ import annotations
import curses
import logging
from typing import List, Optional

from radiance.core.errors import StartupError
from radiance.core.input import InputEvent, Key, KeyEvent, ResizeEvent, UnmappedEvent
from radiance.core.view import (
    CharacterInteractionView,
    DialogView,
    FightView,
    InventoryView,
    PLAYER_GLYPH,
    MapView,
    Portrait,
    StartScreenView,
    View,
)

logger = logging.getLogger(__name__)

GOODBYE = "Shutting down, goodbye!"

_SPECIAL_KEYS = {
    curses.KEY_UP: Key.UP,
    curses.KEY_DOWN: Key.DOWN,
    curses.KEY_LEFT: Key.LEFT,
    curses.KEY_RIGHT: Key.RIGHT,
    curses.KEY_ENTER: Key.ENTER,
    10: Key.ENTER,
    13: Key.ENTER,
    27: Key.ESC,
}


def map_key(code: int) -> Optional[KeyEvent]:
    """Translate a curses key code; unknown codes map to None."""
    if code in _SPECIAL_KEYS:
        return KeyEvent(_SPECIAL_KEYS[code])
    if 32 <= code < 127:
        return KeyEvent.of_char(chr(code))
    return None


def _wrap(text: str, width: int) -> List[str]:
    """Greedy word wrap; words longer than ``width`` are hard-split."""
    lines: List[str] = []
    for paragraph in text.splitlines() or [""]:
        current = ""
        for word in paragraph.split():
            while len(word) > width:
                if current:
                    lines.append(current)
                    current = ""
                lines.append(word[:width])
                word = word[width:]
            if not current:
                current = word
            elif len(current) + 1 + len(word) <= width:
                current += " " + word
            else:
                lines.append(current)
                current = word
        lines.append(current)
    return lines


def _options_line(options, selected: int) -> str:
    parts = []
    for i, label in enumerate(options):
        parts.append(f"[ {label} ]" if i == selected else f"  {label}  ")
    return "   ".join(parts)


class Screen:
    def __init__(self):
        self.stdscr = None

    # --- Lifecycle ---
    def initialize(self, min_cols: int, min_rows: int) -> None:
        try:
            self.stdscr = curses.initscr()
        except curses.error as e:
            raise StartupError(f"Unable to initialise the terminal: {e}") from e
        rows, cols = self.stdscr.getmaxyx()
        if cols < min_cols or rows < min_rows:
            self._restore()
            raise StartupError(
                f"Terminal too small: {cols}x{rows}, need at least {min_cols}x{min_rows}"
            )
        try:
            curses.noecho()
            curses.cbreak()
            self.stdscr.keypad(True)
        except curses.error as e:
            self._restore()
            raise StartupError(f"Raw mode unavailable: {e}") from e
        try:
            curses.curs_set(0)
        except curses.error:
            logger.info("Terminal does not support hiding the cursor")
        # Esc must not wait for an escape sequence
        curses.set_escdelay(25)
        logger.debug("Screen initialised at %dx%d", cols, rows)

    def _restore(self) -> None:
        if self.stdscr is None:
            return
        self.stdscr.keypad(False)
        curses.nocbreak()
        curses.echo()
        curses.endwin()
        self.stdscr = None

    def end(self) -> None:
        self._restore()
        print(GOODBYE)

    # --- Input ---
    def read_event(self, timeout_ms: int) -> InputEvent:
        """Block up to ``timeout_ms`` for one key; None on timeout."""
        self.stdscr.timeout(timeout_ms)
        code = self.stdscr.getch()
        if code == -1:
            return None
        if code == curses.KEY_RESIZE:
            rows, cols = self.stdscr.getmaxyx()
            return ResizeEvent(cols, rows)
        event = map_key(code)
        if event is None:
            logger.debug("Unmapped key code %d", code)
            return UnmappedEvent(code)
        return event

    # --- Drawing ---
    def draw(self, view: View) -> None:
        self.stdscr.erase()
        if isinstance(view, StartScreenView):
            self._draw_start(view)
        elif isinstance(view, MapView):
            self._draw_map(view)
        elif isinstance(view, DialogView):
            self._draw_dialog(view)
        elif isinstance(view, InventoryView):
            self._draw_inventory(view)
        elif isinstance(view, CharacterInteractionView):
            self._draw_interaction(view)
        elif isinstance(view, FightView):
            self._draw_fight(view)
        else:
            raise TypeError(f"Unsupported view: {type(view).__name__}")
        self.stdscr.refresh()

    def _size(self):
        rows, cols = self.stdscr.getmaxyx()
        return cols, rows

    def _put(self, x: int, y: int, text: str, attr: int = 0) -> None:
        cols, rows = self._size()
        if y < 0 or y >= rows or x >= cols:
            return
        if x < 0:
            text, x = text[-x:], 0
        # Last cell of the screen cannot be written without scrolling
        limit = cols - x - (1 if y == rows - 1 else 0)
        if limit <= 0:
            return
        self.stdscr.addstr(y, x, text[:limit], attr)

    def _centered(self, y: int, text: str, attr: int = 0) -> None:
        cols, _ = self._size()
        self._put(max(0, (cols - len(text)) // 2), y, text, attr)

    def _box(self, x: int, y: int, w: int, h: int, title: str = "") -> None:
        self._put(x, y, "+" + "-" * (w - 2) + "+")
        for row in range(y + 1, y + h - 1):
            self._put(x, row, "|")
            self._put(x + w - 1, row, "|")
        self._put(x, y + h - 1, "+" + "-" * (w - 2) + "+")
        if title:
            self._put(x + 2, y, f" {title} ")

    def _text_box(self, lines: List[str], footer: str = "", title: str = "") -> None:
        cols, rows = self._size()
        w = min(cols - 4, max([len(line) for line in lines] + [len(footer), len(title) + 4]) + 4)
        h = len(lines) + (4 if footer else 2)
        x, y = (cols - w) // 2, (rows - h) // 2
        self._box(x, y, w, h, title)
        for i, line in enumerate(lines):
            self._put(x + 2, y + 1 + i, line)
        if footer:
            self._put(x + max(2, (w - len(footer)) // 2), y + h - 2, footer, curses.A_BOLD)

    def _draw_start(self, view: StartScreenView) -> None:
        cols, rows = self._size()
        self._box(0, 0, cols, rows)
        top = rows // 3
        self._centered(top, view.title, curses.A_BOLD)
        self._centered(top + 1, f"by {view.author}")
        for i, line in enumerate(_wrap(view.description, cols - 8)):
            self._centered(top + 3 + i, line)
        self._centered(rows - 3, view.hint, curses.A_DIM)
        self._centered(rows - 2, "Powered by The Radiance Platform", curses.A_DIM)

    def _draw_map(self, view: MapView) -> None:
        cols, rows = self._size()
        height, width = len(view.rows), len(view.rows[0]) if view.rows else 0
        ox, oy = max(0, (cols - width) // 2), max(1, (rows - height - 3) // 2)
        self._put(1, 0, view.description[: cols - 2])
        for y, line in enumerate(view.rows):
            self._put(ox, oy + y, line)
        px, py = view.player
        glyph = PLAYER_GLYPH if view.show_player else view.underlying
        self._put(ox + px, oy + py, glyph, curses.A_REVERSE if view.show_player else 0)
        if view.occupant_name:
            self._put(1, rows - 2, f"Here: {view.occupant_name}")
        self._put(1, rows - 1, "Arrows/WASD move  Enter interact  E inventory  H title  Esc quit", curses.A_DIM)

    def _draw_dialog(self, view: DialogView) -> None:
        cols, _ = self._size()
        lines = _wrap(view.message, max(10, cols // 2))
        self._text_box(lines, footer=_options_line(view.options, view.selected))

    def _draw_inventory(self, view: InventoryView) -> None:
        cols, rows = self._size()
        self._put(1, 0, f"{view.owner}'s inventory", curses.A_BOLD)
        cell_w = 5
        for y, row in enumerate(view.icons):
            for x, icon in enumerate(row):
                left, top = 2 + x * cell_w, 2 + y * 2
                attr = curses.A_REVERSE if (x, y) == view.cursor else 0
                self._put(left, top, f"[ {icon} ]"[:cell_w], attr)
        self._put(1, rows - 2, f"Selected: {view.selected_name}")
        self._put(1, rows - 1, "Arrows select  Enter use here  Esc/M/E back to map", curses.A_DIM)

    def _draw_portrait(self, x: int, y: int, w: int, portrait: Portrait) -> None:
        self._box(x, y, w, 4 + len(portrait.attributes), portrait.name)
        self._put(x + 2, y + 1, portrait.icon)
        for i, (name, current, maximum) in enumerate(portrait.attributes):
            self._put(x + 2, y + 2 + i, f"{name}: {current}/{maximum}")

    def _draw_interaction(self, view: CharacterInteractionView) -> None:
        cols, rows = self._size()
        half = cols // 2
        self._draw_portrait(1, 1, half - 2, view.player)
        self._draw_portrait(half + 1, 1, half - 2, view.npc)
        top = rows - 6
        for i, line in enumerate(_wrap(view.npc_line, cols - 4)[:3]):
            self._put(2, top + i, line)
        self._centered(rows - 2, _options_line(view.options, view.selected), curses.A_BOLD)

    def _draw_fight(self, view: FightView) -> None:
        cols, rows = self._size()
        self._draw_portrait(1, 1, cols // 2 - 2, view.player)
        if view.npc is not None:
            self._draw_portrait(cols // 2 + 1, 1, cols // 2 - 2, view.npc)
        self._centered(rows - 2, view.notice)
