"""Buffered character screen with pending changes, blinking text and timed messages."""

from __future__ import annotations

import enum
import time
from typing import Callable, List, Optional, Protocol

MAX_SCREEN_BUFFER_COLUMNS = 20
MAX_SCREEN_BUFFER_ROWS = 4
TEXT_BLINK_MS = 500
WORK_STRING_SIZE = 32
DEFAULT_UPDATE_TIME_MS = 1000

_BLANK = " "


class CharacterLcd(Protocol):
    def begin(self, cols: int, rows: int) -> object: ...

    def clear(self) -> object: ...

    def no_cursor(self) -> object: ...

    def set_cursor(self, col: int, row: int) -> object: ...

    def print(self, text: str) -> object: ...


class Attribute(enum.IntFlag):
    """Per-character display attributes."""

    NONE = 0
    BLINK = 0b00000001


def _monotonic_ms() -> int:
    return int(time.monotonic() * 1000)


class Screen:
    """Keeps live, pending and saved copies of a character display.

    Text is written into the pending buffer; ``update`` pushes only the
    characters that differ from what is on the display.
    """

    def __init__(
        self,
        lcd: CharacterLcd,
        columns: int,
        rows: int,
        update_time_ms: int = DEFAULT_UPDATE_TIME_MS,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        if columns <= 0 or rows <= 0:
            raise ValueError("screen must have at least one column and one row")
        if columns * rows > MAX_SCREEN_BUFFER_COLUMNS * MAX_SCREEN_BUFFER_ROWS:
            raise ValueError(
                f"a {columns}x{rows} screen does not fit the "
                f"{MAX_SCREEN_BUFFER_COLUMNS}x{MAX_SCREEN_BUFFER_ROWS} buffer"
            )
        self.lcd = lcd
        self.columns = columns
        self.rows = rows
        self.update_time_ms = update_time_ms
        self._clock = clock if clock is not None else _monotonic_ms
        self._size = columns * rows

        self._live: List[str] = [_BLANK] * self._size
        self._pending: List[str] = [_BLANK] * self._size
        self._revert: List[str] = [_BLANK] * self._size
        self._live_attr: List[int] = [0] * self._size
        self._pending_attr: List[int] = [0] * self._size
        self._revert_attr: List[int] = [0] * self._size

        self.pending_dirty = False
        self.print_row = 0
        self.print_column = 0
        self.revert_screen_time = 0
        self.revert_screen_flag = False
        self.timed_screen_changes_pending = False
        self.blink_state = False
        self._last_blink_state = False
        self._next_blink_transition = TEXT_BLINK_MS
        self._last_pending_update = 0

    def _index(self, x: int, y: int) -> int:
        return y * self.columns + x

    def _cell(self, index: int) -> tuple:
        return index % self.columns, index // self.columns

    def initialize(self) -> None:
        """Start the display and clear it."""
        self.lcd.begin(self.columns, self.rows)
        self.lcd.no_cursor()
        self.clear()

    def service(self, force_update: int = 0) -> None:
        """Push pending changes periodically, expire timed messages and blink text.

        ``force_update`` 1 forces an update unless a timed message is shown;
        2 forces an update and cancels any timed message.
        """
        now = self._clock()
        if self.revert_screen_flag:
            if force_update > 1:
                self.update()
                self._last_pending_update = self._clock()
                self.revert_screen_flag = False
                self.pending_dirty = False
                return
            if now >= self.revert_screen_time:
                self._revert_back_screen()
                self.revert_screen_flag = False
                return
        elif (
            self.pending_dirty and now - self._last_pending_update >= self.update_time_ms
        ) or force_update > 0:
            self.update()
            self._last_pending_update = self._clock()
            self.pending_dirty = False

        if self.timed_screen_changes_pending:
            self.update()
            self.timed_screen_changes_pending = False
            self.pending_dirty = False
            return

        now = self._clock()
        if now >= self._next_blink_transition:
            self.blink_state = not self.blink_state
            self._next_blink_transition = now + TEXT_BLINK_MS
            self.redraw()

    def clear(self) -> None:
        """Clear every buffer and the display immediately."""
        for buffer in (self._live, self._pending, self._revert):
            buffer[:] = [_BLANK] * self._size
        for attrs in (self._live_attr, self._pending_attr, self._revert_attr):
            attrs[:] = [0] * self._size
        self.lcd.clear()
        self.lcd.no_cursor()
        self.print_row = 0
        self.print_column = 0
        self.revert_screen_flag = False

    def clear_pending_buffer(self) -> None:
        self._pending[:] = [_BLANK] * self._size
        self._pending_attr[:] = [0] * self._size
        self.pending_dirty = True

    def clear_row(self, row: int) -> None:
        """Blank one row of the pending buffer."""
        for x in range(self.columns):
            index = self._index(x, row)
            if index >= self._size:
                break
            if index >= 0:
                self._pending[index] = _BLANK
                self._pending_attr[index] = 0
        self.pending_dirty = True

    def _emit(self, index: int, char: str, attribute: int) -> None:
        if attribute & Attribute.BLINK and not self.blink_state:
            self.lcd.print(_BLANK)
        else:
            self.lcd.print(char)

    def update(self) -> None:
        """Write the characters that changed in the pending buffer to the display."""
        wrote_last = False
        self.lcd.no_cursor()
        self.lcd.set_cursor(0, 0)
        blink_changed = self._last_blink_state != self.blink_state
        for index, (live, pending) in enumerate(zip(self._live, self._pending)):
            if live != pending:
                if not wrote_last:
                    self.lcd.set_cursor(*self._cell(index))
                self._emit(index, pending, self._pending_attr[index])
                self._live[index] = pending
                self._live_attr[index] = self._pending_attr[index]
                wrote_last = True
            elif blink_changed:
                if self._live_attr[index] & Attribute.BLINK:
                    if not wrote_last:
                        self.lcd.set_cursor(*self._cell(index))
                    self._emit(index, live, self._live_attr[index])
                    wrote_last = True
            else:
                wrote_last = False
        self._last_blink_state = self.blink_state

    def redraw(self) -> None:
        """Rewrite the whole display from the live buffer."""
        self.lcd.no_cursor()
        self.lcd.set_cursor(0, 0)
        for index, char in enumerate(self._live):
            self.lcd.set_cursor(*self._cell(index))
            self._emit(index, char, self._live_attr[index])

    def row_scroll(self) -> None:
        """Move every pending row up by one and blank the bottom row."""
        cols = self.columns
        self._pending[: self._size - cols] = self._pending[cols:]
        self._pending_attr[: self._size - cols] = self._pending_attr[cols:]
        self._pending[self._size - cols :] = [_BLANK] * cols
        self._pending_attr[self._size - cols :] = [0] * cols
        self.pending_dirty = True

    def print_at(
        self, text: str, x: int, y: int, attribute: int = Attribute.NONE
    ) -> None:
        """Write text at a position, running on through following rows."""
        start = self._index(x, y)
        for offset, char in enumerate(text[: self._size]):
            if char == "\0":
                break
            index = start + offset
            if 0 <= index < self._size:
                self._pending[index] = char
                self._pending_attr[index] = int(attribute)
        self.pending_dirty = True

    def print(self, text: str, attribute: int = Attribute.NONE) -> None:
        """Write text at the running print position, wrapping and scrolling."""
        for char in (text + "\0")[: self._size]:
            if char == "\0":
                # the terminator ends the call before the buffer is marked dirty
                return
            if char == "\n":
                self.print_column = self.columns
                continue
            if self.print_column >= self.columns:
                self.print_column = 0
                self.print_row += 1
                if self.print_row >= self.rows:
                    self.row_scroll()
                    self.print_row -= 1
            index = self._index(self.print_column, self.print_row)
            self._pending[index] = char
            self._pending_attr[index] = int(attribute)
            self.print_column += 1
        self.pending_dirty = True

    def println(self, text: str) -> None:
        """Print text followed by a line break."""
        if len(text) < WORK_STRING_SIZE - 2:
            text += "\n"
        self.print(text, Attribute.NONE)

    def length(self, text: str) -> int:
        """Length of text up to a NUL, capped at the screen size."""
        return len(text.split("\0", 1)[0][: self._size])

    def _save_current_screen_to_revert_buffer(self) -> None:
        self._revert[:] = self._live
        self._revert_attr[:] = self._live_attr
        self._pending[:] = [_BLANK] * self._size
        self._pending_attr[:] = [0] * self._size

    def _revert_back_screen(self) -> None:
        self._pending[:] = self._revert
        self._pending_attr[:] = self._revert_attr
        self.update()

    def prepare_for_timed_screen(self, ms_to_display: int) -> None:
        """Save the shown screen and blank the pending one for a timed message."""
        self._save_current_screen_to_revert_buffer()
        self.revert_screen_flag = True
        self.revert_screen_time = self._clock() + ms_to_display
        self.timed_screen_changes_pending = True

    def pending_row(self, row: int) -> str:
        """Text of one row of the pending buffer."""
        if not 0 <= row < self.rows:
            raise IndexError(f"row {row} is outside the screen")
        start = self._index(0, row)
        return "".join(self._pending[start : start + self.columns])

    def live_row(self, row: int) -> str:
        """Text of one row as last written to the display."""
        if not 0 <= row < self.rows:
            raise IndexError(f"row {row} is outside the screen")
        start = self._index(0, row)
        return "".join(self._live[start : start + self.columns])