"""Abstract interface shared by character LCD drivers."""

from __future__ import annotations

import abc
from typing import Sequence


class LcdApi(abc.ABC):
    """Common operations of a character LCD controller."""

    _status: int = 0

    @abc.abstractmethod
    def command(self, value: int) -> None:
        """Send a command byte to the display."""

    @abc.abstractmethod
    def initialize(self) -> None:
        """Bring the display into a known state: cleared, on, cursor home."""

    @abc.abstractmethod
    def set_delay(self, cmd_delay: int, char_delay: int) -> None:
        """Set the delays in milliseconds after commands and characters."""

    @abc.abstractmethod
    def write(self, value: int) -> int:
        """Write one character at the current position."""

    @abc.abstractmethod
    def write_buffer(self, data: bytes) -> int:
        """Write a run of characters at the current position."""

    @abc.abstractmethod
    def clear(self) -> None:
        """Clear the display and move the cursor to (0, 0)."""

    @abc.abstractmethod
    def home(self) -> None:
        """Move the cursor to (0, 0)."""

    @abc.abstractmethod
    def on(self) -> None:
        """Switch the display on."""

    @abc.abstractmethod
    def off(self) -> None:
        """Switch the display off."""

    @abc.abstractmethod
    def cursor_on(self) -> None:
        """Show the underline cursor."""

    @abc.abstractmethod
    def cursor_off(self) -> None:
        """Hide the underline cursor."""

    @abc.abstractmethod
    def blink_on(self) -> None:
        """Start cursor blinking."""

    @abc.abstractmethod
    def blink_off(self) -> None:
        """Stop cursor blinking."""

    @abc.abstractmethod
    def set_cursor(self, line: int, col: int) -> None:
        """Move the cursor to the given line and column."""

    @abc.abstractmethod
    def load_custom_character(self, char_num: int, rows: Sequence[int]) -> None:
        """Store an eight row bitmap as a user defined character."""

    @abc.abstractmethod
    def keypad(self) -> int:
        """Read a keypad attached to the display."""

    @abc.abstractmethod
    def set_backlight(self, value: int) -> None:
        """Set the backlight level from 0 to 255."""

    @abc.abstractmethod
    def set_contrast(self, value: int) -> None:
        """Set the contrast level from 0 to 255."""

    @property
    def status(self) -> int:
        """Status of the last bus transfer; 0 means success."""
        return self._status

    def printstr(self, text: str) -> int:
        """Write a string at the current position."""
        return self.write_buffer(text.encode("latin-1"))