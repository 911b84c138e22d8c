"""HD44780 character LCD driven through a PCF8574 I2C port expander."""

from __future__ import annotations

import time
from typing import Callable, Protocol, Sequence

PCF8574_SLAVE_ADDRESS = 0x20

# commands
LCD_CLEARDISPLAY = 0x01
LCD_RETURNHOME = 0x02
LCD_ENTRYMODESET = 0x04
LCD_DISPLAYCONTROL = 0x08
LCD_CURSORSHIFT = 0x10
LCD_FUNCTIONSET = 0x20
LCD_SETCGRAMADDR = 0x40
LCD_SETDDRAMADDR = 0x80

# entry mode flags
LCD_ENTRYRIGHT = 0x00
LCD_ENTRYLEFT = 0x02
LCD_ENTRYSHIFTINCREMENT = 0x01
LCD_ENTRYSHIFTDECREMENT = 0x00

# display on/off control flags
LCD_DISPLAYON = 0x04
LCD_DISPLAYOFF = 0x00
LCD_CURSORON = 0x02
LCD_CURSOROFF = 0x00
LCD_BLINKON = 0x01
LCD_BLINKOFF = 0x00

# display/cursor shift flags
LCD_DISPLAYMOVE = 0x08
LCD_CURSORMOVE = 0x00
LCD_MOVERIGHT = 0x04
LCD_MOVELEFT = 0x00

# function set flags
LCD_8BITMODE = 0x10
LCD_4BITMODE = 0x00
LCD_2LINE = 0x08
LCD_1LINE = 0x00
LCD_5x10DOTS = 0x04
LCD_5x8DOTS = 0x00

# expander port bits
RS = 0b00000001
RW = 0b00000010
EN = 0b00000100
BL = 0b00001000
DB4 = 0b00010000
DB5 = 0b00100000
DB6 = 0b01000000
DB7 = 0b10000000

_MAX_LINES = 4


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> object: ...


def _sleep_microseconds(us: int) -> None:
    time.sleep(us / 1_000_000)


class Pcf8574Lcd:
    """Character LCD in 4-bit mode behind a PCF8574 expander."""

    def __init__(
        self,
        bus: I2CBus,
        address: int = PCF8574_SLAVE_ADDRESS,
        delay: Callable[[int], object] = _sleep_microseconds,
    ) -> None:
        self.bus = bus
        self.address = address
        self._delay = delay
        self.backlight = BL
        self.display_function = LCD_4BITMODE | LCD_1LINE | LCD_5x8DOTS
        self.display_control = 0
        self.display_mode = 0
        self.num_lines = 1
        self.row_offsets = [0, 0, 0, 0]

    def begin(self, cols: int, rows: int, dotsize: int = LCD_5x8DOTS) -> None:
        """Run the HD44780 power-up sequence and switch to 4-bit mode."""
        if rows > 1:
            self.display_function |= LCD_2LINE
        self.num_lines = rows
        self.set_row_offsets(0x00, 0x40, 0x00 + cols, 0x40 + cols)
        if dotsize != LCD_5x8DOTS and rows == 1:
            self.display_function |= LCD_5x10DOTS

        self._delay(50000)
        self._write_i2c(0x00)

        self._write4bits(DB4 | DB5)
        self._delay(4500)
        self._write4bits(DB4 | DB5)
        self._delay(4500)
        self._write4bits(DB4 | DB5)
        self._delay(150)
        self._write4bits(DB5)

        self.command(LCD_FUNCTIONSET | self.display_function)

        self.display_control = LCD_DISPLAYON | LCD_CURSOROFF | LCD_BLINKOFF
        self.display()
        self.clear()

        self.display_mode = LCD_ENTRYLEFT | LCD_ENTRYSHIFTDECREMENT
        self.command(LCD_ENTRYMODESET | self.display_mode)

    def set_row_offsets(self, row0: int, row1: int, row2: int, row3: int) -> None:
        self.row_offsets = [row0 & 0xFF, row1 & 0xFF, row2 & 0xFF, row3 & 0xFF]

    def clear(self) -> None:
        self.command(LCD_CLEARDISPLAY)
        self._delay(2000)

    def home(self) -> None:
        self.command(LCD_RETURNHOME)
        self._delay(2000)

    def set_cursor(self, col: int, row: int) -> None:
        row = min(row, _MAX_LINES - 1)
        if row >= self.num_lines:
            row = self.num_lines - 1
        self.command(LCD_SETDDRAMADDR | ((col + self.row_offsets[row]) & 0xFF))

    def _set_control(self, control: int) -> None:
        self.display_control = control & 0xFF
        self.command(LCD_DISPLAYCONTROL | self.display_control)

    def _set_mode(self, mode: int) -> None:
        self.display_mode = mode & 0xFF
        self.command(LCD_ENTRYMODESET | self.display_mode)

    def no_display(self) -> None:
        self._set_control(self.display_control & ~LCD_DISPLAYON)

    def display(self) -> None:
        self._set_control(self.display_control | LCD_DISPLAYON)

    def no_cursor(self) -> None:
        self._set_control(self.display_control & ~LCD_CURSORON)

    def cursor(self) -> None:
        self._set_control(self.display_control | LCD_CURSORON)

    def no_blink(self) -> None:
        self._set_control(self.display_control & ~LCD_BLINKON)

    def blink(self) -> None:
        self._set_control(self.display_control | LCD_BLINKON)

    def scroll_display_left(self) -> None:
        self.command(LCD_CURSORSHIFT | LCD_DISPLAYMOVE | LCD_MOVELEFT)

    def scroll_display_right(self) -> None:
        self.command(LCD_CURSORSHIFT | LCD_DISPLAYMOVE | LCD_MOVERIGHT)

    def left_to_right(self) -> None:
        self._set_mode(self.display_mode | LCD_ENTRYLEFT)

    def right_to_left(self) -> None:
        self._set_mode(self.display_mode & ~LCD_ENTRYLEFT)

    def autoscroll(self) -> None:
        self._set_mode(self.display_mode | LCD_ENTRYSHIFTINCREMENT)

    def no_autoscroll(self) -> None:
        self._set_mode(self.display_mode & ~LCD_ENTRYSHIFTINCREMENT)

    def create_char(self, location: int, charmap: Sequence[int]) -> None:
        """Fill one of the eight CGRAM slots with an eight row bitmap."""
        location &= 0x7
        self.command(LCD_SETCGRAMADDR | (location << 3))
        for row in charmap[:8]:
            self.write(row)

    def command(self, value: int) -> None:
        self._send(value, 0)

    def write(self, value: int) -> int:
        self._send(value, RS)
        return 1

    def print(self, text: str) -> int:
        """Write a string at the cursor; returns the number of characters sent."""
        return sum(self.write(byte) for byte in text.encode("latin-1"))

    def _send(self, value: int, mode: int) -> None:
        high = value & 0xF0
        low = (value << 4) & 0xF0
        self._write4bits(high | mode)
        self._write4bits(low | mode)

    def _pulse_enable(self, value: int) -> None:
        self._write_i2c(value & ~EN)
        self._delay(1)
        self._write_i2c(value | EN)
        self._delay(1)
        self._write_i2c(value & ~EN)
        self._delay(100)

    def _write4bits(self, value: int) -> None:
        self._write_i2c(value)
        self._pulse_enable(value)

    def _write_i2c(self, data: int) -> None:
        self.bus.write(self.address, bytes([(data | self.backlight) & 0xFF]))