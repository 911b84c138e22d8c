"""Driver for character LCDs built around the ST7036 I2C controller."""

from __future__ import annotations

import time
from typing import Callable, List, Optional, Protocol, Sequence

from rotorctl.lcd_api import LcdApi

CMD_DELAY = 1
CHAR_DELAY = 0
PIXEL_ROWS_PER_CHAR = 8
MAX_USER_CHARS = 16

DISP_CMD = 0x00
RAM_WRITE_CMD = 0x40
CLEAR_DISP_CMD = 0x01
HOME_CMD = 0x02
DISP_ON_CMD = 0x0C
DISP_OFF_CMD = 0x08
SET_DDRAM_CMD = 0x80
CONTRAST_CMD = 0x70
FUNC_SET_TBL0 = 0x38
FUNC_SET_TBL1 = 0x39

CURSOR_ON_BIT = 1 << 1
BLINK_ON_BIT = 1 << 0

NO_BACKLIGHT_PIN = -1
OUTPUT = 1

# DDRAM start address of each line, by number of display lines
_DDRAM_LINE_ADDRESSES = (
    (0x00, 0x00, 0x00),
    (0x00, 0x40, 0x00),
    (0x00, 0x10, 0x20),
)

_INIT_SEQUENCE = bytes(
    [
        DISP_CMD,
        FUNC_SET_TBL0,
        FUNC_SET_TBL1,
        0x14,  # bias 1/5
        0x73,  # contrast low byte
        0x5E,  # icon on, booster on, contrast high byte
        0x6D,  # follower circuit on, amplifier ratio 6
        0x0C,  # display on
        0x01,  # clear display
        0x06,  # entry mode: increment
    ]
)

C0220BIZ_LINES = 2
C0220BIZ_COLUMNS = 20
C0220BIZ_I2C_ADDRESS = 0x78


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> Optional[int]: ...


class PinController(Protocol):
    def pin_mode(self, pin: int, mode: int) -> object: ...

    def analog_write(self, pin: int, value: int) -> object: ...


def _sleep_milliseconds(ms: int) -> None:
    time.sleep(ms / 1000)


class ST7036(LcdApi):
    """Character LCD with an ST7036 controller on an I2C bus.

    ``i2c_address`` is the 8-bit bus address; the 7-bit form is used on the bus.
    """

    def __init__(
        self,
        bus: I2CBus,
        num_lines: int,
        num_col: int,
        i2c_address: int,
        backlight_pin: int = NO_BACKLIGHT_PIN,
        pins: Optional[PinController] = None,
        sleep: Callable[[int], object] = _sleep_milliseconds,
    ) -> None:
        if not 1 <= num_lines <= len(_DDRAM_LINE_ADDRESSES):
            raise ValueError(
                f"display must have 1 to {len(_DDRAM_LINE_ADDRESSES)} lines, got {num_lines}"
            )
        if backlight_pin != NO_BACKLIGHT_PIN and pins is None:
            raise ValueError("a backlight pin needs a pin controller")
        self.bus = bus
        self.num_lines = num_lines
        self.num_col = num_col
        self.i2c_address = (i2c_address & 0xFF) >> 1
        self.cmd_delay = CMD_DELAY
        self.char_delay = CHAR_DELAY
        self.initialised = False
        self.backlight_pin = backlight_pin
        self.pins = pins
        self._sleep = sleep
        self._status = 0
        if backlight_pin not in (NO_BACKLIGHT_PIN, 0) and pins is not None:
            pins.pin_mode(backlight_pin, OUTPUT)

    def _transmit(self, data: bytes) -> int:
        result = self.bus.write(self.i2c_address, bytes(data))
        self._status = result if isinstance(result, int) else 0
        return self._status

    def initialize(self) -> None:
        """Configure the controller; it becomes usable only if the bus accepts it."""
        self._sleep(10)
        self._sleep(10)
        if self._transmit(_INIT_SEQUENCE) == 0:
            self.initialised = True

    def set_delay(self, cmd_delay: int, char_delay: int) -> None:
        self.cmd_delay = cmd_delay
        self.char_delay = char_delay

    def command(self, value: int) -> None:
        if not self.initialised:
            return
        self._transmit(bytes([DISP_CMD, value & 0xFF]))
        self._sleep(self.cmd_delay)

    def write(self, value: int) -> int:
        """Write one character; a newline moves to the start of the second line."""
        if not self.initialised:
            return 0
        if value == ord("\n"):
            self.set_cursor(1, 0)
        else:
            self._transmit(bytes([RAM_WRITE_CMD, value & 0xFF]))
            self._sleep(self.char_delay)
        return 1

    def write_buffer(self, data: bytes) -> int:
        if not self.initialised:
            return 0
        payload = bytes(data)
        self._transmit(bytes([RAM_WRITE_CMD]) + payload)
        self._sleep(self.char_delay)
        return len(payload)

    def clear(self) -> None:
        self.command(CLEAR_DISP_CMD)

    def home(self) -> None:
        self.command(HOME_CMD)

    def on(self) -> None:
        self.command(DISP_ON_CMD)

    def off(self) -> None:
        self.command(DISP_OFF_CMD)

    def cursor_on(self) -> None:
        self.command(DISP_ON_CMD | CURSOR_ON_BIT)

    def cursor_off(self) -> None:
        self.command(DISP_ON_CMD & ~CURSOR_ON_BIT)

    def blink_on(self) -> None:
        self.command(DISP_ON_CMD | BLINK_ON_BIT)

    def blink_off(self) -> None:
        self.command(DISP_ON_CMD & ~BLINK_ON_BIT)

    def set_cursor(self, line: int, col: int) -> None:
        line_addresses = _DDRAM_LINE_ADDRESSES[self.num_lines - 1]
        if not 0 <= line < len(line_addresses):
            raise ValueError(f"line {line} is outside the display")
        if not self.initialised:
            return
        self.command(SET_DDRAM_CMD + line_addresses[line] + col)

    def keypad(self) -> int:
        """No keypad is supported; always 0."""
        return 0

    def load_custom_character(self, char_num: int, rows: Sequence[int]) -> None:
        """Store an eight row bitmap in CGRAM slot ``char_num`` (0 to 15)."""
        if not self.initialised or not 0 <= char_num < MAX_USER_CHARS:
            return
        bitmap: List[int] = [row & 0xFF for row in rows[:PIXEL_ROWS_PER_CHAR]]
        if len(bitmap) < PIXEL_ROWS_PER_CHAR:
            raise ValueError(
                f"a character needs {PIXEL_ROWS_PER_CHAR} rows, got {len(bitmap)}"
            )
        self._sleep(self.cmd_delay)
        status = self._transmit(
            bytes(
                [
                    DISP_CMD,
                    FUNC_SET_TBL0,
                    (RAM_WRITE_CMD + PIXEL_ROWS_PER_CHAR * char_num) & 0xFF,
                ]
            )
        )
        if status == 0:
            self.write_buffer(bytes(bitmap))
            self.command(FUNC_SET_TBL1)
            self.set_cursor(0, 0)

    def set_backlight(self, value: int) -> None:
        if self.backlight_pin != NO_BACKLIGHT_PIN and self.pins is not None:
            self.pins.analog_write(self.backlight_pin, value & 0xFF)

    def set_contrast(self, value: int) -> None:
        """Set contrast; 0 to 255 is mapped onto the 16 levels of the display."""
        level = (value & 0xFF) * 15 // 255
        self.command(CONTRAST_CMD + level)


class LcdC0220Biz(ST7036):
    """Two line, twenty column ST7036 display module."""

    def __init__(
        self,
        bus: I2CBus,
        backlight_pin: int = NO_BACKLIGHT_PIN,
        pins: Optional[PinController] = None,
        sleep: Callable[[int], object] = _sleep_milliseconds,
    ) -> None:
        super().__init__(
            bus,
            C0220BIZ_LINES,
            C0220BIZ_COLUMNS,
            C0220BIZ_I2C_ADDRESS,
            backlight_pin,
            pins,
            sleep,
        )