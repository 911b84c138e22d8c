"""Debug output routed to the controller's serial control port."""

from __future__ import annotations

import enum
from typing import Optional, Protocol, Union

NEWLINE = "\r\n"
DEFAULT_FLOAT_PLACES = 2


class DebugPort(enum.Flag):
    """Ports that debug output may be sent to."""

    NONE = 0
    CONTROL_PORT0 = enum.auto()


class _TextPort(Protocol):
    def write(self, text: str) -> object: ...


def format_float(value: float, places: int = DEFAULT_FLOAT_PLACES) -> str:
    """Format a number with a fixed count of decimal places and no padding."""
    if places < 0:
        raise ValueError(f"decimal places must not be negative, got {places}")
    return f"{float(value):.{places}f}"


Printable = Union[str, int, float]


class DebugOutput:
    """Writes debug text to the control port while that port is enabled."""

    def __init__(
        self, control_port: _TextPort, mode: DebugPort = DebugPort.CONTROL_PORT0
    ) -> None:
        self.control_port = control_port
        self.mode = mode

    @property
    def enabled(self) -> bool:
        return DebugPort.CONTROL_PORT0 in self.mode

    def _emit(self, text: str) -> None:
        if self.enabled:
            self.control_port.write(text)

    @staticmethod
    def _render(value: Printable, places: Optional[int]) -> str:
        if isinstance(value, str):
            if places is not None:
                raise TypeError("decimal places apply only to numbers")
            return value
        if isinstance(value, bool):
            return str(int(value))
        if isinstance(value, int):
            if places is not None:
                raise TypeError("decimal places apply only to floating point values")
            return str(value)
        if isinstance(value, float):
            return format_float(
                value, DEFAULT_FLOAT_PLACES if places is None else places
            )
        raise TypeError(f"cannot print value of type {type(value).__name__}")

    def print(self, value: Optional[Printable], places: Optional[int] = None) -> None:
        """Print a string, integer or float; floats default to two places."""
        if value is None:
            return
        self._emit(self._render(value, places))

    def println(self, value: Optional[Printable] = "") -> None:
        """Print a value followed by a line ending."""
        if value is None:
            return
        self._emit(self._render(value, None) + NEWLINE)

    def write(self, value: Union[str, int]) -> None:
        """Write a string as is, or an integer as a single byte character."""
        if isinstance(value, str):
            self._emit(value)
        elif isinstance(value, int) and not isinstance(value, bool):
            self._emit(chr(value & 0xFF))
        else:
            raise TypeError(f"cannot write value of type {type(value).__name__}")