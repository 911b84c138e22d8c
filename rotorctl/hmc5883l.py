"""Driver for the HMC5883L three axis magnetometer over I2C."""

from __future__ import annotations

import enum
import math
from dataclasses import dataclass
from typing import Protocol

HMC5883L_ADDRESS = 0x1E
CONFIGURATION_REGISTER_A = 0x00
CONFIGURATION_REGISTER_B = 0x01
MODE_REGISTER = 0x02
DATA_REGISTER_BEGIN = 0x03

SCALE_ERROR_TEXT = (
    "Entered scale was not valid, valid gauss values are: "
    "0.88, 1.3, 1.9, 2.5, 4.0, 4.7, 5.6, 8.1"
)

# gauss range -> (register code, milligauss per count)
_SCALES = (
    (0.88, 0x00, 0.73),
    (1.3, 0x01, 0.92),
    (1.9, 0x02, 1.22),
    (2.5, 0x03, 1.52),
    (4.0, 0x04, 2.27),
    (4.7, 0x05, 2.56),
    (5.6, 0x06, 3.03),
    (8.1, 0x07, 4.35),
)


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> object: ...

    def read(self, address: int, length: int) -> bytes: ...


class MeasurementMode(enum.IntEnum):
    CONTINUOUS = 0x00
    SINGLE_SHOT = 0x01
    IDLE = 0x03


class ScaleError(ValueError):
    """Raised for a gauss range the device does not support."""


@dataclass(frozen=True)
class MagnetometerRaw:
    x_axis: int
    y_axis: int
    z_axis: int


@dataclass(frozen=True)
class MagnetometerScaled:
    x_axis: float
    y_axis: float
    z_axis: float


def _signed16(high: int, low: int) -> int:
    value = (high << 8) | low
    return value - 0x10000 if value & 0x8000 else value


class HMC5883L:
    """HMC5883L magnetometer on an I2C bus."""

    def __init__(self, bus: I2CBus) -> None:
        self.bus = bus
        self.scale = 1.0

    def _write(self, register: int, value: int) -> None:
        self.bus.write(HMC5883L_ADDRESS, bytes([register & 0xFF, value & 0xFF]))

    def _read(self, register: int, length: int) -> bytes:
        self.bus.write(HMC5883L_ADDRESS, bytes([register & 0xFF]))
        data = bytes(self.bus.read(HMC5883L_ADDRESS, length))
        if len(data) != length:
            raise OSError(f"expected {length} bytes from magnetometer, got {len(data)}")
        return data

    def read_raw_axis(self) -> MagnetometerRaw:
        """Read the raw axis counts; the device sends X, Z, Y."""
        buf = self._read(DATA_REGISTER_BEGIN, 6)
        return MagnetometerRaw(
            x_axis=_signed16(buf[0], buf[1]),
            z_axis=_signed16(buf[2], buf[3]),
            y_axis=_signed16(buf[4], buf[5]),
        )

    def read_scaled_axis(self) -> MagnetometerScaled:
        raw = self.read_raw_axis()
        return MagnetometerScaled(
            x_axis=raw.x_axis * self.scale,
            y_axis=raw.y_axis * self.scale,
            z_axis=raw.z_axis * self.scale,
        )

    def set_scale(self, gauss: float) -> None:
        """Select the gauss range; raises ScaleError for unsupported values."""
        for value, code, scale in _SCALES:
            if math.isclose(gauss, value, rel_tol=1e-6):
                self.scale = scale
                self._write(CONFIGURATION_REGISTER_B, code << 5)
                return
        raise ScaleError(SCALE_ERROR_TEXT)

    def set_measurement_mode(self, mode: MeasurementMode) -> None:
        self._write(MODE_REGISTER, int(mode))