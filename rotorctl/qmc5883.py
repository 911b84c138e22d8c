"""Driver for the QMC5883L three axis magnetometer over I2C."""

from __future__ import annotations

import enum
import math
from typing import Protocol, Tuple

QMC5883_ADDRESS = 0x0D

DATA_REGISTER = 0x00
CONTROL_REGISTER_1 = 0x09
CONTROL_REGISTER_2 = 0x0A
SET_RESET_PERIOD_REGISTER = 0x0B

SOFT_RESET = 0x80
SET_RESET_PERIOD = 0x01


class I2CBus(Protocol):
    def write(self, address: int, data: bytes) -> object: ...

    def read(self, address: int, length: int) -> bytes: ...


class Mode(enum.IntFlag):
    STANDBY = 0b00000000
    CONTINUOUS = 0b00000001


class OutputDataRate(enum.IntFlag):
    HZ_10 = 0b00000000
    HZ_50 = 0b00000100
    HZ_100 = 0b00001000
    HZ_200 = 0b00001100


class Range(enum.IntFlag):
    GAUSS_2 = 0b00000000
    GAUSS_8 = 0b00010000


class OverSampleRatio(enum.IntFlag):
    OSR_512 = 0b00000000
    OSR_256 = 0b01000000
    OSR_128 = 0b10000000
    OSR_64 = 0b11000000


def azimuth(a: float, b: float) -> float:
    """Angle of the vector (b, a) in degrees, in the range [0, 360)."""
    angle = math.atan2(a, b) * 180.0 / math.pi
    return 360 + angle if angle < 0 else angle


class QMC5883:
    """QMC5883L magnetometer on an I2C bus."""

    def __init__(self, bus: I2CBus, address: int = QMC5883_ADDRESS) -> None:
        self.bus = bus
        self.address = address

    def _write_reg(self, register: int, value: int) -> None:
        self.bus.write(self.address, bytes([register & 0xFF, value & 0xFF]))

    def initialize(self) -> None:
        """Set the set/reset period and start continuous measurement."""
        self._write_reg(SET_RESET_PERIOD_REGISTER, SET_RESET_PERIOD)
        self.set_mode(
            Mode.CONTINUOUS,
            OutputDataRate.HZ_200,
            Range.GAUSS_8,
            OverSampleRatio.OSR_512,
        )

    def set_mode(
        self,
        mode: Mode,
        odr: OutputDataRate,
        rng: Range,
        osr: OverSampleRatio,
    ) -> None:
        self._write_reg(CONTROL_REGISTER_1, int(mode) | int(odr) | int(rng) | int(osr))

    def soft_reset(self) -> None:
        self._write_reg(CONTROL_REGISTER_2, SOFT_RESET)

    def read(self) -> Tuple[int, int, int]:
        """Read the X, Y and Z counts as unsigned 16 bit values."""
        self.bus.write(self.address, bytes([DATA_REGISTER]))
        data = bytes(self.bus.read(self.address, 6))
        if len(data) != 6:
            raise OSError(f"expected 6 bytes from magnetometer, got {len(data)}")
        x = data[0] | (data[1] << 8)
        y = data[2] | (data[3] << 8)
        z = data[4] | (data[5] << 8)
        return x, y, z

    def read_with_azimuth(self) -> Tuple[int, int, int, float]:
        """Read the axes and the azimuth computed from Y over X."""
        x, y, z = self.read()
        return x, y, z, azimuth(y, x)