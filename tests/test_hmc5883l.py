import pytest

from rotorctl.hmc5883l import (
    HMC5883L,
    MagnetometerRaw,
    MeasurementMode,
    ScaleError,
)


class FakeBus:
    def __init__(self, responses=()):
        self.writes = []
        self.reads = []
        self.responses = list(responses)

    def write(self, address, data):
        self.writes.append((address, bytes(data)))

    def read(self, address, length):
        self.reads.append((address, length))
        return self.responses.pop(0)


def test_read_raw_axis_order_and_protocol():
    bus = FakeBus([bytes([0x01, 0x02, 0x00, 0x03, 0x00, 0x10])])
    raw = HMC5883L(bus).read_raw_axis()
    assert raw == MagnetometerRaw(x_axis=0x0102, y_axis=0x0010, z_axis=0x0003)
    assert bus.writes == [(0x1E, bytes([0x03]))]
    assert bus.reads == [(0x1E, 6)]


def test_read_raw_axis_is_signed():
    bus = FakeBus([bytes([0xFF, 0xFE, 0x00, 0x00, 0x00, 0x00])])
    raw = HMC5883L(bus).read_raw_axis()
    assert raw.x_axis == -2


def test_default_scale_leaves_counts_unchanged():
    bus = FakeBus([bytes([0x00, 0x64, 0x00, 0x05, 0x00, 0x07])])
    scaled = HMC5883L(bus).read_scaled_axis()
    assert (scaled.x_axis, scaled.y_axis, scaled.z_axis) == (100.0, 7.0, 5.0)


@pytest.mark.parametrize(
    "gauss, code",
    [(0.88, 0), (1.3, 1), (1.9, 2), (2.5, 3), (4.0, 4), (4.7, 5), (5.6, 6), (8.1, 7)],
)
def test_set_scale_writes_configuration_b(gauss, code):
    bus = FakeBus()
    HMC5883L(bus).set_scale(gauss)
    assert bus.writes == [(0x1E, bytes([0x01, code << 5]))]


def test_scaled_reading_uses_selected_scale():
    bus = FakeBus([bytes([0x00, 0x64, 0x00, 0x00, 0x00, 0x00])])
    mag = HMC5883L(bus)
    mag.set_scale(1.3)
    scaled = mag.read_scaled_axis()
    assert scaled.x_axis == pytest.approx(100 * 0.92)
    assert scaled.y_axis == 0.0


def test_invalid_scale_raises_and_keeps_previous():
    bus = FakeBus()
    mag = HMC5883L(bus)
    mag.set_scale(2.5)
    with pytest.raises(ScaleError, match="valid gauss values"):
        mag.set_scale(3.0)
    assert mag.scale == 1.52
    assert len(bus.writes) == 1


@pytest.mark.parametrize("mode", list(MeasurementMode))
def test_set_measurement_mode(mode):
    bus = FakeBus()
    HMC5883L(bus).set_measurement_mode(mode)
    assert bus.writes == [(0x1E, bytes([0x02, int(mode)]))]


def test_short_read_raises():
    bus = FakeBus([bytes([0x00, 0x01])])
    with pytest.raises(OSError):
        HMC5883L(bus).read_raw_axis()