import io

import pytest

from rotorctl.debug import DebugOutput, DebugPort, format_float


@pytest.fixture
def port():
    return io.StringIO()


def test_print_string_when_enabled(port):
    out = DebugOutput(port, DebugPort.CONTROL_PORT0)
    out.print("hello")
    assert port.getvalue() == "hello"


def test_nothing_written_when_disabled(port):
    out = DebugOutput(port, DebugPort.NONE)
    out.print("hello")
    out.println("line")
    out.write(65)
    assert port.getvalue() == ""


def test_mode_change_takes_effect(port):
    out = DebugOutput(port, DebugPort.NONE)
    out.print("a")
    out.mode = DebugPort.CONTROL_PORT0
    out.print("b")
    assert port.getvalue() == "b"


def test_print_int(port):
    out = DebugOutput(port)
    out.print(42)
    assert port.getvalue() == "42"


def test_print_float_default_two_places(port):
    out = DebugOutput(port)
    out.print(1.25)
    assert port.getvalue() == "1.25"


def test_print_float_with_places(port):
    out = DebugOutput(port)
    out.print(2.5, 3)
    assert port.getvalue() == "2.500"


def test_print_none_is_ignored(port):
    out = DebugOutput(port)
    out.print(None)
    assert port.getvalue() == ""


def test_println_appends_crlf(port):
    out = DebugOutput(port)
    out.println("abc")
    out.println(7)
    assert port.getvalue() == "abc\r\n7\r\n"


def test_println_none_writes_nothing(port):
    out = DebugOutput(port)
    out.println(None)
    assert port.getvalue() == ""


def test_write_string_and_byte(port):
    out = DebugOutput(port)
    out.write("xy")
    out.write(65)
    out.write(0x141)
    assert port.getvalue() == "xyAA"


def test_print_unsupported_type_raises(port):
    out = DebugOutput(port)
    with pytest.raises(TypeError):
        out.print([1, 2])


def test_places_on_int_raises(port):
    out = DebugOutput(port)
    with pytest.raises(TypeError):
        out.print(5, 2)


def test_format_float_negative_places_raises():
    with pytest.raises(ValueError):
        format_float(1.0, -1)


@pytest.mark.parametrize("value", [0.0, 1.5, -3.25, 123.4567, 1e-3])
def test_format_float_round_trip(value):
    text = format_float(value, 4)
    assert float(text) == pytest.approx(value, abs=5e-5)
    assert len(text.split(".")[1]) == 4