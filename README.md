# rotorctl

Building blocks for an antenna rotator controller. The package is plain Python
and has no third-party dependencies.

## What is inside

- `rotorctl.screen`: `Screen`, a buffered character display. Text goes into a
  pending buffer. `Screen.update()` writes only the cells that changed to the
  LCD. `Screen.service()` pushes pending changes once `update_time_ms` has
  passed, blinks cells that carry `Attribute.BLINK` every 500 ms, and brings
  back the previous screen when a timed message runs out. `Screen.print()` writes
  at a running position, wrapping lines and scrolling rows up. `Screen.print_at()`
  writes at a fixed position. `pending_row()` and `live_row()` return the text
  of one row.
- `rotorctl.display`: `Display`, a `Screen` with left, right and centred
  placement, padded and fixed-width fields, corner placement, and
  `print_center_timed_message()` for one to four lines.
- `rotorctl.pcf8574_lcd`: `Pcf8574Lcd`, an HD44780 character LCD driven in
  4-bit mode through a PCF8574 I2C port expander.
- `rotorctl.st7036`: `ST7036`, a driver for the ST7036 I2C LCD controller, and
  `LcdC0220Biz`, its two-line, twenty-column module.
- `rotorctl.lcd_api`: `LcdApi`, the abstract interface that `ST7036`
  implements.
- `rotorctl.hmc5883l`: `HMC5883L` three-axis magnetometer. `set_scale()`
  raises `ScaleError` for a gauss range the device does not support.
- `rotorctl.qmc5883`: `QMC5883` magnetometer and the `azimuth()` helper.
- `rotorctl.debug`: `DebugOutput` sends debug text to a control port, but only
  while `DebugPort.CONTROL_PORT0` is set in its mode. `format_float()` formats a
  number with a fixed count of decimal places.

## Hardware access

The drivers never open a bus device themselves. Each one takes a `bus` object
and does all of its I2C traffic through it:

- `bus.write(address, data)` sends bytes to a 7-bit address. For `ST7036`, an
  integer return value is taken as the transfer status, where 0 means success.
- `bus.read(address, length)` returns bytes. The magnetometers use it.

Delays go through injectable callables (`delay` for `Pcf8574Lcd`, `sleep` for
`ST7036`), so tests can run without waiting. `Screen` takes a `clock` callable
that returns milliseconds. The LCD it draws on needs `begin(cols, rows)`,
`clear()`, `no_cursor()`, `set_cursor(col, row)` and `print(text)`.
`Pcf8574Lcd` provides all of these.

## Installing

```
pip install .
```

To run the test suite:

```
pip install .[test]
pytest
```

## Example

```python
from rotorctl.display import Display
from rotorctl.pcf8574_lcd import Pcf8574Lcd
from rotorctl.screen import Attribute

lcd = Pcf8574Lcd(bus)
display = Display(lcd, 20, 4, 1000, clock)
display.initialize()
display.print_center("AZ 180", 1)
display.print_right("EL 45", 2)
display.print_center("MOVING", 3, attribute=Attribute.BLINK)
display.print_center_timed_message("Parked", ms_to_display=3000)

while True:
    display.service()
```

Here `bus` is your I2C adapter and `clock` returns the current time in
milliseconds.

## What it does not do

This is a library of parts. It has no command-line program, no rotator control
loop, and no serial command protocol. It has no accelerometer driver and no
tilt-compensated heading. The only heading it computes is the plain `azimuth()`
of two magnetometer axes.