# pinkit

Input handling for small devices, runnable on an ordinary computer:

- an in-memory GPIO **emulator** with pins, interrupt lines, PWM and ADC values;
- a debounced **button** state machine that reports presses, clicks, holds,
  releases and multi-click timeouts;
- awaitable `read` and `write` helpers that poll a `Stream` or `Print` until
  the transfer is done or cancelled;
- a non-blocking, raw-mode stream on standard input and output;
- a free-memory report.

The package has no dependencies outside the standard library. `pinkit.serial`
uses `fcntl` and `termios` and so needs a POSIX system.

## Installation

```
pip install pinkit
```

## Modules

| Module            | Contents                                                               |
|-------------------|------------------------------------------------------------------------|
| `pinkit.modes`    | `InterruptMode`, `GPIOMode`, `ButtonLevel`, `IOCaps`, `is_input`, `is_output`, `is_digital_input`, `is_digital_output`, `interrupt_mode` |
| `pinkit.emulator` | `Emulator`, `Pin`, `Interrupt`, `EmulatorError`                        |
| `pinkit.button`   | `ButtonEvent`, `ButtonSettings`, `ButtonSM`, `Button`                  |
| `pinkit.streams`  | `Print`, `Stream`, `read`, `write`                                     |
| `pinkit.serial`   | `IOStream`                                                             |
| `pinkit.memory`   | `MemoryUsage`, `get_memory_usage`                                      |

## Pins and the emulator

`Emulator.instance()` returns the one shared emulator. `Pin` and `Interrupt`
objects use it unless they are given an emulator of their own. A test bench
drives the emulated signals with `write_pin`, `toggle_pin` and
`raise_interrupt`.

```python
from pinkit.emulator import Emulator, Pin
from pinkit.modes import GPIOMode, InterruptMode

emu = Emulator.instance()

led = Pin(3, GPIOMode.OUTPUT)
led.init()
led.set()
led.toggle()

key = Pin(1, GPIOMode.INPUT)
key.init()
emu.write_pin(1, 1)
assert key.read() == 1

key.interrupt().attach(InterruptMode.RISING, lambda: print("edge"))
assert emu.raise_interrupt(1, InterruptMode.RISING)  # runs the handler
```

`raise_interrupt` returns `False` when no interrupt is attached to the pin or
the edge does not match the attached mode.

Misuse raises `EmulatorError`: writing, toggling or driving PWM on a pin that
is not an output, reading a pin that is not an input, `analog_read` on a pin
configured as digital, detaching an interrupt that was never attached, or
raising a matching interrupt that has no handler. A PWM value outside 0–255,
or a pin number outside 0–255, raises `ValueError`.

An emulated pin reports every capability in `capabilities()`.

## Buttons

`Button(pin, settings=None, clock=None)` pairs an input pin with
`ButtonSettings`:

| Field         | Default            | Meaning                                   |
|---------------|--------------------|-------------------------------------------|
| `hold_ms`     | 500                | press time before `HOLD_STARTED`          |
| `timeout_ms`  | 500                | quiet time after a release before `TIMEOUT` |
| `debounce_ms` | 50                 | debounce time (0–255)                     |
| `level`       | `ButtonLevel.HIGH` | level at which the button is engaged      |

`clock` is a function returning milliseconds; it defaults to the monotonic
clock. Call `tick()` often and look at the event after each call:

```python
from pinkit.button import Button, ButtonEvent, ButtonSettings
from pinkit.emulator import Pin
from pinkit.modes import GPIOMode

button = Button(Pin(1, GPIOMode.INPUT), ButtonSettings(hold_ms=500, debounce_ms=50))
button.init()

button.tick()
if button.event() is ButtonEvent.CLICKED:
    print("clicks so far:", button.clicks())
```

`init()` configures the pin and, since the pin has an interrupt line,
attaches `button_isr` to it on the edge given by the level (rising for
`HIGH`, falling for `LOW`). An interrupt makes the next poll treat the button
as engaged.

A single click produces `PRESSED`, then `CLICKED` on release, then `TIMEOUT`
once the button has stayed released for `timeout_ms`; clicks in a series are
counted by `clicks()` and reset by the timeout. A long press produces
`HOLD_STARTED` and then `RELEASED`. `busy()`, `pressing()`, `holding()` and
`waiting()` tell where the button is. `suspend_if_pressing()` turns the
current press into one that ends in `RELEASED` with no click or hold.

`ButtonSM` is the state machine on its own; feed it with
`poll(engaged, settings, now_ms)`. Times are taken modulo 2^16 ms.

## Streams

`Print` and `Stream` are abstract byte sinks and streams.
`read(stream, size)` and `write(printer, data)` return awaitables for use
under asyncio. Each moves what it can at once, then yields to the event loop
and retries until the transfer is complete. Awaiting `read` gives the bytes
read; awaiting `write` gives the number of bytes written.

```python
from pinkit.streams import read

async def main(stream):
    data = await read(stream, 4)
```

Calling `cancel()` on the awaitable does not interrupt the waiting task: its
next attempt finishes with what was moved so far. The `done` property and the
`data` (read) or `written` (write) properties show the progress.

## Terminal stream

`IOStream(stdin_fd=0, stdout_fd=1)` makes both descriptors non-blocking and,
when the input is a terminal, turns off canonical mode and echo. `close()`,
or leaving a `with` block, restores them. `read()` and `peek()` return a byte
or `None`, `available()` counts bytes ready to read, and `write()` returns how
many bytes the output took.

## Memory

`get_memory_usage()` returns a `MemoryUsage`; on a host, `free_ram` is the
largest `size_t` value, meaning it is not tracked.

## Not included

There is no rotary encoder support, and no driver for real hardware: pins and
interrupts exist only in the emulator.