"""Software emulation of GPIO pins, ADC inputs and external interrupts."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, ClassVar, Optional

from .modes import GPIOMode, InterruptMode, IOCaps, is_input, is_output

__all__ = ["EmulatorError", "Emulator", "Interrupt", "Pin", "InterruptHandler"]

log = logging.getLogger(__name__)

InterruptHandler = Callable[[], None]


class EmulatorError(RuntimeError):
    """Raised when the emulated hardware is used in a way it does not allow."""


@dataclass
class _PinState:
    mode: Optional[GPIOMode] = None  # None for ADC
    value: int = 0  # ADC reading or digital level
    pwm: bool = False


@dataclass
class _Vector:
    mode: InterruptMode
    handler: Optional[InterruptHandler]


class Emulator:
    """Emulated pins and interrupt lines, controllable from tests."""

    _shared: ClassVar[Optional["Emulator"]] = None

    def __init__(self) -> None:
        self._pins: dict[int, _PinState] = {}
        self._interrupts: dict[int, _Vector] = {}

    @classmethod
    def instance(cls) -> "Emulator":
        """Return the process-wide emulator, creating it on first use."""
        if cls._shared is None:
            cls._shared = cls()
        return cls._shared

    def _state(self, pin: int) -> _PinState:
        return self._pins.setdefault(pin, _PinState())

    # Pins

    def init(self, pin: int, mode: GPIOMode) -> None:
        """Configure ``pin`` as a digital pin in ``mode``."""
        log.debug("[emulator] init pin=%s, mode=%s", pin, mode)
        self._state(pin).mode = GPIOMode(mode)

    def analog_read(self, pin: int) -> int:
        """Return the ADC value of ``pin``, which must not be a digital pin."""
        state = self._state(pin)
        log.debug("[emulator] analogRead pin=%s, value=%s", pin, state.value)
        if state.mode is not None:
            raise EmulatorError(f"pin {pin} is configured as digital {state.mode}")
        return state.value

    def _require_output(self, pin: int, state: _PinState) -> None:
        if state.mode is None or not is_output(state.mode):
            raise EmulatorError(f"pin {pin} is not an output pin")

    def _require_input(self, pin: int, state: _PinState) -> None:
        if state.mode is None or not is_input(state.mode):
            raise EmulatorError(f"pin {pin} is not an input pin")

    def write(self, pin: int, value: bool) -> None:
        """Drive the output ``pin`` high or low."""
        state = self._state(pin)
        log.debug("[emulator] write pin=%s, value=%s", pin, value)
        self._require_output(pin, state)
        state.pwm = False
        state.value = int(bool(value))

    def toggle(self, pin: int) -> None:
        """Invert the level of the output ``pin``."""
        state = self._state(pin)
        log.debug("[emulator] toggle pin=%s, value=%s", pin, state.value)
        self._require_output(pin, state)
        state.pwm = False
        state.value = int(state.value == 0)

    def read(self, pin: int) -> int:
        """Return the level of the input ``pin`` as an unsigned byte."""
        state = self._state(pin)
        log.debug("[emulator] read pin=%s, value=%s", pin, state.value)
        self._require_input(pin, state)
        return state.value & 0xFF

    def pwm(self, pin: int, value: int) -> None:
        """Drive the output ``pin`` with a PWM duty of ``value`` (0-255)."""
        if not 0 <= value <= 0xFF:
            raise ValueError(f"pwm value out of range: {value}")
        state = self._state(pin)
        log.debug("[emulator] pwm pin=%s, value=%s", pin, value)
        self._require_output(pin, state)
        state.pwm = True
        state.value = int(value)

    # Interrupts

    def attach_interrupt(
        self,
        pin: int,
        mode: InterruptMode,
        handler: Optional[InterruptHandler] = None,
    ) -> None:
        """Enable the interrupt on ``pin`` for ``mode``, served by ``handler``."""
        log.debug("[emulator] attach pin=%s, mode=%s", pin, mode)
        self._interrupts[pin] = _Vector(InterruptMode(mode), handler)

    def detach_interrupt(self, pin: int) -> None:
        """Disable the interrupt on ``pin``."""
        log.debug("[emulator] detach pin=%s", pin)
        if pin not in self._interrupts:
            raise EmulatorError(f"no interrupt attached to pin {pin}")
        del self._interrupts[pin]

    # Control of the emulated environment

    def write_pin(self, pin: int, value: int) -> None:
        """Set the level or ADC value seen on ``pin`` from outside."""
        log.debug("[emulator] emulate write pin=%s, value=%s", pin, value)
        self._state(pin).value = int(value)

    def toggle_pin(self, pin: int) -> None:
        """Invert the level seen on ``pin`` from outside."""
        state = self._state(pin)
        log.debug("[emulator] emulate toggle pin=%s, value=%s", pin, state.value)
        state.value = int(state.value == 0)

    def raise_interrupt(self, pin: int, mode: InterruptMode) -> bool:
        """Signal an edge on ``pin``; return True if a handler was run."""
        vector = self._interrupts.get(pin)
        if vector is None:
            log.debug("[emulator] raise (noint) pin=%s, mode=%s", pin, mode)
            return False
        if vector.mode != mode:
            log.debug("[emulator] raise (nomode) pin=%s, mode=%s", pin, mode)
            return False
        if vector.handler is None:
            raise EmulatorError(f"interrupt handler not found: {pin}")
        log.debug("[emulator] raise (call) pin=%s, mode=%s", pin, mode)
        vector.handler()
        return True


class Interrupt:
    """External interrupt line of an emulated pin."""

    __slots__ = ("_number", "_emulator")

    def __init__(self, number: int, emulator: Optional[Emulator] = None) -> None:
        self._number = number
        self._emulator = emulator

    def _emu(self) -> Emulator:
        return self._emulator if self._emulator is not None else Emulator.instance()

    def number(self) -> int:
        """Return the interrupt number."""
        return self._number

    def attach(
        self, mode: InterruptMode, handler: Optional[InterruptHandler] = None
    ) -> None:
        """Enable the interrupt for ``mode``, served by ``handler``."""
        self._emu().attach_interrupt(self._number, mode, handler)

    def detach(self) -> None:
        """Disable the interrupt."""
        self._emu().detach_interrupt(self._number)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Interrupt):
            return NotImplemented
        return self._number == other._number and self._emulator is other._emulator

    def __hash__(self) -> int:
        return hash(self._number)

    def __repr__(self) -> str:
        return f"Interrupt({self._number})"


_ALL_CAPS = IOCaps(
    dio=True,
    intr=True,
    adc=True,
    pwm=True,
    sda=True,
    scl=True,
    cs=True,
    sck=True,
    copi=True,
    cipo=True,
)


class Pin:
    """An emulated pin with a fixed number and mode."""

    __slots__ = ("_number", "_mode", "_emulator")

    def __init__(
        self, number: int, mode: GPIOMode, emulator: Optional[Emulator] = None
    ) -> None:
        if not 0 <= number <= 0xFF:
            raise ValueError(f"pin number out of range: {number}")
        self._number = number
        self._mode = GPIOMode(mode)
        self._emulator = emulator

    def _emu(self) -> Emulator:
        return self._emulator if self._emulator is not None else Emulator.instance()

    def init(self) -> None:
        """Configure the pin in its mode."""
        self._emu().init(self._number, self._mode)

    def adc_read(self) -> int:
        """Return the ADC value of the pin."""
        return self._emu().analog_read(self._number)

    def set(self) -> None:
        """Drive the pin high."""
        self._emu().write(self._number, True)

    def clear(self) -> None:
        """Drive the pin low."""
        self._emu().write(self._number, False)

    def toggle(self) -> None:
        """Invert the pin's output level."""
        self._emu().toggle(self._number)

    def read(self) -> int:
        """Return the pin's input level."""
        return self._emu().read(self._number)

    def pwm(self, value: int) -> None:
        """Drive the pin with a PWM duty of ``value``."""
        self._emu().pwm(self._number, value)

    def mode(self) -> GPIOMode:
        """Return the pin's mode."""
        return self._mode

    def native(self) -> int:
        """Return the pin number."""
        return self._number

    def interrupt(self) -> Interrupt:
        """Return the interrupt line of this pin."""
        return Interrupt(self._number, self._emulator)

    def capabilities(self) -> IOCaps:
        """Return the pin's capabilities; an emulated pin can do everything."""
        return _ALL_CAPS

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Pin):
            return NotImplemented
        return (
            self._number == other._number
            and self._mode is other._mode
            and self._emulator is other._emulator
        )

    def __hash__(self) -> int:
        return hash((self._number, self._mode))

    def __repr__(self) -> str:
        return f"Pin({self._number}, {self._mode})"