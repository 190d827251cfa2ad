"""Pin, interrupt and button level modes, and pin capabilities."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

__all__ = [
    "InterruptMode",
    "GPIOMode",
    "ButtonLevel",
    "IOCaps",
    "is_digital_output",
    "is_output",
    "is_digital_input",
    "is_input",
    "interrupt_mode",
]


class InterruptMode(Enum):
    """Signal edge that triggers an interrupt."""

    CHANGE = "Change"
    FALLING = "Falling"
    RISING = "Rising"

    def __str__(self) -> str:
        return self.value


class GPIOMode(Enum):
    """Direction and pull configuration of a digital pin."""

    INPUT = "Input"
    INPUT_PULLUP = "InputPullup"
    OUTPUT = "Output"

    def __str__(self) -> str:
        return self.value


class ButtonLevel(Enum):
    """Logic level at which a button counts as engaged."""

    HIGH = "High"
    LOW = "Low"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class IOCaps:
    """Capabilities of a physical pin."""

    dio: bool = False
    intr: bool = False
    adc: bool = False
    pwm: bool = False
    sda: bool = False
    scl: bool = False
    cs: bool = False
    sck: bool = False
    copi: bool = False
    cipo: bool = False


_OUTPUT_MODES = frozenset({GPIOMode.OUTPUT})
_INPUT_MODES = frozenset({GPIOMode.INPUT, GPIOMode.INPUT_PULLUP})


def is_digital_output(mode: GPIOMode) -> bool:
    """Return True if the mode drives the pin as a digital output."""
    return mode in _OUTPUT_MODES


def is_output(mode: GPIOMode) -> bool:
    """Return True if the mode is an output mode."""
    return mode in _OUTPUT_MODES


def is_digital_input(mode: GPIOMode) -> bool:
    """Return True if the mode reads the pin as a digital input."""
    return mode in _INPUT_MODES


def is_input(mode: GPIOMode) -> bool:
    """Return True if the mode is an input mode."""
    return mode in _INPUT_MODES


def interrupt_mode(level: ButtonLevel) -> InterruptMode:
    """Return the edge that signals a button becoming engaged at ``level``."""
    if level is ButtonLevel.HIGH:
        return InterruptMode.RISING
    if level is ButtonLevel.LOW:
        return InterruptMode.FALLING
    raise ValueError(f"unknown button level: {level!r}")