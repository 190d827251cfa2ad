"""Debounced push-button state machine with click counting, hold and timeout."""

from __future__ import annotations

import time
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from .modes import ButtonLevel, interrupt_mode

__all__ = ["ButtonEvent", "ButtonSettings", "ButtonSM", "Button"]

_U16_MAX = 0xFFFF
_U8_MAX = 0xFF


class ButtonEvent(Enum):
    """Event reported by a button after a poll."""

    NONE = 0b00000000
    PRESSED = 0b00010000
    RELEASED = 0b00100000
    CLICKED = 0b00110000
    HOLD_STARTED = 0b01000000
    TIMEOUT = 0b01010000

    def __str__(self) -> str:
        return _EVENT_NAMES[self]


_EVENT_NAMES = {
    ButtonEvent.NONE: "None",
    ButtonEvent.PRESSED: "Pressed",
    ButtonEvent.RELEASED: "Released",
    ButtonEvent.CLICKED: "Clicked",
    ButtonEvent.HOLD_STARTED: "HoldStarted",
    ButtonEvent.TIMEOUT: "Timeout",
}


@dataclass(frozen=True)
class ButtonSettings:
    """Timing and level configuration of a button."""

    hold_ms: int = 500
    timeout_ms: int = 500  # after the last release
    debounce_ms: int = 50
    level: ButtonLevel = ButtonLevel.HIGH

    def __post_init__(self) -> None:
        for name, limit in (
            ("hold_ms", _U16_MAX),
            ("timeout_ms", _U16_MAX),
            ("debounce_ms", _U8_MAX),
        ):
            value = getattr(self, name)
            if not 0 <= value <= limit:
                raise ValueError(f"{name} out of range 0..{limit}: {value}")
        object.__setattr__(self, "level", ButtonLevel(self.level))


class _State(Enum):
    IDLE = "idle"
    PRESS_DEBOUNCE = "press-debounce"
    RELEASE_DEBOUNCE = "release-debounce"
    PRESSING = "pressing"
    HOLDING = "holding"
    WAITING = "waiting"
    PRESS_SUSPENDED = "press-suspended"
    PRESS_DEBOUNCE_SUSPENDED = "press-debounce-suspended"


_PRESSING_STATES = frozenset(
    {_State.PRESSING, _State.PRESS_DEBOUNCE, _State.PRESS_SUSPENDED, _State.HOLDING}
)


class ButtonSM:
    """Button state machine driven by periodic polls of the engaged level."""

    def __init__(self) -> None:
        self._timer = 0
        self._clicks = 0
        self._state = _State.IDLE
        self._event = ButtonEvent.NONE
        self._isr_pending = False

    def event(self) -> ButtonEvent:
        """Return the event produced by the last poll."""
        return self._event

    def clicks(self) -> int:
        """Return the number of clicks in the current series."""
        return self._clicks

    def busy(self) -> bool:
        """Return True unless the button is idle."""
        return self._state is not _State.IDLE

    def holding(self) -> bool:
        """Return True while the button is held past the hold time."""
        return self._state is _State.HOLDING

    def waiting(self) -> bool:
        """Return True while waiting for a further click after a release."""
        return self._state is _State.WAITING

    def pressing(self) -> bool:
        """Return True while the button is pressed, suspended or not."""
        return self._state in _PRESSING_STATES

    def suspend_if_pressing(self) -> None:
        """Stop a press in progress from producing clicks or a hold."""
        if self._state in (_State.PRESSING, _State.HOLDING):
            target = _State.PRESS_SUSPENDED
        elif self._state is _State.PRESS_DEBOUNCE:
            target = _State.PRESS_DEBOUNCE_SUSPENDED
        else:
            return
        self._state = target
        self._event = ButtonEvent.NONE
        self._isr_pending = False

    def isr(self) -> None:
        """Record an interrupt; the next poll treats the button as engaged."""
        self._isr_pending = True

    def _enter(
        self, state: _State, event: ButtonEvent, now: Optional[int] = None
    ) -> None:
        if now is not None:
            self._timer = now
        self._state = state
        self._event = event

    def poll(self, engaged: bool, settings: ButtonSettings, now_ms: int) -> None:
        """Advance the state machine at time ``now_ms`` (milliseconds)."""
        now = now_ms & _U16_MAX
        elapsed = (now - self._timer) & _U16_MAX
        engaged = bool(engaged) or self._isr_pending
        self._isr_pending = False
        self._event = ButtonEvent.NONE

        debounced = elapsed >= settings.debounce_ms
        state = self._state
        E = ButtonEvent
        S = _State

        if state is S.IDLE:
            if engaged:
                self._enter(S.PRESS_DEBOUNCE, E.PRESSED, now)
        elif state is S.PRESS_DEBOUNCE:
            if debounced:
                self._enter(S.PRESSING, E.NONE)
        elif state is S.PRESSING:
            if not engaged:
                self._clicks += 1
                self._enter(S.RELEASE_DEBOUNCE, E.CLICKED, now)
            elif elapsed >= settings.hold_ms:
                self._enter(S.HOLDING, E.HOLD_STARTED)
        elif state is S.HOLDING:
            if not engaged:
                self._clicks = 0
                self._enter(S.RELEASE_DEBOUNCE, E.RELEASED, now)
        elif state is S.RELEASE_DEBOUNCE:
            if debounced:
                if engaged:
                    self._enter(S.PRESS_DEBOUNCE, E.PRESSED, now)
                else:
                    self._enter(S.WAITING, E.NONE, now)
        elif state is S.WAITING:
            if engaged:
                self._enter(S.PRESS_DEBOUNCE, E.PRESSED, now)
            elif elapsed >= settings.timeout_ms:
                self._clicks = 0
                self._enter(S.IDLE, E.TIMEOUT)
        elif state is S.PRESS_SUSPENDED:
            if not engaged:
                self._enter(S.RELEASE_DEBOUNCE, E.RELEASED, now)
        elif state is S.PRESS_DEBOUNCE_SUSPENDED:
            if debounced:
                if engaged:
                    self._enter(S.PRESS_SUSPENDED, E.NONE)
                else:
                    self._enter(S.RELEASE_DEBOUNCE, E.RELEASED, now)


def _monotonic_ms() -> int:
    return time.monotonic_ns() // 1_000_000


class Button(ButtonSM):
    """A button read from a digital input pin."""

    def __init__(
        self,
        pin,
        settings: Optional[ButtonSettings] = None,
        clock: Optional[Callable[[], int]] = None,
    ) -> None:
        super().__init__()
        self.pin = pin
        self.settings = settings if settings is not None else ButtonSettings()
        self._clock = clock if clock is not None else _monotonic_ms

    def init(self) -> None:
        """Configure the pin and, if it has one, attach its interrupt."""
        self.pin.init()
        if callable(getattr(self.pin, "interrupt", None)):
            self.pin.interrupt().attach(
                interrupt_mode(self.settings.level), self.button_isr
            )

    def tick(self) -> None:
        """Read the pin and advance the state machine."""
        level = bool(self.pin.read())
        engaged = level if self.settings.level is ButtonLevel.HIGH else not level
        self.poll(engaged, self.settings, self._clock())

    def button_isr(self) -> None:
        """Interrupt handler for the button's pin."""
        self.isr()