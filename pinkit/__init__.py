"""GPIO emulator, debounced button state machine, and polling stream helpers."""

__version__ = "0.1.0"

__all__ = ["button", "emulator", "memory", "modes", "serial", "streams"]