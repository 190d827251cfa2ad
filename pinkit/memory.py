"""Report of free RAM."""

from __future__ import annotations

import struct
from dataclasses import dataclass

__all__ = ["MemoryUsage", "get_memory_usage"]

# The largest value of the platform's size_t; the host does not track free RAM.
_SIZE_MAX = (1 << (8 * struct.calcsize("N"))) - 1


@dataclass(frozen=True)
class MemoryUsage:
    """Memory figures in bytes."""

    free_ram: int


def get_memory_usage() -> MemoryUsage:
    """Return memory usage; on a host free RAM is reported as unlimited."""
    return MemoryUsage(free_ram=_SIZE_MAX)