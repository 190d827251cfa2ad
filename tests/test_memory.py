import dataclasses
import struct
import sys

import pytest

from pinkit.memory import MemoryUsage, get_memory_usage


def test_free_ram_is_all_ones_size_t():
    free = get_memory_usage().free_ram
    assert free & (free + 1) == 0
    assert free.bit_length() == 8 * struct.calcsize("N")


def test_free_ram_not_less_than_maxsize():
    assert get_memory_usage().free_ram >= sys.maxsize


def test_usage_equals_size_t_maximum():
    size_t_max = 2 ** (8 * struct.calcsize("N")) - 1
    assert get_memory_usage() == MemoryUsage(free_ram=size_t_max)


def test_memory_usage_is_frozen():
    usage = MemoryUsage(free_ram=42)
    with pytest.raises(dataclasses.FrozenInstanceError):
        usage.free_ram = 0
    assert usage.free_ram == 42