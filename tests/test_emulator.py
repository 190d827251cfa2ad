import dataclasses

import pytest

from pinkit.emulator import Emulator, EmulatorError, Interrupt, Pin
from pinkit.modes import GPIOMode, InterruptMode


@pytest.fixture
def emu():
    return Emulator()


def test_instance_is_shared():
    first = Emulator.instance()
    first.write_pin(77, 5)
    second = Emulator.instance()
    assert second is first
    assert second.analog_read(77) == 5


def test_example_interrupt_handler_called(emu):
    calls = []
    pin = Pin(1, GPIOMode.INPUT_PULLUP, emulator=emu)
    pin.init()
    pin.interrupt().attach(InterruptMode.RISING, lambda: calls.append("called"))

    assert emu.raise_interrupt(1, InterruptMode.RISING) is True
    assert calls == ["called"]


def test_interrupt_with_other_mode_not_called(emu):
    calls = []
    emu.attach_interrupt(1, InterruptMode.RISING, lambda: calls.append(1))
    assert emu.raise_interrupt(1, InterruptMode.FALLING) is False
    assert calls == []


def test_interrupt_not_attached(emu):
    assert emu.raise_interrupt(3, InterruptMode.CHANGE) is False


def test_detach_stops_interrupt(emu):
    calls = []
    irq = Interrupt(2, emulator=emu)
    irq.attach(InterruptMode.CHANGE, lambda: calls.append(1))
    irq.detach()
    assert emu.raise_interrupt(2, InterruptMode.CHANGE) is False
    assert calls == []


def test_detach_unknown_interrupt_fails(emu):
    with pytest.raises(EmulatorError):
        emu.detach_interrupt(7)


def test_raise_without_handler_fails(emu):
    emu.attach_interrupt(4, InterruptMode.CHANGE)
    with pytest.raises(EmulatorError):
        emu.raise_interrupt(4, InterruptMode.CHANGE)


def test_input_reads_external_level(emu):
    emu.init(1, GPIOMode.INPUT)
    assert emu.read(1) == 0
    emu.write_pin(1, 1)
    assert emu.read(1) == 1
    emu.toggle_pin(1)
    assert emu.read(1) == 0


def test_write_requires_output(emu):
    emu.init(1, GPIOMode.INPUT)
    with pytest.raises(EmulatorError):
        emu.write(1, True)


def test_write_requires_initialised_pin(emu):
    with pytest.raises(EmulatorError):
        emu.write(9, True)


def test_read_requires_input(emu):
    emu.init(1, GPIOMode.OUTPUT)
    with pytest.raises(EmulatorError):
        emu.read(1)


def test_toggle_requires_output(emu):
    emu.init(1, GPIOMode.INPUT_PULLUP)
    with pytest.raises(EmulatorError):
        emu.toggle(1)


def test_output_value_survives_reconfiguration(emu):
    emu.init(5, GPIOMode.OUTPUT)
    emu.write(5, True)
    emu.init(5, GPIOMode.INPUT)
    assert emu.read(5) == 1


def test_output_toggle(emu):
    emu.init(5, GPIOMode.OUTPUT)
    emu.toggle(5)
    emu.init(5, GPIOMode.INPUT)
    assert emu.read(5) == 1
    emu.init(5, GPIOMode.OUTPUT)
    emu.toggle(5)
    emu.init(5, GPIOMode.INPUT)
    assert emu.read(5) == 0


def test_pwm_value_stored(emu):
    emu.init(6, GPIOMode.OUTPUT)
    emu.pwm(6, 200)
    emu.init(6, GPIOMode.INPUT)
    assert emu.read(6) == 200


@pytest.mark.parametrize("value", [-1, 256])
def test_pwm_out_of_range(emu, value):
    emu.init(6, GPIOMode.OUTPUT)
    with pytest.raises(ValueError):
        emu.pwm(6, value)


def test_analog_read_of_unconfigured_pin(emu):
    assert emu.analog_read(10) == 0
    emu.write_pin(10, 512)
    assert emu.analog_read(10) == 512


def test_analog_read_of_digital_pin_fails(emu):
    emu.init(10, GPIOMode.INPUT)
    with pytest.raises(EmulatorError):
        emu.analog_read(10)


def test_pin_output_operations(emu):
    out = Pin(3, GPIOMode.OUTPUT, emulator=emu)
    out.init()
    out.set()
    emu.init(3, GPIOMode.INPUT)
    assert emu.read(3) == 1

    out.init()
    out.clear()
    emu.init(3, GPIOMode.INPUT)
    assert emu.read(3) == 0


def test_pin_reads_emulated_level(emu):
    inp = Pin(2, GPIOMode.INPUT, emulator=emu)
    inp.init()
    emu.write_pin(2, 1)
    assert inp.read() == 1


def test_pin_adc_read(emu):
    adc = Pin(20, GPIOMode.INPUT, emulator=emu)
    emu.write_pin(20, 300)
    assert adc.adc_read() == 300


def test_pin_properties(emu):
    pin = Pin(8, GPIOMode.INPUT_PULLUP, emulator=emu)
    assert pin.native() == 8
    assert pin.mode() is GPIOMode.INPUT_PULLUP
    assert pin.interrupt().number() == 8


def test_pin_capabilities_all_enabled(emu):
    caps = Pin(0, GPIOMode.INPUT, emulator=emu).capabilities()
    assert dataclasses.asdict(caps) == {
        "dio": True,
        "intr": True,
        "adc": True,
        "pwm": True,
        "sda": True,
        "scl": True,
        "cs": True,
        "sck": True,
        "copi": True,
        "cipo": True,
    }


@pytest.mark.parametrize("number", [-1, 256])
def test_pin_number_out_of_range(number):
    with pytest.raises(ValueError):
        Pin(number, GPIOMode.INPUT)


def test_pin_uses_shared_emulator_by_default():
    pin = Pin(42, GPIOMode.INPUT)
    pin.init()
    Emulator.instance().write_pin(42, 1)
    assert pin.read() == 1
    Emulator.instance().write_pin(42, 0)
    assert pin.read() == 0