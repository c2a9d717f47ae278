import pygame

from archery.haptics import Haptics


class FakeJoystick:
    def __init__(self, result=True, error=False):
        self.result = result
        self.error = error
        self.calls = []

    def rumble(self, low, high, duration):
        self.calls.append(duration)
        if self.error:
            raise pygame.error("rumble not supported")
        return self.result


def test_disabled_is_noop():
    haptics = Haptics(enabled=False)
    assert haptics.pulse(50) is False
    assert haptics.joysticks == {}


def test_pulse_reaches_every_device():
    haptics = Haptics(enabled=False)
    haptics.enabled = True
    pads = {0: FakeJoystick(), 1: FakeJoystick(result=False)}
    haptics.joysticks = pads

    assert haptics.pulse(100) is True
    assert pads[0].calls == [100]
    assert pads[1].calls == [100]


def test_unsupported_device_is_ignored():
    haptics = Haptics(enabled=False)
    haptics.enabled = True
    haptics.joysticks = {0: FakeJoystick(error=True)}
    assert haptics.pulse(50) is False


def test_no_controllers_connected():
    pygame.init()
    try:
        haptics = Haptics(enabled=True)
        assert haptics.pulse(50) in (True, False)
    finally:
        pygame.quit()
