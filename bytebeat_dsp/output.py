"""Audio output backends: PWM duty levels and packed 32-bit I2S frames."""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Callable


def pwm_level(sample: int, wrap: int = 499) -> int:
    """Map a signed 16-bit sample to a PWM compare level in 0..wrap."""
    v = (sample + 32768) * (wrap + 1)
    if v < 0:
        return 0
    if (v >> 16) > wrap:
        return wrap
    return v >> 16


def i2s_frame(left: int, right: int) -> int:
    """Pack a stereo frame: left in the high 16 bits (sent first), right in the low 16."""
    return ((left & 0xFFFF) << 16) | (right & 0xFFFF)


class AudioOutput(ABC):
    """A destination for stereo 16-bit samples."""

    _running: bool = False

    @property
    def running(self) -> bool:
        """Whether start() has been called without a later stop()."""
        return self._running

    @abstractmethod
    def write(self, left: int, right: int) -> None:
        """Send one stereo frame."""

    def start(self) -> None:
        """Mark the output as running."""
        self._running = True

    def stop(self) -> None:
        """Mark the output as stopped."""
        self._running = False


class PwmOutput(AudioOutput):
    """Two-channel PWM output; each frame becomes a pair of duty levels for the sink."""

    PWM_WRAP = 499

    def __init__(self, sink: Callable[[tuple[int, int]], None]) -> None:
        self._sink = sink
        silence = self.PWM_WRAP // 2
        self._sink((silence, silence))

    def write(self, left: int, right: int) -> None:
        self._sink((pwm_level(left, self.PWM_WRAP), pwm_level(right, self.PWM_WRAP)))


class I2sOutput(AudioOutput):
    """I2S output for a PCM5102-style DAC; each frame becomes one packed 32-bit word."""

    SAMPLE_RATE = 44100
    PRELOAD_FRAMES = 16

    def __init__(self, sink: Callable[[int], None]) -> None:
        self._sink = sink
        # Leading silence lets the DAC lock before real samples arrive.
        for _ in range(self.PRELOAD_FRAMES):
            self._sink(0)

    def write(self, left: int, right: int) -> None:
        self._sink(i2s_frame(left, right))