"""Snap gate: a periodic, fast-decaying VCA that turns audio into ticks."""

from __future__ import annotations


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


class SnapGate:
    """BPM-synced retriggering gain window; amount 0 bypasses."""

    PERIOD_BASE = 1378  # 1/16 beat at 120 BPM
    DECAY_LONG = 2205  # 50 ms
    DECAY_SHORT = 88  # 2 ms
    GAIN_FULL_Q15 = 32767
    MIN_PERIOD = 44

    def __init__(self) -> None:
        self._base_period = self.PERIOD_BASE
        self.reset()

    def reset(self) -> None:
        self._gain_q15 = self.GAIN_FULL_Q15
        self._phase = 0
        self._period = self.PERIOD_BASE
        self._amount = 0.0
        self._decay_coeff = self.GAIN_FULL_Q15

    @property
    def is_active(self) -> bool:
        return self._amount > 0.01

    @property
    def period(self) -> int:
        return self._period

    @property
    def base_period(self) -> int:
        return self._base_period

    def _dense_period(self) -> int:
        if self._amount > 0.5:
            density = 1.0 + (self._amount - 0.5) * 2.0 * 3.0
            return max(int(self._base_period / density), self.MIN_PERIOD)
        return self._base_period

    def set_amount(self, a: float) -> None:
        """Set the gate amount in [0, 1]: shorter decay, then denser ticks above 0.5."""
        a = min(max(a, 0.0), 1.0)
        self._amount = a
        if a < 0.01:
            self._gain_q15 = self.GAIN_FULL_Q15
            self._decay_coeff = self.GAIN_FULL_Q15
            return
        decay_s = self.DECAY_LONG * (1.0 - a) + self.DECAY_SHORT * a
        coeff = max(1.0 - 1.0 / decay_s, 0.0)
        self._decay_coeff = int(coeff * 32767.0)
        self._period = self._dense_period()

    def set_bpm(self, bpm: float) -> None:
        """Sync the tick period to 1/16 of a beat, with BPM clamped to 20..300."""
        bpm = min(max(bpm, 20.0), 300.0)
        beat_samp = int(44100.0 * 60.0 / bpm)
        self._base_period = max(beat_samp // 16, self.MIN_PERIOD)
        self._period = self._dense_period()

    def process(self, left: int, right: int) -> tuple[int, int]:
        if self._amount < 0.01:
            return left, right
        if self._phase >= self._period:
            self._phase = 0
            self._gain_q15 = self.GAIN_FULL_Q15
        self._phase += 1
        self._gain_q15 = (self._gain_q15 * self._decay_coeff) >> 15
        return (
            _clamp16((left * self._gain_q15) >> 15),
            _clamp16((right * self._gain_q15) >> 15),
        )