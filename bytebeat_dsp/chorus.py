"""Stereo BBD-style chorus: two delay lines read by LFOs in antiphase."""

from __future__ import annotations

from .waveforms import SINE_TABLE_256

_MASK32 = 0xFFFFFFFF


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


class Chorus:
    """Modulated-delay chorus; amount 0 bypasses, higher amounts widen and deepen it."""

    DELAY_MAX_SAMP = 1764  # 40 ms
    DELAY_CENTER = 309  # 7 ms
    DEPTH_MAX_SAMP = 132  # 3 ms
    LFO_RATE_MIN_Q24 = 150
    LFO_RATE_MAX_Q24 = 560

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        """Clear the delay lines and return every parameter to its default."""
        self._buf_l = [0] * self.DELAY_MAX_SAMP
        self._buf_r = [0] * self.DELAY_MAX_SAMP
        self._write_pos = 0
        self._lfo_phase = 0
        self._amount = 0.0
        self._wet_q15 = 0
        self._dry_q15 = 32767
        self._feedback_q15 = 0
        self._lfo_rate_q24 = self.LFO_RATE_MIN_Q24
        self._delay_center = self.DELAY_CENTER
        self._depth_samp = self.DEPTH_MAX_SAMP // 4

    @property
    def amount(self) -> float:
        return self._amount

    @property
    def is_active(self) -> bool:
        return self._amount > 0.005

    def set_amount(self, a: float) -> None:
        """Set the chorus amount in [0, 1]; values outside are clamped."""
        a = min(max(a, 0.0), 1.0)
        self._amount = a

        wet = 0.55 * a * a
        depth_norm = 0.12 + 0.88 * (a * a)
        center_norm = 1.0 + 0.22 * a
        feedback = ((a - 0.55) / 0.45) * 0.18 if a > 0.55 else 0.0

        self._wet_q15 = min(max(int(wet * 32767.0), 0), 32767)
        self._dry_q15 = 32767 - self._wet_q15
        self._feedback_q15 = int(feedback * 32767.0)
        span = self.LFO_RATE_MAX_Q24 - self.LFO_RATE_MIN_Q24
        self._lfo_rate_q24 = int(self.LFO_RATE_MIN_Q24 + span * (0.2 + 0.8 * a))
        self._delay_center = min(int(self.DELAY_CENTER * center_norm), self.DELAY_MAX_SAMP - 1)
        self._depth_samp = min(max(int(depth_norm * self.DEPTH_MAX_SAMP), 1), self.DEPTH_MAX_SAMP)

    def _offset(self, lfo: int) -> int:
        off = self._delay_center + ((lfo * self._depth_samp) >> 15)
        return min(max(off, 1), self.DELAY_MAX_SAMP - 1)

    def process(self, left: int, right: int) -> tuple[int, int]:
        """Process one stereo frame and return the new (left, right)."""
        if self._amount < 0.005:
            return left, right

        index = self._lfo_phase >> 16
        lfo_l = SINE_TABLE_256[index & 0xFF]
        lfo_r = SINE_TABLE_256[(index + 128) & 0xFF]

        size = self.DELAY_MAX_SAMP
        rd_l = (self._write_pos + size - self._offset(lfo_l)) % size
        rd_r = (self._write_pos + size - self._offset(lfo_r)) % size
        del_l = self._buf_l[rd_l]
        del_r = self._buf_r[rd_r]

        self._buf_l[self._write_pos] = _clamp16(left + ((del_l * self._feedback_q15) >> 15))
        self._buf_r[self._write_pos] = _clamp16(right + ((del_r * self._feedback_q15) >> 15))

        out_l = _clamp16((left * self._dry_q15 + del_l * self._wet_q15) >> 15)
        out_r = _clamp16((right * self._dry_q15 + del_r * self._wet_q15) >> 15)

        self._write_pos = (self._write_pos + 1) % size
        self._lfo_phase = (self._lfo_phase + self._lfo_rate_q24) & _MASK32
        return out_l, out_r