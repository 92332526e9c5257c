"""Stutter effect: a short ring buffer replayed in a loop at a variable rate."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


class StutterFx:
    """Loop the last 20 ms of audio, crossfaded with the dry signal by depth."""

    BUF_SAMPLES = 882
    DEPTH_ALPHA_Q15 = 1638
    RATE_ALPHA_Q15 = 4915

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._buf_l = [0] * self.BUF_SAMPLES
        self._buf_r = [0] * self.BUF_SAMPLES
        self._gate_on = False
        self._write_pos = 0
        self._read_pos_q16 = 0
        self._loop_start = 0
        self._loop_len = self.BUF_SAMPLES
        self._depth_target_q15 = 0
        self._depth_smooth_q15 = 0
        self._rate_q16 = 1 << 16
        self._rate_smooth_q16 = 1 << 16

    @property
    def is_active(self) -> bool:
        return self._gate_on

    @property
    def depth(self) -> float:
        return self._depth_target_q15 / 32767.0

    @property
    def rate(self) -> float:
        return self._rate_q16 / 65536.0

    def _start_loop(self, length: int) -> None:
        self._gate_on = True
        self._loop_len = length
        self._loop_start = (self._write_pos + self.BUF_SAMPLES - length) % self.BUF_SAMPLES
        self._read_pos_q16 = self._loop_start << 16

    def gate_on(self) -> None:
        """Loop the whole buffer; raise depth to full if it was near zero."""
        self._start_loop(self.BUF_SAMPLES)
        if self._depth_target_q15 < 328:
            self._depth_target_q15 = 32767

    def gate_repeat(self, divisor: int) -> None:
        """Loop 1/divisor of the buffer (at least 64 samples) at full depth."""
        divisor = max(int(divisor), 1)
        self._start_loop(max(self.BUF_SAMPLES // divisor, 64))
        self._depth_target_q15 = 32767

    def gate_off(self) -> None:
        self._gate_on = False
        self._depth_target_q15 = 0

    def set_pressure(self, pressure: float) -> None:
        """Map pressure 0..0.4 to depth and 0.4..1 to a loop rate of 1x..3x."""
        p = min(max(pressure, 0.0), 1.0)
        if p < 0.01:
            self._depth_target_q15 = 0
            self._rate_q16 = 1 << 16
        elif p < 0.4:
            self._depth_target_q15 = min(int((p / 0.4) * 32767.0), 32767)
            self._rate_q16 = 1 << 16
        else:
            self._depth_target_q15 = 32767
            rate_f = min(max(1.0 + (p - 0.4) / 0.6 * 2.0, 0.25), 4.0)
            self._rate_q16 = int(rate_f * 65536.0)

    def set_depth(self, d: float) -> None:
        d = min(max(d, 0.0), 1.0)
        self._depth_target_q15 = int(d * 32767.0)

    def set_rate(self, r: float) -> None:
        r = min(max(r, 0.25), 4.0)
        self._rate_q16 = int(r * 65536.0)

    def process(self, left: int, right: int) -> tuple[int, int]:
        """Record one frame and return it mixed with the loop playback."""
        size = self.BUF_SAMPLES
        self._buf_l[self._write_pos] = left
        self._buf_r[self._write_pos] = right
        self._write_pos = (self._write_pos + 1) % size

        self._depth_smooth_q15 += ((self._depth_target_q15 - self._depth_smooth_q15) * self.DEPTH_ALPHA_Q15) >> 15
        self._rate_smooth_q16 = (
            self._rate_smooth_q16 + (((self._rate_q16 - self._rate_smooth_q16) * self.RATE_ALPHA_Q15) >> 15)
        ) & _MASK32

        if not self._gate_on and self._depth_smooth_q15 < 32:
            self._depth_smooth_q15 = 0
            return left, right

        read_i = (self._read_pos_q16 >> 16) % size
        ri1 = (read_i + 1) % size
        frac_q15 = (self._read_pos_q16 & 0xFFFF) >> 1
        inv_q15 = 32767 - frac_q15

        loop_l = (self._buf_l[read_i] * inv_q15 + self._buf_l[ri1] * frac_q15) >> 15
        loop_r = (self._buf_r[read_i] * inv_q15 + self._buf_r[ri1] * frac_q15) >> 15

        self._read_pos_q16 = (self._read_pos_q16 + self._rate_smooth_q16) & _MASK32
        if self._read_pos_q16 >= ((self._loop_start + self._loop_len) << 16):
            self._read_pos_q16 = self._loop_start << 16

        wet = self._depth_smooth_q15
        dry = 32767 - wet
        return (
            _clamp16((left * dry + loop_l * wet) >> 15),
            _clamp16((right * dry + loop_r * wet) >> 15),
        )