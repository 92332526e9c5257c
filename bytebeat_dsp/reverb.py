"""Simplified Schroeder/Freeverb stereo reverb: four combs per side and two allpasses."""

from __future__ import annotations


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


def _wrap16(v: int) -> int:
    return ((v + 0x8000) & 0xFFFF) - 0x8000


class CombFilter:
    """Feedback comb with a first-order damping low-pass in the loop."""

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("comb filter size must be positive")
        self.size = size
        self.reset()

    def reset(self) -> None:
        self._buf = [0] * self.size
        self._pos = 0
        self._lpf_acc = 0

    def process(self, sample: int, feedback_q15: int, damp_q15: int) -> int:
        delayed = self._buf[self._pos]
        one_minus_damp = 32767 - damp_q15
        self._lpf_acc = _clamp16((delayed * one_minus_damp + self._lpf_acc * damp_q15) >> 15)

        fb = (self._lpf_acc * feedback_q15) >> 15
        out = _clamp16(sample + fb)

        self._buf[self._pos] = out
        self._pos = 0 if self._pos + 1 >= self.size else self._pos + 1
        return out


class AllpassFilter:
    """Schroeder allpass diffuser with gain 0.5."""

    G_Q15 = 16384

    def __init__(self, size: int) -> None:
        if size < 1:
            raise ValueError("allpass filter size must be positive")
        self.size = size
        self.reset()

    def reset(self) -> None:
        self._buf = [0] * self.size
        self._pos = 0

    def process(self, sample: int) -> int:
        g = self.G_Q15
        delayed = self._buf[self._pos]
        out = _clamp16(-sample + delayed + ((delayed * g) >> 15) - ((sample * g) >> 15))
        self._buf[self._pos] = _wrap16(sample + ((out * g) >> 15))
        self._pos = 0 if self._pos + 1 >= self.size else self._pos + 1
        return out


class Reverb:
    """Stereo reverb with room size, damping, wet and width controls, all in [0, 1]."""

    COMB_L0, COMB_R0 = 1116, 1139
    COMB_L1, COMB_R1 = 1188, 1211
    COMB_L2, COMB_R2 = 1277, 1300
    COMB_L3, COMB_R3 = 1356, 1379
    AP_0, AP_1 = 556, 441

    def __init__(self) -> None:
        self._combs_l = [CombFilter(n) for n in (self.COMB_L0, self.COMB_L1, self.COMB_L2, self.COMB_L3)]
        self._combs_r = [CombFilter(n) for n in (self.COMB_R0, self.COMB_R1, self.COMB_R2, self.COMB_R3)]
        self._ap0_l, self._ap0_r = AllpassFilter(self.AP_0), AllpassFilter(self.AP_0)
        self._ap1_l, self._ap1_r = AllpassFilter(self.AP_1), AllpassFilter(self.AP_1)

        self._feedback_q15 = 27525
        self._damp_q15 = 16384
        self._wet = 0.25
        self._width = 0.8
        self._wet_q15 = 8192
        self._dry_q15 = 24575
        self._width_l_q15 = 29490
        self._width_x_q15 = 3277

        self.set_room_size(0.84)
        self.set_damping(0.5)
        self.set_wet(0.25)
        self.set_width(0.8)

    def reset(self) -> None:
        """Clear every delay line, keeping the parameters."""
        for f in (*self._combs_l, *self._combs_r, self._ap0_l, self._ap0_r, self._ap1_l, self._ap1_r):
            f.reset()

    @property
    def wet(self) -> float:
        return self._wet

    @property
    def width(self) -> float:
        return self._width

    @property
    def is_active(self) -> bool:
        return self._wet_q15 >= 32

    def set_room_size(self, r: float) -> None:
        r = min(max(r, 0.0), 1.0)
        fb = 0.7 + r * 0.22
        self._feedback_q15 = int(fb * 32767.0)
        # Bigger rooms get a darker tail.
        self._damp_q15 = int((0.22 + r * 0.58) * 0.4 * 32767.0)

    def set_damping(self, d: float) -> None:
        d = min(max(d, 0.0), 1.0)
        self._damp_q15 = int(d * 0.4 * 32767.0)

    def set_wet(self, w: float) -> None:
        w = min(max(w, 0.0), 1.0)
        self._wet = w
        self._wet_q15 = min(max(int(w * w * 32767.0), 0), 32767)
        self._dry_q15 = 32767

    def set_width(self, w: float) -> None:
        w = min(max(w, 0.0), 1.0)
        self._width = w
        self._width_l_q15 = int((w * 0.5 + 0.5) * 32767.0)
        self._width_x_q15 = int((0.5 - w * 0.5) * 32767.0)

    def process(self, input_mono: int, left: int, right: int) -> tuple[int, int]:
        """Add the reverb of input_mono to (left, right) and return the new frame."""
        if self._wet_q15 < 32:
            return left, right

        in_scaled = input_mono >> 2
        fb, damp = self._feedback_q15, self._damp_q15
        sum_l = _clamp16(sum(c.process(in_scaled, fb, damp) for c in self._combs_l))
        sum_r = _clamp16(sum(c.process(in_scaled, fb, damp) for c in self._combs_r))

        diff_l = self._ap1_l.process(self._ap0_l.process(sum_l))
        diff_r = self._ap1_r.process(self._ap0_r.process(sum_r))

        rev_l = (diff_l * self._width_l_q15 + diff_r * self._width_x_q15) >> 15
        rev_r = (diff_r * self._width_l_q15 + diff_l * self._width_x_q15) >> 15

        mix_l = ((left * self._dry_q15) >> 15) + ((rev_l * self._wet_q15) >> 15)
        mix_r = ((right * self._dry_q15) >> 15) + ((rev_r * self._wet_q15) >> 15)
        return _clamp16(mix_l), _clamp16(mix_r)