"""Variable high-pass biquad driven from a 16-entry Q15 coefficient table."""

from __future__ import annotations

from dataclasses import dataclass


def _wrap32(v: int) -> int:
    return ((v + 0x80000000) & 0xFFFFFFFF) - 0x80000000


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


@dataclass(frozen=True)
class HpfCoeff:
    """Q15 biquad coefficients; b2 equals b0."""

    b0: int
    b1: int
    a1: int
    a2: int


# Cutoffs: 20, 40, 80, 150, 250, 400, 600, 800 Hz, 1, 1.5, 2, 3, 4, 5.5, 7, 8 kHz.
HPF_TABLE: tuple[HpfCoeff, ...] = (
    HpfCoeff(32740, -65480, -32727, 32713),
    HpfCoeff(32725, -32682, -32695, 32663),
    HpfCoeff(32692, -32616, -32634, 32576),
    HpfCoeff(32630, -32492, -32516, 32403),
    HpfCoeff(32535, -32302, -32338, 32143),
    HpfCoeff(32376, -31984, -32030, 31686),
    HpfCoeff(32141, -31514, -31592, 31046),
    HpfCoeff(31858, -30948, -31086, 30318),
    HpfCoeff(31497, -30226, -30435, 29378),
    HpfCoeff(30539, -28310, -28674, 27215),
    HpfCoeff(29320, -25872, -26606, 24699),
    HpfCoeff(26550, -20332, -22038, 19333),
    HpfCoeff(23340, -13912, -16904, 13375),
    HpfCoeff(18590, -4412, -9370, 5959),
    HpfCoeff(13586, 5596, -1186, -1495),
    HpfCoeff(10240, 12288, 3686, -5120),
)

_W_MAX = 32767 << 15
_W_MIN = -(32768 << 15)


class BiquadState:
    """Direct Form II state of one channel, with 32-bit fixed-point arithmetic."""

    def __init__(self) -> None:
        self.w1 = 0
        self.w2 = 0

    def reset(self) -> None:
        self.w1 = 0
        self.w2 = 0

    def process(self, x: int, coeff: HpfCoeff) -> int:
        w0 = _wrap32(
            (x << 15)
            - (_wrap32(coeff.a1 * self.w1) >> 15)
            - (_wrap32(coeff.a2 * self.w2) >> 15)
        )
        w0 = min(max(w0, _W_MIN), _W_MAX)

        acc = _wrap32(
            _wrap32(coeff.b0 * (w0 >> 15))
            + _wrap32(coeff.b1 * (self.w1 >> 15))
            + _wrap32(coeff.b0 * (self.w2 >> 15))
        )
        y = acc >> 15

        self.w2 = self.w1
        self.w1 = w0
        return _clamp16(y)


class HpFilter:
    """Stereo high-pass; amount 0..1 picks a cutoff from about 20 Hz to 8 kHz."""

    def __init__(self) -> None:
        self._left = BiquadState()
        self._right = BiquadState()
        self._amount = 0.0
        self._coeff_idx = 0

    @property
    def is_active(self) -> bool:
        return self._amount > 0.02

    @property
    def coeff_index(self) -> int:
        return self._coeff_idx

    def set_amount(self, a: float) -> None:
        a = min(max(a, 0.0), 1.0)
        self._amount = a
        self._coeff_idx = min(int(a * 15.0 + 0.5), 15)

    def process(self, left: int, right: int) -> tuple[int, int]:
        """Filter one stereo frame; below the active threshold it passes unchanged."""
        if self._amount < 0.02:
            return left, right
        c = HPF_TABLE[self._coeff_idx]
        return self._left.process(left, c), self._right.process(right, c)

    def reset(self) -> None:
        self._left.reset()
        self._right.reset()