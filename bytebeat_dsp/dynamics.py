"""Fixed-point dynamics processors: DC blocker, brickwall limiter and soft clipper."""

from __future__ import annotations

INT16_MAX = 32767
INT16_MIN = -32768


def _clamp16(v: int) -> int:
    return INT16_MAX if v > INT16_MAX else (INT16_MIN if v < INT16_MIN else v)


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


class DcBlocker:
    """First-order high-pass, y[n] = x[n] - x[n-1] + 0.995 * y[n-1] (about 35 Hz)."""

    R_NUM = 9950
    R_DEN = 10000

    def __init__(self) -> None:
        self._x_prev = 0
        self._y_acc = 0

    def warm(self, dc_value: int, n: int = 512) -> None:
        """Run the filter on a constant value so it settles before real audio."""
        for _ in range(n):
            self.process(dc_value)

    def reset(self) -> None:
        self._x_prev = 0
        self._y_acc = 0

    def process(self, x: int) -> int:
        self._y_acc = x - self._x_prev + _cdiv(self._y_acc * self.R_NUM, self.R_DEN)
        self._x_prev = x
        return _clamp16(self._y_acc)


class Limiter:
    """Brickwall limiter at 0.9 full scale with instant attack and Q15 release."""

    THRESH_F = 0.9
    THRESH = int(32767 * THRESH_F)
    GAIN_FULL_Q15 = 32767
    RELEASE_Q15 = 32741

    def __init__(self) -> None:
        self.gain_q15 = self.GAIN_FULL_Q15

    def reset(self) -> None:
        self.gain_q15 = self.GAIN_FULL_Q15

    def _update_gain(self, peak: int) -> None:
        if peak > self.THRESH:
            needed = (self.THRESH << 15) // peak
            if needed < self.gain_q15:
                self.gain_q15 = needed
        else:
            self.gain_q15 = min((self.gain_q15 * self.RELEASE_Q15) >> 15, self.GAIN_FULL_Q15)

    def process(self, x: int) -> int:
        self._update_gain(abs(x))
        return _clamp16((x * self.gain_q15) >> 15)

    def process_stereo(self, left: int, right: int) -> tuple[int, int]:
        """Limit both channels with one gain taken from the louder channel."""
        self._update_gain(max(abs(left), abs(right)))
        return (
            _clamp16((left * self.gain_q15) >> 15),
            _clamp16((right * self.gain_q15) >> 15),
        )


class SoftClip:
    """Rational saturation y = x(27 + x^2) / (27 + 9x^2) with a drive pre-gain."""

    _K = 27

    def __init__(self) -> None:
        self._gain_q8 = 256
        self._bypass = True

    @property
    def bypassed(self) -> bool:
        return self._bypass

    def set_drive(self, drive: int) -> None:
        """Set drive as an 8-bit value, 0 (bypass) to 255 (about 7x pre-gain)."""
        drive = int(drive) & 0xFF
        self._gain_q8 = 256 + (drive * 1536) // 255
        self._bypass = drive == 0

    def set_drive_f(self, d: float) -> None:
        d = min(max(d, 0.0), 1.0)
        self.set_drive(int(d * 255.0))

    def process(self, x: int) -> int:
        if self._bypass:
            return x
        v = _clamp16((x * self._gain_q8) >> 8)
        s = v >> 3
        s2 = (s * s) >> 12
        num = s * (self._K + s2)
        den = self._K + 9 * s2
        out_q12 = _cdiv(num, den) if den != 0 else s
        return _clamp16(out_q12 << 3)