"""Grain freeze: continuously records audio and loops a frozen slice of it."""

from __future__ import annotations


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


class GrainFreeze:
    """Freeze the last ~186 ms and loop it, forward below 0.5 and reverse above."""

    BUF_SIZE = 8192
    XFADE_LEN = 256
    REFRESH_THRESH = 0.02
    _MASK = BUF_SIZE - 1

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._buf_l = [0] * self.BUF_SIZE
        self._buf_r = [0] * self.BUF_SIZE
        self._write_pos = 0
        self._read_pos = 0
        self._freeze_pos = 0
        self._xfade_pos = 0
        self._frozen = False
        self._going_in = False
        self._reverse = False
        self._force_hold = False
        self._amount = 0.0
        self._last_amount = -1.0

    @property
    def is_active(self) -> bool:
        return self._frozen and (self._amount > 0.02 or self._force_hold)

    @property
    def frozen(self) -> bool:
        return self._frozen

    @property
    def reverse(self) -> bool:
        return self._reverse

    def _start_loop(self) -> None:
        self._freeze_pos = self._write_pos
        self._read_pos = self._write_pos
        self._xfade_pos = 0
        self._going_in = True

    def set_amount(self, a: float) -> bool:
        """Set the freeze amount; return True when a pot move recaptured the loop."""
        a = min(max(a, 0.0), 1.0)

        if a < 0.02:
            self._frozen = False
            self._amount = 0.0
            self._last_amount = a
            self._going_in = False
            return False

        refreshed = False
        if self._frozen and self._last_amount >= 0.0 and abs(a - self._last_amount) > self.REFRESH_THRESH:
            self._start_loop()
            refreshed = True

        if not self._frozen:
            self._start_loop()
            self._frozen = True

        self._reverse = a >= 0.5
        self._amount = a
        self._last_amount = a
        return refreshed

    def force_freeze(self) -> None:
        """Capture and hold a forward loop regardless of the amount setting."""
        self._start_loop()
        self._frozen = True
        self._force_hold = True
        self._reverse = False

    def force_release(self) -> None:
        self._force_hold = False
        if self._amount < 0.02:
            self._frozen = False
            self._going_in = False

    def process(self, left: int, right: int) -> tuple[int, int]:
        """Record one frame and, while frozen, return the looped frame mixed in."""
        self._buf_l[self._write_pos] = left
        self._buf_r[self._write_pos] = right
        self._write_pos = (self._write_pos + 1) & self._MASK

        if not self._frozen or (not self._force_hold and self._amount < 0.02):
            return left, right

        frozen_l = self._buf_l[self._read_pos]
        frozen_r = self._buf_r[self._read_pos]
        step = self.BUF_SIZE - 1 if self._reverse else 1
        self._read_pos = (self._read_pos + step) & self._MASK

        if self._going_in and self._xfade_pos < self.XFADE_LEN:
            wet = self._xfade_pos * 32767 // self.XFADE_LEN
            self._xfade_pos += 1
            if self._xfade_pos >= self.XFADE_LEN:
                self._going_in = False
        else:
            wet = 32767
        dry = 32767 - wet

        return (
            _clamp16((frozen_l * wet + left * dry) >> 15),
            _clamp16((frozen_r * wet + right * dry) >> 15),
        )