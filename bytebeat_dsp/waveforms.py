"""Shared waveform tables, noise and envelope shapes for the synth voices."""

from __future__ import annotations

_MASK32 = 0xFFFFFFFF

# First quarter of the Q15 sine wave (0 to pi/2 inclusive); the rest follows by symmetry.
_QUARTER_SINE = (
    0, 804, 1608, 2410, 3212, 4011, 4808, 5602, 6393, 7179, 7962, 8739, 9512,
    10279, 11039, 11793, 12539, 13279, 14010, 14732, 15446, 16151, 16846,
    17530, 18204, 18868, 19519, 20159, 20787, 21403, 22005, 22594, 23170,
    23731, 24279, 24811, 25329, 25832, 26319, 26790, 27245, 27683, 28105,
    28510, 28898, 29268, 29621, 29956, 30273, 30571, 30852, 31113, 31356,
    31580, 31785, 31971, 32137, 32285, 32412, 32521, 32609, 32678, 32728,
    32757, 32767,
)

_HALF_SINE = _QUARTER_SINE + _QUARTER_SINE[-2:0:-1]

SINE_TABLE_256: tuple[int, ...] = _HALF_SINE + tuple(-v for v in _HALF_SINE)

# (start level, total drop) for the three linear pieces of the decay curve.
_EXP_SEGMENTS = ((65535, 32768), (32767, 24575), (8192, 8192))


def _as_int32(v: int) -> int:
    v &= _MASK32
    return v - (1 << 32) if v & 0x80000000 else v


def sine_q15(phase_q24: int) -> int:
    """Q15 sine for a phase where 2**24 is one full turn."""
    return SINE_TABLE_256[(phase_q24 >> 16) & 0xFF]


def lfsr_next(state: int) -> int:
    """One step of the 16-bit Galois LFSR (taps 0xB400); returns the new state."""
    state &= 0xFFFF
    shifted = state >> 1
    return shifted ^ 0xB400 if state & 1 else shifted


def exp_env(pos: int, length: int) -> int:
    """Exponential-like decay from 65535 to 0, built from three linear segments."""
    if pos >= length:
        return 0
    third = length // 3
    last = len(_EXP_SEGMENTS) - 1
    for index, (start, drop) in enumerate(_EXP_SEGMENTS):
        if index == last or pos < (index + 1) * third:
            offset = pos - index * third
            return _as_int32(start - ((drop * offset) & _MASK32) // third)
    return 0


def lin_env(pos: int, length: int) -> int:
    """Linear decay from 65535 to 0 over length samples."""
    if pos >= length:
        return 0
    return _as_int32(65535 - ((65535 * pos) & _MASK32) // length)