"""Drum voices (kick, snare, hat) with sound families, BPM-synced rolls and kick sidechain."""

from __future__ import annotations

from enum import IntEnum
from typing import NamedTuple

from .waveforms import exp_env, lfsr_next, lin_env, sine_q15

_PHASE_WRAP = 0x1000000
_PHASE_INC_FACTOR = 381  # Q8 Hz -> Q24 phase increment at 44.1 kHz


def _clamp16(v: int) -> int:
    return 32767 if v > 32767 else (-32768 if v < -32768 else v)


def _as_int16(v: int) -> int:
    v &= 0xFFFF
    return v - 0x10000 if v & 0x8000 else v


def _cdiv(a: int, b: int) -> int:
    """Integer division truncating toward zero."""
    q = abs(a) // abs(b)
    return -q if (a < 0) != (b < 0) else q


def _decay_length(base: int, decay_scale: float) -> int:
    return max(int(base * (0.5 + decay_scale)), 0)


def _advance_phase(phase: int, freq_q8: int) -> int:
    phase += (freq_q8 * _PHASE_INC_FACTOR) >> 8
    if phase >= _PHASE_WRAP:
        phase -= _PHASE_WRAP
    return phase


class DrumId(IntEnum):
    KICK = 0
    SNARE = 1
    HAT = 2


def color_to_family(color: float) -> int:
    """Map drum colour 0..1 to family 0, 1 or 2 (split at 0.33 and 0.66)."""
    if color < 0.33:
        return 0
    if color < 0.66:
        return 1
    return 2


class MiniHPF:
    """First-order high-pass with R = 0.7, used to brighten the hat noise."""

    def __init__(self) -> None:
        self._x_prev = 0
        self._y_acc = 0

    def process(self, x: int) -> int:
        self._y_acc = x - self._x_prev + _cdiv(self._y_acc * 7000, 10000)
        self._x_prev = x
        return _clamp16(self._y_acc)

    def reset(self) -> None:
        self._x_prev = 0
        self._y_acc = 0


class KickVoice:
    """Pitch-swept sine kick; also produces the sidechain gain for ducking."""

    DECAY_SAMPLES = (9702, 7056, 12348)
    FREQ_START_Q8 = (180 * 256, 200 * 256, 160 * 256)
    FREQ_END_Q8 = (45 * 256, 60 * 256, 35 * 256)
    PITCH_ENV_SAMP = 2205

    def __init__(self) -> None:
        self.sidechain_gain_q15 = 32767
        self.active = False
        self._family = 0
        self._decay_len = 9702
        self._phase_q24 = 0
        self._position = 0

    @property
    def decay_length(self) -> int:
        return self._decay_len

    def trigger(self, family: int, decay_scale: float) -> None:
        self._family = min(family, 2)
        self._decay_len = _decay_length(self.DECAY_SAMPLES[self._family], decay_scale)
        self._position = 0
        self._phase_q24 = 0
        self.active = True

    def process(self, duck_depth_q15: int) -> int:
        """Return the next sample and update sidechain_gain_q15."""
        if not self.active:
            self.sidechain_gain_q15 = 32767
            return 0

        start = self.FREQ_START_Q8[self._family]
        end = self.FREQ_END_Q8[self._family]
        if self._position < self.PITCH_ENV_SAMP:
            t = (self._position << 8) // self.PITCH_ENV_SAMP
            freq_q8 = start - (((start - end) * t) >> 8)
        else:
            freq_q8 = end

        self._phase_q24 = _advance_phase(self._phase_q24, freq_q8)

        env = exp_env(self._position, self._decay_len)
        out = (sine_q15(self._phase_q24) * env) >> 16

        if self._family == 2:
            out = _clamp16(_cdiv(out * 3, 2))

        env_q15 = env >> 1
        self.sidechain_gain_q15 = max(32767 - ((env_q15 * duck_depth_q15) >> 15), 0)

        self._position += 1
        if self._position >= self._decay_len:
            self.active = False
            self.sidechain_gain_q15 = 32767
        return _as_int16(out)


class SnareVoice:
    """Noise plus 200 Hz tone snare; family 2 adds a long ring."""

    DECAY_SAMPLES = (6615, 5953, 11025)
    RING_FREQ_Q8 = (0, 0, 200 * 256)
    NOISE_FRAC = (7, 4, 5)
    TONE_FRAC = (3, 6, 5)
    TONE_FREQ_Q8 = 200 * 256

    def __init__(self) -> None:
        self.active = False
        self._family = 0
        self._decay_len = 6615
        self._position = 0
        self._lfsr = 0xACE1
        self._noise_init = False
        self._phase_q24 = 0
        self._ring_phase = 0

    @property
    def decay_length(self) -> int:
        return self._decay_len

    def trigger(self, family: int, decay_scale: float) -> None:
        self._family = min(family, 2)
        self._decay_len = _decay_length(self.DECAY_SAMPLES[self._family], decay_scale)
        self._position = 0
        self._phase_q24 = 0
        if not self._noise_init:
            self._lfsr = 0xACE1
            self._noise_init = True
        self.active = True

    def process(self) -> int:
        if not self.active:
            return 0

        env = exp_env(self._position, self._decay_len)

        self._lfsr = lfsr_next(self._lfsr)
        noise = (_as_int16(self._lfsr) * env) >> 16

        self._phase_q24 = _advance_phase(self._phase_q24, self.TONE_FREQ_Q8)
        tone = (sine_q15(self._phase_q24) * env) >> 16

        ring = 0
        if self._family == 2:
            self._ring_phase = _advance_phase(self._ring_phase, self.RING_FREQ_Q8[2])
            ring_env = lin_env(self._position, self._decay_len)
            ring = (sine_q15(self._ring_phase) * ring_env) >> 17

        mixed = noise * self.NOISE_FRAC[self._family] + tone * self.TONE_FRAC[self._family]
        out = _clamp16(_cdiv(mixed, 10) + ring)

        self._position += 1
        if self._position >= self._decay_len:
            self.active = False
        return out


class HatVoice:
    """High-passed LFSR noise hat: closed, open or metallic."""

    DECAY_SAMPLES = (1764, 13230, 3528)

    def __init__(self) -> None:
        self.active = False
        self._family = 0
        self._decay_len = 1764
        self._position = 0
        self._lfsr = 0xACE1
        self._hpf = MiniHPF()

    @property
    def decay_length(self) -> int:
        return self._decay_len

    def trigger(self, family: int, decay_scale: float) -> None:
        self._family = min(family, 2)
        self._decay_len = _decay_length(self.DECAY_SAMPLES[self._family], decay_scale)
        self._position = 0
        self._lfsr = 0xDEAD if self._family == 2 else 0xACE1
        self._hpf.reset()
        self.active = True

    def process(self) -> int:
        if not self.active:
            return 0

        self._lfsr = lfsr_next(self._lfsr)
        raw = self._lfsr
        if self._family == 2:
            raw2 = (raw ^ (raw << 3)) & 0xFFFF
            raw = ((raw + raw2) >> 1) & 0xFFFF

        if self._family == 1:
            env = lin_env(self._position, self._decay_len)
        else:
            env = exp_env(self._position, self._decay_len)

        noise = (_as_int16(raw) * env) >> 16
        out = self._hpf.process(_as_int16(noise))

        self._position += 1
        if self._position >= self._decay_len:
            self.active = False
        return out


class DrumFrame(NamedTuple):
    left: int
    right: int
    sidechain_q15: int


class DrumEngine:
    """Coordinates the three voices, their rolls and the kick sidechain."""

    DEFAULT_ROLL_PERIOD = 11025
    MIN_ROLL_PERIOD = 441

    def __init__(self) -> None:
        self._kick = KickVoice()
        self._snare = SnareVoice()
        self._hat = HatVoice()
        self._color = 0.0
        self._decay = 0.5
        self._duck_depth_q15 = 16384
        self._roll_active = [False] * len(DrumId)
        self._roll_counter = [0] * len(DrumId)
        self._roll_period = [self.DEFAULT_ROLL_PERIOD] * len(DrumId)

    @property
    def color(self) -> float:
        return self._color

    @property
    def decay(self) -> float:
        return self._decay

    @property
    def duck_depth_q15(self) -> int:
        return self._duck_depth_q15

    @property
    def roll_periods(self) -> tuple[int, ...]:
        return tuple(self._roll_period)

    def trigger(self, drum: DrumId | int, velocity: float = 1.0) -> None:
        """Start a hit; velocity is accepted but does not yet change the sound."""
        drum = DrumId(drum)
        family = color_to_family(self._color)
        voice = {DrumId.KICK: self._kick, DrumId.SNARE: self._snare, DrumId.HAT: self._hat}[drum]
        voice.trigger(family, self._decay)

    def roll_on(self, drum: DrumId | int) -> None:
        drum = DrumId(drum)
        self._roll_active[drum] = True
        self._roll_counter[drum] = 0
        self.trigger(drum)

    def roll_off(self, drum: DrumId | int) -> None:
        self._roll_active[DrumId(drum)] = False

    def set_params(
        self,
        color: float | None = None,
        decay: float | None = None,
        duck: float | None = None,
    ) -> None:
        """Update colour, decay and duck depth; None or a negative value leaves one unchanged."""
        if color is not None and color >= 0.0:
            self._color = color
        if decay is not None and decay >= 0.0:
            self._decay = decay
        if duck is not None and duck >= 0.0:
            duck = min(duck, 1.0)
            self._duck_depth_q15 = int((0.2 + duck * 0.6) * 32767.0)

    def tick_bpm(self, bpm: float) -> None:
        """Set the roll period to a sixteenth note at bpm (at least 441 samples)."""
        bpm = max(bpm, 20.0)
        period = max(int(661500.0 / bpm), self.MIN_ROLL_PERIOD)
        self._roll_period = [period] * len(DrumId)

    def process(self) -> DrumFrame:
        """Produce the next drum frame and the kick's sidechain gain."""
        for drum in DrumId:
            if not self._roll_active[drum]:
                continue
            self._roll_counter[drum] += 1
            if self._roll_counter[drum] >= self._roll_period[drum]:
                self._roll_counter[drum] = 0
                self.trigger(drum)

        kick = self._kick.process(self._duck_depth_q15)
        snare = self._snare.process()
        hat = self._hat.process()

        mix = _clamp16(kick + ((snare * 23170) >> 15) + ((hat * 16384) >> 15))
        return DrumFrame(mix, mix, self._kick.sidechain_gain_q15)