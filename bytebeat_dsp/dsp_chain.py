"""The full effects chain applied to the synth and drum mix."""

from __future__ import annotations

from .chorus import Chorus
from .dynamics import DcBlocker, Limiter, SoftClip
from .grain_freeze import GrainFreeze
from .hp_filter import HpFilter
from .reverb import Reverb
from .snap_gate import SnapGate
from .stutter import StutterFx


class LevelScaler:
    """Q8 gain staging for the mix bus."""

    SYNTH_GAIN = 128
    DRUM_GAIN = 128
    KICK_GAIN = 128
    SNARE_GAIN = 91
    HAT_GAIN = 91

    @staticmethod
    def scale(x: int, gain_q8: int) -> int:
        v = (x * gain_q8) >> 8
        return 32767 if v > 32767 else (-32768 if v < -32768 else v)


class DspChain:
    """Stutter, DC block, high-pass, snap gate, soft clip, chorus, grain, reverb, limiter."""

    def __init__(self) -> None:
        self._dc_l = DcBlocker()
        self._dc_r = DcBlocker()
        self._clip_l = SoftClip()
        self._clip_r = SoftClip()
        self._limiter = Limiter()
        self._stutter = StutterFx()
        self._reverb = Reverb()
        self._chorus = Chorus()
        self._hpf = HpFilter()
        self._grain = GrainFreeze()
        self._snap = SnapGate()

    def reset(self) -> None:
        """Clear the DC blockers, limiter and high-pass state."""
        self._dc_l.reset()
        self._dc_r.reset()
        self._limiter.reset()
        self._hpf.reset()

    def set_drive(self, d: float) -> None:
        self._clip_l.set_drive_f(d)
        self._clip_r.set_drive_f(d)

    def warm_dc(self, first_sample: int) -> None:
        self._dc_l.warm(first_sample)
        self._dc_r.warm(first_sample)

    def set_chorus_amount(self, a: float) -> None:
        self._chorus.set_amount(a)

    def set_hp_amount(self, a: float) -> None:
        self._hpf.set_amount(a)

    def set_grain_amount(self, a: float) -> None:
        self._grain.set_amount(a)

    def set_snap_amount(self, a: float) -> None:
        self._snap.set_amount(a)

    def set_snap_bpm(self, bpm: float) -> None:
        self._snap.set_bpm(bpm)

    @property
    def stutter(self) -> StutterFx:
        return self._stutter

    @property
    def reverb(self) -> Reverb:
        return self._reverb

    @property
    def chorus(self) -> Chorus:
        return self._chorus

    @property
    def hp_filter(self) -> HpFilter:
        return self._hpf

    @property
    def grain(self) -> GrainFreeze:
        return self._grain

    @property
    def snap_gate(self) -> SnapGate:
        return self._snap

    @property
    def limiter_gain(self) -> int:
        return self._limiter.gain_q15

    def process(self, left: int, right: int) -> tuple[int, int]:
        """Run one stereo frame through the whole chain."""
        left, right = self._stutter.process(left, right)

        left = self._dc_l.process(left)
        right = self._dc_r.process(right)

        if self._hpf.is_active:
            left, right = self._hpf.process(left, right)

        # The gate works on the full signal, before saturation.
        if self._snap.is_active:
            left, right = self._snap.process(left, right)

        left = self._clip_l.process(left)
        right = self._clip_r.process(right)

        if self._chorus.is_active:
            left, right = self._chorus.process(left, right)

        if self._grain.is_active:
            left, right = self._grain.process(left, right)

        if self._reverb.is_active:
            mono_in = (left + right) >> 1
            left, right = self._reverb.process(mono_in, left, right)

        return self._limiter.process_stereo(left, right)