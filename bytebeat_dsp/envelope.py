"""Attack/release envelope with optional free-running loop, in Q15 fixed point."""

from __future__ import annotations

from enum import Enum


class Phase(Enum):
    IDLE = 0
    ATTACK = 1
    SUSTAIN = 2
    RELEASE = 3


def _clamp01(v: float) -> float:
    return 0.0 if v < 0.0 else (1.0 if v > 1.0 else v)


def _approx_sqrt(v: float) -> float:
    if v <= 0.0:
        return 0.0
    x = v * 0.5 + 0.25
    x = 0.5 * (x + v / x)
    x = 0.5 * (x + v / x)
    return x


def _wrap16(v: int) -> int:
    return ((v + 0x8000) & 0xFFFF) - 0x8000


class ArEnvelope:
    """AR envelope: attack 1 ms..600 ms (v^2 curve), release 1 ms..8 s (v^2.5 curve)."""

    SAMPLE_RATE = 44100
    ATTACK_MIN_S = 0.001
    ATTACK_MAX_S = 0.600
    RELEASE_MIN_S = 0.001
    RELEASE_MAX_S = 8.000

    def __init__(self) -> None:
        self.reset()

    def reset(self) -> None:
        self._env_q15 = 0
        self._phase = Phase.IDLE
        self._loop = False
        self._loop_dir_up = True
        self._prev_gate = False
        self._attack_inc = self._time_to_inc(self.ATTACK_MIN_S)
        self._release_coef_q15 = self._time_to_release_coef(self.RELEASE_MIN_S)
        self._loop_attack_inc = self._attack_inc
        self._loop_rel_coef = self._release_coef_q15
        self._release_pot = 0.0
        self._attack_pot = 0.0
        self._loop_time_scale = 1.0

    @property
    def phase(self) -> Phase:
        return self._phase

    @property
    def level(self) -> float:
        return self._env_q15 * (1.0 / 32767.0)

    @property
    def is_looping(self) -> bool:
        return self._loop

    def _attack_time(self, v: float) -> float:
        return self.ATTACK_MIN_S + (self.ATTACK_MAX_S - self.ATTACK_MIN_S) * v * v

    def _release_time(self, v: float) -> float:
        return self.RELEASE_MIN_S + (self.RELEASE_MAX_S - self.RELEASE_MIN_S) * v * v * _approx_sqrt(v)

    def set_attack(self, v: float) -> None:
        v = _clamp01(v)
        self._attack_pot = v
        t = self._attack_time(v)
        self._attack_inc = self._time_to_inc(t)
        self._loop_attack_inc = self._time_to_inc(t * self._loop_time_scale)

    def set_release(self, v: float) -> None:
        v = _clamp01(v)
        self._release_pot = v
        t = self._release_time(v)
        self._release_coef_q15 = self._time_to_release_coef(t)
        self._loop_rel_coef = self._time_to_release_coef(t * self._loop_time_scale)

    def set_loop(self, on: bool) -> None:
        self._loop = on
        if on:
            self._phase = Phase.ATTACK
            self._loop_dir_up = True
        else:
            self._phase = Phase.IDLE

    def set_loop_time_scale(self, v: float) -> None:
        v = _clamp01(v)
        self._loop_time_scale = 0.1 + v * 0.9
        self._loop_attack_inc = self._time_to_inc(self._attack_time(self._attack_pot) * self._loop_time_scale)
        self._loop_rel_coef = self._time_to_release_coef(
            self._release_time(self._release_pot) * self._loop_time_scale
        )

    def retrigger(self) -> None:
        """Restart the attack from the current level, without dropping to zero."""
        self._phase = Phase.ATTACK
        if self._loop:
            self._loop_dir_up = True

    def next_gain(self, gate: bool) -> int:
        """Advance the envelope by one sample and return its Q15 gain."""
        rising = gate and not self._prev_gate
        self._prev_gate = gate
        if self._loop:
            if rising:
                self._phase = Phase.ATTACK
                self._loop_dir_up = True
            self._step_loop()
        else:
            if rising:
                self._phase = Phase.ATTACK
            self._step_ar(gate)
        return self._env_q15

    @staticmethod
    def apply(s: int, gain_q15: int) -> int:
        return _wrap16((s * gain_q15) >> 15)

    def _step_ar(self, gate: bool) -> None:
        if self._phase is Phase.IDLE:
            self._env_q15 = 0
        elif self._phase is Phase.ATTACK:
            self._env_q15 += self._attack_inc
            if self._env_q15 >= 32767:
                self._env_q15 = 32767
                self._phase = Phase.SUSTAIN if gate else Phase.RELEASE
        elif self._phase is Phase.SUSTAIN:
            self._env_q15 = 32767
            if not gate:
                self._phase = Phase.RELEASE
        else:
            self._env_q15 = (self._env_q15 * self._release_coef_q15) >> 15
            if self._env_q15 < 8:
                self._env_q15 = 0
                self._phase = Phase.IDLE

    def _step_loop(self) -> None:
        if self._loop_dir_up:
            self._env_q15 += self._loop_attack_inc
            if self._env_q15 >= 32767:
                self._env_q15 = 32767
                self._loop_dir_up = False
        else:
            self._env_q15 = (self._env_q15 * self._loop_rel_coef) >> 15
            if self._env_q15 < 8:
                self._env_q15 = 0
                self._loop_dir_up = True

    @classmethod
    def _time_to_inc(cls, time_s: float) -> int:
        time_s = max(time_s, 0.0001)
        inc = int(32767.0 / (time_s * cls.SAMPLE_RATE))
        return min(max(inc, 1), 32767)

    @classmethod
    def _time_to_release_coef(cls, time_s: float) -> int:
        time_s = max(time_s, 0.0001)
        c = int(32767.0 * (1.0 - 1.0 / (time_s * cls.SAMPLE_RATE)))
        return min(max(c, 1), 32766)