import pytest

from bytebeat_dsp.waveforms import SINE_TABLE_256, exp_env, lfsr_next, lin_env, sine_q15


def test_sine_table_peaks():
    assert len(SINE_TABLE_256) == 256
    assert sine_q15(0) == 0
    assert sine_q15(64 << 16) == 32767
    assert sine_q15(192 << 16) == -32767


def test_sine_pinned_values():
    assert sine_q15(1 << 16) == 804
    assert sine_q15(32 << 16) == 23170
    assert sine_q15(127 << 16) == 804
    assert sine_q15(255 << 16) == -804


def test_sine_is_antisymmetric():
    for i in range(128):
        assert sine_q15(i << 16) == -sine_q15((i + 128) << 16)


def test_sine_wraps_phase():
    assert sine_q15((1 << 24) + (10 << 16)) == sine_q15(10 << 16)
    assert sine_q15((10 << 16) + 0xFFFF) == sine_q15(10 << 16)


def test_lfsr_full_period():
    seed = 0xACE1
    state = seed
    seen = set()
    for _ in range(65535):
        state = lfsr_next(state)
        seen.add(state)
    assert len(seen) == 65535
    assert 0 not in seen
    assert state == seed


def test_lfsr_zero_is_fixed_point():
    assert lfsr_next(0) == 0


def test_lfsr_stays_in_16_bits():
    state = 0xDEAD
    for _ in range(1000):
        state = lfsr_next(state)
        assert 0 <= state <= 0xFFFF


def test_exp_env_segment_boundaries():
    length = 3000
    t = length // 3
    assert exp_env(0, length) == 65535
    assert exp_env(t, length) == 32767
    assert exp_env(2 * t, length) == 8192
    assert exp_env(length, length) == 0


def test_exp_env_decreasing():
    values = [exp_env(p, 3000) for p in range(3001)]
    assert values == sorted(values, reverse=True)
    assert all(v >= 0 for v in values)


def test_exp_env_too_short_raises():
    with pytest.raises(ZeroDivisionError):
        exp_env(0, 2)


def test_lin_env_shape():
    length = 1764
    values = [lin_env(p, length) for p in range(length + 5)]
    assert values[0] == 65535
    assert values == sorted(values, reverse=True)
    assert values[length:] == [0] * 5
    assert values[length - 1] > 0