import pytest

from bytebeat_dsp.snap_gate import SnapGate


def test_bypass_at_zero():
    g = SnapGate()
    assert not g.is_active
    assert g.process(20000, -20000) == (20000, -20000)


def test_default_period_is_base():
    g = SnapGate()
    assert g.period == SnapGate.PERIOD_BASE


def test_bpm_120_gives_base_period():
    g = SnapGate()
    g.set_bpm(120.0)
    assert g.base_period == 1378


@pytest.mark.parametrize("low, clamped", [(5.0, 20.0), (1000.0, 300.0)])
def test_bpm_is_clamped(low, clamped):
    a, b = SnapGate(), SnapGate()
    a.set_bpm(low)
    b.set_bpm(clamped)
    assert a.base_period == b.base_period


def test_faster_bpm_shorter_period():
    slow, fast = SnapGate(), SnapGate()
    slow.set_bpm(90.0)
    fast.set_bpm(180.0)
    assert fast.base_period < slow.base_period


def test_full_amount_quarters_the_period():
    g = SnapGate()
    g.set_amount(1.0)
    assert g.period == SnapGate.PERIOD_BASE // 4


def test_period_never_below_minimum():
    g = SnapGate()
    g.set_bpm(300.0)
    g.set_amount(1.0)
    assert g.period >= SnapGate.MIN_PERIOD


def test_gain_decays_within_a_window():
    g = SnapGate()
    g.set_amount(0.7)
    out = [g.process(30000, -30000)[0] for _ in range(200)]
    assert out[0] < 30000
    assert all(b <= a for a, b in zip(out, out[1:]))


def test_window_retriggers_every_period():
    g = SnapGate()
    g.set_amount(0.4)
    p = g.period
    out = [g.process(30000, 30000) for _ in range(2 * p + 1)]
    assert out[p] == out[0]
    assert out[2 * p] == out[0]
    assert out[p - 1][0] < out[0][0]


def test_left_right_get_same_gain():
    g = SnapGate()
    g.set_amount(0.9)
    for _ in range(300):
        l, r = g.process(10000, -10000)
        assert l == -r or l == -r - 1 or l == -r + 1