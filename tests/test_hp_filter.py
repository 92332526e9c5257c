import pytest

from bytebeat_dsp.hp_filter import HPF_TABLE, BiquadState, HpfCoeff, HpFilter


def signal(n):
    return [((i * 7919) % 40000) - 20000 for i in range(n)]


def test_amount_selects_table_end_points():
    hp = HpFilter()
    hp.set_amount(0.0)
    assert HPF_TABLE[hp.coeff_index].b0 == 32740
    hp.set_amount(1.0)
    assert HPF_TABLE[hp.coeff_index].b0 == 10240


def test_coeff_is_immutable():
    coeff = HpfCoeff(b0=1, b1=2, a1=3, a2=4)
    assert coeff.b0 == 1
    with pytest.raises(AttributeError):
        coeff.b0 = 5


def test_biquad_zero_input_gives_zero():
    st = BiquadState()
    assert [st.process(0, HPF_TABLE[5]) for _ in range(50)] == [0] * 50


def test_biquad_reset_clears_state():
    st = BiquadState()
    for x in signal(30):
        st.process(x, HPF_TABLE[3])
    st.reset()
    assert (st.w1, st.w2) == (0, 0)


def test_bypass_when_inactive():
    hp = HpFilter()
    assert not hp.is_active
    assert hp.process(1234, -4321) == (1234, -4321)
    hp.set_amount(0.01)
    assert hp.process(1234, -4321) == (1234, -4321)


@pytest.mark.parametrize("amount, index", [(0.0, 0), (1.0, 15), (-3.0, 0), (7.0, 15)])
def test_coeff_index_mapping(amount, index):
    hp = HpFilter()
    hp.set_amount(amount)
    assert hp.coeff_index == index


def test_index_grows_with_amount():
    hp = HpFilter()
    indices = []
    for step in range(11):
        hp.set_amount(step / 10)
        indices.append(hp.coeff_index)
    assert indices == sorted(indices)


def test_channels_are_symmetric():
    hp = HpFilter()
    hp.set_amount(0.6)
    for x in signal(300):
        l, r = hp.process(x, x)
        assert l == r


def test_output_in_range_and_reset_repeats():
    hp = HpFilter()
    hp.set_amount(0.9)
    xs = [32767 if i % 2 else -32768 for i in range(400)]
    first = [hp.process(x, -x if x > -32768 else 32767) for x in xs]
    for l, r in first:
        assert -32768 <= l <= 32767 and -32768 <= r <= 32767
    hp.reset()
    assert [hp.process(x, -x if x > -32768 else 32767) for x in xs] == first