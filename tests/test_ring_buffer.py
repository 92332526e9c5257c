import pytest

from bytebeat_dsp.ring_buffer import RingBuffer


def test_fifo_order():
    rb = RingBuffer(8)
    for i in range(5):
        rb.push(i)
    assert [rb.pop() for _ in range(5)] == [0, 1, 2, 3, 4]


def test_capacity_is_size_minus_one():
    rb = RingBuffer(8)
    assert rb.capacity == 7
    for i in range(7):
        rb.push(i)
    assert len(rb) == 7
    with pytest.raises(OverflowError):
        rb.push(99)


def test_pop_empty_raises():
    rb = RingBuffer(4)
    with pytest.raises(IndexError):
        rb.pop()


def test_len_and_truthiness():
    rb = RingBuffer(4)
    assert len(rb) == 0
    assert not rb
    rb.push("a")
    assert len(rb) == 1
    assert rb


def test_wraparound_preserves_order():
    rb = RingBuffer(4)
    out = []
    for i in range(20):
        rb.push(i)
        rb.push(i + 100)
        out.append(rb.pop())
        out.append(rb.pop())
    assert out == [x for i in range(20) for x in (i, i + 100)]
    assert len(rb) == 0


def test_full_buffer_unchanged_after_rejected_push():
    rb = RingBuffer(2)
    rb.push("x")
    with pytest.raises(OverflowError):
        rb.push("y")
    assert rb.pop() == "x"
    assert len(rb) == 0


@pytest.mark.parametrize("size", [0, 1, 3, 6, 100])
def test_invalid_size_rejected(size):
    with pytest.raises(ValueError):
        RingBuffer(size)


def test_default_size():
    assert RingBuffer().capacity == 127