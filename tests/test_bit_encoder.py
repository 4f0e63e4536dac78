import pytest

from SCTAPE.SGM.bit_encoder import BitEncoder
from SCTAPE.SGM.tone import synthesize

ZERO = synthesize(6, 0.98)
ONE = synthesize(10, 0.98)


def make(sink):
    return BitEncoder(44100, ZERO, ONE, sink)


def test_bytes_per_second(sink):
    assert make(sink).bytes_per_second == 689


def test_write_byte_msb_first(sink):
    make(sink).write_byte(0xA0)    # 1010 0000
    expected = ONE.tobytes() + ZERO.tobytes() + ONE.tobytes() + ZERO.tobytes() * 5
    assert bytes(sink.samples) == expected
    assert sink.writes == 8


@pytest.mark.parametrize("value,length", [(0x00, 48), (0xFF, 80), (0x55, 64), (0x54, 60)])
def test_write_byte_length(sink, value, length):
    enc = make(sink)
    enc.write_byte(value)
    assert len(sink.samples) == length
    assert enc.samples_for_byte(value) == length


def test_write_byte_duration_count(sink):
    enc = make(sink)
    written = enc.write_byte_duration(0x55, 0.5)
    assert written == 344
    assert len(sink.samples) == 344 * 64


def test_write_byte_duration_uses_given_byte(sink):
    enc = make(sink)
    enc.write_byte_duration(0x00, 0.01)    # 6 bytes
    assert len(sink.samples) == 6 * 48
    assert bytes(sink.samples) == ZERO.tobytes() * 48


def test_zero_duration_writes_nothing(sink):
    assert make(sink).write_byte_duration(0x55, 0) == 0
    assert len(sink.samples) == 0
    assert sink.writes == 0


def test_short_duration_rounds_down_to_nothing(sink):
    make(sink).write_byte_duration(0xFF, 0.001)
    assert len(sink.samples) == 0
