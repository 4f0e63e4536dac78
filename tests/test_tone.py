import math

import numpy as np
import pytest

from SCTAPE.SGM.tone import synthesize


@pytest.mark.parametrize("cycle", [6, 10, 51])
def test_table_length_and_dtype(cycle):
    table = synthesize(cycle, 0.98)
    assert len(table) == cycle
    assert table.dtype == np.uint8


def test_zero_tone_table():
    assert synthesize(6, 0.98).tolist() == [128, 237, 237, 128, 19, 19]


def test_matches_formula():
    cycle, volume = 51, 0.98
    expected = [
        round((math.sin(2 * math.pi * i / cycle) * volume + 1) * 128)
        for i in range(cycle)
    ]
    assert synthesize(cycle, volume).tolist() == expected


def test_silent_tone_is_flat():
    assert set(synthesize(10, 0.0).tolist()) == {128}


def test_deterministic():
    assert np.array_equal(synthesize(10, 0.98), synthesize(10, 0.98))


def test_rejects_empty_cycle():
    with pytest.raises(ValueError):
        synthesize(0, 0.98)
