import os
import sys
import random

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from SCTAPE.SMM.constants import ROM_SIZE


class SampleSink:
    """Minimal sink: records every write."""

    def __init__(self):
        self.samples = bytearray()
        self.writes = 0

    def write(self, samples):
        self.samples.extend(bytes(samples))
        self.writes += 1


@pytest.fixture
def sink():
    return SampleSink()


@pytest.fixture
def random_rom():
    rng = random.Random(0x2600)
    return bytes(rng.randrange(256) for _ in range(ROM_SIZE))


@pytest.fixture
def address_rom():
    """All zeros except the start address $1234 at offsets 4092/4093."""
    rom = bytearray(ROM_SIZE)
    rom[4092] = 0x34
    rom[4093] = 0x12
    return bytes(rom)
