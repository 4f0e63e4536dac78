# =============================================================================
# bit_encoder.py — Supercharger Bit Encoder
# =============================================================================
#
# Converts bytes into tone cycles.  Every bit is one whole cycle of a sine:
#
#   Bit '1': one cycle of the ONE tone  (ONE_TONE_CYCLE  = 10 samples)
#   Bit '0': one cycle of the ZERO tone (ZERO_TONE_CYCLE =  6 samples)
#
# Bytes are sent most-significant bit first.  A byte therefore occupies
# between 48 (0x00) and 80 (0xFF) samples depending on its value.
#
# The encoder writes into a "sink": any object with a write(samples) method.
# In the normal pipeline that is a WavWriter; tests use a plain list wrapper.
#
# BYTE RATE:
#   bytes_per_second = sample_rate // (zero_cycle + one_cycle) // 4
#                    = 44100 // 16 // 4 = 689
#   This is makewav's tuned figure, used only to turn durations (calibration
#   and trailer runs) into byte counts.  Integer division throughout.

from __future__ import annotations
import numpy as np


class BitEncoder:
    """
    Writes bytes to a sample sink as sequences of zero/one tone cycles.

    Usage:
        enc = BitEncoder(44100, zero_table, one_table, wav)
        enc.write_byte(0x54)
        enc.write_byte_duration(0x55, 0.5)
    """

    def __init__(
        self,
        sample_rate: int,
        zero_tone: np.ndarray,
        one_tone: np.ndarray,
        sink,
    ) -> None:
        self.sample_rate = sample_rate
        self.zero_tone   = zero_tone
        self.one_tone    = one_tone
        self.sink        = sink

        self.bytes_per_second = (
            sample_rate // (len(zero_tone) + len(one_tone)) // 4
        )

    # ── Core encoder ────────────────────────────────────────────────────────

    def write_byte(self, byte: int) -> None:
        """Write the 8 bits of `byte`, MSB first, as tone cycles."""
        byte &= 0xFF
        for i in range(7, -1, -1):
            if (byte >> i) & 1:
                self.sink.write(self.one_tone)
            else:
                self.sink.write(self.zero_tone)

    def write_bytes(self, data) -> None:
        """Write every byte of `data` in order."""
        for byte in data:
            self.write_byte(byte)

    def write_byte_duration(self, byte: int, duration_seconds: float) -> int:
        """
        Repeat `byte` for as many whole bytes as fit in `duration_seconds`
        at the encoder's byte rate.

        Returns:
            Number of bytes written (0 for a zero or too-short duration).
        """
        count = int(duration_seconds * self.bytes_per_second)
        for _ in range(count):
            self.write_byte(byte)
        return max(count, 0)

    # ── Sizing helpers ──────────────────────────────────────────────────────

    def samples_for_byte(self, byte: int) -> int:
        """Number of samples write_byte(byte) appends."""
        ones = bin(byte & 0xFF).count("1")
        return ones * len(self.one_tone) + (8 - ones) * len(self.zero_tone)
