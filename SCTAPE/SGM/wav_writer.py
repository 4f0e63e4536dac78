# =============================================================================
# wav_writer.py — PCM WAV Container Writer
# =============================================================================
#
# Accumulates unsigned 8-bit mono samples and serialises them as a canonical
# RIFF/WAVE file.  Each incoming sample is replicated across `channels`
# before it is buffered, so a mono tape can be written as 2-channel output
# without touching the encoder.
#
# Layout (all integers little-endian):
#
#   "RIFF" <u32 36 + data_size> "WAVE"
#   "fmt " <u32 16>
#       <u16 format> <u16 channels> <u32 sample_rate>
#       <u32 byte_rate> <u16 block_align> <u16 depth>
#   "data" <u32 data_size> <samples...>
#
# For the Supercharger preset (PCM, 1 ch, 44100 Hz, 8 bit) byte_rate equals
# the sample rate and block_align is 1.  Total length = 44 + data_size.

from __future__ import annotations
import struct
import numpy as np

from SCTAPE.SMM.constants import (
    SAMPLE_RATE, WAV_FORMAT, WAV_CHANNELS, WAV_DEPTH,
)

WAV_HEADER_SIZE = 44
FMT_CHUNK_SIZE  = 16


class WavWriter:
    """
    Sample sink that produces a WAV file on demand.

    Usage:
        wav = WavWriter()
        wav.write(samples)          # any uint8 array / bytes
        data = wav.to_bytes()
    """

    def __init__(
        self,
        audio_format: int = WAV_FORMAT,
        channels: int = WAV_CHANNELS,
        sample_rate: int = SAMPLE_RATE,
        depth: int = WAV_DEPTH,
    ) -> None:
        if channels < 1:
            raise ValueError(f"channels must be >= 1, got {channels}")
        self.audio_format = audio_format
        self.channels     = channels
        self.sample_rate  = sample_rate
        self.depth        = depth
        self._data        = bytearray()

    # ── Sink interface ──────────────────────────────────────────────────────

    def write(self, samples) -> int:
        """
        Append mono samples, replicating each one across every channel.

        Returns:
            Number of bytes appended to the buffer.
        """
        mono = np.frombuffer(bytes(samples), dtype=np.uint8)
        if self.channels > 1:
            mono = np.repeat(mono, self.channels)
        self._data.extend(mono.tobytes())
        return len(mono)

    # ── Properties ──────────────────────────────────────────────────────────

    @property
    def block_align(self) -> int:
        return self.channels * self.depth // 8

    @property
    def byte_rate(self) -> int:
        return self.sample_rate * self.block_align

    @property
    def data_size(self) -> int:
        return len(self._data)

    @property
    def frame_count(self) -> int:
        """Number of sample frames (one sample per channel) buffered so far."""
        return len(self._data) // self.channels

    def __len__(self) -> int:
        return WAV_HEADER_SIZE + len(self._data)

    # ── Serialisation ───────────────────────────────────────────────────────

    def header_bytes(self) -> bytes:
        """Return the 44-byte RIFF/fmt/data header for the current buffer."""
        data_size = len(self._data)
        riff = struct.pack("<4sI4s", b"RIFF", 36 + data_size, b"WAVE")
        fmt  = struct.pack(
            "<4sIHHIIHH",
            b"fmt ", FMT_CHUNK_SIZE,
            self.audio_format, self.channels, self.sample_rate,
            self.byte_rate, self.block_align, self.depth,
        )
        data = struct.pack("<4sI", b"data", data_size)
        return riff + fmt + data

    def to_bytes(self) -> bytes:
        """Return the complete WAV file."""
        return self.header_bytes() + bytes(self._data)
