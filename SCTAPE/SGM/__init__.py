# =============================================================================
# SGM — Signal Generation Module
# Subfolder of SCTAPE (Supercharger Cassette Tape Encoder)
# =============================================================================
#
# Generates the deterministic 8-bit PCM tape signal for a game image, using
# the makewav-compatible constants from SMM.
#
# Modules:
#   tone.py          — single-cycle sine tables for the start/zero/one tones
#   bit_encoder.py   — bytes → tone cycles (MSB first), duration runs
#   tape_builder.py  — start tone, calibration, header, blocks, trailer
#   wav_writer.py    — RIFF/WAVE container around the sample buffer
#
# Constants live in SCTAPE/SMM/constants.py
# Verification tools live in SCTAPE/SVM/
# =============================================================================

from .tone import synthesize
from .bit_encoder import BitEncoder
from .wav_writer import WavWriter
from .tape_builder import (
    TapeBuilder, TapeEvent, HeaderRecord, DataBlock,
    build_header, iter_blocks, page_number, packet_checksum,
    format_event, format_events,
)
