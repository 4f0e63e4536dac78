# =============================================================================
# constants.py — SMM Tape Timing Constants and Protocol Values
# =============================================================================
#
# Values match the defaults of Bob Colbert's makewav, which is the reference
# Supercharger WAV generator.  DO NOT change these without re-testing on a
# real Supercharger: the loader's bit-width detection is tuned to them.
#
# Protocol notes (sctech.txt excerpts + makewav deviations) live in
# docs/TAPE_FORMAT.md.

from __future__ import annotations
from typing import NamedTuple

# -----------------------------------------------------------------------------
# AUDIO
# -----------------------------------------------------------------------------

SAMPLE_RATE  = 44_100      # Hz — the only rate the tone cycles are tuned for
WAV_FORMAT   = 1           # PCM
WAV_CHANNELS = 1
WAV_DEPTH    = 8           # bits, unsigned, centred on 128

# -----------------------------------------------------------------------------
# TONES
# -----------------------------------------------------------------------------

# Length of one cycle of each tone, in samples.
#   start: 44100 / 51 ≈ 865 Hz   (deck run-up only, never decoded)
#   zero : 44100 /  6 = 7350 Hz
#   one  : 44100 / 10 = 4410 Hz
START_TONE_CYCLE = 51
ZERO_TONE_CYCLE  = 6
ONE_TONE_CYCLE   = 10

START_TONE_VOLUME = 0.98
ZERO_TONE_VOLUME  = 0.98
ONE_TONE_VOLUME   = 0.98

# Durations, in seconds
START_TONE_SECONDS  = 0.1
HEADER_TONE_SECONDS = 0.5
END_TONE_SECONDS    = 0.5

# -----------------------------------------------------------------------------
# PROTOCOL
# -----------------------------------------------------------------------------

ROM_SIZE    = 4096
BLOCK_SIZE  = 256

CHECKSUM_BASE = 0x55       # every packet (header or block) sums to this

CALIBRATION_BYTE = 0x55    # makewav uses $55, not the $AA from sctech.txt
SYNC_BYTE        = 0x54    # and $54 rather than $00
TRAILER_BYTE     = 0x00

BANK_CONFIG          = 0x1d
MULTILOAD            = 0x00
PROGRESS_SPEED_LOW   = 0xc3
PROGRESS_SPEED_HIGH  = 0x01

# Page numbers wrap once past this value
PAGE_LIMIT = 0x1f

# Offsets of the start address, measured back from the end of the image
ADDRESS_LOW_OFFSET  = 4
ADDRESS_HIGH_OFFSET = 3


# -----------------------------------------------------------------------------
# PROFILE
# -----------------------------------------------------------------------------

class TapeProfile(NamedTuple):
    """Everything the encoder needs to know about one tape format."""
    sample_rate:         int
    start_tone_cycle:    int
    zero_tone_cycle:     int
    one_tone_cycle:      int
    start_tone_volume:   float
    zero_tone_volume:    float
    one_tone_volume:     float
    start_tone_seconds:  float
    header_tone_seconds: float
    end_tone_seconds:    float
    bank_config:         int
    multiload:           int
    progress_speed_low:  int
    progress_speed_high: int


SUPERCHARGER_PROFILE = TapeProfile(
    sample_rate         = SAMPLE_RATE,
    start_tone_cycle    = START_TONE_CYCLE,
    zero_tone_cycle     = ZERO_TONE_CYCLE,
    one_tone_cycle      = ONE_TONE_CYCLE,
    start_tone_volume   = START_TONE_VOLUME,
    zero_tone_volume    = ZERO_TONE_VOLUME,
    one_tone_volume     = ONE_TONE_VOLUME,
    start_tone_seconds  = START_TONE_SECONDS,
    header_tone_seconds = HEADER_TONE_SECONDS,
    end_tone_seconds    = END_TONE_SECONDS,
    bank_config         = BANK_CONFIG,
    multiload           = MULTILOAD,
    progress_speed_low  = PROGRESS_SPEED_LOW,
    progress_speed_high = PROGRESS_SPEED_HIGH,
)
