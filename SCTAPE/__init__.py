# =============================================================================
# Supercharger Cassette Tape Encoder (SCTAPE)
# =============================================================================
#
# Turns 4K Atari 2600 game images into WAV files that a Starpath Supercharger
# can load from cassette (or from any audio player wired to it).
#
# RESPONSIBLE for:
#   - Tone synthesis        one-cycle sine tables for start / zero / one
#   - Bit packing           bytes → tone cycles, MSB first
#   - Tape framing          start tone, calibration + sync, header packet,
#                           16 data packets, trailer; pages and checksums
#   - WAV construction      8-bit unsigned PCM, RIFF/WAVE container
#   - Verification          decoding a tape WAV back to the game image
#
# NOT responsible for:
#   - Multiload or bank-switched images (4K only)
#   - Any sample rate or tone timing other than the makewav preset
#   - Audio compression
#
# ── DATA FLOW ─────────────────────────────────────────────────────────────────
#   ROM bytes   → validate_rom()        exactly 4096 bytes
#               → TapeBuilder           tone tables + BitEncoder
#               → WavWriter             sample buffer → RIFF bytes
#   Output      → <name>.wav beside the ROM, plus diagnostic events
#
# ── Module layout ─────────────────────────────────────────────────────────────
#   SMM/constants.py       — timing constants, protocol values, TapeProfile
#   SGM/tone.py            — sine tables
#   SGM/bit_encoder.py     — BitEncoder
#   SGM/tape_builder.py    — TapeBuilder, header/block arithmetic, events
#   SGM/wav_writer.py      — WavWriter
#   SVM/tape_decoder.py    — tape WAV → image, checksum verification
#   SVM/validate.py        — self-validation suite
#   convert.py             — validate_rom / convert / convert_file
#   cli.py                 — command line front end
#   bridge.py              — JSON entry point and Flask server
# =============================================================================

from SCTAPE.convert import (
    convert, convert_file, validate_rom,
    ConversionResult, UnsupportedSizeError, OutputExistsError,
)

__version__ = "1.0.0"
