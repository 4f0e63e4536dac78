#!/usr/bin/env python3
# =============================================================================
# validate.py — SCTAPE Self-Validation Suite
# =============================================================================
#
# Run directly:  python -m SCTAPE.SVM.validate
#             or python SCTAPE/SVM/validate.py (from project root)
#
# Tests:
#   1. Constants integrity   — tone cycles, byte rate, profile matches module
#   2. Tone tables           — lengths, centre, peaks
#   3. Bit encoder           — per-byte sample counts, MSB-first order
#   4. Tape layout           — header/block checksums, pages, total length
#   5. Round trip            — WAV decodes back to the original image
# =============================================================================

import sys
import os
import random

# Allow running from project root without installing
sys.path.insert(0, os.path.join(os.path.dirname(__file__), "..", ".."))

from SCTAPE.SMM.constants import (
    SAMPLE_RATE, START_TONE_CYCLE, ZERO_TONE_CYCLE, ONE_TONE_CYCLE,
    ROM_SIZE, BLOCK_SIZE, CHECKSUM_BASE, SUPERCHARGER_PROFILE,
)
from SCTAPE.SGM.tone import synthesize
from SCTAPE.SGM.bit_encoder import BitEncoder
from SCTAPE.SGM.tape_builder import TapeBuilder, build_header, iter_blocks, page_number
from SCTAPE.SGM.wav_writer import WavWriter, WAV_HEADER_SIZE
from SCTAPE.convert import convert
from SCTAPE.SVM.tape_decoder import decode_wav

PASS = "[PASS]"
FAIL = "[FAIL]"
INFO = "[INFO]"

failures = 0

def check(label: str, condition: bool, detail: str = "") -> bool:
    global failures
    if condition:
        print(f"  {PASS} {label}")
    else:
        print(f"  {FAIL} {label}{(' -- ' + detail) if detail else ''}")
        failures += 1
    return condition


class _Collect:
    def __init__(self):
        self.samples = bytearray()

    def write(self, samples):
        self.samples.extend(bytes(samples))


# =============================================================================
# TEST 1 — Constants Integrity
# =============================================================================
print("\n" + "="*60)
print("TEST 1 — Constants Integrity")
print("="*60)

check("SAMPLE_RATE = 44100",            SAMPLE_RATE == 44_100)
check("ZERO cycle shorter than ONE",    ZERO_TONE_CYCLE < ONE_TONE_CYCLE < START_TONE_CYCLE)
check("ROM holds 16 blocks",            ROM_SIZE // BLOCK_SIZE == 16)
check("Profile uses module sample rate", SUPERCHARGER_PROFILE.sample_rate == SAMPLE_RATE)

zero = synthesize(ZERO_TONE_CYCLE, 0.98)
one  = synthesize(ONE_TONE_CYCLE, 0.98)
enc  = BitEncoder(SAMPLE_RATE, zero, one, _Collect())
check("bytes_per_second = 689",          enc.bytes_per_second == 689,
      f"got {enc.bytes_per_second}")


# =============================================================================
# TEST 2 — Tone Tables
# =============================================================================
print("\n" + "="*60)
print("TEST 2 — Tone Tables")
print("="*60)

for name, cycle in (("start", START_TONE_CYCLE), ("zero", ZERO_TONE_CYCLE), ("one", ONE_TONE_CYCLE)):
    t = synthesize(cycle, 0.98)
    check(f"{name}: length = {cycle}",       len(t) == cycle, f"got {len(t)}")
    check(f"{name}: starts at centre (128)", int(t[0]) == 128, f"got {t[0]}")
    check(f"{name}: peak <= 253",            int(t.max()) <= 253, f"got {t.max()}")

check("zero table = [128,237,237,128,19,19]",
      zero.tolist() == [128, 237, 237, 128, 19, 19], f"got {zero.tolist()}")


# =============================================================================
# TEST 3 — Bit Encoder
# =============================================================================
print("\n" + "="*60)
print("TEST 3 — Bit Encoder")
print("="*60)

sink = _Collect()
enc  = BitEncoder(SAMPLE_RATE, zero, one, sink)
enc.write_byte(0x00)
check("0x00 = 8 zero cycles (48 samples)", len(sink.samples) == 48)

sink = _Collect()
enc  = BitEncoder(SAMPLE_RATE, zero, one, sink)
enc.write_byte(0xFF)
check("0xFF = 8 one cycles (80 samples)", len(sink.samples) == 80)

sink = _Collect()
enc  = BitEncoder(SAMPLE_RATE, zero, one, sink)
enc.write_byte(0x80)
check("0x80: MSB first (one cycle leads)",
      bytes(sink.samples[:ONE_TONE_CYCLE]) == one.tobytes()
      and len(sink.samples) == ONE_TONE_CYCLE + 7 * ZERO_TONE_CYCLE)

sink = _Collect()
enc  = BitEncoder(SAMPLE_RATE, zero, one, sink)
enc.write_byte_duration(0x55, 0)
check("Zero duration writes nothing", len(sink.samples) == 0)


# =============================================================================
# TEST 4 — Tape Layout
# =============================================================================
print("\n" + "="*60)
print("TEST 4 — Tape Layout")
print("="*60)

rng = random.Random(2600)
rom = bytes(rng.randrange(256) for _ in range(ROM_SIZE))

header = build_header(rom)
check("Header sums to $55", sum(header) & 0xFF == CHECKSUM_BASE)
check("Header block count = 16", header.block_count == 16)

blocks = list(iter_blocks(rom, header.block_count))
check("16 blocks", len(blocks) == 16)
check("Every block sums to $55",
      all((b.page + b.checksum + sum(b.data)) & 0xFF == CHECKSUM_BASE for b in blocks))
check("Pages: 0→1, 7→29, 8→2",
      (page_number(0), page_number(7), page_number(8)) == (1, 29, 2))

builder = TapeBuilder()
wav = builder.build(rom)
check("WAV length = 44 + samples",
      len(wav.to_bytes()) == WAV_HEADER_SIZE + wav.data_size)
print(f"  {INFO} {wav.data_size} samples, {wav.data_size / SAMPLE_RATE:.2f} s of audio")
check("16 block events recorded",
      sum(1 for e in builder.events if e.kind == "block") == 16)


# =============================================================================
# TEST 5 — Round Trip
# =============================================================================
print("\n" + "="*60)
print("TEST 5 — Round Trip")
print("="*60)

result = convert(rom)
tape   = decode_wav(result.wav_bytes)
check("Decoded tape has no errors", tape.ok, "; ".join(tape.errors))
check("Decoded image matches",      tape.rom == rom)
check("Calibration run = 344 bytes", tape.calibration_bytes == 344,
      f"got {tape.calibration_bytes}")
check("Trailer run = 344 bytes",     tape.trailer_bytes == 344,
      f"got {tape.trailer_bytes}")

stereo = WavWriter(channels=2)
TapeBuilder().build(rom, stereo)
check("2-channel tape decodes",      decode_wav(stereo.to_bytes()).rom == rom)


# =============================================================================
# Summary
# =============================================================================
print("\n" + "="*60)
if failures == 0:
    print(f"  ALL TESTS PASSED")
else:
    print(f"  {failures} TEST(S) FAILED")
print("="*60 + "\n")
sys.exit(0 if failures == 0 else 1)
