#!/usr/bin/env python3
# =============================================================================
# tape_decoder.py — Supercharger Tape Decoder
# =============================================================================
#
# Inverse of TapeBuilder.  Reads a tape WAV, recovers the byte stream, and
# checks it the way the Supercharger loader would: calibration run, sync
# byte, header checksum, block pages and block checksums.
#
# Decoding model:
#   - Every bit is one whole sine cycle starting at the centre line and
#     rising, so each cycle begins at a rising zero-crossing.
#   - Cycle length (samples between rising crossings) identifies the tone:
#       short  (~ZERO_TONE_CYCLE)  → bit 0
#       medium (~ONE_TONE_CYCLE)   → bit 1
#       long   (~START_TONE_CYCLE) → start tone, not data
#     Thresholds are the midpoints between neighbouring cycle lengths.
#   - Bits after the start tone are packed MSB first into bytes.  The first
#     data bit is byte-aligned because the start tone is not bit-significant.
#
# Usage:
#   python -m SCTAPE.SVM.tape_decoder <path_to_wav>
#   python -m SCTAPE.SVM.tape_decoder <path_to_wav> --rom game.bin
#   python -m SCTAPE.SVM.tape_decoder <path_to_wav> --dump-blocks
#
# =============================================================================

from __future__ import annotations
import io
import os
import sys
import argparse
from typing import NamedTuple

import numpy as np
import soundfile as sf

from SCTAPE.SMM.constants import (
    SUPERCHARGER_PROFILE, TapeProfile,
    BLOCK_SIZE, CHECKSUM_BASE, CALIBRATION_BYTE, SYNC_BYTE, TRAILER_BYTE,
)
from SCTAPE.SGM.tape_builder import HeaderRecord, DataBlock, page_number

HEADER_SIZE = 8

# Tone kinds returned by classify_cycles()
ZERO  = 0
ONE   = 1
START = 2


class TapeDecodeError(ValueError):
    pass


class DecodedTape(NamedTuple):
    sample_rate:       int
    channels:          int
    start_cycles:      int
    calibration_bytes: int
    header:            HeaderRecord
    blocks:            list[DataBlock]
    trailer_bytes:     int
    errors:            list[str]     # checksum / page faults; empty = loadable

    @property
    def rom(self) -> bytes:
        return b"".join(b.data for b in self.blocks)

    @property
    def ok(self) -> bool:
        return not self.errors


# ---------------------------------------------------------------------------
# WAV input
# ---------------------------------------------------------------------------

def read_wav(source) -> tuple[np.ndarray, int, int]:
    """
    Read the first channel of a WAV file.

    Args:
        source: path, file object, or raw WAV bytes.

    Returns:
        (samples, sample_rate, channels) — samples are int16, centred on 0.
    """
    if isinstance(source, (bytes, bytearray, memoryview)):
        source = io.BytesIO(bytes(source))
    try:
        data, sr = sf.read(source, dtype="int16", always_2d=True)
    except (sf.SoundFileError, RuntimeError) as exc:
        raise ValueError(f"Could not read WAV: {exc}") from exc
    return data[:, 0], sr, data.shape[1]


# ---------------------------------------------------------------------------
# Signal → bits → bytes
# ---------------------------------------------------------------------------

def cycle_lengths(samples: np.ndarray) -> np.ndarray:
    """Lengths of the cycles delimited by rising zero-crossings."""
    s = np.asarray(samples)
    if len(s) == 0:
        return np.zeros(0, dtype=np.int64)
    rising = np.where((s[:-1] < 0) & (s[1:] >= 0))[0] + 1
    starts = rising if s[0] < 0 else np.concatenate(([0], rising))
    bounds = np.concatenate((starts, [len(s)]))
    return np.diff(bounds)


def classify_cycles(lengths: np.ndarray, profile: TapeProfile = SUPERCHARGER_PROFILE) -> np.ndarray:
    """Map cycle lengths to ZERO / ONE / START."""
    zero_one   = (profile.zero_tone_cycle + profile.one_tone_cycle) / 2
    one_start  = (profile.one_tone_cycle + profile.start_tone_cycle) / 2
    kinds = np.full(len(lengths), ONE, dtype=np.uint8)
    kinds[lengths <= zero_one] = ZERO
    kinds[lengths > one_start] = START
    return kinds


def recover_bytes(
    samples: np.ndarray, profile: TapeProfile = SUPERCHARGER_PROFILE,
) -> tuple[int, bytes]:
    """
    Returns:
        (start_cycles, data) — number of leading start-tone cycles and the
        bytes encoded after them.
    """
    kinds = classify_cycles(cycle_lengths(samples), profile)
    data_kinds = np.where(kinds != START)[0]
    if len(data_kinds) == 0:
        raise TapeDecodeError("no data cycles found after the start tone")

    start_cycles = int(data_kinds[0])
    bits = kinds[start_cycles:]
    if np.any(bits == START):
        pos = start_cycles + int(np.argmax(bits == START))
        raise TapeDecodeError(f"start-tone cycle inside data stream at cycle {pos}")
    if len(bits) % 8:
        raise TapeDecodeError(f"{len(bits)} data bits is not a whole number of bytes")

    return start_cycles, np.packbits(bits).tobytes()


# ---------------------------------------------------------------------------
# Bytes → tape structure
# ---------------------------------------------------------------------------

def parse_tape(
    data: bytes,
    sample_rate: int = SUPERCHARGER_PROFILE.sample_rate,
    channels: int = 1,
    start_cycles: int = 0,
) -> DecodedTape:
    """
    Parse the byte stream that follows the start tone.

    Structural faults (no sync byte, truncated packets) raise TapeDecodeError.
    Checksum and page faults are collected in DecodedTape.errors.
    """
    errors: list[str] = []
    pos = 0
    while pos < len(data) and data[pos] == CALIBRATION_BYTE:
        pos += 1
    calibration = pos

    if pos >= len(data) or data[pos] != SYNC_BYTE:
        raise TapeDecodeError(f"sync byte ${SYNC_BYTE:02X} not found after {calibration} calibration bytes")
    pos += 1

    if pos + HEADER_SIZE > len(data):
        raise TapeDecodeError("tape ends inside the header packet")
    header = HeaderRecord(*data[pos:pos + HEADER_SIZE])
    pos += HEADER_SIZE
    if sum(header) & 0xFF != CHECKSUM_BASE:
        errors.append(f"header checksum: sum ${sum(header) & 0xFF:02X}, expected ${CHECKSUM_BASE:02X}")

    blocks: list[DataBlock] = []
    packet = BLOCK_SIZE + 2
    for index in range(header.block_count):
        if pos + packet > len(data):
            raise TapeDecodeError(f"tape ends inside block {index}")
        page, checksum = data[pos], data[pos + 1]
        payload = bytes(data[pos + 2:pos + packet])
        pos += packet

        if page != page_number(index):
            errors.append(f"block {index}: page ${page:02X}, expected ${page_number(index):02X}")
        total = (page + checksum + sum(payload)) & 0xFF
        if total != CHECKSUM_BASE:
            errors.append(f"block {index}: checksum sum ${total:02X}, expected ${CHECKSUM_BASE:02X}")
        blocks.append(DataBlock(index, page, checksum, payload))

    trailer = data[pos:]
    if any(b != TRAILER_BYTE for b in trailer):
        errors.append("trailer contains non-zero bytes")

    return DecodedTape(
        sample_rate       = sample_rate,
        channels          = channels,
        start_cycles      = start_cycles,
        calibration_bytes = calibration,
        header            = header,
        blocks            = blocks,
        trailer_bytes     = len(trailer),
        errors            = errors,
    )


def decode_wav(source, profile: TapeProfile = SUPERCHARGER_PROFILE) -> DecodedTape:
    """Read a tape WAV (path, file object or bytes) and decode it."""
    samples, sr, channels = read_wav(source)
    start_cycles, data = recover_bytes(samples, profile)
    return parse_tape(data, sr, channels, start_cycles)


# ---------------------------------------------------------------------------
# CLI entry point
# ---------------------------------------------------------------------------

DIVIDER = "=" * 68


def run_check(wav_path: str, rom_path: str | None, dump_blocks: bool) -> bool:
    """
    Decode one tape WAV and print a report.
    Returns True if a Supercharger would load it.
    """
    print(f"\n{DIVIDER}")
    print(f"  Supercharger Tape Check")
    print(DIVIDER)

    if not os.path.exists(wav_path):
        print(f"  [!!] File not found: {wav_path}")
        return False

    try:
        tape = decode_wav(wav_path)
    except ValueError as exc:
        print(f"  [!!] {exc}")
        return False

    h = tape.header
    print(f"  File         : {os.path.basename(wav_path)}")
    print(f"  Rate         : {tape.sample_rate} Hz")
    print(f"  Channels     : {tape.channels}")
    print(f"  Start cycles : {tape.start_cycles}")
    print(f"  Calibration  : {tape.calibration_bytes} bytes")
    print(f"  Address      : ${h.address:04X}")
    print(f"  Bank config  : ${h.bank_config:02X}")
    print(f"  Blocks       : {h.block_count}")
    print(f"  Multiload    : {h.multiload}")
    print(f"  Load speed   : ${h.load_speed:04X}")
    print(f"  Trailer      : {tape.trailer_bytes} bytes")

    if dump_blocks:
        print(f"\n  -- Blocks --")
        for b in tape.blocks:
            print(f"  Block {b.index:02d}  page=${b.page:02X}  checksum=${b.checksum:02X}")

    errors = list(tape.errors)
    if rom_path:
        with open(rom_path, "rb") as f:
            expected = f.read()
        if tape.rom != expected:
            errors.append(f"recovered image differs from {os.path.basename(rom_path)}")
        else:
            print(f"  [INFO] recovered image matches {os.path.basename(rom_path)}")

    print(f"\n{DIVIDER}")
    if not errors:
        print(f"  VERDICT: PASS — Supercharger would load this tape")
    else:
        print(f"  VERDICT: FAIL — Supercharger would reject this tape")
        for e in errors:
            print(f"    - {e}")
    print(f"{DIVIDER}\n")
    return not errors


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Supercharger Tape Checker")
    parser.add_argument("wav", help="Path to tape WAV file")
    parser.add_argument("--rom", help="Compare the recovered image with this ROM file")
    parser.add_argument("--dump-blocks", action="store_true",
                        help="Print page and checksum of every block")
    args = parser.parse_args(argv)

    ok = run_check(args.wav, args.rom, args.dump_blocks)
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
