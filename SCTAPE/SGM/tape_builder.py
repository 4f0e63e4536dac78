# =============================================================================
# tape_builder.py — Supercharger Tape Builder
# =============================================================================
#
# Turns a 4K game image into the complete Supercharger tape signal.
#
# TAPE LAYOUT (fixed order):
#   1. Start tone      — START_TONE_SECONDS of the low start tone, written
#                        as whole cycles straight to the sink (not bits).
#   2. Calibration     — $55 repeated for HEADER_TONE_SECONDS, then one $54
#                        sync byte.
#   3. Header packet   — 8 bytes, see HeaderRecord.
#   4. Data packets    — per 256-byte block: page, checksum, 256 data bytes.
#   5. Trailer         — $00 repeated for END_TONE_SECONDS.
#
# CHECKSUMS:
#   Every packet sums to $55 modulo 256 once its checksum byte is included.
#   All arithmetic is 8-bit with wraparound.
#
# PAGES:
#   page = block * 4 + 1, wrapped once by subtracting $1F when it exceeds $1F.
#   A single subtraction only covers images of up to 16 blocks.
#
# The builder performs no validation: the image must already be ROM_SIZE
# bytes (see SCTAPE.convert.validate_rom).
#
# Diagnostics are recorded as TapeEvent tuples on `builder.events`; nothing is
# printed here.  format_events() renders them for the CLI.

from __future__ import annotations
from typing import NamedTuple

from SCTAPE.SMM.constants import (
    BLOCK_SIZE, CHECKSUM_BASE, PAGE_LIMIT,
    CALIBRATION_BYTE, SYNC_BYTE, TRAILER_BYTE,
    ADDRESS_LOW_OFFSET, ADDRESS_HIGH_OFFSET,
    SUPERCHARGER_PROFILE, TapeProfile,
)
from .bit_encoder import BitEncoder
from .tone import synthesize
from .wav_writer import WavWriter


class TapeEvent(NamedTuple):
    kind:  str              # "address", "bank_config", "block_count",
                            # "multiload", "load_speed", "checksum", "block"
    value: int
    block: int | None = None


class HeaderRecord(NamedTuple):
    address_low:         int
    address_high:        int
    bank_config:         int
    block_count:         int
    checksum:            int
    multiload:           int
    progress_speed_low:  int
    progress_speed_high: int

    @property
    def address(self) -> int:
        return (self.address_high << 8) | self.address_low

    @property
    def load_speed(self) -> int:
        return (self.progress_speed_high << 8) | self.progress_speed_low

    def to_bytes(self) -> bytes:
        """Header bytes in tape order."""
        return bytes(self)


class DataBlock(NamedTuple):
    index:    int
    page:     int
    checksum: int
    data:     bytes


# ── Protocol arithmetic ─────────────────────────────────────────────────────

def packet_checksum(data) -> int:
    """Byte that makes `data` plus itself sum to $55 (mod 256)."""
    return (CHECKSUM_BASE - sum(data)) & 0xFF


def page_number(block: int) -> int:
    page = (block * 4 + 1) & 0xFF
    if page > PAGE_LIMIT:
        page -= PAGE_LIMIT
    return page


def build_header(rom: bytes, profile: TapeProfile = SUPERCHARGER_PROFILE) -> HeaderRecord:
    """
    Derive the 8-byte header packet from a game image.

    The start address is read from the reset vector near the end of the
    image (len-4 = low byte, len-3 = high byte).
    """
    fields = [
        rom[len(rom) - ADDRESS_LOW_OFFSET],
        rom[len(rom) - ADDRESS_HIGH_OFFSET],
        profile.bank_config,
        (len(rom) // BLOCK_SIZE) & 0xFF,
        profile.multiload,
        profile.progress_speed_low,
        profile.progress_speed_high,
    ]
    checksum = packet_checksum(fields)
    return HeaderRecord(
        address_low         = fields[0],
        address_high        = fields[1],
        bank_config         = fields[2],
        block_count         = fields[3],
        checksum            = checksum,
        multiload           = fields[4],
        progress_speed_low  = fields[5],
        progress_speed_high = fields[6],
    )


def iter_blocks(rom: bytes, block_count: int):
    """Yield a DataBlock for each 256-byte slice of the image, in order."""
    for index in range(block_count):
        start = index * BLOCK_SIZE
        data  = bytes(rom[start:start + BLOCK_SIZE])
        page  = page_number(index)
        yield DataBlock(
            index    = index,
            page     = page,
            checksum = packet_checksum([page, *data]),
            data     = data,
        )


# ── Builder ─────────────────────────────────────────────────────────────────

class TapeBuilder:
    """
    Writes a complete Supercharger tape for one game image into a sink.

    Example:
        builder = TapeBuilder()
        wav = builder.build(rom)
        wav_bytes = wav.to_bytes()
        for event in builder.events: ...
    """

    def __init__(self, profile: TapeProfile = SUPERCHARGER_PROFILE) -> None:
        self.profile = profile
        self.events: list[TapeEvent] = []

        # Tone tables are built once and reused for every bit
        self.start_tone = synthesize(profile.start_tone_cycle, profile.start_tone_volume)
        self.zero_tone  = synthesize(profile.zero_tone_cycle,  profile.zero_tone_volume)
        self.one_tone   = synthesize(profile.one_tone_cycle,   profile.one_tone_volume)

    # ── Stages ──────────────────────────────────────────────────────────────

    def start_tone_cycles(self) -> int:
        p = self.profile
        return round(p.start_tone_seconds * p.sample_rate / p.start_tone_cycle)

    def write_start_tone(self, sink) -> None:
        for _ in range(self.start_tone_cycles()):
            sink.write(self.start_tone)

    def write_calibration(self, enc: BitEncoder) -> None:
        enc.write_byte_duration(CALIBRATION_BYTE, self.profile.header_tone_seconds)
        enc.write_byte(SYNC_BYTE)

    def write_header(self, enc: BitEncoder, header: HeaderRecord) -> None:
        self.events.extend([
            TapeEvent("address",     header.address),
            TapeEvent("bank_config", header.bank_config),
            TapeEvent("block_count", header.block_count),
            TapeEvent("multiload",   header.multiload),
            TapeEvent("load_speed",  header.load_speed),
            TapeEvent("checksum",    header.checksum),
        ])
        enc.write_bytes(header.to_bytes())

    def write_block(self, enc: BitEncoder, block: DataBlock) -> None:
        self.events.append(TapeEvent("block", block.checksum, block.index))
        enc.write_byte(block.page)
        enc.write_byte(block.checksum)
        enc.write_bytes(block.data)

    def write_trailer(self, enc: BitEncoder) -> None:
        enc.write_byte_duration(TRAILER_BYTE, self.profile.end_tone_seconds)

    # ── Full tape ───────────────────────────────────────────────────────────

    def build(self, rom: bytes, sink=None):
        """
        Encode `rom` into `sink` (a new mono WavWriter if omitted).

        Returns:
            The sink, with every tape sample written to it.
        """
        if sink is None:
            sink = WavWriter(sample_rate=self.profile.sample_rate)
        self.events = []

        self.write_start_tone(sink)

        enc = BitEncoder(self.profile.sample_rate, self.zero_tone, self.one_tone, sink)
        self.write_calibration(enc)

        header = build_header(rom, self.profile)
        self.write_header(enc, header)

        for block in iter_blocks(rom, header.block_count):
            self.write_block(enc, block)

        self.write_trailer(enc)
        return sink


# ── Diagnostics ─────────────────────────────────────────────────────────────

def format_event(event: TapeEvent) -> str:
    if event.kind == "address":
        return f"\taddress: {event.value:04x}"
    if event.kind == "bank_config":
        return f"\tbank config: {event.value:02x}"
    if event.kind == "block_count":
        return f"\tblock count: {event.value:02x}"
    if event.kind == "multiload":
        return f"\tmultiload: {event.value:02x}"
    if event.kind == "load_speed":
        return f"\tload speed: {event.value:04x}"
    if event.kind == "checksum":
        return f"\tchecksum: {event.value:02x}"
    if event.kind == "block":
        return f"\tblock {event.block}: checksum {event.value:02x}"
    raise ValueError(f"Unknown tape event kind: {event.kind!r}")


def format_events(events: list[TapeEvent]) -> str:
    """Render diagnostic events as newline-terminated, tab-indented lines."""
    return "".join(format_event(e) + "\n" for e in events)
