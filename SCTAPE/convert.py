# =============================================================================
# convert.py — ROM → WAV conversion entry points
# =============================================================================
#
# validate_rom()  — size check; the encoder itself never validates
# convert()       — bytes in, WAV bytes + diagnostic events out
# convert_file()  — <name>.bin → <name>.wav beside it
#
# Each call owns its own TapeBuilder and WavWriter, so independent
# conversions can run in parallel without any coordination.
# =============================================================================

from __future__ import annotations
import os
from typing import NamedTuple

from SCTAPE.SMM.constants import ROM_SIZE, SUPERCHARGER_PROFILE, TapeProfile
from SCTAPE.SGM.tape_builder import TapeBuilder, TapeEvent, format_events


class UnsupportedSizeError(ValueError):
    """The game image is not a size the Supercharger format can carry."""

    def __init__(self, size: int) -> None:
        super().__init__(f"unsupported size ({size})")
        self.size = size


class OutputExistsError(FileExistsError):
    pass


class ConversionResult(NamedTuple):
    wav_bytes: bytes
    events:    list[TapeEvent]

    @property
    def report(self) -> str:
        return format_events(self.events)


def validate_rom(rom: bytes) -> None:
    """Raise UnsupportedSizeError unless `rom` is exactly ROM_SIZE bytes."""
    if len(rom) != ROM_SIZE:
        raise UnsupportedSizeError(len(rom))


def convert(rom: bytes, profile: TapeProfile = SUPERCHARGER_PROFILE) -> ConversionResult:
    """
    Convert a 4K game image to a Supercharger-loadable WAV.

    Raises:
        UnsupportedSizeError: before any encoding if the size is wrong.
    """
    rom = bytes(rom)
    validate_rom(rom)

    builder = TapeBuilder(profile)
    wav     = builder.build(rom)
    return ConversionResult(wav.to_bytes(), list(builder.events))


def wav_path_for(rom_path: str) -> str:
    """game.bin → game.wav (same directory)."""
    stem, _ = os.path.splitext(rom_path)
    return f"{stem}.wav"


def convert_file(
    rom_path: str,
    overwrite: bool = False,
    profile: TapeProfile = SUPERCHARGER_PROFILE,
) -> tuple[str, ConversionResult]:
    """
    Convert the ROM at `rom_path` and write the WAV next to it.

    Returns:
        (wav_path, ConversionResult)

    Raises:
        OutputExistsError:    the WAV exists and overwrite is False.
        UnsupportedSizeError: the ROM is not ROM_SIZE bytes.
        OSError:              reading or writing failed.
    """
    wav_path = wav_path_for(rom_path)
    if not overwrite and os.path.exists(wav_path):
        raise OutputExistsError(f"{os.path.basename(wav_path)} already exists")

    with open(rom_path, "rb") as f:
        rom = f.read()

    result = convert(rom, profile)

    with open(wav_path, "wb") as f:
        f.write(result.wav_bytes)

    return wav_path, result
