#!/usr/bin/env python3
# =============================================================================
# cli.py — Supercharger WAV Converter
# =============================================================================
#
# Converts 4K 2600 game images into WAV files that load on a Supercharger.
# Each WAV is written beside its ROM with the extension replaced by ".wav".
#
# Usage:
#   python -m SCTAPE game.bin
#   python -m SCTAPE -v game1.bin game2.a26
#   python -m SCTAPE -o game.bin          (overwrite an existing game.wav)
#
# Errors for one file are reported and the remaining files still convert.
# =============================================================================

from __future__ import annotations
import sys, os, argparse

from SCTAPE.convert import (
    convert_file, UnsupportedSizeError, OutputExistsError,
)


def process(rom_path: str, overwrite: bool, verbose: bool) -> bool:
    """Convert one ROM. Returns True on success."""
    name = os.path.basename(rom_path)
    try:
        _, result = convert_file(rom_path, overwrite=overwrite)
    except UnsupportedSizeError as exc:
        print(f"  [!!] {name} skipped: {exc}")
        return False
    except OutputExistsError as exc:
        print(f"  [!!] {exc}")
        return False
    except OSError as exc:
        print(f"  [!!] {name}: {exc.strerror or exc}")
        return False

    if verbose:
        print(f"{name} converted")
        print(result.report, end="")
    return True


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="sctape",
        description="Convert 4K 2600 ROM images to Supercharger tape WAV files",
        epilog="converted WAV files are saved in the same directory as the ROM file",
    )
    parser.add_argument("roms", nargs="*", metavar="ROM", help="ROM files to convert")
    parser.add_argument("-v", dest="verbose", action="store_true", help="verbose messages")
    parser.add_argument("-o", dest="overwrite", action="store_true",
                        help="overwrite existing wav files")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.roms:
        parser.print_help()
        return 0

    ok = True
    for rom_path in args.roms:
        ok = process(os.path.normpath(rom_path), args.overwrite, args.verbose) and ok
    return 0 if ok else 1


if __name__ == "__main__":
    sys.exit(main())
