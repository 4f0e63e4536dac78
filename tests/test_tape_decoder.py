import numpy as np
import pytest

from SCTAPE.convert import convert
from SCTAPE.SGM.tape_builder import TapeBuilder, build_header, iter_blocks
from SCTAPE.SGM.wav_writer import WavWriter
from SCTAPE.SVM.tape_decoder import (
    TapeDecodeError, cycle_lengths, classify_cycles, parse_tape, decode_wav,
    read_wav, main, ZERO, ONE, START,
)


def byte_stream(rom, calibration=20, trailer=5):
    header = build_header(rom)
    out = bytearray([0x55] * calibration + [0x54])
    out += header.to_bytes()
    for block in iter_blocks(rom, header.block_count):
        out += bytes([block.page, block.checksum]) + block.data
    out += bytes(trailer)
    return out


def test_cycle_lengths():
    s = np.array([0, 5, -5, 0, 3, 3, -1, -1, 0, 9])
    assert cycle_lengths(s).tolist() == [3, 5, 2]


def test_classify_cycles():
    kinds = classify_cycles(np.array([6, 10, 51, 5, 11, 40]))
    assert kinds.tolist() == [ZERO, ONE, START, ZERO, ONE, START]


def test_round_trip(random_rom):
    tape = decode_wav(convert(random_rom).wav_bytes)
    assert tape.ok, tape.errors
    assert tape.rom == random_rom
    assert tape.sample_rate == 44100
    assert tape.channels == 1
    assert tape.start_cycles == 86
    assert tape.calibration_bytes == 344
    assert tape.trailer_bytes == 344
    assert [b.page for b in tape.blocks] == [1, 5, 9, 13, 17, 21, 25, 29,
                                             2, 6, 10, 14, 18, 22, 26, 30]


def test_header_fields(address_rom):
    tape = decode_wav(convert(address_rom).wav_bytes)
    assert tape.header.address == 0x1234
    assert tape.header.block_count == 16
    assert tape.header.load_speed == 0x01c3


def test_stereo_round_trip(address_rom):
    wav = TapeBuilder().build(address_rom, WavWriter(channels=2))
    tape = decode_wav(wav.to_bytes())
    assert tape.channels == 2
    assert tape.rom == address_rom


def test_parse_clean_stream(random_rom):
    tape = parse_tape(byte_stream(random_rom))
    assert tape.ok
    assert tape.calibration_bytes == 20
    assert tape.trailer_bytes == 5


def test_corrupt_data_byte_is_reported(random_rom):
    data = byte_stream(random_rom)
    data[21 + 8 + 2 + 100] ^= 0xFF     # inside block 0 payload
    tape = parse_tape(data)
    assert not tape.ok
    assert any(e.startswith("block 0: checksum") for e in tape.errors)


def test_corrupt_header_is_reported(random_rom):
    data = byte_stream(random_rom)
    data[21 + 4] ^= 0x01    # header checksum byte
    tape = parse_tape(data)
    assert any(e.startswith("header checksum") for e in tape.errors)


def test_wrong_page_is_reported(random_rom):
    data = byte_stream(random_rom)
    data[21 + 8] = 0x02
    tape = parse_tape(data)
    assert any("page $02, expected $01" in e for e in tape.errors)


def test_missing_sync(random_rom):
    data = byte_stream(random_rom)
    data[20] = 0x00
    with pytest.raises(TapeDecodeError):
        parse_tape(data)


def test_truncated_tape(random_rom):
    data = byte_stream(random_rom, trailer=0)[:-10]
    with pytest.raises(TapeDecodeError):
        parse_tape(data)


def test_not_a_wav():
    with pytest.raises(ValueError):
        read_wav(b"definitely not audio")


def test_cli_pass(tmp_path, random_rom, capsys):
    rom_path = tmp_path / "game.bin"
    wav_path = tmp_path / "game.wav"
    rom_path.write_bytes(random_rom)
    wav_path.write_bytes(convert(random_rom).wav_bytes)

    assert main([str(wav_path), "--rom", str(rom_path), "--dump-blocks"]) == 0
    out = capsys.readouterr().out
    assert "VERDICT: PASS" in out
    assert "Block 15" in out


def test_cli_image_mismatch(tmp_path, random_rom, address_rom, capsys):
    rom_path = tmp_path / "other.bin"
    wav_path = tmp_path / "game.wav"
    rom_path.write_bytes(address_rom)
    wav_path.write_bytes(convert(random_rom).wav_bytes)

    assert main([str(wav_path), "--rom", str(rom_path)]) == 1
    assert "VERDICT: FAIL" in capsys.readouterr().out


def test_cli_missing_file(tmp_path, capsys):
    assert main([str(tmp_path / "nope.wav")]) == 1
    assert "File not found" in capsys.readouterr().out
