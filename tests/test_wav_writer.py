import io
import struct

import numpy as np
import soundfile as sf

from SCTAPE.SGM.wav_writer import WavWriter, WAV_HEADER_SIZE
from SCTAPE.SGM.tape_builder import TapeBuilder


def parse_fmt(wav_bytes):
    riff, size, wave = struct.unpack("<4sI4s", wav_bytes[:12])
    fmt_id, fmt_size = struct.unpack("<4sI", wav_bytes[12:20])
    fields = struct.unpack("<HHIIHH", wav_bytes[20:36])
    data_id, data_size = struct.unpack("<4sI", wav_bytes[36:44])
    return riff, size, wave, fmt_id, fmt_size, fields, data_id, data_size


def test_empty_file():
    data = WavWriter().to_bytes()
    assert len(data) == WAV_HEADER_SIZE
    riff, size, wave, fmt_id, fmt_size, _, data_id, data_size = parse_fmt(data)
    assert (riff, wave, fmt_id, data_id) == (b"RIFF", b"WAVE", b"fmt ", b"data")
    assert size == 36
    assert fmt_size == 16
    assert data_size == 0


def test_fmt_chunk_for_any_rom(random_rom, address_rom):
    for rom in (random_rom, address_rom):
        wav = TapeBuilder().build(rom).to_bytes()
        fields = parse_fmt(wav)[5]
        audio_format, channels, rate, byte_rate, block_align, depth = fields
        assert (audio_format, channels, rate, depth) == (1, 1, 44100, 8)
        assert byte_rate == 44100
        assert block_align == 1


def test_length_invariant(random_rom):
    wav = TapeBuilder().build(random_rom)
    data = wav.to_bytes()
    assert len(data) == WAV_HEADER_SIZE + wav.data_size == len(wav)
    _, size, *_, data_size = parse_fmt(data)
    assert size == len(data) - 8
    assert data_size == wav.data_size


def test_write_appends_in_order():
    wav = WavWriter()
    wav.write(bytes([1, 2, 3]))
    wav.write(np.array([4, 5], dtype=np.uint8))
    assert wav.to_bytes()[WAV_HEADER_SIZE:] == bytes([1, 2, 3, 4, 5])
    assert wav.frame_count == 5


def test_channels_replicate_samples():
    wav = WavWriter(channels=3)
    assert wav.write(bytes([7, 9])) == 6
    assert wav.to_bytes()[WAV_HEADER_SIZE:] == bytes([7, 7, 7, 9, 9, 9])
    assert wav.frame_count == 2
    fields = parse_fmt(wav.to_bytes())[5]
    assert fields[1] == 3
    assert fields[3] == 44100 * 3
    assert fields[4] == 3


def test_soundfile_reads_output(address_rom):
    wav = TapeBuilder().build(address_rom)
    info = sf.info(io.BytesIO(wav.to_bytes()))
    assert info.samplerate == 44100
    assert info.channels == 1
    assert info.frames == wav.data_size
    assert info.subtype == "PCM_U8"
