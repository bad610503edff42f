import io
import struct

import pytest

from wavmenu.wavfile import (
    SampleFormat,
    WavFormatError,
    read_header,
    sample_format_for_bits,
)


def make_wav(samples, *, bits=16, channels=1, rate=8000, audio_format=1, extra=b""):
    block = channels * bits // 8
    head = struct.pack(
        "<4sI4s4sIHHIIHH",
        b"RIFF",
        36 + len(extra) + len(samples),
        b"WAVE",
        b"fmt ",
        16,
        audio_format,
        channels,
        rate,
        rate * block,
        block,
        bits,
    )
    return head + extra + struct.pack("<4sI", b"data", len(samples)) + samples


def test_plain_header_fields():
    samples = b"\x01\x02\x03\x04"
    header = read_header(io.BytesIO(make_wav(samples, channels=2, rate=22050)))
    assert header.chunk_id == b"RIFF"
    assert header.chunk_format == b"WAVE"
    assert header.num_channels == 2
    assert header.sample_rate == 22050
    assert header.bits_per_sample == 16
    assert header.data_id == b"data"
    assert header.data_size == len(samples)
    assert header.data_offset == 44
    assert header.is_pcm


def test_stream_positioned_at_samples():
    samples = bytes(range(10))
    stream = io.BytesIO(make_wav(samples))
    read_header(stream)
    assert stream.read() == samples


def test_extra_chunk_is_skipped():
    extra = b"LIST" + struct.pack("<I", 4) + b"INFO"
    samples = b"\x10\x20"
    stream = io.BytesIO(make_wav(samples, extra=extra))
    header = read_header(stream)
    assert header.data_offset == 44 + len(extra)
    assert header.data_size == len(samples)
    assert stream.read() == samples


def test_missing_data_chunk_raises():
    data = make_wav(b"")[:-8] + b"junk" + struct.pack("<I", 0)
    with pytest.raises(WavFormatError):
        read_header(io.BytesIO(data))


def test_short_file_raises():
    with pytest.raises(WavFormatError):
        read_header(io.BytesIO(b"RIFF"))


def test_non_pcm_is_flagged():
    header = read_header(io.BytesIO(make_wav(b"", audio_format=3)))
    assert header.is_pcm is False


@pytest.mark.parametrize(
    "bits, expected",
    [
        (8, SampleFormat.U8),
        (16, SampleFormat.S16_LE),
        (24, SampleFormat.S24_LE),
        (32, SampleFormat.S32_LE),
    ],
)
def test_sample_format_for_bits(bits, expected):
    assert sample_format_for_bits(bits) is expected
    assert expected.width == bits


def test_unsupported_bits_raises():
    with pytest.raises(WavFormatError):
        sample_format_for_bits(12)


def test_describe_lists_fields():
    header = read_header(io.BytesIO(make_wav(b"\x00\x00", rate=8000)))
    text = header.describe()
    assert "[id] : RIFF" in text
    assert "[sample rate] : 8000" in text
    assert "[sub chunk2 id] : data" in text
    assert text.startswith("================[wav info]")