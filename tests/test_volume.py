import struct

import pytest

from wavmenu.volume import clamp_volume, scale_samples
from wavmenu.wavfile import SampleFormat


@pytest.mark.parametrize("value, expected", [(150, 1.0), (-5, 0.0), (100, 1.0), (0, 0.0)])
def test_clamp_volume_limits(value, expected):
    assert clamp_volume(value) == expected


def test_clamp_volume_in_range():
    assert clamp_volume(50) == 0.5


@pytest.mark.parametrize("fmt", list(SampleFormat))
def test_full_volume_is_identity(fmt):
    data = bytes([0x00, 0x7F, 0x80, 0xFF, 0x12, 0x34] * 4)
    assert scale_samples(data, fmt, 1.0) == data


@pytest.mark.parametrize("fmt", [SampleFormat.S16_LE, SampleFormat.S24_LE, SampleFormat.S32_LE])
def test_zero_volume_silences_signed(fmt):
    data = bytes([0x12, 0x34, 0x80, 0xFF, 0x01, 0x7F] * 4)
    assert scale_samples(data, fmt, 0.0) == bytes(len(data))


def test_u8_scales_unsigned():
    assert scale_samples(bytes([200, 101]), SampleFormat.U8, 0.5) == bytes([100, 50])


def test_s16_halves_signed_values():
    data = struct.pack("<2h", 1000, -1000)
    assert struct.unpack("<2h", scale_samples(data, SampleFormat.S16_LE, 0.5)) == (500, -500)


def test_s24_keeps_sign():
    data = (-400).to_bytes(3, "little", signed=True)
    result = scale_samples(data, SampleFormat.S24_LE, 0.5)
    assert int.from_bytes(result, "little", signed=True) == -200


def test_s32_truncates_toward_zero():
    data = struct.pack("<i", -3)
    assert struct.unpack("<i", scale_samples(data, SampleFormat.S32_LE, 0.5)) == (-1,)


def test_trailing_partial_sample_kept():
    data = struct.pack("<h", 40) + b"\x07"
    result = scale_samples(data, SampleFormat.S16_LE, 0.5)
    assert len(result) == len(data)
    assert result[-1:] == b"\x07"


def test_no_format_leaves_data():
    data = b"\x01\x02\x03"
    assert scale_samples(data, None, 0.0) == data