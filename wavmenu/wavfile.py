"""Reading the RIFF/WAVE header of a PCM file."""

from __future__ import annotations

import enum
import io
import struct
from dataclasses import dataclass
from typing import BinaryIO

_HEADER = struct.Struct("<4sI4s4sIHHIIHH4sI")
_CHUNK = struct.Struct("<4sI")

MAX_CHUNKS = 1024
PCM_AUDIO_FORMAT = 1


class WavFormatError(ValueError):
    """Raised when a file is not a WAV file that can be played."""


class SampleFormat(enum.Enum):
    """Little-endian PCM sample layouts, valued by their bit width."""

    U8 = 8
    S16_LE = 16
    S24_LE = 24
    S32_LE = 32

    @property
    def width(self) -> int:
        return self.value

    @property
    def sample_size(self) -> int:
        return self.value // 8

    @property
    def signed(self) -> bool:
        return self is not SampleFormat.U8


def sample_format_for_bits(bits: int) -> SampleFormat:
    """Return the sample format stored with ``bits`` bits per sample."""
    try:
        return SampleFormat(bits)
    except ValueError:
        raise WavFormatError(f"unsupported bits per sample: {bits}") from None


@dataclass(frozen=True)
class WavHeader:
    """The fields of a WAV header, with the offset where sample data starts."""

    chunk_id: bytes
    chunk_size: int
    chunk_format: bytes
    sub_chunk1_id: bytes
    sub_chunk1_size: int
    audio_format: int
    num_channels: int
    sample_rate: int
    byte_rate: int
    block_align: int
    bits_per_sample: int
    data_id: bytes
    data_size: int
    data_offset: int

    @property
    def is_pcm(self) -> bool:
        return self.audio_format == PCM_AUDIO_FORMAT

    def describe(self) -> str:
        """Return a multi-line summary of the header."""

        def text(raw: bytes) -> str:
            return raw[:4].decode("latin-1")

        return "\n".join(
            [
                "================[wav info]===============",
                f"[id] : {text(self.chunk_id)}",
                f"[chunk size] : {self.chunk_size}",
                f"[format] : {text(self.chunk_format)}",
                f"[subchunk1 id] : {text(self.sub_chunk1_id)}",
                f"[subchunk1 size] : {self.sub_chunk1_size}",
                f"[audio format] : {self.audio_format}",
                f"[num channel] : {self.num_channels}",
                f"[sample rate] : {self.sample_rate}",
                f"[byte rate] : {self.byte_rate}",
                f"[block align] : {self.block_align}",
                f"[bits per sample] : {self.bits_per_sample}",
                f"[sub chunk2 id] : {text(self.data_id)}",
                f"[sub chunk2 size] : {self.data_size}",
                "=========================================",
            ]
        )


def read_header(stream: BinaryIO) -> WavHeader:
    """Read a WAV header, skipping chunks until the ``data`` chunk.

    On return the stream is positioned at the first sample.
    """
    raw = stream.read(_HEADER.size)
    if len(raw) < _HEADER.size:
        raise WavFormatError("file is too short for a WAV header")
    fields = _HEADER.unpack(raw)
    data_id, data_size = fields[-2:]
    offset = _HEADER.size

    for _ in range(MAX_CHUNKS):
        if data_id == b"data":
            return WavHeader(
                chunk_id=fields[0],
                chunk_size=fields[1],
                chunk_format=fields[2],
                sub_chunk1_id=fields[3],
                sub_chunk1_size=fields[4],
                audio_format=fields[5],
                num_channels=fields[6],
                sample_rate=fields[7],
                byte_rate=fields[8],
                block_align=fields[9],
                bits_per_sample=fields[10],
                data_id=data_id,
                data_size=data_size,
                data_offset=offset,
            )
        offset += _CHUNK.size + data_size
        stream.seek(data_size, io.SEEK_CUR)
        raw = stream.read(_CHUNK.size)
        if len(raw) < _CHUNK.size:
            break
        data_id, data_size = _CHUNK.unpack(raw)

    raise WavFormatError("conversion failed: 'data' chunk not found")