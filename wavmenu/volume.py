"""Software volume applied to raw PCM samples."""

from __future__ import annotations

from wavmenu.wavfile import SampleFormat


def clamp_volume(value: int) -> float:
    """Clamp a 0-100 volume setting and return it as a 0.0-1.0 factor."""
    return min(max(value, 0), 100) / 100.0


def scale_samples(data: bytes, sample_format: SampleFormat | None, volume: float) -> bytes:
    """Return ``data`` with each little-endian sample multiplied by ``volume``.

    Products are truncated toward zero; trailing bytes that do not form a
    whole sample are left as they are.
    """
    if sample_format is None:
        return bytes(data)
    size = sample_format.sample_size
    signed = sample_format.signed
    mask = (1 << (8 * size)) - 1
    whole = len(data) - len(data) % size

    def scale(start: int) -> bytes:
        sample = int.from_bytes(data[start:start + size], "little", signed=signed)
        return (int(sample * volume) & mask).to_bytes(size, "little")

    return b"".join(scale(start) for start in range(0, whole, size)) + bytes(data[whole:])