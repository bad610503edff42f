"""Terminal menu player for PCM WAV files: header parsing, software volume and playback control."""

__version__ = "0.1.0"