"""WAV playback controlled by flags that another thread sets."""

from __future__ import annotations

import enum
import subprocess
import sys
import threading
import time
from typing import BinaryIO, Callable, Protocol, TextIO

from wavmenu.volume import clamp_volume, scale_samples
from wavmenu.wavfile import (
    SampleFormat,
    WavFormatError,
    WavHeader,
    read_header,
    sample_format_for_bits,
)

CHUNK_SIZE = 4096
RECOVER_DROP_CHUNKS = 64
DEFAULT_VOLUME = 0.5
POLL_INTERVAL = 0.001


class PlaybackFlag(enum.Enum):
    START = enum.auto()
    PAUSE = enum.auto()
    ABORT = enum.auto()


class PcmSink(Protocol):
    """Somewhere interleaved PCM frames can be written."""

    def configure(self, sample_format: SampleFormat, channels: int, rate: int) -> None: ...

    def write(self, data: bytes) -> None: ...

    def drop(self) -> None: ...


class PygameSink:
    """A PCM sink playing through the pygame mixer."""

    def __init__(self) -> None:
        self._mixer = None
        self._channel = None
        self._narrow_from = 0
        self._frame_size = 0

    def configure(self, sample_format: SampleFormat, channels: int, rate: int) -> None:
        import pygame

        mixer = pygame.mixer
        mixer.quit()
        size = 8 if sample_format is SampleFormat.U8 else -16
        mixer.init(frequency=rate, size=size, channels=channels)
        self._mixer = mixer
        self._channel = None
        wide = sample_format in (SampleFormat.S24_LE, SampleFormat.S32_LE)
        self._narrow_from = sample_format.sample_size if wide else 0
        self._frame_size = channels * (1 if sample_format is SampleFormat.U8 else 2)

    def _narrow(self, data: bytes) -> bytes:
        # The mixer takes at most 16-bit integers: keep each sample's top two bytes.
        size = self._narrow_from
        whole = len(data) - len(data) % size
        return b"".join(data[start + size - 2:start + size] for start in range(0, whole, size))

    def write(self, data: bytes) -> None:
        if self._mixer is None:
            raise RuntimeError("sink is not configured")
        if self._narrow_from:
            data = self._narrow(data)
        data = data[: len(data) - len(data) % self._frame_size]
        if not data:
            return
        sound = self._mixer.Sound(buffer=data)
        if self._channel is None or not self._channel.get_busy():
            self._channel = sound.play()
            return
        while self._channel.get_queue() is not None:
            time.sleep(POLL_INTERVAL)
        self._channel.queue(sound)

    def drop(self) -> None:
        if self._mixer is not None and self._mixer.get_init():
            self._mixer.stop()
        self._channel = None


def _clear_screen() -> None:
    subprocess.run(["clear"], check=False)


class Player:
    """Plays the chosen WAV file when asked, honouring pause and abort."""

    def __init__(
        self,
        sink: PcmSink | None = None,
        *,
        output: TextIO | None = None,
        clear: Callable[[], None] | None = None,
        chunk_size: int = CHUNK_SIZE,
        stop: threading.Event | None = None,
    ) -> None:
        self._sink = sink if sink is not None else PygameSink()
        self._output = output if output is not None else sys.stdout
        self._clear = clear if clear is not None else _clear_screen
        self._chunk_size = chunk_size
        self._stop = stop if stop is not None else threading.Event()
        self._lock = threading.Lock()
        self._flags = {flag: False for flag in PlaybackFlag}
        self._volume = DEFAULT_VOLUME
        self._requested_route = ""
        self._current_route = ""
        self._sample_format: SampleFormat | None = None

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _error(self, where: str, message: str) -> None:
        self._write(f"[\x1b[31m{where}\x1b[0m]{message}\n")

    def _debug(self, message: str) -> None:
        self._write(f"[\x1b[33mDBG\x1b[0m]{message}\n")

    def _flag(self, flag: PlaybackFlag) -> bool:
        with self._lock:
            return self._flags[flag]

    def _set_flag(self, flag: PlaybackFlag, value: bool) -> None:
        with self._lock:
            self._flags[flag] = value

    def start(self) -> None:
        with self._lock:
            self._flags[PlaybackFlag.START] = True
            self._flags[PlaybackFlag.PAUSE] = False

    def restart(self) -> None:
        self.abort()
        time.sleep(0.1)
        self.start()

    def pause(self) -> None:
        self._set_flag(PlaybackFlag.PAUSE, True)

    def resume(self) -> None:
        self._set_flag(PlaybackFlag.PAUSE, False)

    def abort(self) -> None:
        self._set_flag(PlaybackFlag.ABORT, True)

    def set_volume(self, value: int) -> None:
        with self._lock:
            self._volume = clamp_volume(value)

    def volume(self) -> float:
        with self._lock:
            return self._volume

    def set_file_route(self, route: str) -> None:
        with self._lock:
            self._requested_route = route

    def file_route(self) -> str:
        with self._lock:
            return self._requested_route

    def _check_file_change(self) -> None:
        route = self.file_route()
        if route == self._current_route:
            self._debug("file not change")
            return
        self._write(f"[\x1b[32mcheck_file_change\x1b[0m]file check success : {route}\n")
        self._current_route = route
        self._debug("file change")

    def _play_pcm(self, data: bytes) -> bool:
        if self._flag(PlaybackFlag.PAUSE):
            return True
        data = scale_samples(data, self._sample_format, self.volume())
        while True:
            if self._flag(PlaybackFlag.ABORT) or self._flag(PlaybackFlag.PAUSE):
                return True
            try:
                self._sink.write(data)
            except BlockingIOError:
                continue
            except (OSError, RuntimeError) as exc:
                self._error("play_pcm", f"pcm write : {exc}")
                return False
            return True

    def _configure(self, header: WavHeader) -> None:
        self._sink.configure(self._sample_format, header.num_channels, header.sample_rate)

    def _stream_samples(self, stream: BinaryIO, header: WavHeader) -> None:
        played = 0
        drop_pending = False
        while True:
            if self._flag(PlaybackFlag.ABORT):
                break
            if self._flag(PlaybackFlag.PAUSE):
                if drop_pending:
                    # Step back over what the device discarded on drop.
                    played = max(0, played - self._chunk_size * RECOVER_DROP_CHUNKS)
                    stream.seek(header.data_offset + played)
                    self._sink.drop()
                    self._configure(header)
                    drop_pending = False
                time.sleep(POLL_INTERVAL)
                continue

            data = stream.read(self._chunk_size)
            drop_pending = True
            if len(data) < self._chunk_size:
                self._debug("audio finished")
                self._play_pcm(data)
                break
            played += len(data)
            if header.data_size:
                percent = played * 100 // header.data_size
                self._write(f"\x1b[18;1Hplaying[{percent}%]\n")
            self._play_pcm(data)

    def play_file(self, path: str) -> None:
        """Play ``path`` until it ends or playback is aborted."""
        with open(path, "rb") as stream:
            header = read_header(stream)
            if not header.is_pcm:
                raise WavFormatError("audio format is not pcm type")
            self._sample_format = sample_format_for_bits(header.bits_per_sample)
            self._configure(header)
            self._clear()
            self._write(header.describe() + "\n")
            self._debug(f"header size [{header.data_offset}], start playing [{path}]")
            self._stream_samples(stream, header)

    def run_once(self) -> bool:
        """Act on a pending start or abort request; return whether there was one."""
        if self._flag(PlaybackFlag.START):
            self._debug("start")
            self._check_file_change()
            try:
                self.play_file(self._current_route)
            except (OSError, WavFormatError, RuntimeError) as exc:
                self._error("start_wav_conversion", f"[{self._current_route}] {exc}")
            self._drop()
            self._set_flag(PlaybackFlag.START, False)
            return True
        if self._flag(PlaybackFlag.ABORT):
            self._debug("abort")
            self._drop()
            self._set_flag(PlaybackFlag.ABORT, False)
            return True
        return False

    def _drop(self) -> None:
        try:
            self._sink.drop()
        except (OSError, RuntimeError) as exc:
            self._error("drop_pcm", f"fail to pcm drop : {exc}")

    def run(self) -> None:
        """Serve requests until the player's stop event is set, or forever."""
        while not self._stop.is_set():
            self.run_once()
            time.sleep(POLL_INTERVAL)

    def start_thread(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="wav-player", daemon=True)
        thread.start()
        return thread