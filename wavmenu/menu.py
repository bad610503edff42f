"""Terminal menu driving the WAV player."""

from __future__ import annotations

import argparse
import collections
import os
import re
import subprocess
import sys
import threading
import time
from typing import Callable, Iterable, TextIO

from wavmenu.player import Player, PygameSink

DEFAULT_DIRECTORY = "/root"
DEFAULT_PATTERN = ".wav"
NAMES_PER_LINE = 5

_LEADING_INT = re.compile(r"\s*([+-]?\d+)")


def _atoi(text: str) -> int:
    match = _LEADING_INT.match(text)
    return int(match.group(1)) if match else 0


def _clear_screen() -> None:
    subprocess.run(["clear"], check=False)


def _at(row: int, column: int, text: str) -> str:
    return f"\x1b[{row};{column}H{text}\n"


def list_matching_files(directory: str, pattern: str) -> list[str]:
    """Return the sorted names in ``directory`` that contain ``pattern``."""
    return sorted(name for name in os.listdir(directory) if pattern in name)


def format_file_listing(names: Iterable[str]) -> str:
    """Lay names out separated by spaces, with a line break after every fifth."""
    parts = []
    for count, name in enumerate(names, start=1):
        parts.append(f"{name} ")
        if count % NAMES_PER_LINE == 0:
            parts.append("\n")
    return "".join(parts)


class Menu:
    """Reads menu choices and turns them into player requests."""

    def __init__(
        self,
        player: Player,
        *,
        directory: str = DEFAULT_DIRECTORY,
        pattern: str = DEFAULT_PATTERN,
        input: TextIO | None = None,
        output: TextIO | None = None,
        clear: Callable[[], None] | None = None,
    ) -> None:
        self._player = player
        self._directory = directory
        self._pattern = pattern
        self._input = input if input is not None else sys.stdin
        self._output = output if output is not None else sys.stdout
        self._clear = clear if clear is not None else _clear_screen
        self._tokens: collections.deque[str] = collections.deque()
        self._actions = {
            1: self._play,
            2: player.restart,
            3: player.pause,
            4: player.resume,
            5: player.abort,
            6: self._set_volume,
        }

    def _write(self, text: str) -> None:
        self._output.write(text)
        self._output.flush()

    def _read_token(self) -> str:
        while not self._tokens:
            line = self._input.readline()
            if not line:
                raise EOFError("input closed")
            self._tokens.extend(line.split())
        return self._tokens.popleft()

    def _play(self) -> None:
        self._write("Music path: ")
        self._player.set_file_route(self._read_token())
        self._player.start()

    def _set_volume(self) -> None:
        self._write("Volume (0 ~ 100): ")
        self._player.set_volume(_atoi(self._read_token()))

    def render(self) -> None:
        """Clear the screen and draw the file list and the menu."""
        self._clear()
        self._write(_at(1, 1, "==============================="))
        try:
            listing = format_file_listing(list_matching_files(self._directory, self._pattern))
        except OSError as exc:
            self._write(f"[\x1b[31mprint_file\x1b[0m]fail to print file : {exc}\n")
        else:
            self._write(_at(2, 1, listing))
        for row, line in enumerate(
            [
                "[Music menu]====================",
                "1. Play music",
                "2. Restart",
                "3. Pause",
                "4. Continue",
                "5. Abort",
                "6. Set volume",
                "===============================",
            ],
            start=4,
        ):
            self._write(_at(row, 1, line))

    def process(self, choice: str) -> bool:
        """Carry out a menu choice; return False when it names no entry."""
        action = self._actions.get(_atoi(choice))
        if action is None:
            return False
        action()
        return True

    def run(self) -> None:
        """Show the menu and handle choices until input ends."""
        try:
            while True:
                time.sleep(0.1)
                self.render()
                self.process(self._read_token())
        except EOFError:
            return

    def start_thread(self) -> threading.Thread:
        thread = threading.Thread(target=self.run, name="wav-menu", daemon=True)
        thread.start()
        return thread


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(prog="wavmenu", description="Play WAV files from a terminal menu.")
    parser.add_argument(
        "--directory",
        default=DEFAULT_DIRECTORY,
        help="directory whose WAV files are listed (default: %(default)s)",
    )
    args = parser.parse_args(argv)
    player = Player(PygameSink())
    player.start_thread()
    try:
        Menu(player, directory=args.directory).run()
    except KeyboardInterrupt:
        pass
    return 0