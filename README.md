# wavmenu

`wavmenu` is a small terminal music player for uncompressed PCM WAV files.
A numbered menu starts, restarts, pauses, continues and aborts playback, and
sets the volume in software.

## Installation

```
pip install .
```

Audio goes out through the `pygame` mixer, so a working sound device is needed.
The screen is cleared by running the `clear` command.

## Usage

```
wavmenu [--directory DIR]
```

Each time the menu is drawn, the names in `DIR` (default `/root`) that contain
`.wav` are listed at the top in sorted order, five to a line, followed by:

```
1. Play music
2. Restart
3. Pause
4. Continue
5. Abort
6. Set volume
```

Type a number and press Enter; anything that is not one of these numbers is
ignored.

- *Play music* asks for the path of a WAV file and starts playing it.
- *Restart* aborts playback and starts the same file again.
- *Pause* stops output at once. *Continue* goes on from a little before the
  point where it paused (the player steps back 64 chunks of 4096 bytes, to make
  up for what the sound device discarded).
- *Abort* stops playback.
- *Set volume* asks for a value from 0 to 100. Values outside that range are
  clamped, and text that does not start with a number counts as 0. The
  starting volume is 50.

While a file plays, its header fields (chunk ids and sizes, audio format,
channels, sample rate, byte rate, block align, bits per sample) are printed,
and the progress in percent is shown on row 18 of the screen.

The menu runs until its input ends (Ctrl-D) or Ctrl-C is pressed.

## Supported files

Only PCM WAV files (audio format 1) are played, with 8-bit unsigned or 16-,
24- or 32-bit signed little-endian samples. Chunks between the format fields and
the `data` chunk are skipped, up to 1024 of them. A file that is not PCM, has
another sample width, or has no `data` chunk is reported and not played.

The `pygame` mixer takes at most 16-bit samples, so 24- and 32-bit files are
played at 16-bit resolution.

## Using it from Python

```python
from wavmenu.player import Player

player = Player()          # plays through PygameSink by default
player.start_thread()      # serves requests on a daemon thread
player.set_volume(80)
player.set_file_route("song.wav")
player.start()
```

`Player` also has `restart()`, `pause()`, `resume()`, `abort()`, `volume()`,
`file_route()`, and `play_file(path)`, which plays a file on the calling thread.
Any object with `configure(sample_format, channels, rate)`, `write(data)` and
`drop()` methods can be given to `Player` in place of `PygameSink`.

`wavmenu.wavfile.read_header` parses a WAV header from a binary stream into a
`WavHeader` and leaves the stream at the first sample; it raises
`WavFormatError` for files it cannot use. `wavmenu.volume.scale_samples`
multiplies raw little-endian PCM samples by a volume factor, and
`wavmenu.volume.clamp_volume` turns a 0–100 setting into that factor.

`wavmenu.menu.Menu` drives a `Player` from any text input and output, and
`wavmenu.menu.main` is the `wavmenu` command.

## What it does not do

There is no playlist, no seeking, and no file browser: the path of each file is
typed in by hand. Only uncompressed PCM WAV is supported, and the volume is
applied in software to the samples, not through a hardware mixer.

## Running the tests

```
pip install .[test]
pytest
```