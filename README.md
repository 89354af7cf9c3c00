# lutrokit

Building blocks for a small 2D game runtime. It is written in pure Python and
has no third-party dependencies.

## Modules

- `lutrokit.decoder`: `WavDecoder` streams 8- and 16-bit PCM WAV files with one
  or two channels. It seeks and tells in sample frames and adds decoded samples
  into a float buffer at a given volume, with optional looping. Malformed files
  raise `WavFormatError`.
- `lutrokit.source`: `Source` is a playable sound backed by a `.wav` file path
  or by pre-decoded `SoundData` (interleaved floats, 1 or 2 channels). Its state
  is a `SourceState` of `STOPPED`, `PAUSED` or `PLAYING`. It has `loop`, `volume`
  and `pitch`, and `seek` / `tell` take `"samples"` (the default) or
  `"seconds"` at 44100 Hz.
- `lutrokit.mixer`: `Mixer` registers sources with `play` and handles `stop`,
  `pause`, `stop_all`, `active_sources`, `active_source_count` and
  `unref_stopped`. Its `render()` mixes one chunk of `frames` stereo frames into
  an `array("h")` of interleaved, saturated 16-bit samples, scaled by the
  master `volume`.
- `lutrokit.imagedata`: `ImageData` is a grid of packed 32-bit ARGB pixels with
  `get_pixel` / `set_pixel`. `pack_color` and `unpack_color` convert between
  components and packed values.
- `lutrokit.canvas`: `Canvas` holds an `ImageData` target, a drawing colour
  and a background colour. Colours are set as `(r, g, b[, a])` or as one
  sequence. The canvas has `clear`, `point` and `points`. `set_scissor` stores a
  clip rectangle that is clamped to the canvas, and `pixel` reads a pixel back.
- `lutrokit.graphics`: `Graphics` owns the default canvas and the current
  render target (`new_canvas`, `set_canvas`, `get_canvas`, `dimensions`).
  `Quad` is a viewport rectangle. `segment_count` chooses how many segments
  to use for an ellipse.
- `lutrokit.filesystem`: `GameFilesystem` appends paths to a game directory
  for `read`, `write`, `exists`, `is_directory`, `is_file`, `create_directory`
  and `get_directory_items`. `user_directory()` returns the home directory with
  a trailing slash.
- `lutrokit.controls`: `Keyboard` and `Joysticks` cache input state from poll
  callbacks and call press and release handlers when the state changes.
  Lookups: `key_to_scancode`, `scancode_to_key`, `button_to_id`,
  `id_to_button`. `joypad` queries a single named button.

## Install

```
pip install lutrokit
```

To run the tests:

```
pip install "lutrokit[test]"
pytest
```

## Examples

```python
from lutrokit.mixer import Mixer
from lutrokit.source import SoundData

mixer = Mixer(1024)
tone = SoundData([0.5, -0.5] * 512, channels=1)
source = mixer.new_source(tone)
mixer.play(source)
frames = mixer.render()   # 2048 interleaved int16 samples
```

```python
from lutrokit.canvas import Canvas

canvas = Canvas(320, 240)
canvas.set_color(255, 0, 0)
canvas.point(10, 20)
assert canvas.pixel(10, 20) == (255, 0, 0, 255)
```

## What it does not do

- There is no Ogg Vorbis decoding. A `Source` made from an `.ogg` path logs an
  error and cannot be played.
- It does not load image files. `ImageData` is only created from a width and
  height.
- `Canvas` draws single points only. It has no lines, rectangles, polygons,
  ellipses, image blitting, fonts or text, and the scissor rectangle does not
  restrict what `point` draws.
- It opens no window and no audio device, and it runs no game scripts. The
  caller supplies input through poll callbacks and takes rendered audio and
  pixels from the package.